from datetime import datetime, time, timezone as dt_timezone
from decimal import Decimal, ROUND_HALF_UP

from django.utils.dateparse import parse_date
from rest_framework import serializers

from .models import Transaction
from .utils import to_number

MAX_AMOUNT = Decimal(10) ** 13


class FlexibleDateTimeField(serializers.DateTimeField):
    """ISO 8601 일시 또는 날짜('2025-01-31' → 해당 날짜 00:00 UTC)"""

    def to_internal_value(self, value):
        if isinstance(value, str):
            try:
                day = parse_date(value.strip())
            except ValueError:
                day = None
            if day is not None:
                return datetime.combine(day, time.min, tzinfo=dt_timezone.utc)
        return super().to_internal_value(value)


class TransactionInputSerializer(serializers.Serializer):
    """
    거래 입력/수정 검증

    - amount: 문자열도 허용, 0보다 크고 10^13 미만 (소수점 2자리로 반올림)
    - date: 생략 시 생성은 현재 시각, 수정은 기존 값 유지
    - forMember: 'Self' 또는 본인 가족 구성원 id (존재 여부는 뷰에서 확인)
    """
    type = serializers.ChoiceField(
        choices=[Transaction.INCOME, Transaction.EXPENSE],
        error_messages={'invalid_choice': "Type must be 'income' or 'expense'"},
    )
    amount = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        error_messages={'invalid': 'Amount must be a number'},
    )
    category = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'Category is required', 'required': 'Category is required'},
    )
    description = serializers.CharField(
        max_length=500,
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={'max_length': 'Description cannot exceed 500 characters'},
    )
    date = FlexibleDateTimeField(required=False, allow_null=True)
    paymentMethod = serializers.ChoiceField(
        choices=[choice for choice, _ in Transaction.PAYMENT_METHOD_CHOICES],
        required=False,
    )
    forMember = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_amount(self, value):
        if value is None or not value.is_finite() or value <= 0:
            raise serializers.ValidationError('Amount must be positive')
        # 모델 컬럼(max_digits=15, decimal_places=2) 범위
        if value >= MAX_AMOUNT:
            raise serializers.ValidationError('Amount is too large')
        amount = value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        if amount <= 0:
            raise serializers.ValidationError('Amount must be positive')
        if amount >= MAX_AMOUNT:
            raise serializers.ValidationError('Amount is too large')
        return amount

    def to_model_fields(self):
        """검증된 값 → 모델 필드 (입력된 값만)"""
        data = self.validated_data
        fields = {
            'type': data['type'],
            'amount': data['amount'],
            'category': data['category'],
        }
        if 'description' in data:
            fields['description'] = data['description'] or ''
        if data.get('date'):
            fields['date'] = data['date']
        if 'paymentMethod' in data:
            fields['payment_method'] = data['paymentMethod']
        return fields


def serialize_transaction(tx):
    """응답용 거래 정보 (SPA 필드명 그대로)"""
    return {
        '_id': tx.pk,
        'userId': tx.user_id,
        'type': tx.type,
        'amount': to_number(tx.amount),
        'category': tx.category,
        'description': tx.description,
        'date': tx.date.isoformat() if tx.date else None,
        'paymentMethod': tx.payment_method,
        'forMemberId': tx.for_member_id,
        'forMember': tx.for_member_name,
        'createdAt': tx.created_at.isoformat() if tx.created_at else None,
        'updatedAt': tx.updated_at.isoformat() if tx.updated_at else None,
    }
