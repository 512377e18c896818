from decimal import Decimal

from django.contrib.auth.models import User
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from apps.core.models import TimeStampedModel
from apps.family.models import FamilyMember

SELF_MEMBER = 'Self'


class TransactionQuerySet(models.QuerySet):
    """Transaction 전용 QuerySet (헬퍼 메서드)"""
    def income(self): return self.filter(type=Transaction.INCOME)
    def expense(self): return self.filter(type=Transaction.EXPENSE)
    def for_user(self, user): return self.filter(user=user)
    def with_relations(self): return self.select_related('for_member')

    def by_date_range(self, start=None, end=None):
        """시작/종료일 모두 선택, 양 끝 포함"""
        qs = self
        if start is not None:
            qs = qs.filter(date__gte=start)
        if end is not None:
            qs = qs.filter(date__lte=end)
        return qs


class Transaction(TimeStampedModel):
    """수입/지출 거래 내역 (핵심 모델)"""
    INCOME = 'income'
    EXPENSE = 'expense'
    TYPE_CHOICES = [(INCOME, 'Income'), (EXPENSE, 'Expense')]

    PAYMENT_METHOD_CHOICES = [
        ('Cash', 'Cash'),
        ('UPI', 'UPI'),
        ('Bank Transfer', 'Bank Transfer'),
        ('Credit Card', 'Credit Card'),
        ('Debit Card', 'Debit Card'),
        ('Cheque', 'Cheque'),
        ('Other', 'Other'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='transactions', db_index=True)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, db_index=True)
    amount = models.DecimalField(max_digits=15, decimal_places=2, validators=[MinValueValidator(Decimal('0.01'))])
    category = models.CharField(max_length=100)
    description = models.CharField(max_length=500, blank=True)
    date = models.DateTimeField(default=timezone.now, db_index=True)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default='Cash')
    # 구성원이 삭제되면 본인(Self) 거래로 돌아감
    for_member = models.ForeignKey(
        FamilyMember,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='transactions',
    )

    objects = TransactionQuerySet.as_manager()

    class Meta:
        db_table = 'transactions'
        ordering = ['-date']
        indexes = [
            models.Index(fields=['user', '-date'], name='transaction_user_id_5a1f2b_idx'),
            models.Index(fields=['user', 'category'], name='transaction_user_id_8c3d4e_idx'),
            models.Index(fields=['user', 'type', '-date'], name='transaction_user_id_e7b6a9_idx'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount__gt=0), name='transaction_amount_positive'),
        ]

    def __str__(self):
        sign = '+' if self.type == self.INCOME else '-'
        return f"{sign}{self.amount:,.2f} {self.category} ({self.date.date()})"

    def save(self, *args, **kwargs):
        self.category = (self.category or '').strip()
        self.description = (self.description or '').strip()
        super().save(*args, **kwargs)

    @property
    def for_member_name(self):
        """구성원 이름, 없으면 'Self'"""
        return self.for_member.name if self.for_member_id else SELF_MEMBER
