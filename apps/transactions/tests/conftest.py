"""
transactions 앱 테스트용 공통 fixture
"""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from apps.family.models import FamilyMember
from apps.transactions.models import Transaction


@pytest.fixture
def member(test_user):
    """테스트 사용자의 가족 구성원"""
    return FamilyMember.objects.create(user=test_user, name='Mom')


@pytest.fixture
def other_member(other_user):
    """다른 사용자의 가족 구성원"""
    return FamilyMember.objects.create(user=other_user, name='Stranger')


@pytest.fixture
def make_tx(test_user):
    """거래 생성 헬퍼 (기본: 지출 100, Food)"""
    def _make(user=None, **kwargs):
        values = {
            'type': Transaction.EXPENSE,
            'amount': Decimal('100.00'),
            'category': 'Food',
            'date': datetime(2025, 1, 15, 12, 0, tzinfo=dt_timezone.utc),
        }
        values.update(kwargs)
        return Transaction.objects.create(user=user or test_user, **values)
    return _make
