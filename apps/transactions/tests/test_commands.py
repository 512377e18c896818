from io import StringIO

import pytest
from django.contrib.auth.models import User
from django.core.management import call_command

from apps.family.models import FamilyMember
from apps.transactions.constants import DEFAULT_CATEGORIES
from apps.transactions.models import Transaction


@pytest.mark.django_db
class TestSeedTransactions:
    def test_creates_user_members_and_transactions(self):
        out = StringIO()
        call_command('seed_transactions', '--username', 'demo', '--months', '2', '--per-month', '5', '--seed', '1', stdout=out)

        user = User.objects.get(username='demo')
        assert user.check_password('test1234')
        assert FamilyMember.objects.filter(user=user).count() == 3

        txs = Transaction.objects.filter(user=user)
        # 월별 급여 1건은 항상 생성
        assert txs.filter(category='Salary').count() >= 2
        assert txs.count() <= 2 * 5
        assert set(txs.values_list('category', flat=True)) <= set(DEFAULT_CATEGORIES)
        assert all(amount > 0 for amount in txs.values_list('amount', flat=True))
        assert '완료' in out.getvalue()

    def test_existing_user_reused(self, test_user):
        call_command('seed_transactions', '--username', 'tester', '--months', '1', '--per-month', '3', stdout=StringIO())

        assert User.objects.filter(username='tester').count() == 1
        assert Transaction.objects.filter(user=test_user).exists()
        test_user.refresh_from_db()
        assert test_user.check_password('pass1234')


@pytest.mark.django_db
class TestClearTransactions:
    def test_clear_named_user(self, test_user, other_user, make_tx):
        make_tx()
        make_tx()
        make_tx(user=other_user)

        out = StringIO()
        call_command('clear_transactions', '--username', 'tester', stdout=out)

        assert not Transaction.objects.filter(user=test_user).exists()
        assert Transaction.objects.filter(user=other_user).count() == 1
        assert '2건' in out.getvalue()

    def test_defaults_to_first_user(self, test_user, other_user, make_tx):
        make_tx()
        make_tx(user=other_user)

        call_command('clear_transactions', stdout=StringIO())

        assert not Transaction.objects.filter(user=test_user).exists()
        assert Transaction.objects.filter(user=other_user).exists()

    def test_unknown_user(self, db):
        out = StringIO()
        call_command('clear_transactions', '--username', 'ghost', stdout=out)

        assert '찾을 수 없습니다' in out.getvalue()
