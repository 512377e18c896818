"""
admin 화면 테스트 (거래 / 가족 구성원 / 프로필)
"""
from decimal import Decimal

import pytest
from django.contrib.admin.sites import AdminSite

from apps.accounts.admin import ProfileAdmin
from apps.accounts.models import Profile
from apps.family.admin import FamilyMemberAdmin
from apps.family.models import FamilyMember
from apps.transactions.admin import TransactionAdmin
from apps.transactions.models import Transaction


@pytest.mark.django_db
class TestTransactionAdmin:
    def test_colored_type_and_amount(self, make_tx):
        admin = TransactionAdmin(Transaction, AdminSite())
        income = make_tx(type='income', category='Salary', amount=Decimal('1234.5'))
        expense = make_tx()

        assert 'green' in admin.get_type_display_colored(income)
        assert 'red' in admin.get_type_display_colored(expense)
        assert '1,234.50' in admin.get_amount_display(income)

    def test_for_member_column(self, make_tx, member):
        admin = TransactionAdmin(Transaction, AdminSite())

        assert admin.get_for_member(make_tx()) == 'Self'
        assert admin.get_for_member(make_tx(for_member=member)) == 'Mom'

    def test_changelist_renders(self, admin_client, make_tx, member):
        make_tx(for_member=member)

        assert admin_client.get('/admin/transactions/transaction/').status_code == 200
        assert admin_client.get('/admin/family/familymember/').status_code == 200
        assert admin_client.get('/admin/accounts/profile/').status_code == 200


@pytest.mark.django_db
class TestFamilyAndProfileAdmin:
    def test_transaction_count(self, rf, admin_user, make_tx, member):
        make_tx(for_member=member)
        make_tx(for_member=member)
        admin = FamilyMemberAdmin(FamilyMember, AdminSite())
        request = rf.get('/admin/')
        request.user = admin_user

        annotated = admin.get_queryset(request).get(pk=member.pk)

        assert admin.get_transaction_count(annotated) == 2

    def test_profile_columns(self, test_user):
        admin = ProfileAdmin(Profile, AdminSite())
        profile = test_user.profile

        assert admin.get_email(profile) == 'tester@example.com'
        assert admin.get_push_enabled(profile) is False
