from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest
from django.urls import reverse
from django.utils import timezone

from apps.transactions.models import Transaction

LIST_URL = '/api/transactions'


def detail_url(pk):
    return reverse('transactions:transaction_detail', args=[pk])


@pytest.mark.django_db
class TestTransactionCreate:
    def test_requires_login(self, api_client):
        response = api_client.post(LIST_URL, {'type': 'expense', 'amount': 10, 'category': 'Food'}, format='json')

        assert response.status_code == 401
        assert response.json()['message'] == 'Not authorized, no token'

    def test_create_minimal(self, auth_client, test_user):
        """필수값만 입력 → 결제수단 Cash, 대상 Self"""
        response = auth_client.post(LIST_URL, {
            'type': 'expense',
            'amount': '12.5',
            'category': 'Food',
        }, format='json')

        assert response.status_code == 201
        body = response.json()
        assert body['message'] == 'Transaction added successfully'
        tx = body['transaction']
        assert tx['amount'] == 12.5
        assert tx['paymentMethod'] == 'Cash'
        assert tx['forMember'] == 'Self'
        assert tx['forMemberId'] is None
        assert tx['userId'] == test_user.pk

    def test_create_full(self, auth_client, member):
        response = auth_client.post(LIST_URL, {
            'type': 'income',
            'amount': 5000,
            'category': 'Salary',
            'description': 'January salary',
            'date': '2025-01-31',
            'paymentMethod': 'Bank Transfer',
            'forMember': str(member.pk),
        }, format='json')

        assert response.status_code == 201
        tx = Transaction.objects.get(pk=response.json()['transaction']['_id'])
        assert tx.amount == Decimal('5000.00')
        assert tx.date == datetime(2025, 1, 31, tzinfo=dt_timezone.utc)
        assert tx.payment_method == 'Bank Transfer'
        assert tx.for_member == member
        assert response.json()['transaction']['forMember'] == 'Mom'

    def test_for_member_self(self, auth_client):
        response = auth_client.post(LIST_URL, {
            'type': 'expense', 'amount': 10, 'category': 'Food', 'forMember': 'Self',
        }, format='json')

        assert response.status_code == 201
        assert response.json()['transaction']['forMember'] == 'Self'

    def test_other_users_member_rejected(self, auth_client, other_member):
        response = auth_client.post(LIST_URL, {
            'type': 'expense', 'amount': 10, 'category': 'Food', 'forMember': str(other_member.pk),
        }, format='json')

        assert response.status_code == 400
        assert response.json()['message'] == 'Invalid forMember value'
        assert Transaction.objects.count() == 0

    @pytest.mark.parametrize('amount', [0, -5, '0.001', 'abc'])
    def test_invalid_amount(self, auth_client, amount):
        response = auth_client.post(LIST_URL, {
            'type': 'expense', 'amount': amount, 'category': 'Food',
        }, format='json')

        assert response.status_code == 400
        body = response.json()
        assert body['message'] == 'Validation error'
        assert 'amount' in body['errors']

    @pytest.mark.parametrize('amount', ['1e30', 1e30, 10 ** 28, '10000000000000', '9999999999999.999'])
    def test_amount_too_large(self, auth_client, amount):
        """DB 컬럼(15자리) 범위를 넘는 금액은 400"""
        response = auth_client.post(LIST_URL, {
            'type': 'expense', 'amount': amount, 'category': 'Food',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['errors']['amount'] == ['Amount is too large']
        assert Transaction.objects.count() == 0

    def test_largest_amount_accepted(self, auth_client):
        response = auth_client.post(LIST_URL, {
            'type': 'income', 'amount': '9999999999999.99', 'category': 'Salary',
        }, format='json')

        assert response.status_code == 201
        assert Transaction.objects.get().amount == Decimal('9999999999999.99')

    def test_missing_fields(self, auth_client):
        response = auth_client.post(LIST_URL, {'type': 'transfer'}, format='json')

        assert response.status_code == 400
        errors = response.json()['errors']
        assert errors['category'] == ['Category is required']
        assert 'type' in errors
        assert 'amount' in errors

    def test_invalid_payment_method(self, auth_client):
        response = auth_client.post(LIST_URL, {
            'type': 'expense', 'amount': 10, 'category': 'Food', 'paymentMethod': 'Bitcoin',
        }, format='json')

        assert response.status_code == 400
        assert 'paymentMethod' in response.json()['errors']

    def test_description_too_long(self, auth_client):
        response = auth_client.post(LIST_URL, {
            'type': 'expense', 'amount': 10, 'category': 'Food', 'description': 'x' * 501,
        }, format='json')

        assert response.status_code == 400
        assert 'description' in response.json()['errors']


@pytest.mark.django_db
class TestTransactionList:
    def test_only_own_transactions(self, auth_client, make_tx, other_user):
        make_tx()
        make_tx(user=other_user)

        body = auth_client.get(LIST_URL).json()

        assert body['total'] == 1
        assert len(body['transactions']) == 1

    def test_pagination(self, auth_client, make_tx):
        for _ in range(15):
            make_tx()

        body = auth_client.get(LIST_URL, {'page': 2, 'limit': 10}).json()

        assert body['total'] == 15
        assert body['totalPages'] == 2
        assert body['currentPage'] == 2
        assert len(body['transactions']) == 5

    def test_page_out_of_range(self, auth_client, make_tx):
        make_tx()

        body = auth_client.get(LIST_URL, {'page': 5}).json()

        assert body['transactions'] == []
        assert body['total'] == 1

    def test_empty_list(self, auth_client):
        body = auth_client.get(LIST_URL).json()

        assert body['transactions'] == []
        assert body['totalPages'] == 0
        assert body['currentPage'] == 1

    def test_filter_category_and_type(self, auth_client, make_tx):
        make_tx(category='Food')
        make_tx(category='Fast food')
        make_tx(category='Travel')
        make_tx(type='income', category='Food refund')

        body = auth_client.get(LIST_URL, {'category': 'food', 'type': 'expense'}).json()

        assert body['total'] == 2
        assert {tx['category'] for tx in body['transactions']} == {'Food', 'Fast food'}

    def test_date_filter_uses_report_timezone(self, auth_client, make_tx):
        """
        날짜만 입력된 필터는 Asia/Kolkata 기준 하루 전체
        2025-01-31 20:00 UTC = 2025-02-01 01:30 IST
        """
        make_tx(date=datetime(2025, 1, 31, 20, 0, tzinfo=dt_timezone.utc), description='late')
        make_tx(date=datetime(2025, 1, 31, 10, 0, tzinfo=dt_timezone.utc), description='jan')

        january = auth_client.get(LIST_URL, {'startDate': '2025-01-01', 'endDate': '2025-01-31'}).json()
        february = auth_client.get(LIST_URL, {'startDate': '2025-02-01'}).json()

        assert [tx['description'] for tx in january['transactions']] == ['jan']
        assert [tx['description'] for tx in february['transactions']] == ['late']

    def test_sort_by_date(self, auth_client, make_tx):
        make_tx(date=datetime(2025, 1, 1, tzinfo=dt_timezone.utc), description='old')
        make_tx(date=datetime(2025, 3, 1, tzinfo=dt_timezone.utc), description='new')

        body = auth_client.get(LIST_URL, {'sortBy': 'date'}).json()

        assert [tx['description'] for tx in body['transactions']] == ['new', 'old']

    def test_default_sort_by_created(self, auth_client, make_tx):
        first = make_tx(date=datetime(2025, 3, 1, tzinfo=dt_timezone.utc), description='first')
        make_tx(date=datetime(2025, 1, 1, tzinfo=dt_timezone.utc), description='second')
        Transaction.objects.filter(pk=first.pk).update(created_at=timezone.now() - timedelta(hours=1))

        body = auth_client.get(LIST_URL).json()

        assert [tx['description'] for tx in body['transactions']] == ['second', 'first']


@pytest.mark.django_db
class TestTransactionUpdate:
    def test_update(self, auth_client, make_tx):
        tx = make_tx()

        response = auth_client.put(detail_url(tx.pk), {
            'type': 'income',
            'amount': 250,
            'category': 'Freelance',
            'paymentMethod': 'UPI',
        }, format='json')

        assert response.status_code == 200
        assert response.json()['message'] == 'Transaction updated successfully'
        tx.refresh_from_db()
        assert tx.type == 'income'
        assert tx.amount == Decimal('250.00')
        assert tx.payment_method == 'UPI'
        # 날짜를 보내지 않으면 기존 값 유지
        assert tx.date == datetime(2025, 1, 15, 12, 0, tzinfo=dt_timezone.utc)

    def test_omitted_for_member_kept(self, auth_client, make_tx, member):
        tx = make_tx(for_member=member)

        response = auth_client.put(detail_url(tx.pk), {
            'type': 'expense', 'amount': 10, 'category': 'Food',
        }, format='json')

        assert response.status_code == 200
        assert response.json()['transaction']['forMember'] == 'Mom'

    def test_reset_for_member_to_self(self, auth_client, make_tx, member):
        tx = make_tx(for_member=member)

        response = auth_client.put(detail_url(tx.pk), {
            'type': 'expense', 'amount': 10, 'category': 'Food', 'forMember': 'Self',
        }, format='json')

        assert response.status_code == 200
        tx.refresh_from_db()
        assert tx.for_member is None

    @pytest.mark.parametrize('value', ['', None])
    def test_blank_for_member_keeps_member(self, auth_client, make_tx, member, value):
        """빈 값은 Self로 바꾸지 않고 기존 구성원 유지"""
        tx = make_tx(for_member=member)

        response = auth_client.put(detail_url(tx.pk), {
            'type': 'expense', 'amount': 10, 'category': 'Food', 'forMember': value,
        }, format='json')

        assert response.status_code == 200
        tx.refresh_from_db()
        assert tx.for_member == member

    def test_update_amount_too_large(self, auth_client, make_tx):
        tx = make_tx()

        response = auth_client.put(detail_url(tx.pk), {
            'type': 'expense', 'amount': '1000000000000000', 'category': 'Food',
        }, format='json')

        assert response.status_code == 400
        assert response.json()['errors']['amount'] == ['Amount is too large']
        tx.refresh_from_db()
        assert tx.amount == Decimal('100.00')

    def test_other_users_transaction(self, other_client, make_tx):
        tx = make_tx()

        response = other_client.put(detail_url(tx.pk), {
            'type': 'expense', 'amount': 10, 'category': 'Food',
        }, format='json')

        assert response.status_code == 404
        assert response.json()['message'] == 'Transaction not found'

    def test_invalid_body(self, auth_client, make_tx):
        tx = make_tx()

        response = auth_client.put(detail_url(tx.pk), {'type': 'expense', 'amount': -1, 'category': 'Food'}, format='json')

        assert response.status_code == 400
        tx.refresh_from_db()
        assert tx.amount == Decimal('100.00')


@pytest.mark.django_db
class TestTransactionDelete:
    def test_delete(self, auth_client, make_tx):
        tx = make_tx()

        response = auth_client.delete(detail_url(tx.pk))

        assert response.status_code == 200
        assert response.json()['message'] == 'Transaction deleted successfully'
        assert not Transaction.objects.filter(pk=tx.pk).exists()

    def test_delete_other_users(self, other_client, make_tx):
        tx = make_tx()

        response = other_client.delete(detail_url(tx.pk))

        assert response.status_code == 404
        assert Transaction.objects.filter(pk=tx.pk).exists()

    def test_delete_missing(self, auth_client):
        assert auth_client.delete(detail_url(99999)).status_code == 404


@pytest.mark.django_db
class TestSummaryView:
    url = '/api/transactions/summary'

    def test_summary_current_month(self, auth_client, make_tx):
        now = timezone.now()
        make_tx(type='income', category='Salary', amount=Decimal('1000'), date=now)
        make_tx(amount=Decimal('250.25'), date=now)

        body = auth_client.get(self.url).json()

        assert body['success'] is True
        assert body['totalIncome'] == 1000
        assert body['totalExpense'] == 250.25
        assert body['balance'] == 749.75
        assert len(body['monthlyTrend']) == 6
        assert body['monthlyTrend'][-1]['income'] == 1000
        assert body['categoryBreakdown'][0] == {'category': 'Salary', 'type': 'income', 'total': 1000}

    def test_summary_weekly(self, auth_client):
        body = auth_client.get(self.url, {'months': 1}).json()

        assert len(body['monthlyTrend']) == 4
        assert body['totalIncome'] == 0

    def test_weekly_trend_anchored_on_end_date(self, auth_client, make_tx):
        """months=1 + endDate → endDate가 속한 주까지 4주"""
        make_tx(date=datetime(2025, 1, 15, 12, 0, tzinfo=dt_timezone.utc), amount=Decimal('40'))
        make_tx(date=datetime(2025, 1, 16, 12, 0, tzinfo=dt_timezone.utc), amount=Decimal('99'))

        body = auth_client.get(self.url, {'months': 1, 'endDate': '2025-01-15'}).json()

        trend = body['monthlyTrend']
        assert [w['key'] for w in trend] == ['2024-12-23', '2024-12-30', '2025-01-06', '2025-01-13']
        assert trend[-1]['expense'] == 40
        assert body['totalExpense'] == 40

    def test_summary_date_range(self, auth_client, make_tx):
        make_tx(date=datetime(2025, 1, 10, tzinfo=dt_timezone.utc), amount=Decimal('10'))
        make_tx(date=datetime(2025, 2, 10, tzinfo=dt_timezone.utc), amount=Decimal('20'))

        body = auth_client.get(self.url, {
            'startDate': '2025-02-01', 'endDate': '2025-02-28', 'months': 3,
        }).json()

        assert body['totalExpense'] == 20
        # 추이는 endDate 기준 최근 3개월 (기간 필터와 무관)
        assert [m['key'] for m in body['monthlyTrend']] == ['2024-12', '2025-01', '2025-02']
        assert [m['expense'] for m in body['monthlyTrend']] == [0, 10, 20]


@pytest.mark.django_db
class TestCategoryList:
    def test_defaults_and_custom(self, auth_client, make_tx):
        make_tx(category='Groceries')
        make_tx(category='food')

        body = auth_client.get('/api/transactions/categories').json()

        names = [c['name'] for c in body['categories']]
        assert 'Food' in names and 'Salary' in names
        assert body['custom'] == ['Groceries']
