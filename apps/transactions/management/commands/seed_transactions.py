import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction as db_transaction
from django.utils import timezone

from apps.family.models import FamilyMember
from apps.transactions.constants import DEFAULT_CATEGORIES
from apps.transactions.models import Transaction

User = get_user_model()


class Command(BaseCommand):
    help = '대시보드 확인용 테스트 거래 데이터 생성 (최근 N개월)'

    INCOME_CATS = [name for name, info in DEFAULT_CATEGORIES.items() if info['type'] == 'income']
    EXPENSE_CATS = [name for name, info in DEFAULT_CATEGORIES.items() if info['type'] == 'expense']
    FAMILY = ['Mom', 'Dad', 'Kid']
    PAYMENT_METHODS = [choice for choice, _ in Transaction.PAYMENT_METHOD_CHOICES]

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default='testuser', help='사용자명')
        parser.add_argument('--months', type=int, default=6, help='생성할 개월 수 (이번 달 포함)')
        parser.add_argument('--per-month', type=int, default=30, help='월별 거래 건수')
        parser.add_argument('--seed', type=int, default=None, help='난수 시드 (재현용)')

    @db_transaction.atomic
    def handle(self, *args, **options):
        if options['seed'] is not None:
            random.seed(options['seed'])

        username = options['username']
        months = max(options['months'], 1)
        per_month = max(options['per_month'], 1)

        # 1. 사용자
        user, created = User.objects.get_or_create(
            username=username,
            defaults={'email': f'{username}@example.com'}
        )
        if created:
            user.set_password('test1234')
            user.save()
            self.stdout.write(f"👤 사용자 생성: {username} / test1234")

        # 2. 가족 구성원
        members = [
            FamilyMember.objects.get_or_create(user=user, name=name)[0]
            for name in self.FAMILY
        ]

        # 3. 거래 생성 (월초 급여 + 나머지 랜덤 지출/수입)
        now = timezone.localtime()
        first_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        transactions_to_create = []

        for offset in range(months):
            month_start = first_of_month
            for _ in range(offset):
                month_start = (month_start - timedelta(days=1)).replace(day=1)

            transactions_to_create.append(self._build(
                user, Transaction.INCOME, 'Salary',
                Decimal(random.randint(400, 600)) * 100,
                month_start.replace(hour=9), None,
            ))

            for _ in range(per_month - 1):
                day = random.randint(1, 28)
                occurred_at = month_start.replace(day=day, hour=random.randint(8, 22), minute=random.randint(0, 59))
                if occurred_at > now:
                    continue

                if random.random() < 0.15:
                    tx_type = Transaction.INCOME
                    category = random.choice(self.INCOME_CATS)
                    amount = Decimal(random.randint(50, 1500)) * 10
                else:
                    tx_type = Transaction.EXPENSE
                    category = random.choice(self.EXPENSE_CATS)
                    amount = Decimal(random.randint(50, 5000)) + Decimal(random.randint(0, 99)) / 100

                member = random.choice(members + [None, None])
                transactions_to_create.append(self._build(user, tx_type, category, amount, occurred_at, member))

        Transaction.objects.bulk_create(transactions_to_create)
        self.stdout.write(self.style.SUCCESS(
            f"🎉 완료! {username}: {len(transactions_to_create)}건 생성 ({months}개월)"
        ))

    def _build(self, user, tx_type, category, amount, occurred_at, member):
        return Transaction(
            user=user,
            type=tx_type,
            category=category,
            amount=amount,
            date=occurred_at,
            payment_method=random.choice(self.PAYMENT_METHODS),
            for_member=member,
            description=f'{category} - {occurred_at:%Y.%m.%d}',
        )
