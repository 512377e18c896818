from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from apps.transactions.models import Transaction

User = get_user_model()


class Command(BaseCommand):
    help = '지정한 사용자(기본: 첫 번째 사용자)의 거래 내역을 모두 삭제합니다.'

    def add_arguments(self, parser):
        parser.add_argument('--username', type=str, default=None, help='사용자명 (생략 시 첫 번째 사용자)')

    def handle(self, *args, **options):
        username = options['username']

        if username:
            user = User.objects.filter(username=username).first()
            if user is None:
                self.stdout.write(self.style.ERROR(f"❌ '{username}' 사용자를 찾을 수 없습니다."))
                return
        else:
            user = User.objects.order_by('pk').first()
            if user is None:
                self.stdout.write(self.style.ERROR("❌ 사용자가 없습니다."))
                return

        self.stdout.write(f"⚠️ {user.username}의 거래 내역을 삭제하기 시작합니다...")
        count, _ = Transaction.objects.filter(user=user).delete()
        self.stdout.write(self.style.SUCCESS(f"✅ 삭제된 거래: {count}건"))
