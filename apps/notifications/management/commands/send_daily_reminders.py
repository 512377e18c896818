from django.conf import settings
from django.core.management.base import BaseCommand

from apps.notifications.services import get_reminder_recipients, send_daily_reminders_to_all_users


class Command(BaseCommand):
    help = '인증된 전체 사용자에게 일일 리마인더 발송 (푸시 → 이메일 대체). crontab에서 매일 실행'

    def add_arguments(self, parser):
        parser.add_argument('--dry-run', action='store_true', help='발송하지 않고 대상자만 출력')
        parser.add_argument('--status', action='store_true', help='실행 주기/시간대 출력')
        parser.add_argument('--delay', type=float, default=None, help='수신자 사이 대기 시간(초)')

    def handle(self, *args, **options):
        if options['status']:
            self.stdout.write(f"⏰ 실행 주기: {settings.DAILY_REMINDER_CRON}")
            self.stdout.write(f"🌍 시간대: {settings.TIME_ZONE}")
            self.stdout.write(f"📋 현재 대상자: {get_reminder_recipients().count()}명")
            return

        users = list(get_reminder_recipients())
        if not users:
            self.stdout.write("ℹ️  인증된 사용자가 없어 발송을 건너뜁니다.")
            return

        if options['dry_run']:
            self.stdout.write(f"📋 발송 대상 {len(users)}명 (dry-run)")
            for user in users:
                method = 'push' if user.profile.has_push_token else 'email'
                self.stdout.write(f"  - {user.username} <{user.email}> [{method}]")
            return

        results = send_daily_reminders_to_all_users(users, delay=options['delay'])

        self.stdout.write("📊 일일 리마인더 요약")
        self.stdout.write(f"   전체: {results['total']}명")
        self.stdout.write(f"   📱 푸시: {results['pushSent']}건")
        self.stdout.write(f"   📧 이메일: {results['emailSent']}건")
        if results['invalidTokens']:
            self.stdout.write(f"   🗑️  제거된 토큰: {len(results['invalidTokens'])}개")

        if results['failed']:
            self.stdout.write(self.style.WARNING(f"⚠️ 실패: {results['failed']}건"))
        self.stdout.write(self.style.SUCCESS(f"✅ 성공: {results['successful']}건"))
