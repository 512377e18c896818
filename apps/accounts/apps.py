from django.apps import AppConfig


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.accounts'

    def ready(self):
        # Profile 자동 생성 시그널 등록
        import apps.accounts.signals  # noqa: F401
