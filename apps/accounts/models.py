"""
사용자 프로필 관리

Django 기본 User 모델을 확장하여 알림/인증 정보를 저장합니다.
- push_token: FCM 디바이스 토큰 (웹 푸시 구독 시 저장)
- is_verified: 이메일 인증 여부 (일일 리마인더 발송 대상)
- 이메일 인증번호 / 비밀번호 재설정 토큰 (해시로만 저장)
"""
import hashlib
import secrets
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import User
from django.db import models
from django.utils import timezone

from apps.core.models import TimeStampedModel


def hash_secret(value):
    """인증번호/토큰은 원문 대신 sha256 해시로 보관"""
    return hashlib.sha256(str(value).encode()).hexdigest()


class Profile(TimeStampedModel):
    """사용자 프로필 (Django User 확장)"""

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    push_token = models.CharField(max_length=512, null=True, blank=True)
    is_verified = models.BooleanField(default=False, db_index=True)

    email_otp_hash = models.CharField(max_length=64, blank=True)
    email_otp_expires_at = models.DateTimeField(null=True, blank=True)

    reset_token_hash = models.CharField(max_length=64, blank=True, db_index=True)
    reset_token_expires_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'profiles'

    def __str__(self):
        return f"{self.user.username} 프로필"

    @property
    def has_push_token(self):
        return bool(self.push_token)

    def clear_push_token(self):
        """만료/무효 토큰 제거"""
        self.push_token = None
        self.save(update_fields=['push_token', 'updated_at'])

    # ------------------------------------------------------------
    # 이메일 인증번호 (6자리)
    # ------------------------------------------------------------

    def issue_email_otp(self):
        """새 인증번호 발급 후 원문 반환 (메일 발송용)"""
        otp = f"{secrets.randbelow(1000000):06d}"
        self.email_otp_hash = hash_secret(otp)
        self.email_otp_expires_at = timezone.now() + timedelta(
            minutes=settings.EMAIL_OTP_EXPIRE_MINUTES
        )
        self.save(update_fields=['email_otp_hash', 'email_otp_expires_at', 'updated_at'])
        return otp

    def verify_email_otp(self, otp):
        """인증번호 확인 → 성공 시 is_verified=True"""
        if not self.email_otp_hash or not self.email_otp_expires_at:
            return False
        if self.email_otp_expires_at < timezone.now():
            return False
        if not secrets.compare_digest(self.email_otp_hash, hash_secret(otp)):
            return False

        self.is_verified = True
        self.email_otp_hash = ''
        self.email_otp_expires_at = None
        self.save(update_fields=['is_verified', 'email_otp_hash', 'email_otp_expires_at', 'updated_at'])
        return True

    # ------------------------------------------------------------
    # 비밀번호 재설정 토큰
    # ------------------------------------------------------------

    def issue_reset_token(self):
        """재설정 토큰 발급 후 원문 반환 (링크에 포함)"""
        token = secrets.token_hex(20)
        self.reset_token_hash = hash_secret(token)
        self.reset_token_expires_at = timezone.now() + timedelta(
            minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES
        )
        self.save(update_fields=['reset_token_hash', 'reset_token_expires_at', 'updated_at'])
        return token

    def consume_reset_token(self):
        """토큰 1회 사용 후 폐기"""
        self.reset_token_hash = ''
        self.reset_token_expires_at = None
        self.save(update_fields=['reset_token_hash', 'reset_token_expires_at', 'updated_at'])

    @classmethod
    def find_by_reset_token(cls, token):
        """유효한(만료 전) 토큰의 프로필 조회, 없으면 None"""
        if not token:
            return None
        return cls.objects.select_related('user').filter(
            reset_token_hash=hash_secret(token),
            reset_token_expires_at__gt=timezone.now(),
        ).first()
