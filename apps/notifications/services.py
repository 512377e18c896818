"""
알림 발송 서비스

푸시 알림을 먼저 시도하고, 토큰이 없거나 푸시가 실패하면 이메일로 대체 발송합니다.

    사용자 ─┬─ push_token 있음 → FCM 푸시 ──(실패)──┐
            └─ push_token 없음 ────────────────────┴→ 이메일

무효 토큰(InvalidPushToken)은 프로필에서 바로 제거합니다.
"""
import logging
import time

from django.conf import settings
from django.contrib.auth.models import User
from django.template.loader import render_to_string

from apps.accounts.models import Profile
from apps.core.mail import EmailDeliveryError, send_email
from .push import InvalidPushToken, PushNotificationError, send_push_notification

logger = logging.getLogger(__name__)

REMINDER_TITLE = "💰 Time to Track Your Day's Spending!"
REMINDER_BODY = "Don't forget to log your expenses for today. Keep your budget on point! ✨"


def get_profile(user):
    profile, _ = Profile.objects.get_or_create(user=user)
    return profile


def get_reminder_recipients():
    """일일 리마인더 대상: 이메일 인증을 마친 활성 사용자"""
    return (
        User.objects
        .filter(is_active=True, profile__is_verified=True)
        .exclude(email='')
        .select_related('profile')
        .order_by('pk')
    )


def _dashboard_url():
    return f"{settings.CLIENT_URL.rstrip('/')}/dashboard"


def send_reminder_email(user):
    html = render_to_string('notifications/emails/daily_reminder.html', {
        'username': user.username,
        'dashboard_url': _dashboard_url(),
    })
    send_email(user.email, REMINDER_TITLE, REMINDER_BODY, html)


def send_daily_reminder(user):
    """
    한 명에게 일일 리마인더 발송 (푸시 → 이메일 대체)

    Returns:
        {'success', 'method': 'push'|'email', 'user', 'email', ...}
        실패 시 {'success': False, 'error': ...}
        무효 토큰을 정리한 경우 'invalidToken' 포함
    """
    profile = get_profile(user)
    result = {'user': user.username, 'email': user.email}
    token = profile.push_token

    if token:
        try:
            message_id = send_push_notification(
                token,
                REMINDER_TITLE,
                REMINDER_BODY,
                {'type': 'daily_reminder', 'link': '/dashboard'},
            )
            logger.info(f"푸시 리마인더 발송: {user.username} ({user.email})")
            return {**result, 'success': True, 'method': 'push', 'messageId': message_id}
        except InvalidPushToken:
            logger.info(f"무효 토큰 제거: {user.username}")
            profile.clear_push_token()
            result['invalidToken'] = token
        except PushNotificationError as e:
            logger.warning(f"푸시 실패, 이메일로 대체: {user.username} ({e})")

    try:
        send_reminder_email(user)
    except EmailDeliveryError as e:
        logger.error(f"리마인더 발송 실패: {user.username} ({user.email}): {e}")
        return {**result, 'success': False, 'error': str(e)}

    logger.info(f"이메일 리마인더 발송: {user.username} ({user.email})")
    return {**result, 'success': True, 'method': 'email'}


def send_daily_reminders_to_all_users(users, delay=None):
    """
    전체 사용자 리마인더 발송 (순차 처리)

    한 명이 실패해도 나머지는 계속 보냅니다.
    수신자 사이에는 delay초(기본 settings.REMINDER_SEND_DELAY) 대기합니다.
    """
    users = list(users)
    delay = settings.REMINDER_SEND_DELAY if delay is None else delay
    logger.info(f"일일 리마인더 발송 시작: {len(users)}명")

    results = {
        'total': len(users),
        'successful': 0,
        'failed': 0,
        'pushSent': 0,
        'emailSent': 0,
        'details': [],
        'invalidTokens': [],
    }

    for index, user in enumerate(users):
        try:
            result = send_daily_reminder(user)
        except Exception as e:
            logger.error(f"사용자 처리 중 오류: {user.username}: {e}", exc_info=True)
            result = {'success': False, 'user': user.username, 'email': user.email, 'error': str(e)}

        results['details'].append(result)
        if result.get('invalidToken'):
            results['invalidTokens'].append(result['invalidToken'])

        if result['success']:
            results['successful'] += 1
            if result['method'] == 'push':
                results['pushSent'] += 1
            else:
                results['emailSent'] += 1
        else:
            results['failed'] += 1

        if delay and index < len(users) - 1:
            time.sleep(delay)

    logger.info(
        f"일일 리마인더 요약: 전체 {results['total']}명, 성공 {results['successful']}, "
        f"실패 {results['failed']}, 푸시 {results['pushSent']}, 이메일 {results['emailSent']}"
    )
    return results


def send_test_notification(user):
    """
    설정 확인용 테스트 알림

    토큰이 있으면 푸시, 없으면 이메일.
    무효 토큰이면 제거 후 tokenCleared=True 반환 (다시 구독 필요)
    """
    profile = get_profile(user)

    if profile.push_token:
        try:
            send_push_notification(
                profile.push_token,
                'Test Notification',
                f"Hi {user.username}, your push notifications are working! ✅",
                {'type': 'test', 'link': '/settings'},
            )
        except InvalidPushToken as e:
            profile.clear_push_token()
            return {
                'success': False,
                'tokenCleared': True,
                'message': 'Your push token was invalid and has been removed. Please enable notifications again.',
                'error': str(e),
            }
        except PushNotificationError as e:
            logger.error(f"테스트 푸시 실패: {user.username}: {e}")
            return {'success': False, 'error': str(e)}

        return {
            'success': True,
            'method': 'push',
            'message': 'Test push notification sent successfully',
        }

    html = render_to_string('notifications/emails/test_notification.html', {
        'username': user.username,
    })
    try:
        send_email(
            user.email,
            'Test Notification - Push Token Missing',
            f"Hi {user.username}, you don't have push notifications enabled. "
            "This is a test email fallback.",
            html,
        )
    except EmailDeliveryError as e:
        return {'success': False, 'error': str(e)}

    return {
        'success': True,
        'method': 'email',
        'message': 'Test email sent successfully (no push token found)',
    }
