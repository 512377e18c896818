"""
Firebase Cloud Messaging (웹 푸시)

서비스 계정 정보는 환경변수로 받습니다.
    FIREBASE_PROJECT_ID / FIREBASE_CLIENT_EMAIL / FIREBASE_PRIVATE_KEY

설정이 없으면 푸시는 비활성화되고, 호출 측(services.py)에서 이메일로 대체 발송합니다.
"""
import logging

import firebase_admin
from firebase_admin import credentials, messaging
from firebase_admin import exceptions as firebase_exceptions
from django.conf import settings

logger = logging.getLogger(__name__)

WEBPUSH_ICON = '/logo192.png'
WEBPUSH_BADGE = '/badge.png'
WEBPUSH_VIBRATE = [200, 100, 200]

_firebase_app = None


class PushNotificationError(Exception):
    """푸시 발송 실패"""


class PushNotConfigured(PushNotificationError):
    """Firebase 설정 없음"""


class InvalidPushToken(PushNotificationError):
    """만료/등록 해제된 디바이스 토큰 (DB에서 제거 필요)"""


def initialize_firebase():
    """
    Firebase Admin SDK 초기화 (최초 1회)

    Returns:
        firebase_admin.App 또는 None (설정 누락/초기화 실패)
    """
    global _firebase_app
    if _firebase_app is not None:
        return _firebase_app

    project_id = settings.FIREBASE_PROJECT_ID
    client_email = settings.FIREBASE_CLIENT_EMAIL
    private_key = settings.FIREBASE_PRIVATE_KEY
    if not (project_id and client_email and private_key):
        logger.warning("Firebase 설정이 없어 푸시 알림을 사용할 수 없습니다.")
        return None

    try:
        cred = credentials.Certificate({
            'type': 'service_account',
            'project_id': project_id,
            'client_email': client_email,
            # .env에서는 줄바꿈이 '\n' 문자열로 들어옴
            'private_key': private_key.replace('\\n', '\n'),
            'token_uri': 'https://oauth2.googleapis.com/token',
        })
        try:
            _firebase_app = firebase_admin.get_app()
        except ValueError:
            _firebase_app = firebase_admin.initialize_app(cred)
    except (ValueError, IOError) as e:
        logger.error(f"Firebase 초기화 실패: {e}")
        return None

    logger.info("Firebase Admin SDK 초기화 완료")
    return _firebase_app


def get_firebase_app():
    app = initialize_firebase()
    if app is None:
        raise PushNotConfigured('Firebase messaging not available')
    return app


def _absolute_link(link):
    """webpush 클릭 링크는 HTTPS 절대 URL만 허용됨"""
    if not link:
        link = '/'
    if link.startswith('http://') or link.startswith('https://'):
        url = link
    else:
        url = f"{settings.CLIENT_URL.rstrip('/')}/{link.lstrip('/')}"
    return url if url.startswith('https://') else None


def _webpush_config(data):
    link = _absolute_link(data.get('link'))
    return messaging.WebpushConfig(
        notification=messaging.WebpushNotification(
            icon=WEBPUSH_ICON,
            badge=WEBPUSH_BADGE,
            vibrate=WEBPUSH_VIBRATE,
        ),
        fcm_options=messaging.WebpushFCMOptions(link=link) if link else None,
    )


def _data_payload(data):
    # FCM data 값은 문자열만 허용
    payload = {key: str(value) for key, value in (data or {}).items()}
    payload['clickAction'] = 'FLUTTER_NOTIFICATION_CLICK'
    return payload


def _is_invalid_token_error(error):
    """등록 해제/발신자 불일치, 또는 토큰 형식 오류만 무효 토큰으로 판단 (페이로드 오류는 제외)"""
    if isinstance(error, (messaging.UnregisteredError, messaging.SenderIdMismatchError)):
        return True
    if isinstance(error, firebase_exceptions.InvalidArgumentError):
        return 'registration token' in str(error).lower()
    return False


def send_push_notification(token, title, body, data=None):
    """
    단일 디바이스 푸시 발송

    Returns:
        FCM message id

    Raises:
        PushNotConfigured: Firebase 설정 없음
        InvalidPushToken: 만료/무효 토큰
        PushNotificationError: 그 외 발송 실패
    """
    app = get_firebase_app()
    data = data or {}
    message = messaging.Message(
        token=token,
        notification=messaging.Notification(title=title, body=body),
        data=_data_payload(data),
        webpush=_webpush_config(data),
    )

    try:
        message_id = messaging.send(message, app=app)
    except firebase_exceptions.FirebaseError as e:
        logger.error(f"푸시 발송 실패: {e}")
        if _is_invalid_token_error(e):
            logger.warning("만료되었거나 잘못된 토큰입니다. DB에서 제거해야 합니다.")
            raise InvalidPushToken('INVALID_TOKEN') from e
        raise PushNotificationError(str(e)) from e
    except ValueError as e:
        # 메시지 인코딩 단계의 검증 오류 (토큰 형식 등)
        raise PushNotificationError(str(e)) from e

    logger.info(f"푸시 발송 완료: {message_id}")
    return message_id


def send_bulk_push_notifications(tokens, title, body, data=None):
    """
    여러 디바이스에 한 번에 발송

    Returns:
        {'successCount', 'failureCount', 'failedTokens': [{'token', 'error'}]}
    """
    tokens = list(tokens or [])
    if not tokens:
        return {'successCount': 0, 'failureCount': 0, 'failedTokens': []}

    app = get_firebase_app()
    data = data or {}
    message = messaging.MulticastMessage(
        tokens=tokens,
        notification=messaging.Notification(title=title, body=body),
        data=_data_payload(data),
        webpush=_webpush_config(data),
    )

    try:
        response = messaging.send_each_for_multicast(message, app=app)
    except firebase_exceptions.FirebaseError as e:
        logger.error(f"일괄 푸시 발송 실패: {e}")
        raise PushNotificationError(str(e)) from e

    failed_tokens = [
        {'token': token, 'error': str(result.exception)}
        for token, result in zip(tokens, response.responses)
        if not result.success
    ]
    logger.info(f"일괄 푸시: 성공 {response.success_count}건, 실패 {response.failure_count}건")
    if failed_tokens:
        logger.warning(f"실패한 토큰: {failed_tokens}")

    return {
        'successCount': response.success_count,
        'failureCount': response.failure_count,
        'failedTokens': failed_tokens,
    }
