import logging

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import error_response, server_error, validation_error
from .serializers import PushTokenSerializer
from .services import get_profile, send_test_notification

logger = logging.getLogger(__name__)


@api_view(['POST', 'DELETE'])
def push_token(request):
    """FCM 토큰 저장(구독) / 제거(구독 해제)"""
    if request.method == 'DELETE':
        return remove_push_token(request)

    serializer = PushTokenSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    user = request.user
    try:
        profile = get_profile(user)
        profile.push_token = serializer.validated_data['pushToken']
        profile.save(update_fields=['push_token', 'updated_at'])
    except Exception:
        return server_error('Failed to save push token')

    logger.info(f"푸시 토큰 저장: {user.username}")
    return Response({
        'success': True,
        'message': 'Push token saved successfully',
        'user': {
            'id': user.pk,
            'username': user.username,
            'email': user.email,
            'hasPushToken': profile.has_push_token,
        },
    })


def remove_push_token(request):
    try:
        get_profile(request.user).clear_push_token()
    except Exception:
        return server_error('Failed to remove push token')

    logger.info(f"푸시 토큰 제거: {request.user.username}")
    return Response({'success': True, 'message': 'Push notifications disabled successfully'})


@api_view(['GET'])
def push_status(request):
    """푸시 알림 구독 상태"""
    enabled = get_profile(request.user).has_push_token
    return Response({'success': True, 'enabled': enabled, 'hasPushToken': enabled})


@api_view(['POST'])
def test_notification(request):
    """
    테스트 알림 발송

    - 성공: 200 (method: push/email)
    - 무효 토큰 제거됨: 400 (tokenCleared: true, 다시 구독 필요)
    - 그 외 실패: 500
    """
    try:
        result = send_test_notification(request.user)
    except Exception:
        return server_error('Failed to send test notification')

    if result['success']:
        return Response({
            'success': True,
            'message': result['message'],
            'method': result['method'],
        })

    if result.get('tokenCleared'):
        return error_response(
            result['message'],
            status.HTTP_400_BAD_REQUEST,
            error=result.get('error'),
            tokenCleared=True,
        )

    return error_response(
        'Failed to send test notification',
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        error=result.get('error'),
    )
