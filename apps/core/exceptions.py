"""
API 공통 에러 응답

모든 에러 응답은 {"message": ...} 형태로 통일합니다.
검증 에러는 필드별 메시지를 "errors"에 함께 담습니다.

    {"message": "Validation error", "errors": {"amount": ["Amount must be positive"]}}
"""
import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """DRF 기본 핸들러 결과를 {"message": ...} 형태로 변환"""
    response = exception_handler(exc, context)
    if response is None:
        # APIException이 아닌 예외도 HTML 500 대신 JSON으로 응답
        view = context.get('view')
        logger.error(f"처리되지 않은 예외: {view.__class__.__name__ if view else '-'}", exc_info=exc)
        set_rollback()
        return Response(
            {'success': False, 'message': 'Server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            'success': False,
            'message': 'Validation error',
            'errors': response.data,
        }
        return response

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response.data = {
            'success': False,
            'message': 'Not authorized, token failed'
            if isinstance(exc, exceptions.AuthenticationFailed)
            else 'Not authorized, no token',
        }
        return response

    detail = response.data.get('detail') if isinstance(response.data, dict) else None
    response.data = {
        'success': False,
        'message': str(detail) if detail else 'Request failed',
    }
    return response


def validation_error(errors):
    """serializer.errors → 400 응답"""
    return Response(
        {'success': False, 'message': 'Validation error', 'errors': errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def error_response(message, status_code=status.HTTP_400_BAD_REQUEST, **extra):
    """단순 에러 메시지 응답"""
    return Response({'success': False, 'message': message, **extra}, status=status_code)


def server_error(message):
    """예상치 못한 예외 → 500 (호출 측 except 블록에서 사용)"""
    logger.error(message, exc_info=True)
    return Response(
        {'success': False, 'message': message},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
