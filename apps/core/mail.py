"""
이메일 발송 헬퍼

Django 메일 프레임워크 위에서 동작합니다.
    - 운영: SMTP (settings.EMAIL_HOST ...)
    - 개발: 콘솔 출력
    - 테스트: locmem (django.core.mail.outbox)
"""
import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """메일 발송 실패"""


def default_sender():
    return f'"{settings.EMAIL_SENDER_NAME}" <{settings.EMAIL_HOST_USER}>'


def send_email(to, subject, text, html=None):
    """
    단일 수신자에게 메일 발송

    Args:
        to: 수신자 이메일
        subject: 제목
        text: 본문 (plain text)
        html: 본문 (HTML, 선택)

    Raises:
        EmailDeliveryError: SMTP 오류 등 발송 실패 시
    """
    message = EmailMultiAlternatives(
        subject=subject,
        body=text,
        from_email=default_sender(),
        to=[to],
    )
    if html:
        message.attach_alternative(html, 'text/html')

    try:
        sent = message.send()
    except Exception as e:
        logger.error(f"메일 발송 실패 ({to}): {e}", exc_info=True)
        raise EmailDeliveryError('Failed to send email') from e

    logger.info(f"메일 발송 완료: {to} ({subject})")
    return sent
