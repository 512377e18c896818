from smtplib import SMTPException
from unittest.mock import patch

import pytest
from django.core import mail

from apps.core.mail import EmailDeliveryError, default_sender, send_email


@pytest.mark.django_db
class TestCoreRoutes:
    def test_health(self, api_client):
        response = api_client.get('/api/health')

        assert response.status_code == 200
        body = response.json()
        assert body['message'] == 'Server is running!'
        assert 'timestamp' in body

    def test_unknown_api_route(self, api_client):
        response = api_client.get('/api/does-not-exist')

        assert response.status_code == 404
        assert response.json() == {'message': 'Route not found'}

    def test_unknown_route_any_method(self, api_client):
        response = api_client.post('/api/transactions/oops/extra', {}, format='json')

        assert response.status_code == 404


@pytest.mark.django_db
class TestUnhandledError:
    def test_unexpected_exception_returns_json(self, auth_client):
        """처리되지 않은 예외도 JSON 500 (HTML 에러 페이지 아님)"""
        with patch('apps.accounts.views.serialize_user', side_effect=RuntimeError('boom')):
            response = auth_client.get('/api/auth/me')

        assert response.status_code == 500
        assert response['Content-Type'].startswith('application/json')
        assert response.json() == {'success': False, 'message': 'Server error'}


class TestSendEmail:
    def test_send_with_html(self):
        send_email('user@example.com', 'Hello', 'plain body', '<p>html body</p>')

        assert len(mail.outbox) == 1
        message = mail.outbox[0]
        assert message.to == ['user@example.com']
        assert message.from_email == '"Expense Tracker" <noreply@example.com>'
        assert message.alternatives[0][0] == '<p>html body</p>'

    def test_sender_format(self):
        assert default_sender() == '"Expense Tracker" <noreply@example.com>'

    def test_failure_raises(self):
        with patch('apps.core.mail.EmailMultiAlternatives.send', side_effect=SMTPException('boom')):
            with pytest.raises(EmailDeliveryError):
                send_email('user@example.com', 'Hello', 'body')
