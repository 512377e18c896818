"""
알림 발송 서비스 테스트

Firebase 호출은 services.send_push_notification 을 patch 해서 대체합니다.
"""
from unittest.mock import patch

import pytest
from django.contrib.auth.models import User
from django.core import mail

from apps.core.mail import EmailDeliveryError
from apps.notifications.push import InvalidPushToken, PushNotConfigured, PushNotificationError
from apps.notifications.services import (
    get_reminder_recipients,
    send_daily_reminder,
    send_daily_reminders_to_all_users,
    send_test_notification,
)

PUSH = 'apps.notifications.services.send_push_notification'


def set_token(user, token='device-token'):
    user.profile.push_token = token
    user.profile.save()


@pytest.mark.django_db
class TestDailyReminder:
    def test_push_success(self, verified_user):
        set_token(verified_user)

        with patch(PUSH, return_value='msg-1') as push:
            result = send_daily_reminder(verified_user)

        assert result['success'] is True
        assert result['method'] == 'push'
        assert result['messageId'] == 'msg-1'
        push.assert_called_once()
        assert push.call_args.args[0] == 'device-token'
        assert mail.outbox == []

    def test_no_token_sends_email(self, verified_user):
        with patch(PUSH) as push:
            result = send_daily_reminder(verified_user)

        push.assert_not_called()
        assert result == {'user': 'tester', 'email': 'tester@example.com', 'success': True, 'method': 'email'}
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['tester@example.com']

    def test_invalid_token_cleared_and_email_sent(self, verified_user):
        set_token(verified_user, 'stale-token')

        with patch(PUSH, side_effect=InvalidPushToken('INVALID_TOKEN')):
            result = send_daily_reminder(verified_user)

        assert result['success'] is True
        assert result['method'] == 'email'
        assert result['invalidToken'] == 'stale-token'
        assert len(mail.outbox) == 1
        verified_user.profile.refresh_from_db()
        assert verified_user.profile.push_token is None

    def test_push_failure_keeps_token(self, verified_user):
        set_token(verified_user)

        with patch(PUSH, side_effect=PushNotConfigured('Firebase messaging not available')):
            result = send_daily_reminder(verified_user)

        assert result['method'] == 'email'
        assert 'invalidToken' not in result
        verified_user.profile.refresh_from_db()
        assert verified_user.profile.push_token == 'device-token'

    def test_email_failure(self, verified_user):
        with patch('apps.notifications.services.send_email', side_effect=EmailDeliveryError('Failed to send email')):
            result = send_daily_reminder(verified_user)

        assert result['success'] is False
        assert result['error'] == 'Failed to send email'


@pytest.mark.django_db
class TestReminderBatch:
    def test_recipients_only_verified_active(self, verified_user, other_user):
        inactive = User.objects.create_user(username='gone', email='gone@example.com', password='pass1234', is_active=False)
        inactive.profile.is_verified = True
        inactive.profile.save()
        no_email = User.objects.create_user(username='noemail', password='pass1234')
        no_email.profile.is_verified = True
        no_email.profile.save()

        assert list(get_reminder_recipients()) == [verified_user]

    def test_counts_push_and_email(self, verified_user, other_user):
        set_token(verified_user)

        with patch(PUSH, return_value='msg-1'):
            results = send_daily_reminders_to_all_users([verified_user, other_user], delay=0)

        assert results['total'] == 2
        assert results['successful'] == 2
        assert results['failed'] == 0
        assert results['pushSent'] == 1
        assert results['emailSent'] == 1
        assert len(results['details']) == 2

    def test_collects_invalid_tokens(self, verified_user):
        set_token(verified_user, 'stale-token')

        with patch(PUSH, side_effect=InvalidPushToken('INVALID_TOKEN')):
            results = send_daily_reminders_to_all_users([verified_user], delay=0)

        assert results['invalidTokens'] == ['stale-token']
        assert results['emailSent'] == 1

    def test_one_failure_does_not_stop_batch(self, verified_user, other_user):
        def flaky(user):
            if user == verified_user:
                raise RuntimeError('db down')
            return {'success': True, 'method': 'email', 'user': user.username, 'email': user.email}

        with patch('apps.notifications.services.send_daily_reminder', side_effect=flaky):
            results = send_daily_reminders_to_all_users([verified_user, other_user], delay=0)

        assert results['failed'] == 1
        assert results['successful'] == 1
        assert results['details'][0]['error'] == 'db down'

    def test_delay_between_users(self, verified_user, other_user):
        with patch('apps.notifications.services.time.sleep') as sleep:
            send_daily_reminders_to_all_users([verified_user, other_user], delay=0.5)

        sleep.assert_called_once_with(0.5)


@pytest.mark.django_db
class TestTestNotification:
    def test_push(self, test_user):
        set_token(test_user)

        with patch(PUSH, return_value='msg-1'):
            result = send_test_notification(test_user)

        assert result['success'] is True
        assert result['method'] == 'push'

    def test_email_without_token(self, test_user):
        result = send_test_notification(test_user)

        assert result['method'] == 'email'
        assert mail.outbox[0].subject == 'Test Notification - Push Token Missing'

    def test_invalid_token(self, test_user):
        set_token(test_user)

        with patch(PUSH, side_effect=InvalidPushToken('INVALID_TOKEN')):
            result = send_test_notification(test_user)

        assert result['success'] is False
        assert result['tokenCleared'] is True
        test_user.profile.refresh_from_db()
        assert test_user.profile.push_token is None

    def test_push_error(self, test_user):
        set_token(test_user)

        with patch(PUSH, side_effect=PushNotificationError('unavailable')):
            result = send_test_notification(test_user)

        assert result == {'success': False, 'error': 'unavailable'}
