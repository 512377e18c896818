"""
전체 앱 공통 fixture
"""
import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken


@pytest.fixture
def api_client():
    """인증 헤더 없는 API 클라이언트"""
    return APIClient()


@pytest.fixture
def test_user(db):
    """테스트용 사용자"""
    return User.objects.create_user(username='tester', email='tester@example.com', password='pass1234')


@pytest.fixture
def other_user(db):
    """다른 사용자 (권한 테스트용)"""
    return User.objects.create_user(username='other', email='other@example.com', password='pass1234')


@pytest.fixture
def verified_user(test_user):
    """이메일 인증을 마친 사용자 (리마인더 대상)"""
    test_user.profile.is_verified = True
    test_user.profile.save()
    return test_user


def make_client(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {AccessToken.for_user(user)}')
    return client


@pytest.fixture
def auth_client(test_user):
    """JWT로 로그인된 클라이언트"""
    return make_client(test_user)


@pytest.fixture
def other_client(other_user):
    return make_client(other_user)
