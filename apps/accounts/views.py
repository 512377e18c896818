# Django 기본
from django.conf import settings
from django.contrib.auth.models import User
from django.db import IntegrityError, transaction
from django.template.loader import render_to_string

# REST API
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import AccessToken

# 기타
import logging

# 앱 내부
from apps.core.exceptions import error_response, server_error, validation_error
from apps.core.mail import EmailDeliveryError, send_email
from .models import Profile
from .serializers import (
    ForgotPasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
    ResetPasswordSerializer,
    UpdateMeSerializer,
    VerifyEmailSerializer,
    serialize_user,
)

logger = logging.getLogger(__name__)


def generate_token(user):
    """JWT access token 발급 (유효기간: settings.SIMPLE_JWT)"""
    return str(AccessToken.for_user(user))


def auth_response(user, status_code=status.HTTP_200_OK):
    return Response({
        'success': True,
        'token': generate_token(user),
        'user': serialize_user(user),
    }, status=status_code)


def send_verification_email(user):
    """인증번호 발급 + 메일 발송 (실패해도 가입은 유지)"""
    profile, _ = Profile.objects.get_or_create(user=user)
    otp = profile.issue_email_otp()
    context = {
        'username': user.username,
        'otp': otp,
        'expire_minutes': settings.EMAIL_OTP_EXPIRE_MINUTES,
    }
    try:
        send_email(
            user.email,
            'Verify your email - Expense Tracker',
            f"Hi {user.username}, your verification code is {otp}. "
            f"It expires in {settings.EMAIL_OTP_EXPIRE_MINUTES} minutes.",
            render_to_string('accounts/emails/verify_email.html', context),
        )
    except EmailDeliveryError:
        logger.warning(f"인증 메일 발송 실패: {user.email} (가입은 완료됨)")


# ============================================================
# 회원가입 / 로그인
# ============================================================

@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def register(request):
    """
    회원가입
    - 이메일 중복 시 400
    - 가입 즉시 토큰 발급 (로그인 상태)
    - Profile 자동 생성 (signals.py에서 처리)
    """
    serializer = RegisterSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    email = serializer.validated_data['email']
    if User.objects.filter(email__iexact=email).exists():
        return error_response('User already exists with this email')

    try:
        with transaction.atomic():
            user = serializer.save()
    except IntegrityError as e:
        logger.error(f"회원가입 실패 (중복 데이터): {e}")
        return error_response('User already exists with this email')
    except Exception:
        return server_error('Server error during registration')

    logger.info(f"신규 회원가입: {user.username} (ID: {user.id}, Email: {user.email})")
    send_verification_email(user)
    return auth_response(user, status.HTTP_201_CREATED)


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def login(request):
    """이메일 + 비밀번호 로그인"""
    serializer = LoginSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    email = serializer.validated_data['email']
    password = serializer.validated_data['password']

    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.is_active or not user.check_password(password):
        logger.info(f"로그인 실패: {email}")
        return error_response('Invalid credentials', status.HTTP_401_UNAUTHORIZED)

    return auth_response(user)


# ============================================================
# 이메일 인증 / 비밀번호 재설정
# ============================================================

@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def verify_email(request):
    """인증번호 확인"""
    serializer = VerifyEmailSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    user = User.objects.filter(email__iexact=serializer.validated_data['email']).first()
    if user is None:
        return error_response('Invalid or expired OTP')

    profile, _ = Profile.objects.get_or_create(user=user)
    if profile.is_verified:
        return Response({'success': True, 'message': 'Email already verified'})

    if not profile.verify_email_otp(serializer.validated_data['otp']):
        return error_response('Invalid or expired OTP')

    logger.info(f"이메일 인증 완료: {user.email}")
    return Response({'success': True, 'message': 'Email verified successfully'})


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def forgot_password(request):
    """
    비밀번호 재설정 링크 발송

    가입 여부를 노출하지 않도록 존재하지 않는 이메일에도 같은 응답을 반환합니다.
    """
    serializer = ForgotPasswordSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    message = 'If an account exists for this email, a reset link has been sent'
    user = User.objects.filter(email__iexact=serializer.validated_data['email']).first()
    if user is None:
        return Response({'success': True, 'message': message})

    profile, _ = Profile.objects.get_or_create(user=user)
    token = profile.issue_reset_token()
    reset_url = f"{settings.CLIENT_URL.rstrip('/')}/reset-password/{token}"
    context = {
        'username': user.username,
        'reset_url': reset_url,
        'expire_minutes': settings.PASSWORD_RESET_EXPIRE_MINUTES,
    }

    try:
        send_email(
            user.email,
            'Password Reset - Expense Tracker',
            f"Hi {user.username}, reset your password here: {reset_url} "
            f"(expires in {settings.PASSWORD_RESET_EXPIRE_MINUTES} minutes)",
            render_to_string('accounts/emails/password_reset.html', context),
        )
    except EmailDeliveryError:
        # 발송 실패 시 토큰을 남겨두지 않음
        profile.consume_reset_token()
        return error_response(
            'Failed to send reset email. Please try again.',
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response({'success': True, 'message': message})


@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def reset_password(request, token):
    """재설정 토큰 확인 후 새 비밀번호 저장 (토큰은 1회용)"""
    serializer = ResetPasswordSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    profile = Profile.find_by_reset_token(token)
    if profile is None:
        return error_response('Invalid or expired reset token')

    with transaction.atomic():
        user = profile.user
        user.set_password(serializer.validated_data['password'])
        user.save()
        profile.consume_reset_token()

    logger.info(f"비밀번호 재설정 완료: {user.email}")
    return Response({'success': True, 'message': 'Password reset successful'})


# ============================================================
# 내 정보
# ============================================================

@api_view(['GET', 'PUT'])
def me(request):
    if request.method == 'PUT':
        return update_me(request)
    return Response({'success': True, 'user': serialize_user(request.user)})


def update_me(request):
    """아이디/이메일/비밀번호 수정 후 새 토큰 발급"""
    user = request.user
    serializer = UpdateMeSerializer(data=request.data, context={'user': user})
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    email = serializer.validated_data.get('email')
    if email and email != user.email.lower():
        if User.objects.exclude(pk=user.pk).filter(email__iexact=email).exists():
            return error_response('Email already in use')

    try:
        user = serializer.update(user, serializer.validated_data)
    except Exception:
        return server_error('Server error while updating profile')

    return auth_response(user)
