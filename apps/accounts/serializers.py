from django.contrib.auth.models import User
from rest_framework import serializers


def serialize_user(user):
    """응답용 사용자 정보"""
    return {
        'id': user.pk,
        'username': user.username,
        'email': user.email,
    }


class RegisterSerializer(serializers.Serializer):
    """
    회원가입
    - 아이디 3자 이상
    - 이메일 형식 + 중복 확인
    - 비밀번호 6자 이상
    """
    username = serializers.CharField(
        min_length=3,
        max_length=150,
        error_messages={'min_length': 'Username must be at least 3 characters'},
    )
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email format'})
    password = serializers.CharField(
        min_length=6,
        write_only=True,
        trim_whitespace=False,
        error_messages={'min_length': 'Password must be at least 6 characters'},
    )

    def validate_username(self, value):
        value = value.strip()
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError('Username is already taken')
        return value

    def validate_email(self, value):
        return value.strip().lower()

    def create(self, validated_data):
        return User.objects.create_user(
            username=validated_data['username'],
            email=validated_data['email'],
            password=validated_data['password'],
        )


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email format'})
    password = serializers.CharField(
        trim_whitespace=False,
        error_messages={'blank': 'Password is required'},
    )

    def validate_email(self, value):
        return value.strip().lower()


class VerifyEmailSerializer(serializers.Serializer):
    email = serializers.EmailField()
    otp = serializers.RegexField(
        r'^\d{6}$',
        error_messages={'invalid': 'OTP must be 6 digits'},
    )

    def validate_email(self, value):
        return value.strip().lower()


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField(error_messages={'invalid': 'Invalid email format'})

    def validate_email(self, value):
        return value.strip().lower()


class ResetPasswordSerializer(serializers.Serializer):
    password = serializers.CharField(
        min_length=6,
        trim_whitespace=False,
        error_messages={'min_length': 'Password must be at least 6 characters'},
    )


class UpdateMeSerializer(serializers.Serializer):
    """
    프로필 수정 (모든 필드 선택)

    현재 비밀번호 확인은 요구하지 않습니다.
    """
    username = serializers.CharField(min_length=3, max_length=150, required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(min_length=6, required=False, trim_whitespace=False)

    def validate_username(self, value):
        value = value.strip()
        user = self.context['user']
        if User.objects.exclude(pk=user.pk).filter(username__iexact=value).exists():
            raise serializers.ValidationError('Username is already taken')
        return value

    def validate_email(self, value):
        return value.strip().lower()

    def update(self, instance, validated_data):
        if 'username' in validated_data:
            instance.username = validated_data['username']
        if 'email' in validated_data:
            instance.email = validated_data['email']
        if validated_data.get('password'):
            instance.set_password(validated_data['password'])
        instance.save()
        return instance
