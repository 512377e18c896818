from rest_framework import serializers

from .models import FamilyMember


class FamilyMemberSerializer(serializers.ModelSerializer):
    """가족 구성원 입력/응답"""

    _id = serializers.IntegerField(source='pk', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    name = serializers.CharField(
        max_length=100,
        error_messages={'blank': 'Name is required', 'required': 'Name is required'},
    )
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = FamilyMember
        fields = ['_id', 'userId', 'name', 'createdAt', 'updatedAt']
