from rest_framework import serializers


class PushTokenSerializer(serializers.Serializer):
    pushToken = serializers.CharField(
        max_length=512,
        error_messages={
            'required': 'Push token is required',
            'blank': 'Push token is required',
        },
    )
