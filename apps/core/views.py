from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    """서버 상태 확인"""
    return Response({
        'message': 'Server is running!',
        'timestamp': timezone.now().isoformat(),
    })


@api_view(['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
@authentication_classes([])
@permission_classes([AllowAny])
def route_not_found(request, *args, **kwargs):
    return Response({'message': 'Route not found'}, status=status.HTTP_404_NOT_FOUND)
