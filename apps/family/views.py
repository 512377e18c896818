import logging

from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import error_response, server_error
from .models import FamilyMember
from .serializers import FamilyMemberSerializer

logger = logging.getLogger(__name__)


def get_member_or_none(user, pk):
    return FamilyMember.objects.filter(pk=pk, user=user).first()


@api_view(['GET', 'POST'])
def member_list(request):
    """가족 구성원 목록(최신순) / 추가"""
    if request.method == 'POST':
        return member_create(request)

    try:
        members = FamilyMember.objects.filter(user=request.user).order_by('-created_at')
        data = FamilyMemberSerializer(members, many=True).data
    except Exception:
        return server_error('Server error while fetching family members')

    return Response({'success': True, 'members': data})


def member_create(request):
    serializer = FamilyMemberSerializer(data=request.data)
    if not serializer.is_valid():
        return error_response('Name is required')

    try:
        member = serializer.save(user=request.user)
    except Exception:
        return server_error('Server error while creating family member')

    logger.info(f"가족 구성원 추가: {member.name} (user={request.user.pk})")
    return Response(
        {'success': True, 'member': FamilyMemberSerializer(member).data},
        status=status.HTTP_201_CREATED,
    )


@api_view(['PUT', 'DELETE'])
def member_detail(request, pk):
    """가족 구성원 이름 수정 / 삭제 (본인 소유만)"""
    member = get_member_or_none(request.user, pk)
    if member is None:
        return error_response('Family member not found', status.HTTP_404_NOT_FOUND)

    if request.method == 'DELETE':
        return member_delete(request, member)

    serializer = FamilyMemberSerializer(member, data=request.data)
    if not serializer.is_valid():
        return error_response('Name is required')

    try:
        member = serializer.save()
    except Exception:
        return server_error('Server error while updating family member')

    return Response({'success': True, 'member': FamilyMemberSerializer(member).data})


def member_delete(request, member):
    """삭제 시 연결된 거래는 'Self'로 돌아감 (FK SET_NULL)"""
    try:
        with transaction.atomic():
            member.delete()
    except Exception:
        return server_error('Server error while deleting family member')

    logger.info(f"가족 구성원 삭제: {member.name} (user={request.user.pk})")
    return Response({'success': True, 'message': 'Family member deleted'})
