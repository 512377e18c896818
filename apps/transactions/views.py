import logging
import math

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.paginator import EmptyPage, Paginator
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from apps.core.exceptions import error_response, server_error, validation_error
from apps.family.models import FamilyMember
from .constants import DEFAULT_CATEGORIES, is_default_category
from .models import SELF_MEMBER, Transaction
from .serializers import TransactionInputSerializer, serialize_transaction
from .utils import build_summary, get_report_timezone, parse_date_param, parse_months

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# 아직 확인하지 않은 forMember 값 (수정 시 기존 구성원 유지)
UNSET = object()


class InvalidForMember(Exception):
    """본인 소유가 아닌(또는 없는) 가족 구성원"""


def resolve_for_member(user, value):
    """
    forMember 입력값 → FamilyMember 또는 None(본인)

    Raises:
        InvalidForMember: 숫자가 아니거나 다른 사용자의 구성원인 경우
    """
    if value is UNSET:
        return UNSET
    if value in (None, '', SELF_MEMBER):
        return None

    value = str(value).strip()
    if not value.isdigit():
        raise InvalidForMember(value)

    member = FamilyMember.objects.filter(pk=int(value), user=user).first()
    if member is None:
        raise InvalidForMember(value)
    return member


def positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


# ============================================================
# Transaction CRUD
# ============================================================

@api_view(['GET', 'POST'])
def transaction_list(request):
    """거래 목록 (필터 + 페이지네이션) / 거래 추가"""
    if request.method == 'POST':
        return transaction_create(request)

    params = request.query_params
    page = positive_int(params.get('page'), 1)
    limit = min(positive_int(params.get('limit'), DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
    tz = get_report_timezone()

    qs = Transaction.objects.for_user(request.user).with_relations()

    # 1. 필터
    category = (params.get('category') or '').strip()
    if category:
        qs = qs.filter(category__icontains=category)

    tx_type = params.get('type')
    if tx_type in (Transaction.INCOME, Transaction.EXPENSE):
        qs = qs.filter(type=tx_type)

    start = parse_date_param(params.get('startDate'), tz)
    end = parse_date_param(params.get('endDate'), tz, inclusive_end=True)
    qs = qs.by_date_range(start, end)

    # 2. 정렬 (최신순)
    if params.get('sortBy') == 'date':
        qs = qs.order_by('-date', '-pk')
    else:
        qs = qs.order_by('-created_at', '-pk')

    # 3. 페이지네이션
    try:
        paginator = Paginator(qs, limit)
        total = paginator.count
        try:
            transactions = list(paginator.page(page).object_list)
        except EmptyPage:
            transactions = []
    except Exception:
        return server_error('Server error while fetching transactions')

    return Response({
        'success': True,
        'transactions': [serialize_transaction(tx) for tx in transactions],
        'totalPages': math.ceil(total / limit),
        'currentPage': page,
        'total': total,
    })


def transaction_create(request):
    serializer = TransactionInputSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    try:
        member = resolve_for_member(request.user, serializer.validated_data.get('forMember'))
    except InvalidForMember:
        return error_response('Invalid forMember value')

    try:
        tx = Transaction.objects.create(
            user=request.user,
            for_member=member,
            **serializer.to_model_fields(),
        )
    except Exception:
        return server_error('Server error while creating transaction')

    logger.info(f"거래 추가: {tx} (user={request.user.pk})")
    return Response({
        'success': True,
        'message': 'Transaction added successfully',
        'transaction': serialize_transaction(tx),
    }, status=status.HTTP_201_CREATED)


@api_view(['PUT', 'DELETE'])
def transaction_detail(request, pk):
    """거래 수정 / 삭제 (본인 거래만)"""
    tx = Transaction.objects.for_user(request.user).with_relations().filter(pk=pk).first()

    if request.method == 'DELETE':
        return transaction_delete(request, tx)

    serializer = TransactionInputSerializer(data=request.data)
    if not serializer.is_valid():
        return validation_error(serializer.errors)

    if tx is None:
        return error_response('Transaction not found', status.HTTP_404_NOT_FOUND)

    # 빈 값은 'Self'가 아니라 '변경 없음'
    for_member = serializer.validated_data.get('forMember', UNSET)
    if for_member in (None, ''):
        for_member = UNSET

    try:
        member = resolve_for_member(request.user, for_member)
    except InvalidForMember:
        return error_response('Invalid forMember value')

    try:
        for field, value in serializer.to_model_fields().items():
            setattr(tx, field, value)
        if member is not UNSET:
            tx.for_member = member
        tx.full_clean(exclude=['user'])
        tx.save()
    except DjangoValidationError as e:
        return validation_error(e.message_dict)
    except Exception:
        return server_error('Server error while updating transaction')

    return Response({
        'success': True,
        'message': 'Transaction updated successfully',
        'transaction': serialize_transaction(tx),
    })


def transaction_delete(request, tx):
    if tx is None:
        return error_response('Transaction not found', status.HTTP_404_NOT_FOUND)

    try:
        tx.delete()
    except Exception:
        return server_error('Server error while deleting transaction')

    logger.info(f"거래 삭제: pk={tx.pk} (user={request.user.pk})")
    return Response({'success': True, 'message': 'Transaction deleted successfully'})


# ============================================================
# 요약 / 카테고리
# ============================================================

@api_view(['GET'])
def transaction_summary(request):
    """
    대시보드/리포트 요약

    Query:
        startDate, endDate: 합계/카테고리 집계 기간 (선택, 양 끝 포함)
        months: 추이 개월 수 (기본 6, 1이면 최근 4주 주별)
    """
    params = request.query_params
    tz = get_report_timezone()
    start = parse_date_param(params.get('startDate'), tz)
    end = parse_date_param(params.get('endDate'), tz, inclusive_end=True)
    months = parse_months(params.get('months'))

    try:
        summary = build_summary(request.user, start=start, end=end, months=months, tz=tz)
    except Exception:
        return server_error('Server error while fetching summary')

    return Response({'success': True, **summary})


@api_view(['GET'])
def category_list(request):
    """기본 카테고리 + 사용자가 직접 입력한 카테고리"""
    defaults = [
        {'name': name, 'icon': info['icon'], 'color': info['color'], 'type': info['type']}
        for name, info in DEFAULT_CATEGORIES.items()
    ]

    used = (
        Transaction.objects.for_user(request.user)
        .values_list('category', flat=True)
        .distinct()
        .order_by('category')
    )
    custom = sorted({name for name in used if name and not is_default_category(name)})

    return Response({
        'success': True,
        'categories': defaults,
        'custom': custom,
    })
