"""
거래 요약/리포트 집계

대시보드와 리포트 화면에서 쓰는 데이터를 계산합니다.
    - 기간 내 총수입 / 총지출 / 잔액
    - (카테고리, 유형)별 합계
    - 월별 추이 (기본 6개월) 또는 최근 4주 주별 추이 (months=1)

월/주 구분은 UTC가 아니라 리포트 기준 시간대(settings.SERVER_TIMEZONE)로 합니다.
예) Asia/Kolkata 기준 2월 1일 02:00 거래는 UTC로는 1월 31일이지만 2월로 집계됩니다.
"""
import logging
from datetime import datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from django.conf import settings
from django.db.models import Q, Sum
from django.db.models.functions import TruncMonth, TruncWeek
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .models import Transaction

logger = logging.getLogger(__name__)

MONTH_LABELS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

DEFAULT_TREND_MONTHS = 6
MAX_TREND_MONTHS = 60
TREND_WEEKS = 4


def get_report_timezone():
    """리포트 기준 시간대 (잘못된 이름이면 UTC)"""
    name = getattr(settings, 'SERVER_TIMEZONE', None) or 'UTC'
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"알 수 없는 시간대 '{name}', UTC로 집계합니다.")
        return ZoneInfo('UTC')


def to_number(value):
    """Decimal 합계 → JSON 숫자 (소수점 2자리)"""
    if value is None:
        return 0
    amount = Decimal(value).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return int(amount) if amount == amount.to_integral_value() else float(amount)


def parse_date_param(value, tz, inclusive_end=False):
    """
    쿼리 파라미터 날짜 해석

    - '2025-01-31'            → 해당 날짜 00:00 (inclusive_end=True면 23:59:59.999999), tz 기준
    - '2025-01-31T10:00:00Z'  → 그대로 사용 (시간대 없으면 tz 기준)
    - 비어있거나 형식 오류     → None
    """
    if not value:
        return None
    value = str(value).strip()

    # 날짜만 있는 값을 먼저 확인 (parse_datetime은 날짜만 있어도 00:00으로 해석함)
    try:
        day = parse_date(value)
    except ValueError:
        return None
    if day is not None:
        return datetime.combine(day, time.max if inclusive_end else time.min, tzinfo=tz)

    try:
        parsed = parse_datetime(value)
    except ValueError:
        return None
    if parsed is None:
        return None
    if timezone.is_naive(parsed):
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def parse_months(value):
    """months 파라미터 (숫자가 아니거나 1 미만이면 기본 6개월)"""
    try:
        months = int(value)
    except (TypeError, ValueError):
        return DEFAULT_TREND_MONTHS
    if months < 1:
        return DEFAULT_TREND_MONTHS
    return min(months, MAX_TREND_MONTHS)


def shift_month(year, month, delta):
    """(year, month)에서 delta개월 이동"""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def end_of_day(moment, tz):
    """tz 기준 해당 날짜의 마지막 순간"""
    local = moment.astimezone(tz)
    return datetime.combine(local.date(), time.max, tzinfo=tz)


# ============================================================
# 합계 / 카테고리별
# ============================================================

def calculate_totals(queryset):
    """총수입 / 총지출 / 잔액"""
    totals = queryset.aggregate(
        income=Sum('amount', filter=Q(type=Transaction.INCOME)),
        expense=Sum('amount', filter=Q(type=Transaction.EXPENSE)),
    )
    income = totals['income'] or Decimal('0')
    expense = totals['expense'] or Decimal('0')
    return {
        'totalIncome': to_number(income),
        'totalExpense': to_number(expense),
        'balance': to_number(income - expense),
    }


def category_breakdown(queryset):
    """(카테고리, 유형)별 합계, 금액 큰 순"""
    rows = (
        queryset
        .values('category', 'type')
        .annotate(total=Sum('amount'))
        .order_by('-total', 'category', 'type')
    )
    return [
        {
            'category': row['category'],
            'type': row['type'],
            'total': to_number(row['total']),
        }
        for row in rows
    ]


# ============================================================
# 추이 (월별 / 주별)
# ============================================================

def _sum_by_period(queryset, trunc, key_format):
    """{(기간 키, 유형): 합계}"""
    rows = (
        queryset
        .annotate(period=trunc)
        .values('period', 'type')
        .annotate(total=Sum('amount'))
        .order_by()
    )
    sums = {}
    for row in rows:
        if row['period'] is None:
            continue
        key = row['period'].strftime(key_format)
        sums[(key, row['type'])] = sums.get((key, row['type']), Decimal('0')) + row['total']
    return sums


def monthly_trend(queryset, end, months, tz):
    """
    최근 N개월 월별 수입/지출 (오래된 달부터)

    Args:
        queryset: 사용자 거래 (날짜 필터 적용 전)
        end: 기준 시점 (해당 날짜 끝까지 포함)
        months: 개월 수 (1 이상)
        tz: 집계 시간대

    Returns:
        [{'month': 'Jan', 'year': 2025, 'key': '2025-01', 'income': 0, 'expense': 0}, ...]
    """
    window_end = end_of_day(end, tz)
    first_year, first_month = shift_month(window_end.year, window_end.month, -(months - 1))
    window_start = datetime(first_year, first_month, 1, tzinfo=tz)

    sums = _sum_by_period(
        queryset.filter(date__gte=window_start, date__lte=window_end),
        TruncMonth('date', tzinfo=tz),
        '%Y-%m',
    )

    trend = []
    for offset in range(months):
        year, month = shift_month(first_year, first_month, offset)
        key = f"{year}-{month:02d}"
        trend.append({
            'month': MONTH_LABELS[month - 1],
            'year': year,
            'key': key,
            'income': to_number(sums.get((key, Transaction.INCOME))),
            'expense': to_number(sums.get((key, Transaction.EXPENSE))),
        })
    return trend


def _week_label(start):
    finish = start + timedelta(days=6)
    return (
        f"{MONTH_LABELS[start.month - 1]} {start.day:02d} - "
        f"{MONTH_LABELS[finish.month - 1]} {finish.day:02d}"
    )


def weekly_trend(queryset, end, tz, weeks=TREND_WEEKS):
    """
    최근 N주 주별 수입/지출 (월요일 시작, 오래된 주부터)

    기준 시점이 속한 주 + 그 이전 (weeks-1)주를 빈 주 없이 채워서 반환합니다.
    key는 주 시작일(월요일) 'YYYY-MM-DD'.
    """
    window_end = end_of_day(end, tz)
    last_monday = window_end.date() - timedelta(days=window_end.weekday())
    first_monday = last_monday - timedelta(weeks=weeks - 1)
    window_start = datetime.combine(first_monday, time.min, tzinfo=tz)

    sums = _sum_by_period(
        queryset.filter(date__gte=window_start, date__lte=window_end),
        TruncWeek('date', tzinfo=tz),
        '%Y-%m-%d',
    )

    trend = []
    for offset in range(weeks):
        week_start = first_monday + timedelta(weeks=offset)
        key = week_start.isoformat()
        trend.append({
            'month': _week_label(week_start),
            'year': week_start.year,
            'key': key,
            'income': to_number(sums.get((key, Transaction.INCOME))),
            'expense': to_number(sums.get((key, Transaction.EXPENSE))),
        })
    return trend


def build_summary(user, start=None, end=None, months=DEFAULT_TREND_MONTHS, tz=None, now=None):
    """
    대시보드/리포트 요약

    합계와 카테고리별 집계는 [start, end] 기간에 대해,
    추이는 end(없으면 현재) 기준 최근 months개월(months=1이면 최근 4주)에 대해 계산합니다.
    """
    tz = tz or get_report_timezone()
    base_qs = Transaction.objects.for_user(user)
    filtered_qs = base_qs.by_date_range(start, end)

    reference = end or now or timezone.now()
    if months == 1:
        trend = weekly_trend(base_qs, reference, tz)
    else:
        trend = monthly_trend(base_qs, reference, months, tz)

    summary = calculate_totals(filtered_qs)
    summary['categoryBreakdown'] = category_breakdown(filtered_qs)
    summary['monthlyTrend'] = trend
    return summary


