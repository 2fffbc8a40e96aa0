import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import Sum, Count, DecimalField
from decimal import Decimal, ROUND_HALF_UP

from salon.core.cache_utils import cached_query, REPORTS_CACHE_TTL, REPORTS_CACHE_PREFIX
from salon.core.models import Category
from salon.core.utils import parse_date_param, current_month_window, local_today
from salon.payments.models import PaymentLine, PaymentMethod

logger = logging.getLogger('salon.reports')

CENTS = Decimal('0.01')


def _money(value):
    return float((value or Decimal('0.00')).quantize(CENTS, rounding=ROUND_HALF_UP))


def _lines(category=None):
    lines = PaymentLine.objects.all()
    if category:
        lines = lines.filter(service_category=category)
    return lines


@cached_query(cache_ttl=REPORTS_CACHE_TTL, key_prefix=REPORTS_CACHE_PREFIX)
def build_report(start_date, end_date, category, today):
    """Revenue aggregates over payment lines dated within the window"""
    lines = _lines(category).filter(payment__date__gte=start_date, payment__date__lte=end_date)

    totals = lines.aggregate(
        total=Sum('value', output_field=DecimalField()),
        count=Count('id')
    )
    total_revenue = totals['total'] or Decimal('0.00')
    total_services = totals['count']

    today_revenue = _lines(category).filter(payment__date=today).aggregate(
        total=Sum('value', output_field=DecimalField())
    )['total'] or Decimal('0.00')

    average_ticket = total_revenue / total_services if total_services else Decimal('0.00')

    daily = lines.values('payment__date').annotate(
        total=Sum('value', output_field=DecimalField())
    ).order_by('payment__date')
    daily_revenue = [
        {'date': row['payment__date'].isoformat(), 'value': _money(row['total'])}
        for row in daily
    ]

    category_labels = dict(Category.choices)
    by_category = lines.values('service_category').annotate(
        total=Sum('value', output_field=DecimalField())
    ).order_by('-total')
    revenue_by_category = []
    for row in by_category:
        percentage = (row['total'] / total_revenue * 100) if total_revenue else Decimal('0')
        revenue_by_category.append({
            'category': row['service_category'],
            'label': category_labels.get(row['service_category'], row['service_category']),
            'value': _money(row['total']),
            'percentage': _money(percentage),
        })

    by_professional = lines.values('professional_id', 'professional__name').annotate(
        total=Sum('value', output_field=DecimalField()),
        services=Count('id')
    ).order_by('-total', 'professional__name')
    revenue_by_professional = [
        {
            'professional_id': row['professional_id'],
            'name': row['professional__name'],
            'services': row['services'],
            'average': _money(row['total'] / row['services']),
            'total': _money(row['total']),
        }
        for row in by_professional
    ]

    method_labels = dict(PaymentMethod.choices)
    by_method = lines.values('payment__payment_method').annotate(
        total=Sum('value', output_field=DecimalField())
    ).order_by('-total')
    payment_methods = [
        {
            'method': row['payment__payment_method'],
            'label': method_labels.get(row['payment__payment_method'], row['payment__payment_method']),
            'value': _money(row['total']),
        }
        for row in by_method
    ]

    return {
        'period': {
            'start_date': start_date.isoformat(),
            'end_date': end_date.isoformat(),
        },
        'category': category,
        'total_revenue': _money(total_revenue),
        'today_revenue': _money(today_revenue),
        'average_ticket': _money(average_ticket),
        'total_services': total_services,
        'daily_revenue': daily_revenue,
        'revenue_by_category': revenue_by_category,
        'revenue_by_professional': revenue_by_professional,
        'payment_methods': payment_methods,
    }


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def report_data(request):
    """Revenue report for the financial dashboard"""
    try:
        start_date = parse_date_param(request.query_params.get('start_date'), 'start_date')
        end_date = parse_date_param(request.query_params.get('end_date'), 'end_date')
    except ValueError as e:
        logger.warning(f"Bad report request from {request.user.username}: {e}")
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    month_start, month_end = current_month_window()
    start_date = start_date or month_start
    end_date = end_date or month_end
    if start_date > end_date:
        return Response(
            {'error': 'start_date must be on or before end_date'},
            status=status.HTTP_400_BAD_REQUEST
        )

    category = request.query_params.get('category') or None
    if category and category not in Category.values:
        return Response({'error': f"Invalid category '{category}'"}, status=status.HTTP_400_BAD_REQUEST)

    return Response(build_report(start_date, end_date, category, local_today()))
