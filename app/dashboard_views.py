"""
Indicadores do painel da frota.
Um único endpoint agregado, calculado direto no banco.
"""
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db.models import Count, F, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone
from rest_framework.decorators import api_view
from rest_framework.response import Response

from inventory.models import InventoryItem
from maintenance.models import MaintenanceStatus, ScheduledMaintenance, add_months
from reports.models import Report, ReportStatus
from vehicles.models import Vehicle, VehicleStatus
from workorder.models import WorkOrder, WorkOrderStatus


def _count_by_status(queryset, choices):
    counts = {value: 0 for value in choices.values}
    for row in queryset.values('status').annotate(total=Count('id')):
        counts[row['status']] = row['total']
    return counts


def _reports_per_month(months=6):
    """Reportes por mês nos últimos ``months`` meses, incluindo meses sem registros."""
    first_month = add_months(timezone.localdate().replace(day=1), -(months - 1))
    rows = (
        Report.objects.filter(created_at__date__gte=first_month)
        .annotate(month=TruncMonth('created_at'))
        .values('month')
        .annotate(total=Count('id'))
    )
    totals = {}
    for row in rows:
        month = row['month']
        if hasattr(month, 'date'):
            month = month.date()
        totals[month.strftime('%Y-%m')] = row['total']

    series = []
    for offset in range(months):
        key = add_months(first_month, offset).strftime('%Y-%m')
        series.append({'month': key, 'total': totals.get(key, 0)})
    return series


def _maintenance_summary(today):
    horizon = today + timedelta(days=settings.UPCOMING_MAINTENANCE_DAYS)
    pending = ScheduledMaintenance.objects.filter(status=MaintenanceStatus.PENDING).select_related('vehicle')
    overdue = pending.filter(next_due_date__lt=today)
    upcoming = pending.filter(next_due_date__gte=today, next_due_date__lte=horizon)

    def serialize(items):
        return [
            {
                'id': str(item.id),
                'title': item.title,
                'vehicle': item.vehicle.plate,
                'next_due_date': item.next_due_date.isoformat(),
            }
            for item in items[:10]
        ]

    return {
        'overdue_count': overdue.count(),
        'upcoming_count': upcoming.count(),
        'overdue': serialize(overdue),
        'upcoming': serialize(upcoming),
    }


@api_view(['GET'])
def dashboard_overview(request):
    today = timezone.localdate()

    costs = WorkOrder.objects.aggregate(
        estimated=Sum('estimated_cost'),
        actual=Sum('actual_cost'),
    )

    return Response({
        'vehicles': _count_by_status(Vehicle.objects.all(), VehicleStatus),
        'reports': _count_by_status(Report.objects.all(), ReportStatus),
        'work_orders': _count_by_status(WorkOrder.objects.all(), WorkOrderStatus),
        'reports_per_month': _reports_per_month(),
        'costs': {
            'estimated': costs['estimated'] or Decimal('0.00'),
            'actual': costs['actual'] or Decimal('0.00'),
        },
        'low_stock_items': InventoryItem.objects.filter(quantity__lte=F('min_quantity')).count(),
        'maintenance': _maintenance_summary(today),
    })
