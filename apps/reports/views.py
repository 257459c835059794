"""
Reporting endpoints (admin).

  GET /reports/dashboard/
  GET /reports/monthly/?year=&month=
"""
from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.core.api import api_endpoint, parse_int

from .aggregation import dashboard_stats, monthly_report


@require_GET
@api_endpoint
def dashboard(request):
    return JsonResponse({'stats': dashboard_stats(request.user)})


@require_GET
@api_endpoint
def monthly(request):
    year = parse_int(request.GET.get('year'), 'year')
    month = parse_int(request.GET.get('month'), 'month')
    return JsonResponse({'report': monthly_report(request.user, year, month)})
