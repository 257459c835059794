"""
Quota endpoints.

  GET  /quota/current/     this week's quota for the calling lifter
  POST /quota/current/     pre-create this week's window
  GET  /quota/unbooked/    active lifters with quota left (admin)
"""
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods

from apps.core.api import api_endpoint, isoformat

from .ledger import create_quota_window, get_current_quota, unbooked_lifters


@require_http_methods(['GET', 'POST'])
@api_endpoint
def current(request):
    if request.method == 'POST':
        window = create_quota_window(request.user)
        return JsonResponse({'window_id': str(window.id)})

    quota = get_current_quota(request.user)
    quota['week_start'] = isoformat(quota['week_start'])
    quota['week_end'] = isoformat(quota['week_end'])
    return JsonResponse({'quota': quota})


@require_GET
@api_endpoint
def unbooked(request):
    return JsonResponse({'lifters': unbooked_lifters(request.user)})
