"""
Policy endpoints.

  GET  /policies/          all policies (admin)
  POST /policies/          upsert {"key", "value"} (admin)
  GET  /policies/<key>/    single policy, null if not stored
"""
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods

from apps.core.api import api_endpoint, isoformat, json_body

from .store import get_all_policies, get_policy, upsert_policy


def _policy_dict(policy):
    return {'key': policy.key, 'value': policy.value, 'updated_at': isoformat(policy.updated_at)}


@require_http_methods(['GET', 'POST'])
@api_endpoint
def policy_collection(request):
    if request.method == 'POST':
        data = json_body(request)
        policy = upsert_policy(request.user, data.get('key'), data.get('value'))
        return JsonResponse({'policy': _policy_dict(policy)})

    policies = get_all_policies(request.user)
    return JsonResponse({'policies': [_policy_dict(p) for p in policies]})


@require_GET
@api_endpoint
def policy_detail(request, key):
    policy = get_policy(key)
    return JsonResponse({'policy': _policy_dict(policy) if policy else None})
