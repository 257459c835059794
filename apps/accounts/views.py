"""
Account endpoints: session login/logout, profile setup, lifter management.
"""
import logging

from django.contrib.auth import authenticate, login, logout
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from apps.core.api import api_endpoint, json_body
from apps.core.exceptions import AuthenticationError, ValidationError

from .services import all_lifters, create_user_profile, current_user, profile_to_dict, update_user_status

logger = logging.getLogger(__name__)


@require_POST
@api_endpoint
def login_view(request):
    data = json_body(request)
    username = data.get('username')
    password = data.get('password')
    if not username or not password:
        raise ValidationError('Username and password are required')

    user = authenticate(request, username=username, password=password)
    if user is None:
        raise AuthenticationError('Invalid credentials')

    login(request, user)
    logger.info('User %s logged in', user.pk)
    return JsonResponse({'user': current_user(user)})


@require_POST
def logout_view(request):
    logout(request)
    return JsonResponse({'ok': True})


@require_GET
@api_endpoint
def me(request):
    if not request.user.is_authenticated:
        return JsonResponse({'user': None})
    return JsonResponse({'user': current_user(request.user)})


@require_POST
@api_endpoint
def profile_setup(request):
    data = json_body(request)
    profile = create_user_profile(
        request.user,
        role=data.get('role'),
        experience_level=data.get('experience_level'),
        name=data.get('name') or '',
        email=data.get('email') or '',
    )
    return JsonResponse({'user': profile_to_dict(profile)})


@require_GET
@api_endpoint
def lifters(request):
    return JsonResponse({'lifters': all_lifters(request.user)})


@require_POST
@api_endpoint
def lifter_status(request, profile_id):
    data = json_body(request)
    update_user_status(request.user, profile_id, data.get('status'))
    return JsonResponse({'ok': True})
