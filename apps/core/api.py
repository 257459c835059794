"""
JSON endpoint helpers.

Views call the service modules with request.user as the actor; the services
raise typed GymBookingError subclasses which api_endpoint turns into a JSON
error body with the matching HTTP status.
"""
import json
import logging
import uuid
from datetime import timezone as dt_timezone
from functools import wraps

from django.http import JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from .exceptions import GymBookingError, ValidationError

logger = logging.getLogger(__name__)


def api_endpoint(view_func):
    """Translate GymBookingError raised by the view into a JSON error response."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except GymBookingError as exc:
            logger.info('%s %s rejected (%s): %s', request.method, request.path, exc.code, exc)
            return JsonResponse({'error': str(exc), 'code': exc.code}, status=exc.status_code)
    return wrapper


def json_body(request) -> dict:
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError('Request body must be valid JSON')
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def cleaned(form) -> dict:
    """cleaned_data of a bound form, or ValidationError naming the first bad field."""
    if form.is_valid():
        return form.cleaned_data
    field, errors = next(iter(form.errors.items()))
    message = errors[0]
    raise ValidationError(message if field == '__all__' else f'{field}: {message}')


def parse_instant(value, field: str):
    """ISO 8601 string to an aware datetime; naive values are taken as UTC."""
    try:
        parsed = parse_datetime(value) if isinstance(value, str) else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError(f'{field} must be an ISO 8601 datetime')
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    return parsed


def parse_int(value, field: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')


def optional_int(data: dict, field: str):
    value = data.get(field)
    return None if value is None else parse_int(value, field)


def isoformat(value):
    return value.isoformat() if value is not None else None


def parse_uuid(value, field: str):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a UUID')
