"""
Booking endpoints.

  POST /bookings/book/               {"slot_id"}  lifter
  GET  /bookings/mine/               lifter's recent bookings
  POST /bookings/<id>/cancel/        {"reason"}   owner or admin
  POST /bookings/<id>/no-show/       admin
  POST /bookings/<id>/attended/      admin
"""
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from apps.core.api import api_endpoint, isoformat, json_body, optional_int, parse_uuid
from apps.slots.views import slot_to_dict

from .engine import book_slot, cancel_booking, lifter_bookings, mark_attended, mark_no_show


def booking_to_dict(booking) -> dict:
    return {
        'id': str(booking.id),
        'slot_id': str(booking.slot_id) if booking.slot_id else None,
        'level': booking.level,
        'status': booking.status,
        'created_at': isoformat(booking.created_at),
        'canceled_at': isoformat(booking.canceled_at),
        'cancel_reason': booking.cancel_reason,
    }


@require_POST
@api_endpoint
def book(request):
    data = json_body(request)
    booking = book_slot(request.user, parse_uuid(data.get('slot_id'), 'slot_id'))
    return JsonResponse({'booking_id': str(booking.id)}, status=201)


@require_GET
@api_endpoint
def my_bookings(request):
    limit = optional_int(request.GET, 'limit')
    bookings = []
    for booking in lifter_bookings(request.user, limit=limit):
        entry = booking_to_dict(booking)
        entry['slot'] = slot_to_dict(booking.slot) if booking.slot else None
        bookings.append(entry)
    return JsonResponse({'bookings': bookings})


@require_POST
@api_endpoint
def cancel(request, booking_id):
    data = json_body(request)
    booking = cancel_booking(request.user, booking_id, reason=data.get('reason') or '')
    return JsonResponse({'booking': booking_to_dict(booking)})


@require_POST
@api_endpoint
def no_show(request, booking_id):
    booking = mark_no_show(request.user, booking_id)
    return JsonResponse({'booking': booking_to_dict(booking)})


@require_POST
@api_endpoint
def attended(request, booking_id):
    booking = mark_attended(request.user, booking_id)
    return JsonResponse({'booking': booking_to_dict(booking)})
