"""
Slot endpoints.

  GET  /slots/?from=&to=        slots starting in range, with availability
  POST /slots/create/           admin
  POST /slots/<id>/update/      admin
  POST /slots/<id>/delete/      admin
  POST /slots/fill-day/         admin, {"day_start": ISO instant}
"""
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from apps.accounts.permissions import require_authenticated
from apps.core.api import api_endpoint, cleaned, isoformat, json_body, parse_instant

from .forms import FillDayForm, SlotCreateForm, SlotUpdateForm
from .manager import create_slot, delete_slot, fill_day_with_default_working_hours, list_slots, update_slot


def slot_to_dict(slot) -> dict:
    return {
        'id': str(slot.id),
        'starts_at': isoformat(slot.starts_at),
        'ends_at': isoformat(slot.ends_at),
        'tz': slot.tz,
        'capacity_total': slot.capacity_total,
        'capacity_exp': slot.capacity_exp,
        'capacity_inexp': slot.capacity_inexp,
        'status': slot.status,
    }


@require_GET
@api_endpoint
def slot_list(request):
    require_authenticated(request.user)
    starts_from = parse_instant(request.GET.get('from'), 'from')
    starts_before = parse_instant(request.GET.get('to'), 'to')

    slots = []
    for entry in list_slots(starts_from, starts_before):
        entry.update(slot_to_dict(entry.pop('slot')))
        slots.append(entry)
    return JsonResponse({'slots': slots})


@require_POST
@api_endpoint
def slot_create(request):
    data = cleaned(SlotCreateForm(json_body(request)))
    slot = create_slot(request.user, **data)
    return JsonResponse({'slot_id': str(slot.id)}, status=201)


@require_POST
@api_endpoint
def slot_update(request, slot_id):
    data = cleaned(SlotUpdateForm(json_body(request)))
    update_slot(request.user, slot_id, **data)
    return JsonResponse({'ok': True})


@require_POST
@api_endpoint
def slot_delete(request, slot_id):
    canceled = delete_slot(request.user, slot_id)
    return JsonResponse({'ok': True, 'canceled_booking_ids': canceled})


@require_POST
@api_endpoint
def fill_day(request):
    data = cleaned(FillDayForm(json_body(request)))
    return JsonResponse(fill_day_with_default_working_hours(request.user, data['day_start']))
