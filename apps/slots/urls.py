from django.urls import path
from . import views

app_name = 'slots'

urlpatterns = [
    path('',                          views.slot_list,   name='list'),
    path('create/',                   views.slot_create, name='create'),
    path('fill-day/',                 views.fill_day,    name='fill_day'),
    path('<uuid:slot_id>/update/',    views.slot_update, name='update'),
    path('<uuid:slot_id>/delete/',    views.slot_delete, name='delete'),
]
