from django.urls import path
from . import views

app_name = 'bookings'

urlpatterns = [
    path('book/',                         views.book,        name='book'),
    path('mine/',                         views.my_bookings, name='mine'),
    path('<uuid:booking_id>/cancel/',     views.cancel,      name='cancel'),
    path('<uuid:booking_id>/no-show/',    views.no_show,     name='no_show'),
    path('<uuid:booking_id>/attended/',   views.attended,    name='attended'),
]
