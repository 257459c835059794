"""
URL configuration for the Gym Session Booking platform.
"""
from django.contrib import admin
from django.conf import settings
from django.urls import path, include

urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),
    path('accounts/', include('apps.accounts.urls', namespace='accounts')),
    path('policies/', include('apps.policies.urls', namespace='policies')),
    path('slots/', include('apps.slots.urls', namespace='slots')),
    path('quota/', include('apps.quota.urls', namespace='quota')),
    path('bookings/', include('apps.bookings.urls', namespace='bookings')),
    path('reports/', include('apps.reports.urls', namespace='reports')),
]
