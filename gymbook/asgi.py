"""
ASGI config for the Gym Session Booking platform.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'gymbook.settings.production')

application = get_asgi_application()
