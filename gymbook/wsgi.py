"""
WSGI config for the Gym Session Booking platform.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'gymbook.settings.production')

application = get_wsgi_application()
