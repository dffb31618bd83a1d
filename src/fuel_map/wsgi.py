"""
WSGI config for the fuel price map project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'fuel_map.settings')

application = get_wsgi_application()
