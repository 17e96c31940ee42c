"""
WSGI config for the fintracks project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'fintracks.config.settings')

application = get_wsgi_application()
