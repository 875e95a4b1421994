"""
WSGI config for the blood_donor project.

It exposes the WSGI callable as a module-level variable named ``application``.
Run behind a threaded server (e.g. ``gunicorn --threads``) so that bcrypt
work in one request never holds up another.
"""
import os

from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'blood_donor.settings')

application = get_wsgi_application()
