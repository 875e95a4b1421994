"""
ASGI config for the blood_donor project.

The API is plain HTTP; Django runs the synchronous views in its thread
pool when served through an ASGI server.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "blood_donor.settings")

application = get_asgi_application()
