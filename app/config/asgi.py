"""
ASGI config for the account authentication API.

Exposes the ASGI callable as a module-level variable named `application`,
for serving under Uvicorn or any other ASGI server. Requests are handled
by Django's ASGI handler; the API has no WebSocket routes.

For more information on this file, see:
https://docs.djangoproject.com/en/5.2/howto/deployment/asgi/
"""

import os

from django.core.asgi import get_asgi_application

# Set the default Django settings module for the ASGI application
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_asgi_application()
