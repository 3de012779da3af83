import os
import django

# Set the Django settings module first
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core_backend.settings")

# Setup Django explicitly before any models are imported
django.setup()

from channels.routing import ProtocolTypeRouter
from django.core.asgi import get_asgi_application

# Initialize Django ASGI application early to ensure AppRegistry is populated
# before importing code that may import ORM models.
django_asgi_app = get_asgi_application()

# Order lifecycle events are pushed through the channel layer
# (see orders.services.notification_service); websocket consumers that
# subscribe kitchen displays and table trackers are mounted by the realtime
# gateway, not by this service.
application = ProtocolTypeRouter(
    {
        "http": django_asgi_app,
    }
)
