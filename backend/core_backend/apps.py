from django.apps import AppConfig
import logging

logger = logging.getLogger(__name__)


def validate_order_settings():
    """
    Raise ``ImproperlyConfigured`` for order limits no request could satisfy.
    """
    from django.conf import settings
    from django.core.exceptions import ImproperlyConfigured

    attempts = getattr(settings, "ORDER_NUMBER_MAX_ATTEMPTS", 3)
    if attempts < 1:
        raise ImproperlyConfigured("ORDER_NUMBER_MAX_ATTEMPTS must be at least 1")

    min_total = getattr(settings, "ORDER_MIN_TOTAL", None)
    max_total = getattr(settings, "ORDER_MAX_TOTAL", None)
    if min_total is not None and max_total is not None and min_total > max_total:
        raise ImproperlyConfigured("ORDER_MIN_TOTAL cannot exceed ORDER_MAX_TOTAL")

    logger.debug(
        f"Order settings loaded: max_attempts={attempts}, "
        f"total_range=[{min_total}, {max_total}]"
    )


class CoreBackendConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "core_backend"

    def ready(self):
        # Fail at startup rather than on the first order
        validate_order_settings()
