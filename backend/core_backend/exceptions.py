"""
Project-wide DRF exception handler.

Domain errors raised by the order services carry a stable ``code``, a
``kind`` and an HTTP status; they are rendered as

    {"error": {"code": "TABLE_NOT_FOUND", "kind": "NOT_FOUND", "message": "..."}}

Everything else falls through to DRF's default handler. Database errors are
not handled here and surface as 500s.
"""
import logging

from rest_framework.views import exception_handler
from rest_framework.response import Response

from orders.exceptions import OrderError

logger = logging.getLogger(__name__)


def order_exception_handler(exc, context):
    """
    Map ``OrderError`` subclasses to their HTTP status and error envelope,
    delegating any other exception to DRF.
    """
    if not isinstance(exc, OrderError):
        return exception_handler(exc, context)

    request = context.get('request')
    log = logger.warning if exc.http_status >= 500 else logger.info
    log(
        f"Order API error: {exc.code}",
        extra={
            'status_code': exc.http_status,
            'path': getattr(request, 'path', None),
            'method': getattr(request, 'method', None),
        }
    )

    return Response(exc.as_dict(), status=exc.http_status)
