from rest_framework.pagination import LimitOffsetPagination


class StandardPagination(LimitOffsetPagination):
    """
    Project-wide limit/offset pagination.

    Responses carry ``count``, ``next``, ``previous`` and ``results``.
    ``limit`` is capped so a client cannot pull an entire order history at once.
    """

    default_limit = 20
    max_limit = 100
