from rest_framework import viewsets
from ..pagination import StandardPagination


class BaseAPIView(viewsets.GenericViewSet):
    """
    Base class for service-backed ViewSets.

    Reads and writes go through the app's service layer rather than a
    class-level queryset, so this only carries the project pagination plus
    helpers for paging results that the service has already sliced.

    Usage:
        class OrderViewSet(BaseAPIView):
            def list(self, request):
                limit, offset = self.get_page_params(request)
                rows, total = service.list_rows(limit=limit, offset=offset)
                return self.paginated_response(request, rows, total, limit, offset)
    """

    pagination_class = StandardPagination

    def get_queryset(self):
        """Override in child classes"""
        raise NotImplementedError("Child classes must implement get_queryset")

    def get_page_params(self, request):
        """Return ``(limit, offset)`` parsed and capped by the paginator."""
        paginator = self.paginator
        limit = paginator.get_limit(request) or paginator.default_limit
        offset = paginator.get_offset(request)
        return limit, offset

    def paginated_response(self, request, data, total, limit, offset):
        """
        Build the standard ``count/next/previous/results`` envelope for rows
        that were already sliced by the service layer.
        """
        paginator = self.paginator
        paginator.request = request
        paginator.count = total
        paginator.limit = limit
        paginator.offset = offset
        return paginator.get_paginated_response(data)
