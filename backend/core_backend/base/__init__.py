"""
Core backend base components.

Shared viewset, serializer and filter foundations used by the apps in this
project so pagination, filtering and serialization stay consistent.
"""

from .viewsets import BaseAPIView
from .serializers import BaseModelSerializer
from .filters import BaseFilterSet, normalize_datetime_value

__all__ = [
    # ViewSets
    'BaseAPIView',

    # Serializers
    'BaseModelSerializer',

    # Filters
    'BaseFilterSet',
    'normalize_datetime_value',
]
