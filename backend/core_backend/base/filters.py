import django_filters
from django_filters.utils import translate_validation
from django.utils import timezone
from django.utils.dateparse import parse_datetime, parse_date
from datetime import datetime, time
import logging

logger = logging.getLogger(__name__)


def normalize_datetime_value(value, *, is_end=False):
    """
    Normalize a date or datetime (or their string form) to a timezone-aware datetime.

    Date-only values become the start of that day, or the last microsecond of
    it when ``is_end`` is set:

        normalize_datetime_value("2025-11-11")               # 2025-11-11 00:00:00
        normalize_datetime_value("2025-11-11", is_end=True)  # 2025-11-11 23:59:59.999999
    """
    if not value:
        return value

    if isinstance(value, datetime):
        return timezone.make_aware(value) if timezone.is_naive(value) else value

    if isinstance(value, str):
        dt = parse_datetime(value)
        if dt:
            return timezone.make_aware(dt) if timezone.is_naive(dt) else dt
        value = parse_date(value)
        if value is None:
            return None

    # date object
    return timezone.make_aware(datetime.combine(value, time.max if is_end else time.min))


class BaseFilterSet(django_filters.FilterSet):
    """
    Base filter set used to validate list query parameters.

    Service-backed views do not filter a queryset through the FilterSet; they
    call ``cleaned_params()`` and pass the values on to the service layer.
    Filters named in ``end_of_day_filters`` treat a date-only value (parsed as
    midnight) as the end of that day, so ``created_at__lte=2025-11-11``
    includes orders placed on the 11th.
    """

    end_of_day_filters = ()

    def cleaned_params(self):
        if not self.is_valid():
            raise translate_validation(self.errors)

        params = dict(self.form.cleaned_data)
        for name in self.end_of_day_filters:
            value = params.get(name)
            if isinstance(value, datetime) and value.time() == time(0, 0, 0):
                params[name] = normalize_datetime_value(value.date(), is_end=True)
                logger.debug(f"{type(self).__name__}: Adjusted {name} to end of day: {params[name]}")
        return params

    class Meta:
        abstract = True
