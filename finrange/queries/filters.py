"""
Interval Query Helpers

A resolved DateInterval is handed to the report and transaction
endpoints as inclusive `from` / `to` bounds. These helpers build those
parameters, apply the same inclusive filter locally, and name exports
after the interval.
"""

from datetime import date, datetime
from typing import Any, Iterable, Union

from finrange.models.range import DateInterval


DateLike = Union[date, datetime, str]


class IntervalFilterError(ValueError):
    """A record's date field is missing or cannot be read as a date."""
    pass


def interval_query_params(interval: DateInterval, **extra: Any) -> dict[str, Any]:
    """
    Query parameters for a report endpoint.

    Extra keyword arguments (e.g. type="expense") are passed through;
    None values are dropped.
    """
    params: dict[str, Any] = interval.to_query_params()
    params.update({key: value for key, value in extra.items() if value is not None})
    return params


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # Accepts "YYYY-MM-DD" and full ISO timestamps
        try:
            return date.fromisoformat(value[:10])
        except ValueError as e:
            raise IntervalFilterError(f"Not an ISO date: {value!r}") from e
    raise IntervalFilterError(f"Unsupported date value: {value!r}")


def _field_value(record: Any, field: str) -> DateLike:
    if isinstance(record, dict):
        if field not in record:
            raise IntervalFilterError(f"Record has no '{field}' field")
        return record[field]
    if not hasattr(record, field):
        raise IntervalFilterError(f"Record has no '{field}' attribute")
    return getattr(record, field)


def filter_by_interval(
    records: Iterable[Any],
    interval: DateInterval,
    field: str = "date",
) -> list[Any]:
    """
    Keep the records whose date falls inside the interval, both ends included.

    Records may be dicts or objects; the field may hold a date, a datetime
    or an ISO string. Order is preserved.

    Raises:
        IntervalFilterError: If a record's field is missing or unreadable
    """
    return [
        record for record in records
        if interval.contains(_as_date(_field_value(record, field)))
    ]


def describe_interval(interval: DateInterval) -> str:
    """Human-readable label, e.g. "2024-03-01 to 2024-03-15 (15 days)"."""
    if interval.date_from == interval.date_to:
        return f"{interval.date_from.isoformat()} (1 day)"
    return (
        f"{interval.date_from.isoformat()} to {interval.date_to.isoformat()} "
        f"({interval.days} days)"
    )


def export_filename(report: str, interval: DateInterval, extension: str = "csv") -> str:
    """File name for a report export, e.g. report-pnl-2024-01-01-2024-12-31.csv"""
    return (
        f"report-{report}-{interval.date_from.isoformat()}-"
        f"{interval.date_to.isoformat()}.{extension.lstrip('.')}"
    )
