"""Query helpers package."""

from finrange.queries.filters import (
    IntervalFilterError,
    describe_interval,
    export_filename,
    filter_by_interval,
    interval_query_params,
)

__all__ = [
    "IntervalFilterError",
    "describe_interval",
    "export_filename",
    "filter_by_interval",
    "interval_query_params",
]
