"""Quick range resolution package."""

from finrange.ranges.resolver import (
    QUICK_RANGES,
    parse_selector,
    resolve,
    resolve_quick_range,
)

__all__ = [
    "QUICK_RANGES",
    "parse_selector",
    "resolve",
    "resolve_quick_range",
]
