"""
finrange - Quick date ranges for finance dashboards

Resolves the date picker's quick ranges ("last 7 days", "last month",
an explicit span of years, ...) into inclusive calendar-date intervals
for the report and transaction queries.

DESIGN PRINCIPLES:
1. The resolver is pure: "today" is always passed in
2. Every resolved interval is ordered (from <= to)
3. A bad selector never breaks the picker
4. Every user action on the picker is auditable
"""

from finrange.models.range import DateInterval, ExplicitYearRange, RangeSelector
from finrange.ranges import resolve, resolve_quick_range

__version__ = "1.0.0"

__all__ = [
    "DateInterval",
    "ExplicitYearRange",
    "RangeSelector",
    "resolve",
    "resolve_quick_range",
]
