"""
Quick Date Range Resolution

Maps a quick range selector (or an explicit span of years) to an
inclusive calendar-date interval, anchored at a reference date.

DESIGN DECISION: The reference date is always passed in.
Nothing here reads the clock, logs, or keeps state, so the same
inputs always give the same interval.

An unknown selector resolves to today..today instead of raising:
the picker must keep rendering whatever token it is handed.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Union

from finrange.models.range import (
    YEAR_RANGE_TOKEN,
    DateInterval,
    ExplicitYearRange,
    RangeSelector,
)


Selector = Union[RangeSelector, ExplicitYearRange, str]

# Button order in the picker
QUICK_RANGES: tuple[RangeSelector, ...] = (
    RangeSelector.TODAY,
    RangeSelector.YESTERDAY,
    RangeSelector.LAST_7,
    RangeSelector.LAST_30,
    RangeSelector.THIS_MONTH,
    RangeSelector.LAST_MONTH,
    RangeSelector.LAST_3_MONTHS,
    RangeSelector.THIS_YEAR,
    RangeSelector.LAST_YEAR,
    RangeSelector.LAST_2_YEARS,
)


def parse_selector(token: Union[RangeSelector, str, None]) -> Optional[RangeSelector]:
    """Return the selector for a known token, None otherwise."""
    if isinstance(token, RangeSelector):
        return token
    try:
        return RangeSelector(token)
    except ValueError:
        return None


def _first_of_month(year: int, month: int, months_back: int = 0) -> date:
    # month is 1-based; divmod carries the year across January
    year_offset, month_index = divmod(month - 1 - months_back, 12)
    return date(year + year_offset, month_index + 1, 1)


def _last_of_month(first: date) -> date:
    _, days = calendar.monthrange(first.year, first.month)
    return first.replace(day=days)


def _year_span(first_year: int, last_year: int) -> DateInterval:
    return DateInterval(
        date_from=date(first_year, 1, 1),
        date_to=date(last_year, 12, 31),
    )


def _resolve_relative(choice: Optional[RangeSelector], today: date) -> DateInterval:
    y = today.year

    if choice is RangeSelector.TODAY:
        return DateInterval(date_from=today, date_to=today)
    elif choice is RangeSelector.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return DateInterval(date_from=yesterday, date_to=yesterday)
    elif choice is RangeSelector.LAST_7:
        return DateInterval(date_from=today - timedelta(days=6), date_to=today)
    elif choice is RangeSelector.LAST_30:
        return DateInterval(date_from=today - timedelta(days=29), date_to=today)
    elif choice is RangeSelector.THIS_MONTH:
        return DateInterval(date_from=_first_of_month(y, today.month), date_to=today)
    elif choice is RangeSelector.LAST_MONTH:
        start = _first_of_month(y, today.month, months_back=1)
        return DateInterval(date_from=start, date_to=_last_of_month(start))
    elif choice is RangeSelector.LAST_3_MONTHS:
        return DateInterval(
            date_from=_first_of_month(y, today.month, months_back=2),
            date_to=today,
        )
    elif choice is RangeSelector.THIS_YEAR:
        return DateInterval(date_from=date(y, 1, 1), date_to=today)
    elif choice is RangeSelector.LAST_YEAR:
        return _year_span(y - 1, y - 1)
    elif choice is RangeSelector.LAST_2_YEARS:
        return DateInterval(date_from=date(y - 2, 1, 1), date_to=today)
    else:
        # Documented leniency: unknown selectors never fail
        return DateInterval(date_from=today, date_to=today)


def resolve(selector: Selector, reference_now: Union[date, datetime]) -> DateInterval:
    """
    Resolve a selector to an inclusive interval.

    Args:
        selector: A RangeSelector, an ExplicitYearRange, or a raw token.
        reference_now: The current calendar date in the operating locale.
            A datetime is reduced to its date.

    Returns:
        The resolved DateInterval. Unknown tokens give today..today.

    Raises:
        ValueError: If a bound would fall before 0001-01-01, the first day
            `datetime.date` can represent. Only reference dates in years 1
            and 2 can hit this (e.g. "yesterday" on 0001-01-01, "last2Years"
            in year 2).
    """
    today = reference_now.date() if isinstance(reference_now, datetime) else reference_now

    if isinstance(selector, ExplicitYearRange):
        return _year_span(selector.start_year, selector.end_year)

    choice = parse_selector(selector)
    try:
        return _resolve_relative(choice, today)
    except OverflowError as e:
        raise ValueError(
            f"'{choice.value}' reaches before {date.min.isoformat()} from {today.isoformat()}"
        ) from e


def resolve_quick_range(
    token: Union[RangeSelector, str],
    reference_now: Union[date, datetime],
    year_from: Optional[int] = None,
    year_to: Optional[int] = None,
) -> DateInterval:
    """
    String-level entry point used by the picker.

    `yearRange` with both years resolves the explicit span; `yearRange`
    missing either year falls through to the today..today fallback.
    """
    if token == YEAR_RANGE_TOKEN and year_from is not None and year_to is not None:
        return resolve(
            ExplicitYearRange(year_from=year_from, year_to=year_to),
            reference_now,
        )
    return resolve(token, reference_now)
