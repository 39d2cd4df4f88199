"""
Date Range Picker

Form state behind the date range control shown above dashboards and
reports. It ties together:
1. The clock (what "today" is)
2. The resolver (quick ranges and year spans → DateInterval)
3. The year input validator (plausible years only)
4. The audit logger (every user action is recorded)

Whenever the bounds change, the picker calls `on_change(from, to)` with
ISO date strings, which is what the report layer queries with.

DESIGN DECISION: Quick ranges and year spans always produce an ordered
interval. Manual edits of the two date inputs are stored as typed, so
`interval` is None while the user has from > to.
"""

from datetime import date, datetime
from typing import Callable, Optional, Union
from uuid import UUID, uuid4

from finrange.audit import AuditLogger, AuditSinkInterface, configure_logging
from finrange.clock import Clock, SystemClock
from finrange.config import get_settings
from finrange.models.range import (
    DateInterval,
    ExplicitYearRange,
    RangeSelector,
    ValidationIssue,
)
from finrange.ranges import parse_selector, resolve
from finrange.validation import YearInputValidator


OnChange = Callable[[str, str], None]


class DateInputError(ValueError):
    """A manually entered date could not be parsed."""
    pass


class DateRangePicker:
    """
    State of one date range control.

    Quick range buttons call `apply_quick`; the two date inputs call
    `set_from` / `set_to`; the year inputs call `set_year_from` /
    `set_year_to` followed by `apply_year_range`.
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        validator: Optional[YearInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        on_change: Optional[OnChange] = None,
        initial: Optional[DateInterval] = None,
        default_range: Union[RangeSelector, str, None] = None,
        correlation_id: Optional[UUID] = None,
    ):
        """
        Args:
            clock: Supplies today's date. Defaults to SystemClock.
            validator: Year input validator. Defaults to one sharing the clock.
            audit_logger: If None, actions are not audited.
            on_change: Called with (from_iso, to_iso) after every change.
            initial: Starting interval. Takes precedence over default_range.
            default_range: Quick range used when no initial interval is given.
                          Defaults to the configured DATE_RANGE_DEFAULT_RANGE.
            correlation_id: Attached to every audit event of this picker.
        """
        self._clock = clock or SystemClock()
        self._validator = validator or YearInputValidator(clock=self._clock)
        self._audit_logger = audit_logger
        self._on_change = on_change
        self._correlation_id = correlation_id
        self.picker_id = uuid4()

        if initial is None:
            default_range = default_range or get_settings().picker.default_range
            initial = resolve(default_range, self._clock.today())

        self._date_from = initial.date_from
        self._date_to = initial.date_to
        self._year_from = ""
        self._year_to = ""
        self._last_issues: list[ValidationIssue] = []

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def date_from(self) -> date:
        return self._date_from

    @property
    def date_to(self) -> date:
        return self._date_to

    @property
    def year_from(self) -> str:
        return self._year_from

    @property
    def year_to(self) -> str:
        return self._year_to

    @property
    def last_issues(self) -> list[ValidationIssue]:
        """Issues from the most recent rejected year range."""
        return list(self._last_issues)

    @property
    def is_inverted(self) -> bool:
        return self._date_from > self._date_to

    @property
    def interval(self) -> Optional[DateInterval]:
        """The current bounds, or None while a manual edit left them inverted."""
        if self.is_inverted:
            return None
        return DateInterval(date_from=self._date_from, date_to=self._date_to)

    @property
    def can_apply_year_range(self) -> bool:
        """The year range button is enabled only when both years are filled in."""
        return bool(self._year_from) and bool(self._year_to)

    # -------------------------------------------------------------------------
    # Quick ranges
    # -------------------------------------------------------------------------

    def apply_quick(self, selector: Union[RangeSelector, ExplicitYearRange, str]) -> DateInterval:
        """
        Apply a quick range button.

        An ExplicitYearRange is applied and audited as a year range, without
        the year input window check of `apply_year_range`. An unknown
        selector applies today..today and is audited as a warning.
        """
        interval = resolve(selector, self._clock.today())
        self._store(interval)
        choice = None if isinstance(selector, ExplicitYearRange) else parse_selector(selector)

        if self._audit_logger:
            if isinstance(selector, ExplicitYearRange):
                self._audit_logger.log_year_range_applied(
                    picker_id=self.picker_id,
                    year_from=selector.start_year,
                    year_to=selector.end_year,
                    interval=interval.to_query_params(),
                    correlation_id=self._correlation_id,
                )
            elif choice is None:
                self._audit_logger.log_selector_unrecognized(
                    picker_id=self.picker_id,
                    selector=str(selector),
                    interval=interval.to_query_params(),
                    correlation_id=self._correlation_id,
                )
            else:
                self._audit_logger.log_range_applied(
                    picker_id=self.picker_id,
                    selector=choice.value,
                    interval=interval.to_query_params(),
                    correlation_id=self._correlation_id,
                )

        self._emit()
        return interval

    # -------------------------------------------------------------------------
    # Manual date inputs
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_date(value: Union[date, datetime, str], field: str) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value).strip())
        except ValueError as e:
            raise DateInputError(f"Invalid '{field}' date: {value!r}") from e

    def set_from(self, value: Union[date, datetime, str]) -> None:
        """
        Set the start date from the first date input.

        Raises:
            DateInputError: If the value is not a YYYY-MM-DD date
        """
        self._date_from = self._parse_date(value, "from")
        self._audit_edit("from", self._date_from)
        self._emit()

    def set_to(self, value: Union[date, datetime, str]) -> None:
        """
        Set the end date from the second date input.

        Raises:
            DateInputError: If the value is not a YYYY-MM-DD date
        """
        self._date_to = self._parse_date(value, "to")
        self._audit_edit("to", self._date_to)
        self._emit()

    def _audit_edit(self, field: str, value: date) -> None:
        if self._audit_logger:
            self._audit_logger.log_dates_edited(
                picker_id=self.picker_id,
                field=field,
                value=value.isoformat(),
                correlation_id=self._correlation_id,
            )

    # -------------------------------------------------------------------------
    # Year range inputs
    # -------------------------------------------------------------------------

    def set_year_from(self, raw: Optional[str]) -> str:
        """Store the sanitized "year from" text and return it."""
        self._year_from = self._validator.sanitize(raw)
        return self._year_from

    def set_year_to(self, raw: Optional[str]) -> str:
        """Store the sanitized "year to" text and return it."""
        self._year_to = self._validator.sanitize(raw)
        return self._year_to

    def apply_year_range(self) -> Optional[DateInterval]:
        """
        Apply the typed year span.

        Returns:
            The applied interval, or None if the button is disabled or the
            years were rejected (see `last_issues`). Rejections leave the
            current bounds unchanged.
        """
        if not self.can_apply_year_range:
            return None

        result = self._validator.validate(self._year_from, self._year_to)
        if not result.is_valid:
            self._last_issues = result.issues
            if self._audit_logger:
                self._audit_logger.log_year_range_rejected(
                    picker_id=self.picker_id,
                    raw_from=self._year_from,
                    raw_to=self._year_to,
                    issues=[issue.model_dump() for issue in result.issues],
                    correlation_id=self._correlation_id,
                )
            return None

        self._last_issues = []
        interval = resolve(result.to_year_range(), self._clock.today())
        self._store(interval)

        if self._audit_logger:
            self._audit_logger.log_year_range_applied(
                picker_id=self.picker_id,
                year_from=result.year_from,
                year_to=result.year_to,
                interval=interval.to_query_params(),
                correlation_id=self._correlation_id,
            )

        self._emit()
        return interval

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _store(self, interval: DateInterval) -> None:
        self._date_from = interval.date_from
        self._date_to = interval.date_to

    def _emit(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self._date_from.isoformat(), self._date_to.isoformat())
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type="on_change_failed",
                    error_message=str(e),
                    details={
                        "picker_id": str(self.picker_id),
                        "from": self._date_from.isoformat(),
                        "to": self._date_to.isoformat(),
                    },
                    correlation_id=self._correlation_id,
                )
            raise


def create_picker(
    on_change: Optional[OnChange] = None,
    sink: Optional[AuditSinkInterface] = None,
    clock: Optional[Clock] = None,
    correlation_id: Optional[UUID] = None,
) -> DateRangePicker:
    """
    Factory function wiring a picker from application settings.

    Args:
        on_change: Called with (from_iso, to_iso) after every change.
        sink: Audit sink. If None, audit events are only logged locally.
        clock: Defaults to a SystemClock in the configured timezone.
        correlation_id: Shared by every audit event of this picker.
    """
    settings = get_settings()
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
    )

    clock = clock or SystemClock(settings.locale.timezone)

    return DateRangePicker(
        clock=clock,
        validator=YearInputValidator(clock=clock, settings=settings.picker),
        audit_logger=AuditLogger(sink),
        on_change=on_change,
        default_range=settings.picker.default_range,
        correlation_id=correlation_id,
    )
