"""
Tests for the date range picker.

The picker runs against a fixed clock and an in-memory audit sink.
"""

from datetime import date
from uuid import uuid4

import pytest

from finrange.audit import AuditLogger, InMemoryAuditSink
from finrange.clock import FixedClock
from finrange.config import PickerSettings
from finrange.models import (
    AuditEventType,
    AuditSeverity,
    DateInterval,
    ExplicitYearRange,
    RangeSelector,
)
from finrange.picker import DateInputError, DateRangePicker, create_picker
from finrange.validation import YearInputValidator


TODAY = date(2024, 3, 15)


class Recorder:
    """Collects on_change calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, date_from: str, date_to: str) -> None:
        self.calls.append((date_from, date_to))


@pytest.fixture
def sink():
    return InMemoryAuditSink()


@pytest.fixture
def changes():
    return Recorder()


@pytest.fixture
def picker(sink, changes):
    clock = FixedClock(TODAY)
    return DateRangePicker(
        clock=clock,
        validator=YearInputValidator(
            clock=clock,
            settings=PickerSettings(min_year=1990, max_years_ahead=5),
        ),
        audit_logger=AuditLogger(sink),
        on_change=changes,
        default_range=RangeSelector.THIS_YEAR,
    )


class TestInitialState:
    """What a fresh picker shows."""

    def test_starts_on_default_range(self, picker, changes, sink):
        assert picker.date_from == date(2024, 1, 1)
        assert picker.date_to == TODAY
        assert picker.year_from == ""
        assert picker.year_to == ""
        # Nothing is emitted or audited until the user acts
        assert changes.calls == []
        assert sink.events == []

    def test_explicit_initial_interval_wins(self):
        initial = DateInterval(date_from=date(2023, 6, 1), date_to=date(2023, 6, 30))
        picker = DateRangePicker(
            clock=FixedClock(TODAY),
            initial=initial,
            default_range="last7",
        )
        assert picker.interval == initial

    def test_other_default_range(self):
        picker = DateRangePicker(clock=FixedClock(TODAY), default_range="last30")
        assert picker.date_from == date(2024, 2, 15)

    def test_works_without_audit_logger(self):
        picker = DateRangePicker(clock=FixedClock(TODAY), default_range="today")
        assert picker.apply_quick("lastYear").to_query_params() == {
            "from": "2023-01-01",
            "to": "2023-12-31",
        }


class TestQuickRanges:
    """Quick range buttons."""

    def test_apply_quick_updates_bounds_and_emits(self, picker, changes):
        interval = picker.apply_quick(RangeSelector.LAST_MONTH)

        assert interval.to_query_params() == {"from": "2024-02-01", "to": "2024-02-29"}
        assert picker.interval == interval
        assert changes.calls == [("2024-02-01", "2024-02-29")]

    def test_apply_quick_is_audited(self, picker, sink):
        picker.apply_quick("last7")

        events = sink.get_events_by_picker(picker.picker_id)
        assert len(events) == 1
        assert events[0].event_type == AuditEventType.RANGE_APPLIED
        assert events[0].details == {
            "selector": "last7",
            "from": "2024-03-09",
            "to": "2024-03-15",
        }

    def test_unknown_selector_applies_today(self, picker, changes, sink):
        """Documented leniency: an unknown button never breaks the picker."""
        interval = picker.apply_quick("nextDecade")

        assert interval == DateInterval(date_from=TODAY, date_to=TODAY)
        assert changes.calls == [("2024-03-15", "2024-03-15")]

        events = sink.get_events_by_type(AuditEventType.SELECTOR_UNRECOGNIZED)
        assert len(events) == 1
        assert events[0].severity == AuditSeverity.WARNING
        assert events[0].details["selector"] == "nextDecade"

    def test_explicit_year_range_is_audited_as_year_range(self, picker, changes, sink):
        interval = picker.apply_quick(ExplicitYearRange(year_from=2022, year_to=2019))

        assert interval.to_query_params() == {"from": "2019-01-01", "to": "2022-12-31"}
        assert changes.calls == [("2019-01-01", "2022-12-31")]
        assert sink.get_events_by_type(AuditEventType.SELECTOR_UNRECOGNIZED) == []

        event = sink.get_events_by_type(AuditEventType.YEAR_RANGE_APPLIED)[0]
        assert event.severity == AuditSeverity.INFO
        assert event.details == {
            "year_from": 2019,
            "year_to": 2022,
            "from": "2019-01-01",
            "to": "2022-12-31",
        }


class TestManualDates:
    """The two date inputs."""

    def test_set_from_and_to(self, picker, changes):
        picker.set_from("2024-02-01")
        picker.set_to(date(2024, 2, 10))

        assert picker.interval == DateInterval(
            date_from=date(2024, 2, 1), date_to=date(2024, 2, 10)
        )
        assert changes.calls == [
            ("2024-02-01", "2024-03-15"),
            ("2024-02-01", "2024-02-10"),
        ]

    def test_inverted_edit_is_kept_as_typed(self, picker):
        picker.set_from("2024-05-01")

        assert picker.date_from == date(2024, 5, 1)
        assert picker.is_inverted is True
        assert picker.interval is None

        picker.set_to("2024-05-31")
        assert picker.is_inverted is False
        assert picker.interval.days == 31

    @pytest.mark.parametrize("value", ["", "15/03/2024", "2024-02-30", "yesterday"])
    def test_unparseable_date_raises(self, picker, changes, value):
        with pytest.raises(DateInputError):
            picker.set_from(value)
        assert picker.date_from == date(2024, 1, 1)
        assert changes.calls == []

    def test_edits_are_audited(self, picker, sink):
        picker.set_to("2024-03-01")
        events = sink.get_events_by_type(AuditEventType.DATES_EDITED)
        assert events[0].details == {"field": "to", "value": "2024-03-01"}


class TestYearRange:
    """The year inputs and their apply button."""

    def test_button_needs_both_years(self, picker, changes):
        picker.set_year_from("2021")
        assert picker.can_apply_year_range is False
        assert picker.apply_year_range() is None
        assert changes.calls == []

    def test_inputs_are_sanitized(self, picker):
        assert picker.set_year_from("20x19") == "2019"
        assert picker.set_year_to("202145") == "2021"
        assert picker.year_from == "2019"
        assert picker.year_to == "2021"
        assert picker.can_apply_year_range is True

    def test_apply_year_range(self, picker, changes, sink):
        picker.set_year_from("2023")
        picker.set_year_to("2020")

        interval = picker.apply_year_range()

        assert interval.to_query_params() == {"from": "2020-01-01", "to": "2023-12-31"}
        assert changes.calls == [("2020-01-01", "2023-12-31")]
        assert picker.last_issues == []

        event = sink.get_events_by_type(AuditEventType.YEAR_RANGE_APPLIED)[0]
        assert event.details["year_from"] == 2020
        assert event.details["year_to"] == 2023

    def test_out_of_window_year_is_rejected(self, picker, changes, sink):
        picker.set_year_from("1980")
        picker.set_year_to("2020")

        assert picker.apply_year_range() is None

        # Bounds untouched, nothing emitted
        assert picker.date_from == date(2024, 1, 1)
        assert picker.date_to == TODAY
        assert changes.calls == []

        assert [issue.field for issue in picker.last_issues] == ["year_from"]
        event = sink.get_events_by_type(AuditEventType.YEAR_RANGE_REJECTED)[0]
        assert event.severity == AuditSeverity.WARNING
        assert event.details["issues"][0]["issue_type"] == "out_of_range"

    def test_successful_apply_clears_previous_issues(self, picker):
        picker.set_year_from("1980")
        picker.set_year_to("2020")
        picker.apply_year_range()
        assert picker.last_issues

        picker.set_year_from("2019")
        assert picker.apply_year_range() is not None
        assert picker.last_issues == []


class TestOnChangeFailure:
    """A failing callback is audited and re-raised."""

    def test_callback_error_propagates(self, sink):
        def broken(date_from, date_to):
            raise RuntimeError("report reload failed")

        picker = DateRangePicker(
            clock=FixedClock(TODAY),
            audit_logger=AuditLogger(sink),
            on_change=broken,
            default_range="today",
        )

        with pytest.raises(RuntimeError, match="report reload failed"):
            picker.apply_quick("yesterday")

        # State was updated before the callback ran
        assert picker.date_from == date(2024, 3, 14)

        errors = sink.get_events_by_type(AuditEventType.SYSTEM_ERROR)
        assert len(errors) == 1
        assert errors[0].error_message == "report reload failed"
        assert errors[0].details["from"] == "2024-03-14"


class TestCreatePicker:
    """Factory wiring from settings."""

    def test_create_picker_uses_settings(self, monkeypatch, sink, changes):
        from finrange.config import get_settings

        monkeypatch.setenv("DATE_RANGE_DEFAULT_RANGE", "lastMonth")
        monkeypatch.setenv("DATE_RANGE_MIN_YEAR", "2010")
        get_settings.cache_clear()
        correlation_id = uuid4()

        try:
            picker = create_picker(
                on_change=changes,
                sink=sink,
                clock=FixedClock(TODAY),
                correlation_id=correlation_id,
            )

            assert picker.interval.to_query_params() == {
                "from": "2024-02-01",
                "to": "2024-02-29",
            }

            picker.set_year_from("2009")
            picker.set_year_to("2012")
            assert picker.apply_year_range() is None

            picker.apply_quick("today")
            assert changes.calls == [("2024-03-15", "2024-03-15")]
            assert all(e.correlation_id == correlation_id for e in sink.events)
        finally:
            get_settings.cache_clear()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
