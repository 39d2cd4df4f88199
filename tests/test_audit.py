"""Tests for the audit logger and sinks."""

from uuid import uuid4

import pytest

from finrange.audit import (
    AuditLogger,
    AuditSinkError,
    AuditSinkInterface,
    InMemoryAuditSink,
    configure_logging,
    create_correlation_id,
)
from finrange.models import AuditEvent, AuditEventType, AuditSeverity


class FailingSink(AuditSinkInterface):
    """Sink whose store is always down."""

    def append_event(self, event):
        raise AuditSinkError("store unavailable")

    def get_events_by_picker(self, picker_id):
        return []


def _event(**overrides):
    fields = {
        "event_type": AuditEventType.RANGE_APPLIED,
        "description": "Quick range applied: today",
    }
    fields.update(overrides)
    return AuditEvent(**fields)


class TestAuditLogger:
    """Tests for AuditLogger."""

    def test_local_only_logging_succeeds(self):
        assert AuditLogger().log(_event()) is True

    def test_events_reach_the_sink(self):
        sink = InMemoryAuditSink()
        logger = AuditLogger(sink)
        event = _event()

        assert logger.log(event) is True
        assert sink.events == [event]
        assert logger.sink is sink

    def test_sink_failure_is_not_raised(self):
        logger = AuditLogger(FailingSink())
        assert logger.log(_event(severity=AuditSeverity.WARNING)) is False

    def test_helpers_build_typed_events(self):
        sink = InMemoryAuditSink()
        logger = AuditLogger(sink)
        picker_id = uuid4()

        logger.log_range_applied(picker_id, "today", {"from": "2024-03-15", "to": "2024-03-15"})
        logger.log_year_range_applied(picker_id, 2020, 2021, {"from": "2020-01-01", "to": "2021-12-31"})
        logger.log_dates_edited(picker_id, "from", "2024-01-01")
        logger.log_error("boom", "it broke")

        assert [e.event_type for e in sink.events] == [
            AuditEventType.RANGE_APPLIED,
            AuditEventType.YEAR_RANGE_APPLIED,
            AuditEventType.DATES_EDITED,
            AuditEventType.SYSTEM_ERROR,
        ]
        assert len(sink.get_events_by_picker(picker_id)) == 3

    @pytest.mark.parametrize("json_output", [True, False])
    def test_logging_after_configuration(self, json_output):
        configure_logging(level="DEBUG", json_output=json_output)
        logger = AuditLogger()
        for severity in AuditSeverity:
            assert logger.log(_event(severity=severity)) is True


class TestInMemoryAuditSink:
    """Tests for InMemoryAuditSink."""

    def test_keeps_order(self):
        sink = InMemoryAuditSink()
        first, second = _event(), _event()
        sink.append_event(first)
        sink.append_event(second)
        assert sink.events == [first, second]

    def test_max_events_drops_oldest(self):
        sink = InMemoryAuditSink(max_events=2)
        events = [_event() for _ in range(3)]
        for event in events:
            sink.append_event(event)
        assert sink.events == events[1:]

    def test_events_property_is_a_copy(self):
        sink = InMemoryAuditSink()
        sink.append_event(_event())
        sink.events.clear()
        assert len(sink.events) == 1


def test_correlation_ids_are_unique():
    assert create_correlation_id() != create_correlation_id()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
