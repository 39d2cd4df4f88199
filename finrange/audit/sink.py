"""
Audit Sink Interface

DESIGN DECISION: Where audit events end up is pluggable.
The picker only talks to this interface; a deployment can forward
events to its own store, tests use the in-memory sink.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from finrange.models.audit import AuditEvent, AuditEventType


class AuditSinkError(Exception):
    """Raised by a sink that could not store an event."""
    pass


class AuditSinkInterface(ABC):
    """
    Abstract interface for audit event persistence.

    Append-only: events are never updated or deleted.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event.

        Returns:
            True if stored successfully

        Raises:
            AuditSinkError: If the event could not be stored
        """
        pass

    @abstractmethod
    def get_events_by_picker(self, picker_id: UUID) -> list[AuditEvent]:
        """All events recorded for one picker, oldest first."""
        pass


class InMemoryAuditSink(AuditSinkInterface):
    """Keeps events in a list. Not shared between processes."""

    def __init__(self, max_events: Optional[int] = None):
        self._events: list[AuditEvent] = []
        self._max_events = max_events

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]
        return True

    def get_events_by_picker(self, picker_id: UUID) -> list[AuditEvent]:
        return [e for e in self._events if e.picker_id == picker_id]

    def get_events_by_type(self, event_type: AuditEventType) -> list[AuditEvent]:
        return [e for e in self._events if e.event_type == event_type]
