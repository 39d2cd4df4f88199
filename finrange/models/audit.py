"""
Audit Models for finrange

Every action taken on a date range picker is recorded as an audit event:
quick ranges applied, year ranges applied or rejected, manual date edits.

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Quick ranges
    RANGE_APPLIED = "range_applied"
    SELECTOR_UNRECOGNIZED = "selector_unrecognized"

    # Year inputs
    YEAR_RANGE_APPLIED = "year_range_applied"
    YEAR_RANGE_REJECTED = "year_range_rejected"

    # Manual edits of the date inputs
    DATES_EDITED = "dates_edited"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which picker the event came from
    picker_id: Optional[UUID] = Field(
        default=None,
        description="ID of the picker instance"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one report session)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "picker_id": str(self.picker_id) if self.picker_id else None,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.range_applied(picker_id, "last7", interval_params)
    """

    @staticmethod
    def range_applied(
        picker_id: UUID,
        selector: str,
        interval: dict[str, str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RANGE_APPLIED,
            picker_id=picker_id,
            correlation_id=correlation_id,
            description=f"Quick range applied: {selector}",
            details={
                "selector": selector,
                **interval,
            },
            is_user_action=True,
        )

    @staticmethod
    def selector_unrecognized(
        picker_id: UUID,
        selector: str,
        interval: dict[str, str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SELECTOR_UNRECOGNIZED,
            severity=AuditSeverity.WARNING,
            picker_id=picker_id,
            correlation_id=correlation_id,
            description=f"Unrecognized range selector '{selector}', using today",
            details={
                "selector": selector,
                **interval,
            },
            is_user_action=True,
        )

    @staticmethod
    def year_range_applied(
        picker_id: UUID,
        year_from: int,
        year_to: int,
        interval: dict[str, str],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.YEAR_RANGE_APPLIED,
            picker_id=picker_id,
            correlation_id=correlation_id,
            description=f"Year range applied: {year_from}-{year_to}",
            details={
                "year_from": year_from,
                "year_to": year_to,
                **interval,
            },
            is_user_action=True,
        )

    @staticmethod
    def year_range_rejected(
        picker_id: UUID,
        raw_from: str,
        raw_to: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.YEAR_RANGE_REJECTED,
            severity=AuditSeverity.WARNING,
            picker_id=picker_id,
            correlation_id=correlation_id,
            description=f"Year range rejected with {len(issues)} issues",
            details={
                "year_from": raw_from,
                "year_to": raw_to,
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def dates_edited(
        picker_id: UUID,
        field: str,
        value: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATES_EDITED,
            severity=AuditSeverity.DEBUG,
            picker_id=picker_id,
            correlation_id=correlation_id,
            description=f"Date input '{field}' edited",
            details={
                "field": field,
                "value": value,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
