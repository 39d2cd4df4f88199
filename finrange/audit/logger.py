"""
Audit Logger

Every action on a date range picker is logged:
quick ranges, year ranges (applied or rejected) and manual date edits.

The audit logger:
- Always writes a structured local log line
- Forwards events to an optional sink
- Gracefully handles sink failures (a broken sink never breaks the picker)
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finrange.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finrange.audit.sink import AuditSinkInterface


_LEVELS = {
    AuditSeverity.DEBUG: "debug",
    AuditSeverity.INFO: "info",
    AuditSeverity.WARNING: "warning",
    AuditSeverity.ERROR: "error",
    AuditSeverity.CRITICAL: "critical",
}


def configure_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog (and the stdlib root logger it writes through)."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )
    logging.getLogger().setLevel(getattr(logging, level.upper()))

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The configured sink (for persistence)
    """

    def __init__(
        self,
        sink: Optional[AuditSinkInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            sink: Where events are persisted.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger("finrange.audit")

    @property
    def sink(self) -> Optional[AuditSinkInterface]:
        return self._sink

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to the sink if available.

        Returns True if the sink write succeeded (or no sink configured).
        """
        log_method = getattr(self._logger, _LEVELS[event.severity])
        log_method("audit_event", **event.to_log_dict())

        if self._sink:
            try:
                return self._sink.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_range_applied(
        self,
        picker_id: UUID,
        selector: str,
        interval: dict[str, str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a quick range being applied."""
        event = AuditEventBuilder.range_applied(
            picker_id=picker_id,
            selector=selector,
            interval=interval,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_selector_unrecognized(
        self,
        picker_id: UUID,
        selector: str,
        interval: dict[str, str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unknown selector falling back to today."""
        event = AuditEventBuilder.selector_unrecognized(
            picker_id=picker_id,
            selector=selector,
            interval=interval,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_year_range_applied(
        self,
        picker_id: UUID,
        year_from: int,
        year_to: int,
        interval: dict[str, str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.year_range_applied(
            picker_id=picker_id,
            year_from=year_from,
            year_to=year_to,
            interval=interval,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_year_range_rejected(
        self,
        picker_id: UUID,
        raw_from: str,
        raw_to: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.year_range_rejected(
            picker_id=picker_id,
            raw_from=raw_from,
            raw_to=raw_to,
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_dates_edited(
        self,
        picker_id: UUID,
        field: str,
        value: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.dates_edited(
            picker_id=picker_id,
            field=field,
            value=value,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per report session and pass it to every picker on the page.
    """
    return uuid4()
