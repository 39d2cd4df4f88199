"""
Data Models Package

This package contains all Pydantic models used by finrange.
"""

from finrange.models.range import (
    YEAR_RANGE_TOKEN,
    DateInterval,
    ExplicitYearRange,
    RangeSelector,
    ValidationIssue,
    YearInputResult,
)
from finrange.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Range models
    "YEAR_RANGE_TOKEN",
    "DateInterval",
    "ExplicitYearRange",
    "RangeSelector",
    "ValidationIssue",
    "YearInputResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
