"""Audit logging package."""

from finrange.audit.logger import AuditLogger, configure_logging, create_correlation_id
from finrange.audit.sink import AuditSinkError, AuditSinkInterface, InMemoryAuditSink

__all__ = [
    "AuditLogger",
    "AuditSinkError",
    "AuditSinkInterface",
    "InMemoryAuditSink",
    "configure_logging",
    "create_correlation_id",
]
