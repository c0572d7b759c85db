"""
Audit Use Cases
"""

from .list_audit_events_use_case import AuditEventResponse, ListAuditEventsUseCase

__all__ = ["ListAuditEventsUseCase", "AuditEventResponse"]
