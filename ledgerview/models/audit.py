"""
View Event Models for Ledger Viewer

Significant actions (data loads, searches, error states) are emitted
as typed events and written to the structured log.

Events are log-only: nothing is persisted.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class ViewEventType(str, Enum):
    """Types of events we log."""
    # Loading
    DATA_LOADED = "data_loaded"
    DATA_LOAD_FAILED = "data_load_failed"

    # Search
    SEARCH_EXECUTED = "search_executed"
    SEARCH_NO_RESULT = "search_no_result"

    # Rendering
    RENDER_LOAD_ERROR = "render_load_error"

    # System events
    EXTERNAL_SERVICE_ERROR = "external_service_error"


class ViewSeverity(str, Enum):
    """Severity level for view events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ViewEvent(BaseModel):
    """A single view event."""

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: ViewEventType
    severity: ViewSeverity = ViewSeverity.INFO

    # Correlates the events of one load or one search
    correlation_id: Optional[UUID] = None

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(default_factory=dict)

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
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class ViewEventBuilder:
    """
    Helper class to build view events with common patterns.

    Usage:
        event = ViewEventBuilder.data_loaded("activities", 12, correlation_id)
        event = ViewEventBuilder.search_executed("edf", 3, 1, correlation_id)
    """

    @staticmethod
    def data_loaded(
        source: str,
        item_count: int,
        correlation_id: UUID
    ) -> ViewEvent:
        return ViewEvent(
            event_type=ViewEventType.DATA_LOADED,
            correlation_id=correlation_id,
            description=f"Loaded {source}: {item_count} items",
            details={
                "source": source,
                "item_count": item_count,
            },
        )

    @staticmethod
    def data_load_failed(
        source: str,
        error_message: str,
        correlation_id: UUID
    ) -> ViewEvent:
        return ViewEvent(
            event_type=ViewEventType.DATA_LOAD_FAILED,
            severity=ViewSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Could not load {source}",
            error_message=error_message,
            details={
                "source": source,
            },
        )

    @staticmethod
    def search_executed(
        search: str,
        visible_rows: int,
        visible_groups: int,
        correlation_id: UUID
    ) -> ViewEvent:
        return ViewEvent(
            event_type=ViewEventType.SEARCH_EXECUTED,
            severity=ViewSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Search returned {visible_rows} rows",
            details={
                "search": search,
                "visible_rows": visible_rows,
                "visible_groups": visible_groups,
            },
            is_user_action=True,
        )

    @staticmethod
    def search_no_result(
        search: str,
        correlation_id: UUID
    ) -> ViewEvent:
        return ViewEvent(
            event_type=ViewEventType.SEARCH_NO_RESULT,
            correlation_id=correlation_id,
            description="Search matched no activity",
            details={
                "search": search,
            },
            is_user_action=True,
        )

    @staticmethod
    def render_load_error(
        missing: list[str],
        correlation_id: Optional[UUID] = None
    ) -> ViewEvent:
        return ViewEvent(
            event_type=ViewEventType.RENDER_LOAD_ERROR,
            severity=ViewSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Cannot render activities, missing: {', '.join(missing)}",
            details={
                "missing": missing,
            },
        )

    @staticmethod
    def external_service_error(
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> ViewEvent:
        return ViewEvent(
            event_type=ViewEventType.EXTERNAL_SERVICE_ERROR,
            severity=ViewSeverity.ERROR,
            description=f"External service error: {service}",
            error_message=error_message,
            details={
                "service": service,
            },
            correlation_id=correlation_id,
        )
