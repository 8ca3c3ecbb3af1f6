"""
View Event Logger

Every significant action of the viewer is logged as a structured event:
1. Data source loads and their failures
2. Searches and empty search results
3. Render passes that hit a load-error state

The logger never raises into the caller: a failure to log is itself
logged and otherwise ignored.
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from ledgerview.models.audit import ViewEvent, ViewEventBuilder, ViewSeverity


# Configure structlog for local logging
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
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog output through a stdlib handler on stderr."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


class ViewEventLogger:
    """Central event logging service."""

    def __init__(self, name: str = "ledgerview"):
        self._logger = structlog.get_logger(name)

    def log(self, event: ViewEvent) -> None:
        """Log an event at the level matching its severity."""
        log_dict = event.to_log_dict()

        try:
            if event.severity == ViewSeverity.ERROR:
                self._logger.error("view_event", **log_dict)
            elif event.severity == ViewSeverity.WARNING:
                self._logger.warning("view_event", **log_dict)
            elif event.severity == ViewSeverity.DEBUG:
                self._logger.debug("view_event", **log_dict)
            else:
                self._logger.info("view_event", **log_dict)
        except Exception as e:
            logging.getLogger(__name__).error(
                "view event logging failed: %s (event_id=%s)", e, event.event_id
            )

    def log_data_loaded(
        self,
        source: str,
        item_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a successful data source load."""
        self.log(ViewEventBuilder.data_loaded(
            source=source,
            item_count=item_count,
            correlation_id=correlation_id,
        ))

    def log_data_load_failed(
        self,
        source: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a data source that could not be loaded."""
        self.log(ViewEventBuilder.data_load_failed(
            source=source,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_search_executed(
        self,
        search: str,
        visible_rows: int,
        visible_groups: int,
        correlation_id: UUID,
    ) -> None:
        self.log(ViewEventBuilder.search_executed(
            search=search,
            visible_rows=visible_rows,
            visible_groups=visible_groups,
            correlation_id=correlation_id,
        ))

    def log_search_no_result(
        self,
        search: str,
        correlation_id: UUID,
    ) -> None:
        self.log(ViewEventBuilder.search_no_result(
            search=search,
            correlation_id=correlation_id,
        ))

    def log_render_load_error(
        self,
        missing: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self.log(ViewEventBuilder.render_load_error(
            missing=missing,
            correlation_id=correlation_id,
        ))

    def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log external service error."""
        self.log(ViewEventBuilder.external_service_error(
            service=service,
            error_message=error_message,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per data load and one per search.
    """
    return uuid4()
