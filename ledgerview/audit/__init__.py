"""Event logging package."""

from ledgerview.audit.logger import ViewEventLogger, configure_logging, create_correlation_id

__all__ = ["ViewEventLogger", "configure_logging", "create_correlation_id"]
