"""
Abstract Ledger Data Source

Every piece of data the viewer shows comes through this interface.
This allows us to:
1. Read from the ledger HTTP API in production
2. Use in-memory data in tests
3. Keep the view engine unaware of where data comes from

All operations are read-only.
"""

from abc import ABC, abstractmethod

from ledgerview.models.ledger import (
    Balance,
    LedgerHierarchy,
    TagDictionary,
    TagPattern,
    TagSpendSeries,
)


class LedgerDataSource(ABC):
    """
    Abstract interface for ledger reads.

    Implementations raise DataSourceError subclasses, never return
    partial data.
    """

    @abstractmethod
    async def get_activities(self) -> LedgerHierarchy:
        """
        Fetch all activities grouped by month.

        Returns:
            Month groups in server order

        Raises:
            DataSourceError: If the activities cannot be fetched
        """
        pass

    @abstractmethod
    async def get_balance(self) -> Balance:
        """
        Fetch the current account balance.

        Raises:
            DataSourceError: If the balance cannot be fetched
        """
        pass

    @abstractmethod
    async def get_tags(self) -> TagDictionary:
        """
        Fetch the tag dictionary (tag pattern id -> tag names).

        Raises:
            DataSourceError: If the tags cannot be fetched
        """
        pass

    @abstractmethod
    async def get_tag_patterns(self) -> list[TagPattern]:
        """
        Fetch the statement patterns used for tagging.

        Raises:
            DataSourceError: If the patterns cannot be fetched
        """
        pass

    @abstractmethod
    async def get_tag_stats_per_month(self, tags: list[str]) -> TagSpendSeries:
        """
        Fetch the monthly spend for a set of tags.

        Args:
            tags: Tag names, at least one

        Raises:
            DataSourceError: If the stats cannot be fetched
        """
        pass


class DataSourceError(Exception):
    """Base exception for data source operations."""
    pass


class DataSourceConnectionError(DataSourceError):
    """The API could not be reached or failed on its side (retryable)."""
    pass


class DataSourceResponseError(DataSourceError):
    """The API answered with a non-retryable error status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(message)


class InvalidPayloadError(DataSourceError):
    """The API answered with data that does not match the expected schema."""
    pass
