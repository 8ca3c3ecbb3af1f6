"""Services package."""

from ledgerview.services.api import (
    DataSourceConnectionError,
    DataSourceError,
    DataSourceResponseError,
    HttpLedgerDataSource,
    InvalidPayloadError,
    LedgerDataSource,
)

__all__ = [
    "DataSourceConnectionError",
    "DataSourceError",
    "DataSourceResponseError",
    "HttpLedgerDataSource",
    "InvalidPayloadError",
    "LedgerDataSource",
]
