"""
Ledger API Services Package

Abstract data source interface and its HTTP implementation.
"""

from ledgerview.services.api.interface import (
    DataSourceConnectionError,
    DataSourceError,
    DataSourceResponseError,
    InvalidPayloadError,
    LedgerDataSource,
)
from ledgerview.services.api.http_client import HttpLedgerDataSource

__all__ = [
    # Interface
    "LedgerDataSource",
    # Exceptions
    "DataSourceConnectionError",
    "DataSourceError",
    "DataSourceResponseError",
    "InvalidPayloadError",
    # HTTP implementation
    "HttpLedgerDataSource",
]
