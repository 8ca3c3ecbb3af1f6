"""
Ledger HTTP API Client

Reads the ledger from its JSON API with httpx.

This service handles:
1. Issuing GET requests against the configured base URL
2. Retrying transport failures and 5xx answers (tenacity)
3. Decoding JSON with amounts kept as Decimal
4. Validating payloads into the ledger models

A 4xx answer is not retried: asking again will not change it.
"""

import json
from decimal import Decimal
from typing import Any, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ledgerview.config import ApiSettings, get_settings
from ledgerview.models.ledger import (
    Balance,
    LedgerHierarchy,
    TagDictionary,
    TagPattern,
    TagSpendSeries,
    parse_hierarchy,
)
from ledgerview.services.api.interface import (
    DataSourceConnectionError,
    DataSourceResponseError,
    InvalidPayloadError,
    LedgerDataSource,
)


class HttpLedgerDataSource(LedgerDataSource):
    """
    LedgerDataSource backed by the ledger HTTP API.

    A client is opened per request so the data source can be driven
    from successive event loops.
    """

    def __init__(
        self,
        settings: Optional[ApiSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings or get_settings().api
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self._settings.max_attempts),
            wait=wait_exponential(
                multiplier=1,
                min=self._settings.retry_wait_min,
                max=self._settings.retry_wait_max,
            ),
            retry=retry_if_exception_type(DataSourceConnectionError),
            reraise=True,
        )

    async def _get_once(self, path: str, params: Optional[dict[str, str]]) -> Any:
        url = f"{self.base_url}/{path}"

        async with httpx.AsyncClient(
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url, params=params)
            except httpx.TransportError as e:
                raise DataSourceConnectionError(f"Cannot reach {url}: {e}")

        if response.status_code >= 500:
            raise DataSourceConnectionError(
                f"{url} returned status {response.status_code}"
            )
        if response.status_code >= 400:
            raise DataSourceResponseError(
                response.status_code,
                f"{url} returned status {response.status_code}",
            )

        try:
            return json.loads(response.text, parse_float=Decimal)
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid JSON from {url}: {e}")

    async def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        async for attempt in self._retrying():
            with attempt:
                return await self._get_once(path, params)

    async def get_activities(self) -> LedgerHierarchy:
        payload = await self._get_json("activities")
        try:
            return parse_hierarchy(payload)
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid activities payload: {e}")

    async def get_balance(self) -> Balance:
        payload = await self._get_json("balance")
        try:
            return Balance.model_validate(payload)
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid balance payload: {e}")

    async def get_tags(self) -> TagDictionary:
        payload = await self._get_json("tags")
        if not isinstance(payload, dict):
            raise InvalidPayloadError("Invalid tags payload: expected an object")
        try:
            return TagDictionary.from_payload(payload)
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid tags payload: {e}")

    async def get_tag_patterns(self) -> list[TagPattern]:
        payload = await self._get_json("tags/pattern")
        if not isinstance(payload, list):
            raise InvalidPayloadError("Invalid tag patterns payload: expected a list")
        try:
            return [TagPattern.model_validate(item) for item in payload]
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid tag patterns payload: {e}")

    async def get_tag_stats_per_month(self, tags: list[str]) -> TagSpendSeries:
        if not tags:
            raise ValueError("At least one tag is required")

        payload = await self._get_json(
            "stats/per_month/tag",
            params={"value": ",".join(tags)},
        )
        try:
            return TagSpendSeries.model_validate(payload)
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid tag stats payload: {e}")
