"""
Main Orchestrator for Ledger Viewer

This module ties together all the components and defines the
flows behind each page:
1. Activities (activities + balance + tags → snapshot → LedgerView)
2. Tag patterns (patterns → table rows)
3. Spend charts (one monthly series per configured tag)

The three activities fetches are independent: they run concurrently
and any subset may fail. A failed part is reported as missing, never
raised to the page.
"""

import asyncio
from typing import Any, Optional
from uuid import UUID

from ledgerview.audit import ViewEventLogger, configure_logging, create_correlation_id
from ledgerview.config import ViewSettings, get_settings
from ledgerview.models.ledger import LedgerSnapshot, TagSpendSeries
from ledgerview.models.view import TagPatternRow
from ledgerview.presentation import LedgerView, ViewAssembler, tag_pattern_rows
from ledgerview.services.api import (
    DataSourceError,
    HttpLedgerDataSource,
    LedgerDataSource,
)


def _item_count(part: Any) -> int:
    if isinstance(part, tuple):
        return sum(len(group.activities) for group in part)
    if hasattr(part, "__len__"):
        return len(part)
    return 1


class LedgerLoadFlow:
    """
    Loads everything the activities view needs.

    Flow:
    1. Fetch activities, balance and tags concurrently
    2. Keep every part that arrived
    3. Record an error message for every part that did not
    """

    SOURCES = ("hierarchy", "balance", "tags")

    def __init__(
        self,
        data_source: LedgerDataSource,
        event_logger: Optional[ViewEventLogger] = None,
    ):
        self._data_source = data_source
        self._event_logger = event_logger or ViewEventLogger()

    async def load(self, correlation_id: Optional[UUID] = None) -> LedgerSnapshot:
        correlation_id = correlation_id or create_correlation_id()

        results = await asyncio.gather(
            self._data_source.get_activities(),
            self._data_source.get_balance(),
            self._data_source.get_tags(),
            return_exceptions=True,
        )

        parts: dict[str, Any] = {}
        errors: dict[str, str] = {}

        for name, result in zip(self.SOURCES, results):
            if isinstance(result, DataSourceError):
                errors[name] = str(result)
                self._event_logger.log_data_load_failed(
                    source=name,
                    error_message=str(result),
                    correlation_id=correlation_id,
                )
            elif isinstance(result, Exception):
                errors[name] = str(result)
                self._event_logger.log_external_service_error(
                    service=f"ledger_api.{name}",
                    error_message=str(result),
                    correlation_id=correlation_id,
                )
            elif isinstance(result, BaseException):
                raise result
            else:
                parts[name] = result
                self._event_logger.log_data_loaded(
                    source=name,
                    item_count=_item_count(result),
                    correlation_id=correlation_id,
                )

        return LedgerSnapshot(errors=errors, **parts)

    async def load_into(
        self,
        view: LedgerView,
        correlation_id: Optional[UUID] = None,
    ) -> LedgerView:
        """Load a snapshot and hand it to a LedgerView."""
        snapshot = await self.load(correlation_id)
        view.on_data_loaded(snapshot)
        return view


class TagPatternFlow:
    """Loads the rows of the tag pattern table."""

    def __init__(
        self,
        data_source: LedgerDataSource,
        event_logger: Optional[ViewEventLogger] = None,
    ):
        self._data_source = data_source
        self._event_logger = event_logger or ViewEventLogger()

    async def load(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[list[TagPatternRow]]:
        """
        Returns:
            The table rows, or None when the patterns could not be loaded
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            patterns = await self._data_source.get_tag_patterns()
        except DataSourceError as e:
            self._event_logger.log_data_load_failed(
                source="tag_patterns",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            return None

        self._event_logger.log_data_loaded(
            source="tag_patterns",
            item_count=len(patterns),
            correlation_id=correlation_id,
        )
        return tag_pattern_rows(patterns)


class SpendChartFlow:
    """
    Loads one monthly spend series per chart tag.

    Each tag is fetched on its own; a tag that fails yields None in its
    slot so the other charts still render.
    """

    def __init__(
        self,
        data_source: LedgerDataSource,
        settings: Optional[ViewSettings] = None,
        event_logger: Optional[ViewEventLogger] = None,
    ):
        self._data_source = data_source
        self._settings = settings or get_settings().view
        self._event_logger = event_logger or ViewEventLogger()

    @property
    def chart_tags(self) -> list[str]:
        return self._settings.chart_tags_list

    async def _load_one(
        self,
        tag: str,
        correlation_id: UUID,
    ) -> Optional[TagSpendSeries]:
        try:
            series = await self._data_source.get_tag_stats_per_month([tag])
        except DataSourceError as e:
            self._event_logger.log_data_load_failed(
                source=f"tag_stats.{tag}",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            return None

        self._event_logger.log_data_loaded(
            source=f"tag_stats.{tag}",
            item_count=len(series.data),
            correlation_id=correlation_id,
        )
        return series

    async def load(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> list[Optional[TagSpendSeries]]:
        """
        Returns:
            One entry per chart tag, in configured order
        """
        correlation_id = correlation_id or create_correlation_id()

        return list(await asyncio.gather(
            *(self._load_one(tag, correlation_id) for tag in self.chart_tags)
        ))


def create_app_components(
    data_source: Optional[LedgerDataSource] = None,
) -> tuple[LedgerLoadFlow, TagPatternFlow, SpendChartFlow, LedgerView]:
    """
    Factory function to create all application components.

    Args:
        data_source: Where to read the ledger from. Defaults to the
                    HTTP API at the configured base URL.

    Returns:
        (ledger_load_flow, tag_pattern_flow, spend_chart_flow, ledger_view)
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)

    data_source = data_source or HttpLedgerDataSource(settings.api)
    event_logger = ViewEventLogger()

    ledger_load_flow = LedgerLoadFlow(data_source, event_logger)
    tag_pattern_flow = TagPatternFlow(data_source, event_logger)
    spend_chart_flow = SpendChartFlow(data_source, settings.view, event_logger)

    ledger_view = LedgerView(
        assembler=ViewAssembler(settings.view),
        event_logger=event_logger,
    )

    return ledger_load_flow, tag_pattern_flow, spend_chart_flow, ledger_view
