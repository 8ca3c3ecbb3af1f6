"""
View Assembly

Combines the search engine and the sequencer into the display model the
front end renders.

The assembler reports exactly one of four states (see ViewState). No
exception escapes a render pass: a missing collaborator becomes a
LoadErrorState, an empty search result becomes a NO_RESULT display
model.
"""

from typing import Optional

from ledgerview.audit import ViewEventLogger, create_correlation_id
from ledgerview.config.settings import ViewSettings
from ledgerview.models.ledger import (
    Balance,
    LedgerHierarchy,
    LedgerSnapshot,
    TagDictionary,
    TagPattern,
)
from ledgerview.models.view import (
    AmountClass,
    DisplayModel,
    DisplayRow,
    LoadErrorState,
    RenderResult,
    RenderRow,
    TagPatternRow,
    ViewState,
)
from ledgerview.presentation.formatting import (
    format_balance_amount,
    format_date,
    two_decimals,
)
from ledgerview.presentation.sequencer import PresentationSequencer
from ledgerview.search import GroupFilterer, SearchPredicate, TagResolver


def missing_collaborators(
    hierarchy: Optional[LedgerHierarchy],
    tag_dictionary: Optional[TagDictionary],
    balance: Optional[Balance],
) -> list[str]:
    """Names of the inputs a render pass cannot do without."""
    missing = []
    if not hierarchy:
        missing.append("activities")
    if balance is None:
        missing.append("balance")
    if tag_dictionary is None:
        missing.append("tags")
    return missing


class ViewAssembler:
    """Builds the activities display model for one search string."""

    def __init__(
        self,
        settings: Optional[ViewSettings] = None,
        sequencer: Optional[PresentationSequencer] = None,
    ):
        self._settings = settings or ViewSettings()
        self._sequencer = sequencer or PresentationSequencer()

    def _display_row(self, row: RenderRow, resolver: TagResolver) -> DisplayRow:
        activity = row.activity

        leading_cell: tuple[str, ...] = ()
        if row.is_group_header:
            leading_cell = (row.month_label, row.stats_plus, row.stats_minus)

        return DisplayRow(
            activity_id=activity.id,
            band_class=row.band,
            leading_cell=leading_cell,
            date=row.display_date,
            statement=activity.statement,
            tags=", ".join(resolver.tags_for(activity.tag_pattern_id)),
            amount=two_decimals(activity.amount),
            amount_class=AmountClass.PLUS if activity.amount >= 0 else AmountClass.MINUS,
        )

    def render(
        self,
        hierarchy: Optional[LedgerHierarchy],
        tag_dictionary: Optional[TagDictionary],
        balance: Optional[Balance],
        search: str = "",
    ) -> RenderResult:
        missing = missing_collaborators(hierarchy, tag_dictionary, balance)
        if missing:
            return LoadErrorState(missing=tuple(missing))

        resolver = TagResolver(tag_dictionary)
        filterer = GroupFilterer(SearchPredicate.from_settings(resolver, self._settings))
        filtered = filterer.filter(hierarchy, search)

        caption_date = f"Montant au {format_date(balance.date)}"
        caption_amount = format_balance_amount(balance.amount, self._settings.currency_symbol)

        if filterer.is_empty(filtered):
            return DisplayModel(
                state=ViewState.NO_RESULT,
                search=search,
                caption_date=caption_date,
                caption_amount=caption_amount,
            )

        rows = self._sequencer.sequence(filtered)
        return DisplayModel(
            state=ViewState.NORMAL,
            search=search,
            caption_date=caption_date,
            caption_amount=caption_amount,
            rows=tuple(self._display_row(row, resolver) for row in rows),
        )


def tag_pattern_rows(patterns: list[TagPattern]) -> list[TagPatternRow]:
    """Rows of the tag pattern table."""
    return [
        TagPatternRow(pattern=pattern.pattern, tags=", ".join(pattern.tags))
        for pattern in patterns
    ]


class LedgerView:
    """
    Stateful controller of the activities view.

    Holds the latest data snapshot and search string. Every event
    replaces the whole result, computed from both.
    """

    def __init__(
        self,
        assembler: Optional[ViewAssembler] = None,
        event_logger: Optional[ViewEventLogger] = None,
    ):
        self._assembler = assembler or ViewAssembler()
        self._event_logger = event_logger or ViewEventLogger()
        self._snapshot: Optional[LedgerSnapshot] = None
        self._search = ""
        self._result: RenderResult = LoadErrorState(
            state=ViewState.NO_DATA,
            message="Loading activities...",
        )

    @property
    def search(self) -> str:
        return self._search

    @property
    def snapshot(self) -> Optional[LedgerSnapshot]:
        return self._snapshot

    @property
    def result(self) -> RenderResult:
        return self._result

    def _refresh(self) -> RenderResult:
        if self._snapshot is None:
            return self._result

        correlation_id = create_correlation_id()
        snapshot = self._snapshot

        try:
            result = self._assembler.render(
                snapshot.hierarchy,
                snapshot.tags,
                snapshot.balance,
                self._search,
            )
        except Exception as e:
            self._event_logger.log_external_service_error(
                service="view_assembler",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            result = LoadErrorState(message=f"Error while rendering activities: {e}")

        if isinstance(result, LoadErrorState):
            self._event_logger.log_render_load_error(list(result.missing), correlation_id)
        elif result.state == ViewState.NO_RESULT:
            self._event_logger.log_search_no_result(self._search, correlation_id)
        else:
            self._event_logger.log_search_executed(
                search=self._search,
                visible_rows=result.row_count,
                visible_groups=sum(1 for row in result.rows if row.leading_cell),
                correlation_id=correlation_id,
            )

        self._result = result
        return result

    def on_data_loaded(self, snapshot: LedgerSnapshot) -> RenderResult:
        """Merge newly delivered data and re-render with the current search."""
        if self._snapshot is None:
            self._snapshot = snapshot
        else:
            self._snapshot = self._snapshot.merged(snapshot)
        return self._refresh()

    def on_search_string_changed(self, new_search: str) -> RenderResult:
        """Re-render with a new search string."""
        self._search = new_search
        return self._refresh()
