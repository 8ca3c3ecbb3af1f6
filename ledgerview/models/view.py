"""
View Models for Ledger Viewer

Output of the presentation engine. The front end renders these and
nothing else: it decides what to draw based only on the view state.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ledgerview.models.ledger import ActivityRecord, MonthStats


class Band(str, Enum):
    """Alternating row class separating clusters of same-date rows."""
    A = "band-a"
    B = "band-b"

    def flipped(self) -> "Band":
        return Band.B if self is Band.A else Band.A


class AmountClass(str, Enum):
    """Visual classification of an amount."""
    PLUS = "amount-plus"    # amount >= 0
    MINUS = "amount-minus"  # amount < 0


class ViewState(str, Enum):
    """
    What the front end should show.

    NO_DATA:    nothing has been loaded yet
    LOAD_ERROR: a required data source is unavailable
    NO_RESULT:  data is loaded but the search matches nothing
    NORMAL:     the activities table
    """
    NO_DATA = "no_data"
    LOAD_ERROR = "load_error"
    NO_RESULT = "no_result"
    NORMAL = "normal"


# =============================================================================
# SEQUENCER OUTPUT
# =============================================================================

class RenderRow(BaseModel):
    """
    One visible activity annotated with its band and header status.

    Header rows (the first visible row of a month group) carry the month
    label and the formatted stats of that group.
    """
    model_config = ConfigDict(frozen=True)

    activity: ActivityRecord
    month_group_stats: MonthStats
    is_group_header: bool
    band: Band
    display_date: str = Field(..., description="DD/MM/YYYY")
    month_label: Optional[str] = None
    stats_plus: Optional[str] = None
    stats_minus: Optional[str] = None


# =============================================================================
# ASSEMBLER OUTPUT
# =============================================================================

ACTIVITY_COLUMNS = ("Month", "Date", "Libelle", "Tags", "Montant")


class DisplayRow(BaseModel):
    """Cells of one table row, ready to render."""
    model_config = ConfigDict(frozen=True)

    activity_id: int
    band_class: Band
    leading_cell: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Month label and stats on header rows, empty otherwise"
    )
    date: str
    statement: str
    tags: str
    amount: str
    amount_class: AmountClass


class DisplayModel(BaseModel):
    """The activities table, or the no-result state for a search."""
    model_config = ConfigDict(frozen=True)

    state: ViewState
    search: str = ""
    columns: tuple[str, ...] = ACTIVITY_COLUMNS
    caption_date: str = Field(..., description="e.g. 'Montant au 31/01/2024'")
    caption_amount: str = Field(..., description="e.g. '1234.5 €'")
    rows: tuple[DisplayRow, ...] = Field(default_factory=tuple)

    @property
    def row_count(self) -> int:
        return len(self.rows)


class LoadErrorState(BaseModel):
    """Data required to build the table is missing."""
    model_config = ConfigDict(frozen=True)

    state: ViewState = ViewState.LOAD_ERROR
    missing: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Names of unavailable collaborators"
    )
    message: str = "Error while loading page: can not reach data source"


RenderResult = Union[DisplayModel, LoadErrorState]


class TagPatternRow(BaseModel):
    """One row of the tag pattern table."""
    model_config = ConfigDict(frozen=True)

    pattern: str
    tags: str
