"""
Core Data Models for Ledger Viewer

These models define the schemas for all ledger data received from the API.
They are designed to:
1. Validate API payloads at the boundary
2. Be immutable once received (frozen models, tuples instead of lists)
3. Keep the wire field names (row_id, tag_pattern_id) as aliases

Server order is preserved everywhere: month groups and the activities
inside them are kept exactly as received.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    model_validator,
)


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def month_name(month_index: int) -> str:
    """English month name for a 1-based month index."""
    if not 1 <= month_index <= 12:
        raise ValueError(f"Month index out of range: {month_index}")
    return MONTH_NAMES[month_index - 1]


# =============================================================================
# ACTIVITIES
# =============================================================================

class ActivityRecord(BaseModel):
    """
    A single bank transaction.

    The id is unique across the whole dataset. A missing tag_pattern_id
    means the activity is untagged.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(
        ...,
        alias="row_id",
        ge=0,
        description="Stable unique identifier"
    )
    date: date  # Booking date
    statement: str = Field(
        ...,
        description="Free text from the bank statement"
    )
    amount: Decimal = Field(
        ...,
        description="Signed amount (negative = spending)"
    )
    tag_pattern_id: Optional[int] = Field(
        default=None,
        description="Tag pattern linking this activity to tag names"
    )

    @property
    def is_tagged(self) -> bool:
        return self.tag_pattern_id is not None


class MonthStats(BaseModel):
    """
    Aggregate amounts for a whole month, computed by the server.

    This is a snapshot: it reflects every activity of the month
    regardless of what a search currently shows.
    """
    model_config = ConfigDict(frozen=True)

    amount_plus: Decimal = Field(
        ...,
        ge=0,
        description="Sum of incoming amounts"
    )
    amount_minus: Decimal = Field(
        ...,
        le=0,
        description="Sum of outgoing amounts"
    )


class MonthGroup(BaseModel):
    """All activities of one calendar month with their stats snapshot."""
    model_config = ConfigDict(frozen=True)

    month_index: int = Field(
        ...,
        ge=1,
        le=12,
        description="1-based month number"
    )
    stats: MonthStats
    activities: tuple[ActivityRecord, ...] = Field(default_factory=tuple)

    @property
    def month_name(self) -> str:
        return month_name(self.month_index)


LedgerHierarchy = tuple[MonthGroup, ...]

_HIERARCHY_ADAPTER = TypeAdapter(LedgerHierarchy)


def parse_hierarchy(payload: Any) -> LedgerHierarchy:
    """
    Validate the activities payload into month groups.

    Raises:
        pydantic.ValidationError: If the payload does not match the schema
        ValueError: If an activity id appears twice
    """
    hierarchy = _HIERARCHY_ADAPTER.validate_python(payload)

    seen: set[int] = set()
    for group in hierarchy:
        for activity in group.activities:
            if activity.id in seen:
                raise ValueError(f"Duplicate activity id: {activity.id}")
            seen.add(activity.id)

    return hierarchy


class Balance(BaseModel):
    """Account balance snapshot shown in the table header."""
    model_config = ConfigDict(frozen=True)

    date: date
    amount: Decimal


# =============================================================================
# TAGS
# =============================================================================

class TagDictionary(BaseModel):
    """
    Mapping from tag pattern id to its ordered tag names.

    The API encodes ids as string keys; they are validated into integers.
    """
    model_config = ConfigDict(frozen=True)

    entries: dict[int, tuple[str, ...]] = Field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, list[str]]) -> "TagDictionary":
        """Build from the `GET tags` JSON object."""
        return cls(entries=payload)

    def contains(self, tag_pattern_id: int) -> bool:
        return tag_pattern_id in self.entries

    def tags_for(self, tag_pattern_id: int) -> tuple[str, ...]:
        return self.entries.get(tag_pattern_id, ())

    def __len__(self) -> int:
        return len(self.entries)


class TagPattern(BaseModel):
    """A statement pattern and the tags it assigns."""
    model_config = ConfigDict(frozen=True)

    pattern: str
    tags: tuple[str, ...] = Field(default_factory=tuple)


class TagMonthlyAmount(BaseModel):
    """Total amount spent on a tag during one month."""
    model_config = ConfigDict(frozen=True)

    amount: Decimal
    month: int = Field(..., ge=1, le=12)


class TagSpendSeries(BaseModel):
    """
    Monthly spend for a set of tags, as served by
    `GET stats/per_month/tag`.
    """
    model_config = ConfigDict(frozen=True)

    tags: tuple[str, ...]
    data: tuple[TagMonthlyAmount, ...] = Field(default_factory=tuple)

    @model_validator(mode='after')
    def validate_tags(self) -> 'TagSpendSeries':
        if not self.tags:
            raise ValueError("Spend series needs at least one tag")
        return self

    def labels(self) -> list[str]:
        """Month names, one per data point."""
        return [month_name(point.month) for point in self.data]

    def values(self) -> list[Decimal]:
        return [point.amount for point in self.data]

    def dataset_label(self, currency_symbol: str = "€") -> str:
        return f"Depense en {currency_symbol} pour tag {', '.join(self.tags)}"


# =============================================================================
# LOADED DATA
# =============================================================================

class LedgerSnapshot(BaseModel):
    """
    Whatever the data sources have delivered so far.

    Each part is None until it arrives (or when its fetch failed).
    Parts arrive independently and in any order.
    """
    model_config = ConfigDict(frozen=True)

    hierarchy: Optional[LedgerHierarchy] = None
    tags: Optional[TagDictionary] = None
    balance: Optional[Balance] = None
    errors: dict[str, str] = Field(
        default_factory=dict,
        description="Error message per failed source"
    )

    def merged(self, update: "LedgerSnapshot") -> "LedgerSnapshot":
        """Newer parts replace older ones; missing parts are kept."""
        errors = {**self.errors, **update.errors}
        for name in ("hierarchy", "tags", "balance"):
            if getattr(update, name) is not None:
                errors.pop(name, None)
        return LedgerSnapshot(
            hierarchy=update.hierarchy if update.hierarchy is not None else self.hierarchy,
            tags=update.tags if update.tags is not None else self.tags,
            balance=update.balance if update.balance is not None else self.balance,
            errors=errors,
        )
