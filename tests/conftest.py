"""
Shared fixtures for Ledger Viewer tests.

The ledger fixture is a two-month dataset:
- January: 2024-01-05 +10.00 untagged, 2024-01-05 -5.00 tagged EDF (statement without the tag name)
- February: 2024-02-01 +20.00 untagged
"""

import copy
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from ledgerview.models.ledger import (
    ActivityRecord,
    Balance,
    LedgerHierarchy,
    MonthGroup,
    MonthStats,
    TagDictionary,
    TagMonthlyAmount,
    TagPattern,
    TagSpendSeries,
)
from ledgerview.services.api.interface import (
    DataSourceConnectionError,
    DataSourceError,
    LedgerDataSource,
)


ACTIVITIES_PAYLOAD = [
    {
        "month_index": 1,
        "stats": {"amount_plus": 10.00, "amount_minus": -5.00},
        "activities": [
            {
                "row_id": 1,
                "date": "2024-01-05",
                "statement": "VIR SALAIRE",
                "amount": 10.00,
                "tag_pattern_id": None,
            },
            {
                "row_id": 2,
                "date": "2024-01-05",
                "statement": "PRLV SEPA 123",
                "amount": -5.00,
                "tag_pattern_id": 7,
            },
        ],
    },
    {
        "month_index": 2,
        "stats": {"amount_plus": 20.00, "amount_minus": 0},
        "activities": [
            {
                "row_id": 3,
                "date": "2024-02-01",
                "statement": "CB CARREFOUR",
                "amount": 20.00,
                "tag_pattern_id": None,
            },
        ],
    },
]


def build_hierarchy() -> LedgerHierarchy:
    return (
        MonthGroup(
            month_index=1,
            stats=MonthStats(amount_plus=Decimal("10.00"), amount_minus=Decimal("-5.00")),
            activities=(
                ActivityRecord(
                    id=1,
                    date=date(2024, 1, 5),
                    statement="VIR SALAIRE",
                    amount=Decimal("10.00"),
                ),
                ActivityRecord(
                    id=2,
                    date=date(2024, 1, 5),
                    statement="PRLV SEPA 123",
                    amount=Decimal("-5.00"),
                    tag_pattern_id=7,
                ),
            ),
        ),
        MonthGroup(
            month_index=2,
            stats=MonthStats(amount_plus=Decimal("20.00"), amount_minus=Decimal("0")),
            activities=(
                ActivityRecord(
                    id=3,
                    date=date(2024, 2, 1),
                    statement="CB CARREFOUR",
                    amount=Decimal("20.00"),
                ),
            ),
        ),
    )


@pytest.fixture
def hierarchy() -> LedgerHierarchy:
    return build_hierarchy()


@pytest.fixture
def tag_dictionary() -> TagDictionary:
    return TagDictionary(entries={7: ("EDF",), 9: ("FREEMOBILE", "TELEPHONE")})


@pytest.fixture
def balance() -> Balance:
    return Balance(date=date(2024, 2, 28), amount=Decimal("1234.50"))


class InMemoryLedgerDataSource(LedgerDataSource):
    """
    LedgerDataSource serving fixed data.

    Any operation named in `failures` raises DataSourceConnectionError.
    """

    def __init__(
        self,
        hierarchy: Optional[LedgerHierarchy] = None,
        tags: Optional[TagDictionary] = None,
        balance: Optional[Balance] = None,
        patterns: Optional[list[TagPattern]] = None,
        spend: Optional[dict[str, TagSpendSeries]] = None,
        failures: tuple[str, ...] = (),
    ):
        self.hierarchy = hierarchy if hierarchy is not None else build_hierarchy()
        self.tags = tags if tags is not None else TagDictionary(entries={7: ("EDF",)})
        self.balance = balance or Balance(date=date(2024, 2, 28), amount=Decimal("1234.50"))
        self.patterns = patterns if patterns is not None else [
            TagPattern(pattern="PRLV EDF", tags=("EDF",)),
            TagPattern(pattern="FREE MOBILE", tags=("FREEMOBILE", "TELEPHONE")),
        ]
        self.spend = spend or {}
        self.failures = failures
        self.calls: list[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failures:
            raise DataSourceConnectionError(f"{operation} unavailable")

    async def get_activities(self) -> LedgerHierarchy:
        self._check("activities")
        return self.hierarchy

    async def get_balance(self) -> Balance:
        self._check("balance")
        return self.balance

    async def get_tags(self) -> TagDictionary:
        self._check("tags")
        return self.tags

    async def get_tag_patterns(self) -> list[TagPattern]:
        self._check("tag_patterns")
        return self.patterns

    async def get_tag_stats_per_month(self, tags: list[str]) -> TagSpendSeries:
        key = ",".join(tags)
        self._check(f"tag_stats.{key}")
        if key not in self.spend:
            raise DataSourceError(f"No stats for {key}")
        return self.spend[key]


@pytest.fixture
def data_source() -> InMemoryLedgerDataSource:
    return InMemoryLedgerDataSource(
        tags=TagDictionary(entries={7: ("EDF",)}),
        spend={
            "EDF": TagSpendSeries(
                tags=("EDF",),
                data=(
                    TagMonthlyAmount(amount=Decimal("-5.00"), month=1),
                    TagMonthlyAmount(amount=Decimal("-61.20"), month=2),
                ),
            ),
        },
    )


@pytest.fixture
def data_source_factory():
    return InMemoryLedgerDataSource


@pytest.fixture
def activities_payload() -> list[dict]:
    return copy.deepcopy(ACTIVITIES_PAYLOAD)
