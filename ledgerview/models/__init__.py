"""
Data Models Package

Pydantic models for ledger data, view output and view events.
"""

from ledgerview.models.ledger import (
    MONTH_NAMES,
    ActivityRecord,
    Balance,
    LedgerHierarchy,
    LedgerSnapshot,
    MonthGroup,
    MonthStats,
    TagDictionary,
    TagMonthlyAmount,
    TagPattern,
    TagSpendSeries,
    month_name,
    parse_hierarchy,
)
from ledgerview.models.view import (
    ACTIVITY_COLUMNS,
    AmountClass,
    Band,
    DisplayModel,
    DisplayRow,
    LoadErrorState,
    RenderResult,
    RenderRow,
    TagPatternRow,
    ViewState,
)
from ledgerview.models.audit import (
    ViewEvent,
    ViewEventBuilder,
    ViewEventType,
    ViewSeverity,
)

__all__ = [
    # Ledger models
    "MONTH_NAMES",
    "ActivityRecord",
    "Balance",
    "LedgerHierarchy",
    "LedgerSnapshot",
    "MonthGroup",
    "MonthStats",
    "TagDictionary",
    "TagMonthlyAmount",
    "TagPattern",
    "TagSpendSeries",
    "month_name",
    "parse_hierarchy",
    # View models
    "ACTIVITY_COLUMNS",
    "AmountClass",
    "Band",
    "DisplayModel",
    "DisplayRow",
    "LoadErrorState",
    "RenderResult",
    "RenderRow",
    "TagPatternRow",
    "ViewState",
    # Event models
    "ViewEvent",
    "ViewEventBuilder",
    "ViewEventType",
    "ViewSeverity",
]
