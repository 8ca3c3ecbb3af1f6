"""
Group Filtering

Applies a SearchPredicate across the month groups.

GUARANTEES:
- Group order and activity order are preserved
- Groups are never dropped, even when nothing in them matches
- The stats snapshot of each group is carried over unchanged
- The source hierarchy is never modified; a new one is returned
"""

from ledgerview.models.ledger import LedgerHierarchy, MonthGroup
from ledgerview.search.predicate import SearchPredicate


class GroupFilterer:
    """Filters a ledger hierarchy against a search string."""

    def __init__(self, predicate: SearchPredicate):
        self._predicate = predicate

    def filter_group(self, group: MonthGroup, search: str) -> MonthGroup:
        kept = tuple(
            activity
            for activity in group.activities
            if self._predicate.matches(activity, search)
        )
        if len(kept) == len(group.activities):
            return group
        return group.model_copy(update={"activities": kept})

    def filter(self, hierarchy: LedgerHierarchy, search: str) -> LedgerHierarchy:
        return tuple(self.filter_group(group, search) for group in hierarchy)

    @staticmethod
    def is_empty(filtered: LedgerHierarchy) -> bool:
        """True when no group has a visible activity left."""
        return all(len(group.activities) == 0 for group in filtered)

    @staticmethod
    def visible_count(filtered: LedgerHierarchy) -> int:
        return sum(len(group.activities) for group in filtered)
