"""Search engine package."""

from ledgerview.search.filterer import GroupFilterer
from ledgerview.search.predicate import SearchPredicate, amount_text
from ledgerview.search.tags import TagResolver

__all__ = ["GroupFilterer", "SearchPredicate", "TagResolver", "amount_text"]
