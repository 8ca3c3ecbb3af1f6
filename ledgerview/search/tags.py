"""
Tag Resolution

Maps a tag pattern id to its tag names using the tag dictionary.
The dictionary may not be loaded yet: every lookup then resolves to
"no tags" and never matches.
"""

from typing import Optional

from ledgerview.models.ledger import TagDictionary


class TagResolver:
    """Read-only lookups against an optional TagDictionary."""

    def __init__(self, dictionary: Optional[TagDictionary] = None):
        self._dictionary = dictionary

    @property
    def is_available(self) -> bool:
        return self._dictionary is not None

    def tags_for(self, tag_pattern_id: Optional[int]) -> tuple[str, ...]:
        """
        Tag names for a pattern id.

        Empty when the id is None, unknown, or no dictionary is loaded.
        """
        if tag_pattern_id is None or self._dictionary is None:
            return ()
        return self._dictionary.tags_for(tag_pattern_id)

    def matches(self, tag_pattern_id: Optional[int], substring: str) -> bool:
        """
        True iff the id resolves to at least one tag containing
        `substring`, ignoring case.
        """
        if tag_pattern_id is None or self._dictionary is None:
            return False
        if not self._dictionary.contains(tag_pattern_id):
            return False

        needle = substring.lower()
        return any(needle in tag.lower() for tag in self._dictionary.tags_for(tag_pattern_id))
