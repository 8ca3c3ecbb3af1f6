"""
Search Predicate

Decides whether one activity matches a raw search string. The search
string is not a query language: it is lower-cased and looked up as a
substring in the amount, the date, the statement and the tag names.

Untagged activities are found by typing the untagged token ("null").
Whether prefixes of the token also match is a policy, see
UntaggedSentinelPolicy.
"""

from decimal import Decimal

from ledgerview.config.settings import UntaggedSentinelPolicy, ViewSettings
from ledgerview.models.ledger import ActivityRecord
from ledgerview.search.tags import TagResolver


def amount_text(amount: Decimal) -> str:
    """
    Searchable text of an amount.

    Shortest plain decimal form: no exponent, no trailing zeros
    (10.00 -> "10", -5.50 -> "-5.5").
    """
    normalized = amount.normalize()
    if normalized.is_zero():
        return "0"
    return format(normalized, "f")


class SearchPredicate:
    """
    Pure activity matcher.

    Evaluated once per activity on every search change, so each check
    is a substring test or a single dictionary lookup.
    """

    def __init__(
        self,
        tag_resolver: TagResolver,
        policy: UntaggedSentinelPolicy = UntaggedSentinelPolicy.PREFIX,
        untagged_token: str = "null",
    ):
        self._tags = tag_resolver
        self._policy = policy
        self._token = untagged_token.lower()

    @classmethod
    def from_settings(
        cls,
        tag_resolver: TagResolver,
        settings: ViewSettings,
    ) -> "SearchPredicate":
        return cls(
            tag_resolver,
            policy=settings.untagged_policy,
            untagged_token=settings.untagged_token,
        )

    @property
    def policy(self) -> UntaggedSentinelPolicy:
        return self._policy

    def matches_untagged_sentinel(self, pattern: str) -> bool:
        """Does a lower-cased search string select untagged activities?"""
        if self._policy == UntaggedSentinelPolicy.EXACT:
            return pattern == self._token
        return 0 < len(pattern) <= len(self._token) and self._token.startswith(pattern)

    def _matches_tags(self, activity: ActivityRecord, pattern: str) -> bool:
        if activity.tag_pattern_id is None:
            return self.matches_untagged_sentinel(pattern)
        return self._tags.matches(activity.tag_pattern_id, pattern)

    def matches(self, activity: ActivityRecord, raw_search: str) -> bool:
        pattern = raw_search.lower()

        return (
            pattern in amount_text(activity.amount)
            or pattern in activity.date.isoformat()
            or pattern in activity.statement.lower()
            or self._matches_tags(activity, pattern)
        )
