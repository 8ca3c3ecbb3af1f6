"""
Presentation Sequencer

Walks a filtered hierarchy in order and annotates every visible
activity with:
1. its band, alternating on each date change
2. whether it is the header row of its month group

Banding is a fold over the sequence of dates with an immutable
accumulator. The accumulator is carried across month boundaries: a
date change between two groups flips the band like any other. Groups
with no visible activity contribute no row and leave the accumulator
untouched.
"""

from collections.abc import Iterable
from datetime import date
from itertools import accumulate, islice
from typing import NamedTuple, Optional

from ledgerview.models.ledger import ActivityRecord, LedgerHierarchy, MonthGroup
from ledgerview.models.view import Band, RenderRow
from ledgerview.presentation.formatting import format_date, format_stats


class BandState(NamedTuple):
    """Accumulator of the banding fold."""
    previous_date: Optional[date]
    band: Band


# The first row flips B -> A, so the table always starts with band A.
INITIAL_BAND_STATE = BandState(previous_date=None, band=Band.B)


def advance_band(state: BandState, activity_date: date) -> BandState:
    """One step of the fold: flip on a new date, keep otherwise."""
    if state.previous_date is not None and activity_date == state.previous_date:
        return state
    return BandState(previous_date=activity_date, band=state.band.flipped())


def band_sequence(dates: Iterable[date]) -> list[Band]:
    """Bands for a sequence of row dates, in order."""
    states = accumulate(dates, advance_band, initial=INITIAL_BAND_STATE)
    return [state.band for state in islice(states, 1, None)]


class PresentationSequencer:
    """Turns a filtered hierarchy into annotated rows."""

    def _header_row(
        self,
        group: MonthGroup,
        activity: ActivityRecord,
        band: Band,
    ) -> RenderRow:
        stats_plus, stats_minus = format_stats(group.stats)
        return RenderRow(
            activity=activity,
            month_group_stats=group.stats,
            is_group_header=True,
            band=band,
            display_date=format_date(activity.date),
            month_label=group.month_name,
            stats_plus=stats_plus,
            stats_minus=stats_minus,
        )

    def _plain_row(
        self,
        group: MonthGroup,
        activity: ActivityRecord,
        band: Band,
    ) -> RenderRow:
        return RenderRow(
            activity=activity,
            month_group_stats=group.stats,
            is_group_header=False,
            band=band,
            display_date=format_date(activity.date),
        )

    def sequence(self, filtered: LedgerHierarchy) -> list[RenderRow]:
        # Header status is about the filtered position, not the original one
        placed = [
            (group, position, activity)
            for group in filtered
            for position, activity in enumerate(group.activities)
        ]
        bands = band_sequence(activity.date for _, _, activity in placed)

        rows = []
        for (group, position, activity), band in zip(placed, bands):
            if position == 0:
                rows.append(self._header_row(group, activity, band))
            else:
                rows.append(self._plain_row(group, activity, band))
        return rows
