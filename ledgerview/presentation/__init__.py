"""Presentation package: row sequencing and display model assembly."""

from ledgerview.presentation.assembler import (
    LedgerView,
    ViewAssembler,
    missing_collaborators,
    tag_pattern_rows,
)
from ledgerview.presentation.sequencer import (
    INITIAL_BAND_STATE,
    BandState,
    PresentationSequencer,
    advance_band,
    band_sequence,
)

__all__ = [
    "INITIAL_BAND_STATE",
    "BandState",
    "LedgerView",
    "PresentationSequencer",
    "ViewAssembler",
    "advance_band",
    "band_sequence",
    "missing_collaborators",
    "tag_pattern_rows",
]
