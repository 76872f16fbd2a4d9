"""Signals derived from the finalised speeches of a debate."""
from __future__ import annotations

from typing import List, Optional, Sequence
import re

from ..core.types import DebateRecord, EnrichedDebate, Speech

_BRACKETED = re.compile(r"\[(.*?)\]")
MINISTER_CUE = "i call the minister"


def extract_square_brackets(speeches: Sequence[Speech]) -> List[str]:
    """Return every ``[...]`` annotation, speech by speech, in document order."""

    extracts: List[str] = []
    for speech in speeches:
        extracts.extend(match.strip() for match in _BRACKETED.findall(speech.content))
    return extracts


def find_proposing_minister(speeches: Sequence[Speech]) -> Optional[str]:
    """Return the speaker id of the speech following the first minister cue."""

    for index, speech in enumerate(speeches[:-1]):
        if MINISTER_CUE in speech.content.lower():
            return speeches[index + 1].speaker_id
    return None


def enrich_debate(record: DebateRecord) -> EnrichedDebate:
    return EnrichedDebate(
        record=record,
        extracts=tuple(extract_square_brackets(record.speeches)),
        proposing_minister=find_proposing_minister(record.speeches),
    )


def enrich_debates(records: Sequence[DebateRecord]) -> List[EnrichedDebate]:
    return [enrich_debate(record) for record in records]


__all__ = ["MINISTER_CUE", "enrich_debate", "enrich_debates", "extract_square_brackets", "find_proposing_minister"]
