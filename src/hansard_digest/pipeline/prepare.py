"""Clean-up applied to a sitting's debates before they are stored."""
from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence
import logging

from ..core.types import DebateRecord, EnrichedDebate
from ..enrichment import enrich_debates

LOGGER = logging.getLogger(__name__)

QUESTION_CUE = "was asked"


def _is_question_intro(record: DebateRecord) -> bool:
    return len(record.speeches) == 1 and QUESTION_CUE in record.speeches[0].content


def adjust_debate_types(records: Sequence[DebateRecord]) -> List[DebateRecord]:
    """Fold question-time introductions into the type of the debates they head.

    Oral questions open with a one-speech debate such as "The Secretary of
    State was asked". The first such debate of a run is dropped and its text
    becomes the type of the debates that follow with the same type.
    """

    adjusted: List[DebateRecord] = []
    current_type = ""
    current_prepend = ""
    is_first_row = True
    for record in records:
        if _is_question_intro(record):
            if is_first_row:
                current_prepend = record.speeches[0].content.strip() + " "
                current_type = record.type
                is_first_row = False
                continue
            record = replace(record, type=current_prepend)
        elif record.type == current_type and not is_first_row:
            record = replace(record, type=current_prepend)
        else:
            current_type = record.type
            current_prepend = ""
            is_first_row = True
        adjusted.append(record)
    return adjusted


def drop_untitled(records: Sequence[DebateRecord]) -> List[DebateRecord]:
    return [record for record in records if record.title or record.type]


def prepare_sitting(records: Sequence[DebateRecord]) -> List[EnrichedDebate]:
    """Adjust, filter and enrich the debates of one sitting."""

    kept = drop_untitled(adjust_debate_types(records))
    if len(kept) != len(records):
        LOGGER.debug("Kept %s of %s debates after preparation", len(kept), len(records))
    return enrich_debates(kept)


__all__ = ["adjust_debate_types", "drop_untitled", "prepare_sitting"]
