"""Typed domain objects shared across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class Speech:
    """A single contribution by one speaker within a debate."""

    speaker_id: Optional[str]
    speaker_name: str
    content: str
    time: str = "00:00"


@dataclass(frozen=True, slots=True)
class DebateRecord:
    """A finalised debate as emitted by the segmenter."""

    id: str
    title: str
    type: str
    speaker_ids: Tuple[str, ...] = ()
    speeches: Tuple[Speech, ...] = ()
    speaker_names: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class EnrichedDebate:
    """A debate record paired with the signals derived from its speeches."""

    record: DebateRecord
    extracts: Tuple[str, ...] = ()
    proposing_minister: Optional[str] = None

    @property
    def id(self) -> str:
        return self.record.id

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self.record)
        data["speaker_ids"] = list(self.record.speaker_ids)
        data["speaker_names"] = list(self.record.speaker_names)
        data["speeches"] = [asdict(speech) for speech in self.record.speeches]
        data["extracts"] = list(self.extracts)
        data["proposing_minister"] = self.proposing_minister
        return data


@dataclass(slots=True)
class SittingDocument:
    """Raw transcript markup for one sitting of a chamber."""

    chamber: str
    sitting_date: date
    suffix: str
    url: str
    markup: bytes = field(repr=False, default=b"")


__all__ = ["DebateRecord", "EnrichedDebate", "SittingDocument", "Speech"]
