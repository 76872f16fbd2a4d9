"""Mutable debate builder used while a sitting is being segmented."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Set

from ..core.types import DebateRecord, Speech


class OrderedIdentifiers:
    """Insertion ordered collection with set membership semantics."""

    __slots__ = ("_items", "_seen")

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: List[str] = []
        self._seen: Set[str] = set()
        for item in items:
            self.add(item)

    def add(self, item: str) -> bool:
        """Add ``item`` unless already present; return whether it was new."""

        if item in self._seen:
            return False
        self._seen.add(item)
        self._items.append(item)
        return True

    def __contains__(self, item: object) -> bool:
        return item in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def as_tuple(self) -> tuple[str, ...]:
        return tuple(self._items)


class DebateAccumulator:
    """Collects speeches for the debate currently open in the traversal.

    Finalisation is one way: once :meth:`finalize` has produced a
    :class:`DebateRecord` the accumulator refuses further speeches.
    """

    def __init__(self, identifier: str, title: str, debate_type: str, *, placeholder_speaker: str = "No Name") -> None:
        self.id = identifier
        self.title = title
        self.type = debate_type
        self._placeholder_speaker = placeholder_speaker
        self._speaker_ids = OrderedIdentifiers()
        self._speaker_names = OrderedIdentifiers()
        self._speeches: List[Speech] = []
        self._record: Optional[DebateRecord] = None

    @property
    def is_finalized(self) -> bool:
        return self._record is not None

    @property
    def speech_count(self) -> int:
        return len(self._speeches)

    def add_speech(self, speech: Speech) -> None:
        if self._record is not None:
            raise RuntimeError(f"Debate {self.id} has already been finalised")
        if speech.speaker_id:
            self._speaker_ids.add(speech.speaker_id)
        if speech.speaker_name and speech.speaker_name != self._placeholder_speaker:
            self._speaker_names.add(speech.speaker_name)
        self._speeches.append(speech)

    def finalize(self) -> DebateRecord:
        """Freeze the accumulated state into a :class:`DebateRecord`."""

        if self._record is None:
            self._record = DebateRecord(
                id=self.id,
                title=self.title,
                type=self.type,
                speaker_ids=self._speaker_ids.as_tuple(),
                speeches=tuple(self._speeches),
                speaker_names=self._speaker_names.as_tuple(),
            )
        return self._record


__all__ = ["DebateAccumulator", "OrderedIdentifiers"]
