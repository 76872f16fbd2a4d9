"""Group a sitting's transcript tree into debates.

The tree is walked depth first in pre-order. Headings are dispatched before
their children so that a heading closes the previous debate (and sets the
running topic) before any speech nested below it is seen.

Heading rules:

* ``oral-heading`` always closes the open debate and clears the topic.
* ``major-heading`` continues the open debate when no topic is set yet and
  otherwise closes it; either way its text becomes the topic.
* ``minor-heading`` always closes the open debate and opens a new one.
* ``speech`` opens a debate when none is open and is appended to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union
import logging
import re

from ..core.types import DebateRecord, Speech
from .accumulator import DebateAccumulator
from .chambers import DEFAULT_PROFILE, ChamberProfile
from .identifiers import SyntheticIds, last_path_segment, resolve_identifier, resolve_speaker_id
from .nodes import Node, NodeKind, build_tree, paragraph_texts

LOGGER = logging.getLogger(__name__)

URGENT_QUESTION_MARKER = "(Urgent Question):"
URGENT_QUESTION_TYPE = "Urgent Question"
DEFAULT_TIME = "00:00"

_BRACKETED_TITLE = re.compile(r"^(.*?)\s*—\s*\[(.*?)\]$")


@dataclass(slots=True)
class FirstSpeech:
    """Identity of the first speech seen in a sitting."""

    identifier: Optional[str]
    speech_type: str


@dataclass(slots=True)
class SegmentationState:
    """Traversal state for one sitting; never shared between sittings."""

    current: Optional[DebateAccumulator] = None
    current_type: str = ""
    last_major_heading_id: Optional[str] = None
    synthetic: SyntheticIds = field(default_factory=SyntheticIds)
    debates: List[DebateRecord] = field(default_factory=list)
    first_speech: Optional[FirstSpeech] = None
    speech_count: int = 0

    def close_current(self) -> None:
        if self.current is not None:
            self.debates.append(self.current.finalize())
            self.current = None


class DebateSegmenter:
    """State machine turning a transcript tree into :class:`DebateRecord` values."""

    def __init__(self, profile: ChamberProfile = DEFAULT_PROFILE) -> None:
        self._profile = profile

    @property
    def profile(self) -> ChamberProfile:
        return self._profile

    def segment(self, root: Optional[Node], *, scope: str = "") -> List[DebateRecord]:
        """Return the debates contained in the tree below ``root``.

        ``scope`` is placed in front of every synthesised id, never in front
        of ids taken from the transcript itself.
        """

        state = SegmentationState(synthetic=SyntheticIds(scope=scope))
        if root is None:
            return state.debates
        self._visit(root, state)
        state.close_current()

        if not state.debates and state.first_speech is not None and self._profile.synthesize_on_empty:
            state.debates.append(self.fallback_debate(state.first_speech, state.synthetic))

        LOGGER.debug(
            "Segmented %s speeches into %s debates (%s)",
            state.speech_count,
            len(state.debates),
            self._profile.name,
        )
        return state.debates

    def fallback_debate(self, first_speech: FirstSpeech, synthetic: SyntheticIds) -> DebateRecord:
        """Build the placeholder debate for a sitting that produced none."""

        identifier = first_speech.identifier or synthetic.next("speech")
        LOGGER.debug("Synthesising debate %s from the first speech", identifier)
        accumulator = DebateAccumulator(
            f"{self._profile.id_prefix}{identifier}",
            first_speech.speech_type or self._profile.placeholder_title,
            first_speech.speech_type or self._profile.placeholder_type,
            placeholder_speaker=self._profile.placeholder_speaker,
        )
        return accumulator.finalize()

    # --- dispatch -------------------------------------------------------
    def _visit(self, node: Node, state: SegmentationState) -> None:
        kind = NodeKind.from_name(node.kind)
        if kind is NodeKind.ORAL_HEADING:
            self._on_oral_heading(node, state)
        elif kind is NodeKind.MAJOR_HEADING:
            self._on_major_heading(node, state)
        elif kind is NodeKind.MINOR_HEADING:
            self._on_minor_heading(node, state)
        elif kind is NodeKind.SPEECH:
            self._on_speech(node, state)
        elif kind is NodeKind.OTHER:
            pass
        else:  # pragma: no cover - guards against new enum members
            raise AssertionError(f"Unhandled node kind {kind}")

        for child in node.children:
            self._visit(child, state)

    def _on_oral_heading(self, node: Node, state: SegmentationState) -> None:
        state.close_current()
        state.current_type = ""
        state.last_major_heading_id = resolve_identifier(node.attributes, "oral", state.synthetic)

    def _on_major_heading(self, node: Node, state: SegmentationState) -> None:
        if state.current_type:
            state.close_current()
        state.current_type = node.text.strip()
        state.last_major_heading_id = resolve_identifier(node.attributes, "major", state.synthetic)

    def _on_minor_heading(self, node: Node, state: SegmentationState) -> None:
        state.close_current()
        identifier = resolve_identifier(node.attributes, "minor", state.synthetic)
        title = node.text.strip()
        debate_type = state.current_type
        if self._profile.split_bracketed_minor_titles:
            match = _BRACKETED_TITLE.match(title)
            if match:
                title, debate_type = match.group(1).strip(), match.group(2).strip()
        state.current = self._open(identifier, title, debate_type)

    def _on_speech(self, node: Node, state: SegmentationState) -> None:
        attributes = node.attributes
        speech_type = (attributes.get("type") or "").strip()
        paragraphs = paragraph_texts(node)
        state.speech_count += 1
        if state.first_speech is None:
            state.first_speech = FirstSpeech(last_path_segment(attributes.get("id")), speech_type)

        if state.current is None:
            identifier = state.last_major_heading_id or resolve_identifier(attributes, "speech", state.synthetic)
            title = state.current_type or speech_type or self._profile.placeholder_title
            debate_type = state.current_type or speech_type or self._profile.placeholder_type
            if (
                self._profile.detect_urgent_questions
                and paragraphs
                and paragraphs[0].startswith(URGENT_QUESTION_MARKER)
            ):
                debate_type = URGENT_QUESTION_TYPE
            state.current = self._open(identifier, title, debate_type)

        state.current.add_speech(
            Speech(
                speaker_id=resolve_speaker_id(attributes),
                speaker_name=self._speaker_name(attributes.get("speakername")),
                content="\n".join(paragraphs),
                time=self._speech_time(attributes.get("time")),
            )
        )

    # --- helpers --------------------------------------------------------
    def _open(self, identifier: str, title: str, debate_type: str) -> DebateAccumulator:
        return DebateAccumulator(
            f"{self._profile.id_prefix}{identifier}",
            title,
            debate_type,
            placeholder_speaker=self._profile.placeholder_speaker,
        )

    def _speaker_name(self, raw: Optional[str]) -> str:
        name = (raw or "").strip()
        if not name or name in self._profile.anonymous_speakers:
            return self._profile.placeholder_speaker
        return name

    @staticmethod
    def _speech_time(raw: Optional[str]) -> str:
        value = (raw or "").strip()
        return value[:5] if value else DEFAULT_TIME


def segment_debates(
    root: Optional[Node],
    profile: ChamberProfile = DEFAULT_PROFILE,
    *,
    scope: str = "",
) -> List[DebateRecord]:
    """Segment ``root`` with a fresh :class:`DebateSegmenter`."""

    return DebateSegmenter(profile).segment(root, scope=scope)


def parse_debates(
    markup: Union[str, bytes],
    profile: ChamberProfile = DEFAULT_PROFILE,
    *,
    scope: str = "",
) -> List[DebateRecord]:
    """Build a tree from transcript ``markup`` and segment it."""

    return segment_debates(build_tree(markup), profile, scope=scope)


__all__ = [
    "DebateSegmenter",
    "FirstSpeech",
    "SegmentationState",
    "parse_debates",
    "segment_debates",
]
