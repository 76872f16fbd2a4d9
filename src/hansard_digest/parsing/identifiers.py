"""Identifier resolution for headings, speeches and speakers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import logging

LOGGER = logging.getLogger(__name__)

ID_ATTRIBUTE = "id"
PERSON_ATTRIBUTE = "person_id"


def last_path_segment(value: Optional[str]) -> Optional[str]:
    """Return the final ``/`` separated segment of ``value`` or ``None``.

    TheyWorkForYou ids look like ``uk.org.publicwhip/debate/2024-05-01a.100.1``;
    only ``2024-05-01a.100.1`` is kept.
    """

    if not value:
        return None
    segment = value.rsplit("/", 1)[-1].strip()
    return segment or None


@dataclass(slots=True)
class SyntheticIds:
    """Monotonic counter minting ``<scope><label>_<n>`` ids unique within one sitting.

    ``scope`` names the sitting (for example ``2024-05-01a.``) so that ids
    minted for different sittings of the same chamber never collide once
    they are stored side by side.
    """

    counter: int = 0
    scope: str = ""

    def next(self, label: str) -> str:
        self.counter += 1
        identifier = f"{self.scope}{label}_{self.counter}"
        LOGGER.debug("Synthesised identifier %s", identifier)
        return identifier


def resolve_identifier(
    attributes: Mapping[str, str],
    label: str,
    synthetic: SyntheticIds,
    *,
    inherited: Optional[str] = None,
) -> str:
    """Resolve a stable id for a node.

    The node's own ``id`` attribute wins. Otherwise ``inherited`` (the id of
    the enclosing heading, when the caller has one) is used, and as a last
    resort a synthetic ``<label>_<n>`` id is minted.
    """

    own = last_path_segment(attributes.get(ID_ATTRIBUTE))
    if own:
        return own
    if inherited:
        return inherited
    return synthetic.next(label)


def resolve_speaker_id(attributes: Mapping[str, str]) -> Optional[str]:
    return last_path_segment(attributes.get(PERSON_ATTRIBUTE))


__all__ = [
    "ID_ATTRIBUTE",
    "PERSON_ATTRIBUTE",
    "SyntheticIds",
    "last_path_segment",
    "resolve_identifier",
    "resolve_speaker_id",
]
