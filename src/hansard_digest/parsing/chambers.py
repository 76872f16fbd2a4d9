"""Per-chamber settings for the debate segmenter."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, FrozenSet, Optional

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config import ParsingConfig


@dataclass(frozen=True, slots=True)
class ChamberProfile:
    """Knobs that differ between the transcript feeds of each chamber."""

    name: str = "default"
    display_name: str = "UK Parliament"
    id_prefix: str = ""
    placeholder_title: str = "No Title"
    placeholder_type: str = "No Subtitle"
    placeholder_speaker: str = "No Name"
    # TODO: confirm with the product owners whether Lords and Westminster Hall
    # should synthesise a debate for speech-only sittings like Commons does.
    synthesize_on_empty: bool = False
    anonymous_speakers: FrozenSet[str] = frozenset()
    detect_urgent_questions: bool = False
    split_bracketed_minor_titles: bool = False


DEFAULT_PROFILE = ChamberProfile()

CHAMBER_PROFILES: Dict[str, ChamberProfile] = {
    "commons": ChamberProfile(
        name="commons",
        display_name="House of Commons",
        id_prefix="commons",
        synthesize_on_empty=True,
        anonymous_speakers=frozenset({"Several hon. Members", "Hon. Members:"}),
        detect_urgent_questions=True,
    ),
    "lords": ChamberProfile(
        name="lords",
        display_name="House of Lords",
        id_prefix="lords",
    ),
    "westminster": ChamberProfile(
        name="westminster",
        display_name="Westminster Hall",
        id_prefix="westminster",
        placeholder_type="Unknown",
        split_bracketed_minor_titles=True,
    ),
}

CHAMBERS = tuple(CHAMBER_PROFILES)


def chamber_profile(name: str, parsing_config: Optional["ParsingConfig"] = None) -> ChamberProfile:
    """Return the profile for ``name`` with configuration overrides applied."""

    try:
        profile = CHAMBER_PROFILES[name]
    except KeyError:
        raise ValueError(f"Unknown chamber {name!r}; expected one of {', '.join(CHAMBERS)}") from None
    if parsing_config is not None:
        override = getattr(parsing_config, f"{name}_synthesize_on_empty", None)
        if override is not None and override != profile.synthesize_on_empty:
            profile = replace(profile, synthesize_on_empty=override)
    return profile


__all__ = ["CHAMBERS", "CHAMBER_PROFILES", "ChamberProfile", "DEFAULT_PROFILE", "chamber_profile"]
