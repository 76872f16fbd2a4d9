"""Prompt templates for debate analysis and labelling."""
from __future__ import annotations

from typing import Iterable, Mapping, Sequence

CATEGORIES: Sequence[str] = (
    "Environment and Natural Resources",
    "Healthcare and Social Welfare",
    "Economy, Business, and Infrastructure",
    "Science, Technology, and Innovation",
    "Legal Affairs and Public Safety",
    "International Relations and Diplomacy",
    "Parliamentary Affairs and Governance",
    "Education, Culture, and Society",
)

ANALYSIS_PROMPT = (
    "Analyse this UK {chamber} debate and provide a concise and engaging 100 word analysis. "
    "Use British English spelling and narrative present tense. "
    "Explain the core topic, the stances of the main contributors, and the takeaway. "
    'Respond with JSON of the form {{"analysis": "text"}}.\n\n'
    "Debate: {title}\n\n{transcript}"
)

LABELS_PROMPT = (
    "Analyse this UK {chamber} debate, then provide 3 categories and 10 tags identifying the core topics. "
    "Use British English spelling.\n"
    "Select categories from this list only:\n{categories}\n"
    "Tags should focus on subtopics of the categories and the points debated. Avoid overlapping tags "
    'and broad tags such as "Parliamentary debate" or "Official Report".\n'
    'Respond with JSON of the form {{"labels": {{"categories": ["..."], "tags": ["..."]}}}}.\n\n'
    "Debate: {title}\n\n{transcript}"
)


def format_transcript(speeches: Iterable[Mapping[str, str]]) -> str:
    """Render stored speeches as ``Speaker: text`` blocks."""

    blocks = []
    for speech in speeches:
        content = (speech.get("content") or "").strip()
        if content:
            blocks.append(f"{speech.get('speaker_name') or 'No Name'}: {content}")
    return "\n\n".join(blocks)


def analysis_prompt(chamber: str, title: str, speeches: Iterable[Mapping[str, str]]) -> str:
    return ANALYSIS_PROMPT.format(chamber=chamber, title=title, transcript=format_transcript(speeches))


def labels_prompt(chamber: str, title: str, speeches: Iterable[Mapping[str, str]]) -> str:
    return LABELS_PROMPT.format(
        chamber=chamber,
        title=title,
        categories="\n".join(f"- {category}" for category in CATEGORIES),
        transcript=format_transcript(speeches),
    )


__all__ = ["CATEGORIES", "analysis_prompt", "format_transcript", "labels_prompt"]
