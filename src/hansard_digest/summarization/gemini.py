"""Debate analysis and labelling via the Gemini SDK."""
from __future__ import annotations

from dataclasses import dataclass, field
from importlib import import_module
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Sequence
import json
import logging
import math

from .prompts import CATEGORIES, analysis_prompt, labels_prompt

if TYPE_CHECKING:  # pragma: no cover - optional dependency for type checkers only
    from google import genai  # noqa: F401 - imported for typing
    from google.genai import types  # noqa: F401 - imported for typing

LOGGER = logging.getLogger(__name__)

_TEXTUAL_SAFETY_CATEGORY_NAMES: Sequence[str] = (
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_CIVIC_INTEGRITY",
)


@dataclass(slots=True)
class DebateLabels:
    categories: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {"categories": list(self.categories), "tags": list(self.tags)}


def parse_analysis(payload: Mapping[str, Any]) -> str:
    analysis = payload.get("analysis")
    if not isinstance(analysis, str) or not analysis.strip():
        raise RuntimeError("Gemini response did not contain an analysis")
    return analysis.strip()


def parse_labels(payload: Mapping[str, Any]) -> DebateLabels:
    """Read labels from a Gemini reply, discarding categories outside the fixed list."""

    raw = payload.get("labels") or {}
    categories = [str(item).strip() for item in raw.get("categories") or () if str(item).strip() in CATEGORIES]
    tags = [str(item).strip() for item in raw.get("tags") or () if str(item).strip()]
    return DebateLabels(categories=categories, tags=tags)


class GeminiSummarizer:
    """Client generating analyses and topic labels for stored debates."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        model: str = "gemini-2.5-pro",
        timeout: float = 120.0,
        max_retries: int = 3,
        enable_safety_settings: bool = False,
    ) -> None:
        if not api_key:
            raise ValueError("A Gemini API key must be provided")
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._enable_safety_settings = enable_safety_settings
        self._genai = import_module("google.genai")
        self._types = import_module("google.genai.types")
        self._client = self._genai.Client(api_key=api_key, http_options=self._build_http_options())

    def _build_http_options(self):
        http_options_kwargs: dict[str, object] = {}
        if self._base_url:
            http_options_kwargs["base_url"] = self._base_url
        timeout_seconds = math.ceil(self._timeout)
        if timeout_seconds > 0:
            # HttpOptions expects milliseconds
            http_options_kwargs["timeout"] = timeout_seconds * 1000
        return self._types.HttpOptions(**http_options_kwargs)

    def analyse(self, chamber: str, title: str, speeches: Iterable[Mapping[str, str]]) -> str:
        """Return a short narrative analysis of a debate."""

        return parse_analysis(self._generate_json(analysis_prompt(chamber, title, speeches)))

    def label(self, chamber: str, title: str, speeches: Iterable[Mapping[str, str]]) -> DebateLabels:
        """Return the topic categories and tags of a debate."""

        return parse_labels(self._generate_json(labels_prompt(chamber, title, speeches)))

    def _generate_json(self, prompt: str) -> Dict[str, Any]:
        config = self._build_generation_config()
        last_exc: Optional[Exception] = None
        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._client.models.generate_content(
                    model=self._model,
                    contents=prompt,
                    config=config,
                )
                return json.loads(self._extract_text(response))
            except self._genai.errors.APIError as exc:  # pragma: no cover - network errors are rare in tests
                last_exc = exc
                LOGGER.warning("Gemini request failed (attempt %s/%s): %s", attempt, self._max_retries, exc)
            except json.JSONDecodeError as exc:
                last_exc = exc
                LOGGER.warning("Gemini returned invalid JSON (attempt %s/%s)", attempt, self._max_retries)
        raise RuntimeError("Failed to generate debate summary via Gemini") from last_exc

    def _build_generation_config(self):
        config = self._types.GenerateContentConfig(
            temperature=0.2,
            top_p=0.95,
            max_output_tokens=1024,
            response_mime_type="application/json",
        )
        if not self._enable_safety_settings:
            harm_category = self._types.HarmCategory
            config.safety_settings = [
                self._types.SafetySetting(
                    category=getattr(harm_category, name),
                    threshold=self._types.HarmBlockThreshold.BLOCK_NONE,
                )
                for name in _TEXTUAL_SAFETY_CATEGORY_NAMES
            ]
        return config

    @staticmethod
    def _extract_text(response: Any) -> str:
        text = (response.text or "").strip()
        if text:
            return text
        for candidate in response.candidates or ():
            if candidate.content and candidate.content.parts:
                for part in candidate.content.parts:
                    candidate_text = (getattr(part, "text", None) or "").strip()
                    if candidate_text:
                        return candidate_text
        raise RuntimeError("Gemini response did not contain text")


__all__ = ["DebateLabels", "GeminiSummarizer", "parse_analysis", "parse_labels"]
