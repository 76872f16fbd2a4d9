"""Language model summarisation of stored debates."""
from __future__ import annotations

from .gemini import DebateLabels, GeminiSummarizer, parse_analysis, parse_labels

__all__ = ["DebateLabels", "GeminiSummarizer", "parse_analysis", "parse_labels"]
