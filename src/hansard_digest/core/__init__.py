"""Core domain entities used across the pipeline."""
from __future__ import annotations

from .types import DebateRecord, EnrichedDebate, SittingDocument, Speech

__all__ = ["DebateRecord", "EnrichedDebate", "SittingDocument", "Speech"]
