"""Derived signals computed from finalised debates."""
from __future__ import annotations

from .extracts import enrich_debate, enrich_debates, extract_square_brackets, find_proposing_minister

__all__ = ["enrich_debate", "enrich_debates", "extract_square_brackets", "find_proposing_minister"]
