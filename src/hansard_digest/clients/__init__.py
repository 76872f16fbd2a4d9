"""HTTP clients used by the Hansard digest pipeline."""
from __future__ import annotations

from .twfy import SITTING_SUFFIXES, FeedClientError, TheyWorkForYouClient

__all__ = ["FeedClientError", "SITTING_SUFFIXES", "TheyWorkForYouClient"]
