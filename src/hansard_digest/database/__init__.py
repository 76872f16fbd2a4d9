"""Database integration components."""
from __future__ import annotations

from .models import Base, DebateModel
from .storage import DebateOverview, Storage, create_storage

__all__ = [
    "Base",
    "DebateModel",
    "DebateOverview",
    "Storage",
    "create_storage",
]
