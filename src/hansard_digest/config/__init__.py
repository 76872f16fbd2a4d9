"""Configuration helpers for the Hansard digest pipeline."""
from __future__ import annotations

from .settings import (
    AppConfig,
    FeedConfig,
    GeminiConfig,
    ParsingConfig,
    StorageConfig,
    load_config,
    resolve_config_path,
    save_config,
)

__all__ = [
    "AppConfig",
    "FeedConfig",
    "GeminiConfig",
    "ParsingConfig",
    "StorageConfig",
    "load_config",
    "resolve_config_path",
    "save_config",
]
