"""Segment UK parliamentary transcripts into enriched debate records."""
from __future__ import annotations

from .clients import FeedClientError, TheyWorkForYouClient
from .config import AppConfig, FeedConfig, GeminiConfig, ParsingConfig, StorageConfig, load_config
from .core import DebateRecord, EnrichedDebate, SittingDocument, Speech
from .database import Base, DebateModel, Storage, create_storage
from .enrichment import enrich_debate, enrich_debates
from .parsing import ChamberProfile, DebateSegmenter, build_tree, chamber_profile, parse_debates, segment_debates
from .pipeline import ImportPipeline, PipelineEvent, prepare_sitting
from .runtime import PipelineResources, create_pipeline
from .summarization import GeminiSummarizer

__all__ = [
    "AppConfig",
    "Base",
    "ChamberProfile",
    "DebateModel",
    "DebateRecord",
    "DebateSegmenter",
    "EnrichedDebate",
    "FeedClientError",
    "FeedConfig",
    "GeminiConfig",
    "GeminiSummarizer",
    "ImportPipeline",
    "ParsingConfig",
    "PipelineEvent",
    "PipelineResources",
    "SittingDocument",
    "Speech",
    "Storage",
    "StorageConfig",
    "TheyWorkForYouClient",
    "build_tree",
    "chamber_profile",
    "create_pipeline",
    "create_storage",
    "enrich_debate",
    "enrich_debates",
    "load_config",
    "parse_debates",
    "prepare_sitting",
    "segment_debates",
]
