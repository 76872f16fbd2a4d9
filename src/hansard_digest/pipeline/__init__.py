"""Pipeline orchestration components."""
from __future__ import annotations

from .import_pipeline import ImportPipeline, PipelineEvent
from .prepare import adjust_debate_types, drop_untitled, prepare_sitting

__all__ = ["ImportPipeline", "PipelineEvent", "adjust_debate_types", "drop_untitled", "prepare_sitting"]
