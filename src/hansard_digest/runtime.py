"""Application level helpers for assembling pipeline dependencies."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import logging

from .clients import TheyWorkForYouClient
from .config import AppConfig
from .database import Storage, create_storage
from .pipeline import ImportPipeline
from .summarization import GeminiSummarizer

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResources:
    """Container bundling the objects needed to run the pipeline."""

    pipeline: ImportPipeline
    feed_client: TheyWorkForYouClient
    storage: Storage
    summarizer: GeminiSummarizer | None
    owns_client: bool = True
    owns_storage: bool = True

    def close(self) -> None:
        if self.owns_client:
            self.feed_client.close()
        if self.owns_storage:
            self.storage.dispose()


def create_pipeline(
    config: AppConfig,
    *,
    skip_summaries: bool,
    storage: Storage | None = None,
    feed_client: TheyWorkForYouClient | None = None,
) -> PipelineResources:
    owns_client = feed_client is None
    owns_storage = storage is None
    client = feed_client or TheyWorkForYouClient(
        config.feed.base_url,
        timeout=config.feed.timeout,
        max_retries=config.feed.max_retries,
    )
    storage_instance = storage or create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    summarizer: Optional[GeminiSummarizer] = None
    if not skip_summaries and config.gemini.api_key:
        summarizer = GeminiSummarizer(
            api_key=config.gemini.api_key,
            base_url=config.gemini.base_url,
            model=config.gemini.model,
            timeout=config.gemini.timeout,
            max_retries=config.gemini.max_retries,
            enable_safety_settings=config.gemini.enable_safety_settings,
        )
    elif not skip_summaries:
        LOGGER.warning("Gemini API key missing - debate analysis will be skipped")
    pipeline = ImportPipeline(
        feed_client=client,
        storage=storage_instance,
        summarizer=summarizer,
        parsing_config=config.parsing,
        batch_size=config.storage.batch_size,
    )
    return PipelineResources(
        pipeline=pipeline,
        feed_client=client,
        storage=storage_instance,
        summarizer=summarizer,
        owns_client=owns_client,
        owns_storage=owns_storage,
    )


__all__ = ["PipelineResources", "create_pipeline"]
