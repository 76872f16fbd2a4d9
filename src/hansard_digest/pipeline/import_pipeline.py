"""High level orchestration of the Hansard digest pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from threading import Event
from typing import Callable, Iterable, Literal, Mapping, Optional
import logging

from ..clients import SITTING_SUFFIXES, TheyWorkForYouClient
from ..config import ParsingConfig
from ..core.types import SittingDocument
from ..database import Storage
from ..parsing import TreeBuildError, build_tree, chamber_profile, segment_debates
from ..summarization import GeminiSummarizer
from .prepare import prepare_sitting

LOGGER = logging.getLogger(__name__)

PipelineEventKind = Literal[
    "start",
    "fetched",
    "parsed",
    "stored",
    "summaries",
    "progress",
    "finished",
    "cancelled",
    "error",
]


@dataclass(slots=True)
class PipelineEvent:
    """Fine grained progress notification emitted by :class:`ImportPipeline`."""

    kind: PipelineEventKind
    processed: int
    chamber: str | None = None
    sitting: str | None = None
    message: str | None = None
    debate_count: int | None = None
    summary_count: int | None = None


ProgressCallback = Callable[[PipelineEvent], None]


def _sitting_label(document: SittingDocument) -> str:
    return f"{document.sitting_date.isoformat()}{document.suffix}"


class ImportPipeline:
    """Fetch, segment, enrich and store the sittings of a date range."""

    def __init__(
        self,
        *,
        feed_client: TheyWorkForYouClient,
        storage: Storage,
        summarizer: Optional[GeminiSummarizer] = None,
        parsing_config: Optional[ParsingConfig] = None,
        batch_size: int = 100,
    ) -> None:
        self._feed_client = feed_client
        self._storage = storage
        self._summarizer = summarizer
        self._parsing_config = parsing_config or ParsingConfig()
        self._batch_size = batch_size

    def run(
        self,
        *,
        chambers: Iterable[str],
        start_date: date,
        end_date: Optional[date] = None,
        suffix: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[Event] = None,
    ) -> int:
        """Run the pipeline end-to-end and return the number of sittings processed."""

        processed = 0
        cancelled = False
        had_error = False
        current_chamber: str | None = None
        current_sitting: str | None = None
        suffixes = (suffix,) if suffix else SITTING_SUFFIXES
        self._notify(
            progress_callback,
            PipelineEvent(kind="start", processed=processed, message="Pipeline run started"),
        )
        try:
            for chamber in chambers:
                current_chamber = chamber
                profile = chamber_profile(chamber, self._parsing_config)
                documents = self._feed_client.iter_sittings(
                    chamber,
                    start_date,
                    end_date,
                    suffixes=suffixes,
                    cancel_event=cancel_event,
                )
                for document in documents:
                    if cancel_event and cancel_event.is_set():
                        cancelled = True
                        break
                    current_sitting = _sitting_label(document)
                    self._notify(
                        progress_callback,
                        PipelineEvent(
                            kind="fetched",
                            processed=processed,
                            chamber=chamber,
                            sitting=current_sitting,
                            message=f"Fetched {document.url}",
                        ),
                    )
                    try:
                        tree = build_tree(document.markup)
                    except TreeBuildError as exc:
                        LOGGER.error("Skipping %s %s: %s", chamber, current_sitting, exc)
                        self._notify(
                            progress_callback,
                            PipelineEvent(
                                kind="error",
                                processed=processed,
                                chamber=chamber,
                                sitting=current_sitting,
                                message=str(exc),
                            ),
                        )
                        continue
                    records = segment_debates(tree, profile, scope=f"{current_sitting}.")
                    debates = prepare_sitting(records)
                    self._notify(
                        progress_callback,
                        PipelineEvent(
                            kind="parsed",
                            processed=processed,
                            chamber=chamber,
                            sitting=current_sitting,
                            message=f"Parsed {len(debates)} debates",
                            debate_count=len(debates),
                        ),
                    )
                    self._storage.upsert_debates(
                        debates,
                        chamber=chamber,
                        sitting_date=document.sitting_date,
                        batch_size=self._batch_size,
                    )
                    LOGGER.info(
                        "Stored %s of %s debates for %s %s",
                        len(debates),
                        len(records),
                        chamber,
                        current_sitting,
                    )
                    self._notify(
                        progress_callback,
                        PipelineEvent(
                            kind="stored",
                            processed=processed,
                            chamber=chamber,
                            sitting=current_sitting,
                            message=f"Persisted {len(debates)} debates",
                            debate_count=len(debates),
                        ),
                    )
                    if self._summarizer:
                        summary_count = self._summarize_pending(profile.display_name, chamber, cancel_event=cancel_event)
                        if summary_count:
                            self._notify(
                                progress_callback,
                                PipelineEvent(
                                    kind="summaries",
                                    processed=processed,
                                    chamber=chamber,
                                    sitting=current_sitting,
                                    message=f"Generated {summary_count} analyses",
                                    summary_count=summary_count,
                                ),
                            )
                        if cancel_event and cancel_event.is_set():
                            cancelled = True
                            break
                    processed += 1
                    self._notify(
                        progress_callback,
                        PipelineEvent(
                            kind="progress",
                            processed=processed,
                            chamber=chamber,
                            sitting=current_sitting,
                            message=f"Completed {chamber} {current_sitting}",
                            debate_count=len(debates),
                        ),
                    )
                if cancelled or (cancel_event and cancel_event.is_set()):
                    cancelled = True
                    break
        except Exception as exc:
            had_error = True
            LOGGER.exception("Import pipeline failed: %s", exc)
            self._notify(
                progress_callback,
                PipelineEvent(
                    kind="error",
                    processed=processed,
                    chamber=current_chamber,
                    sitting=current_sitting,
                    message=str(exc),
                ),
            )
            raise
        finally:
            if cancelled:
                self._notify(
                    progress_callback,
                    PipelineEvent(
                        kind="cancelled",
                        processed=processed,
                        chamber=current_chamber,
                        sitting=current_sitting,
                        message="Pipeline run cancelled",
                    ),
                )
            elif not had_error:
                self._notify(
                    progress_callback,
                    PipelineEvent(
                        kind="finished",
                        processed=processed,
                        chamber=current_chamber,
                        sitting=current_sitting,
                        message="Pipeline run finished",
                    ),
                )
        return processed

    def _summarize_pending(self, chamber_name: str, chamber: str, *, cancel_event: Optional[Event] = None) -> int:
        assert self._summarizer is not None
        generated = 0
        for debate in self._storage.pending_analysis(limit=25, chamber=chamber):
            if cancel_event and cancel_event.is_set():
                break
            speeches: Iterable[Mapping[str, str]] = debate.speeches or ()
            analysis = self._summarizer.analyse(chamber_name, debate.title, speeches)
            labels = self._summarizer.label(chamber_name, debate.title, speeches)
            self._storage.update_generated(debate.id, analysis=analysis, labels=labels.to_dict())
            generated += 1
        return generated

    @staticmethod
    def _notify(callback: Optional[ProgressCallback], event: PipelineEvent) -> None:
        if callback:
            callback(event)


__all__ = ["ImportPipeline", "PipelineEvent", "ProgressCallback"]
