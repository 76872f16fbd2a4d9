"""Persistence helpers built on SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterator, Optional, Sequence
import logging

from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..core.types import EnrichedDebate
from .models import Base, DebateModel

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class DebateOverview:
    """Lightweight representation of a persisted debate."""

    identifier: str
    chamber: str
    sitting_date: date | None
    title: str
    type: str
    speech_count: int
    has_analysis: bool
    updated_at: datetime | None


class Storage:
    """Wrapper around SQLAlchemy to store debates keyed by id."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def upsert_debates(
        self,
        debates: Sequence[EnrichedDebate],
        *,
        chamber: str,
        sitting_date: Optional[date] = None,
        batch_size: int = 100,
    ) -> int:
        """Insert or update ``debates`` in batches; generated columns are kept."""

        batch_size = max(1, batch_size)
        for start in range(0, len(debates), batch_size):
            chunk = debates[start : start + batch_size]
            with self.session() as session:
                for debate in chunk:
                    self._upsert_one(session, debate, chamber=chamber, sitting_date=sitting_date)
            LOGGER.debug("Upserted %s debates into %s", len(chunk), chamber)
        return len(debates)

    @staticmethod
    def _upsert_one(session: Session, debate: EnrichedDebate, *, chamber: str, sitting_date: Optional[date]) -> None:
        data = debate.to_dict()
        model = session.get(DebateModel, debate.id)
        if model is None:
            model = DebateModel(id=debate.id)
            session.add(model)
        model.chamber = chamber
        model.sitting_date = sitting_date
        model.title = data["title"]
        model.type = data["type"]
        model.speaker_ids = data["speaker_ids"]
        model.speaker_names = data["speaker_names"]
        model.speeches = data["speeches"]
        model.extracts = data["extracts"]
        model.proposing_minister = data["proposing_minister"]
        session.flush()

    def get_debate(self, debate_id: str) -> Optional[DebateModel]:
        with self.session() as session:
            return session.get(DebateModel, debate_id)

    def pending_analysis(self, limit: int = 25, *, chamber: Optional[str] = None) -> list[DebateModel]:
        with self.session() as session:
            stmt = select(DebateModel).where(DebateModel.analysis.is_(None))
            if chamber:
                stmt = stmt.where(DebateModel.chamber == chamber)
            stmt = stmt.order_by(DebateModel.sitting_date, DebateModel.id).limit(limit)
            return list(session.scalars(stmt))

    def update_generated(
        self,
        debate_id: str,
        *,
        analysis: str,
        labels: Optional[Dict[str, Any]] = None,
    ) -> None:
        with self.session() as session:
            debate = session.get(DebateModel, debate_id)
            if debate is None:
                raise ValueError(f"Debate {debate_id} not found")
            debate.analysis = analysis
            debate.labels = labels

    def list_debates(self, *, chamber: Optional[str] = None, limit: int = 25) -> list[DebateOverview]:
        """Return the most recent debates, newest sitting first."""

        with self.session() as session:
            stmt = select(DebateModel)
            if chamber:
                stmt = stmt.where(DebateModel.chamber == chamber)
            stmt = stmt.order_by(
                DebateModel.sitting_date.desc().nullslast(),
                DebateModel.id,
            ).limit(limit)
            return [
                DebateOverview(
                    identifier=model.id,
                    chamber=model.chamber,
                    sitting_date=model.sitting_date,
                    title=model.title,
                    type=model.type,
                    speech_count=len(model.speeches or ()),
                    has_analysis=model.analysis is not None,
                    updated_at=model.updated_at,
                )
                for model in session.scalars(stmt)
            ]

    def dispose(self) -> None:
        """Dispose the underlying SQLAlchemy engine."""

        self._engine.dispose()


def create_storage(database_url: str, *, echo: bool = False) -> Storage:
    engine = create_engine(database_url, echo=echo, future=True)
    storage = Storage(engine)
    storage.ensure_schema()
    return storage


__all__ = ["DebateOverview", "Storage", "create_storage"]
