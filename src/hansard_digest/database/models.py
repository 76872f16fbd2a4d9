"""SQLAlchemy models for stored debates."""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Date, DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative SQLAlchemy base class."""


class DebateModel(Base):
    """Database representation of one debate of a sitting."""

    __tablename__ = "debates"

    id: Mapped[str] = mapped_column(String(160), primary_key=True)
    chamber: Mapped[str] = mapped_column(String(32), index=True)
    sitting_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
    title: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[str] = mapped_column(Text, default="")
    speaker_ids: Mapped[List[str]] = mapped_column(JSON, default=list)
    speaker_names: Mapped[List[str]] = mapped_column(JSON, default=list)
    speeches: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    extracts: Mapped[List[str]] = mapped_column(JSON, default=list)
    proposing_minister: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    analysis: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    labels: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


__all__ = ["Base", "DebateModel"]
