"""
SQLAlchemy model for saved invoice results.
"""
from __future__ import annotations

import enum
from datetime import datetime
from typing import Iterable

from sqlalchemy import Column, DateTime, Enum, String, Text
from sqlalchemy.orm import Session

from photostock.database import Base


class Status(str, enum.Enum):
    """Workflow state of a saved invoice."""
    READY = "Ready"
    SCHEDULED = "Scheduled"
    POSTED = "Posted"


class ResultModel(Base):
    __tablename__ = "results"

    inv_number = Column(String(64), primary_key=True)
    total = Column(String(64), nullable=False)
    original_content = Column(Text, nullable=False)
    nas_location = Column(String(512), nullable=False, default="")
    image_path = Column(String(512), nullable=False)
    status = Column(
        Enum(Status, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=Status.READY,
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


def find_existing_inv_numbers(db: Session, inv_numbers: Iterable[str]) -> set[str]:
    """Return the subset of *inv_numbers* that is already stored."""
    candidates = {n for n in inv_numbers if n}
    if not candidates:
        return set()
    rows = (
        db.query(ResultModel.inv_number)
        .filter(ResultModel.inv_number.in_(candidates))
        .all()
    )
    return {row.inv_number for row in rows}
