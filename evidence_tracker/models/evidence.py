"""Evidence submission model."""

from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .base import TimestampMixin, UUIDMixin


def class_key_for(team_class: Optional[str]) -> str:
    """Key form of a team class; a missing class is one key value of its own."""
    return team_class or ""


class Evidence(UUIDMixin, TimestampMixin, SQLModel, table=True):
    __tablename__ = "evidence"
    __table_args__ = (
        sa.UniqueConstraint("team", "class_key", "level", name="uq_evidence_natural_key"),
    )

    team: str = Field(nullable=False)
    team_class: Optional[str] = None
    # Mirrors team_class with NULL folded to "" so the unique constraint covers it.
    class_key: str = Field(default="", nullable=False)
    level: int = Field(nullable=False)
    points: float = Field(nullable=False)
    link: str = Field(nullable=False)
    note: Optional[str] = None
    validated: bool = Field(default=False, nullable=False)
    correction_note: Optional[str] = None
