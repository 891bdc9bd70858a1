"""Card ORM — persists the single clarification-card entity.

Invariants:
    - id is UUID primary key, assigned at creation, never changed
    - problem / success_criteria start as '' placeholders; other text fields nullable
    - version starts at 0 and only moves through compare-and-set updates
    - created_at <= updated_at (check constraint); created_at never changes
    - deleted_at NULL means visible; non-NULL means soft-deleted

Design Decisions:
    - status stored as String, not a DB enum: the transition table lives in core/,
      the column only has to hold one of four names
    - updated_at has onupdate so any UPDATE statement refreshes it
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from clarityflow.core.card_fields import TITLE_MAX_LENGTH
from clarityflow.core.domain_types import CardStatus
from clarityflow.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Card(Base):
    """Clarification card — moves NEEDS_CLARIFICATION → CONFIRMED → IN_PROGRESS → DONE."""
    __tablename__ = "cards"
    __table_args__ = (
        CheckConstraint("version >= 0", name="ck_cards_version_non_negative"),
        CheckConstraint("created_at <= updated_at", name="ck_cards_time_flow"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    problem: Mapped[str] = mapped_column(Text, nullable=False, default="")
    success_criteria: Mapped[str] = mapped_column(
        Text, nullable=False, default="",
    )
    out_of_scope: Mapped[str | None] = mapped_column(Text, nullable=True)
    stakeholders: Mapped[str | None] = mapped_column(Text, nullable=True)
    risks: Mapped[str | None] = mapped_column(Text, nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, index=True,
        default=CardStatus.NEEDS_CLARIFICATION.value,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
    )
    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True,
    )
