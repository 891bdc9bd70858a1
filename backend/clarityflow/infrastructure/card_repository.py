"""Card Repository — SQLAlchemy implementation of the CardRepository protocol.

Invariants:
    - Every read except get_including_deleted filters deleted_at IS NULL
    - compare_and_set is ONE conditional UPDATE keyed on (id, version, deleted_at IS NULL):
      the store decides the race, not a read-then-write in Python
    - Successful writes commit; a CAS miss rolls back and returns None
    - Returned cards are freshly loaded (populate_existing), never stale identity-map rows
"""

import logging
from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from clarityflow.core.domain_types import CardId, CardStatus
from clarityflow.models.card import Card, utcnow

logger = logging.getLogger(__name__)


class SqlCardRepository:
    """Card persistence over an AsyncSession owned by the caller."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, title: str) -> Card:
        now = utcnow()
        card = Card(
            title=title,
            problem="",
            success_criteria="",
            status=CardStatus.NEEDS_CLARIFICATION.value,
            version=0,
            created_at=now,
            updated_at=now,
        )
        self.db.add(card)
        await self.db.commit()
        return card

    async def get_visible(self, card_id: CardId) -> Card | None:
        result = await self.db.execute(
            select(Card)
            .where(Card.id == card_id)
            .where(Card.deleted_at.is_(None))
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_including_deleted(self, card_id: CardId) -> Card | None:
        """Administrative bypass: ignores the visibility filter."""
        result = await self.db.execute(
            select(Card)
            .where(Card.id == card_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def list_visible(
        self,
        status: CardStatus | None,
        query: str | None,
        offset: int,
        limit: int,
    ) -> tuple[Sequence[Card], int]:
        """Visible cards matching filters, newest first, plus the total match count."""
        conditions = [Card.deleted_at.is_(None)]
        if status is not None:
            conditions.append(Card.status == CardStatus(status).value)
        if query:
            needle = query.lower()
            conditions.append(or_(
                func.lower(Card.title).contains(needle, autoescape=True),
                func.lower(Card.problem).contains(needle, autoescape=True),
            ))

        total = await self.db.scalar(
            select(func.count()).select_from(Card).where(*conditions),
        )
        result = await self.db.execute(
            select(Card)
            .where(*conditions)
            .order_by(Card.created_at.desc())
            .offset(offset)
            .limit(limit)
            .execution_options(populate_existing=True),
        )
        return result.scalars().all(), total or 0

    async def compare_and_set(
        self, card_id: CardId, expected_version: int, values: dict[str, Any],
    ) -> Card | None:
        """Apply values and bump version iff the stored version still equals expected_version.

        A miss rolls the session back, which expires every card the caller holds;
        re-read before touching their attributes.
        """
        result = await self.db.execute(
            update(Card)
            .where(Card.id == card_id)
            .where(Card.version == expected_version)
            .where(Card.deleted_at.is_(None))
            .values(**values, version=Card.version + 1, updated_at=utcnow())
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            await self.db.rollback()
            logger.info(
                f"CAS miss on card {card_id} at version {expected_version}",
                extra={"card_id": str(card_id), "version": expected_version},
            )
            return None
        await self.db.commit()
        return await self.get_including_deleted(card_id)

    async def soft_delete(self, card_id: CardId, deleted_at: datetime) -> bool:
        """Set deleted_at on a visible card. False when nothing visible matched."""
        result = await self.db.execute(
            update(Card)
            .where(Card.id == card_id)
            .where(Card.deleted_at.is_(None))
            .values(deleted_at=deleted_at, updated_at=deleted_at)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            await self.db.rollback()
            return False
        await self.db.commit()
        return True
