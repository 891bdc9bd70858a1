"""Card Service — composes visibility, version, state machine and completeness rules.

Invariants:
    - Every operation starts with the visibility filter (deleted == never existed)
    - Check order: visibility → version → state machine → completeness → CAS write
    - Every write is a compare-and-set on the version read at the start of the operation,
      so a losing concurrent writer fails with VersionConflict and nothing is merged
    - Errors are raised immediately; nothing here retries

Design Decisions:
    - CardService takes an explicit CardRepository: no process-wide connection state
    - transition() accepts an optional caller version; the CAS applies with or without it
    - On a CAS miss the card is re-read through the administrative bypass only to pick
      between CardNotFoundError and VersionConflict; that row is never returned
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from clarityflow.core.card_export import render_card_markdown
from clarityflow.core.card_fields import normalize_title
from clarityflow.core.domain_types import CORE_FIELDS, CardField, CardId, CardStatus
from clarityflow.core.enforce_completeness import (
    requires_completeness, validate_completeness, validate_update,
)
from clarityflow.core.enforce_transitions import validate_transition
from clarityflow.core.enforce_version import check_version
from clarityflow.core.enforce_visibility import ensure_visible, is_visible
from clarityflow.core.errors import CardNotFoundError, CardValidationError, VersionConflict
from clarityflow.core.pagination import (
    DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, page_offset, total_pages,
)
from clarityflow.core.repository_protocols import CardLike, CardRepository

logger = logging.getLogger(__name__)


@dataclass
class CardPage:
    """One page of visible cards plus pagination metadata."""
    cards: Sequence[CardLike]
    page: int
    page_size: int
    total: int
    total_pages: int


class CardService:
    """Card lifecycle operations over a repository handle."""

    def __init__(self, repository: CardRepository):
        self.repository = repository

    async def create(self, title: str) -> CardLike:
        card = await self.repository.insert(normalize_title(title))
        logger.info(
            f"Card {card.id} created",
            extra={"card_id": str(card.id), "version": card.version},
        )
        return card

    async def get(self, card_id: CardId) -> CardLike:
        card = await self.repository.get_visible(card_id)
        return ensure_visible(card, card_id)

    async def list(
        self,
        status: CardStatus | None = None,
        query: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> CardPage:
        if page < 1:
            raise CardValidationError("page must be >= 1", "page")
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise CardValidationError(
                f"pageSize must be between 1 and {MAX_PAGE_SIZE}", "pageSize",
            )
        query = query.strip() if query else None
        cards, total = await self.repository.list_visible(
            CardStatus(status) if status is not None else None,
            query or None,
            page_offset(page, page_size),
            page_size,
        )
        return CardPage(
            cards=cards,
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages(total, page_size),
        )

    async def update(
        self,
        card_id: CardId,
        version: int,
        changes: Mapping[CardField, object],
    ) -> CardLike:
        """Apply explicitly present field changes under optimistic locking."""
        card = await self.get(card_id)
        check_version(card.version, version)
        validate_update(card, changes)
        return await self._write(card_id, card.version, _to_column_values(changes))

    async def transition(
        self,
        card_id: CardId,
        status: CardStatus,
        version: int | None = None,
    ) -> CardLike:
        """Move the card one step along the lifecycle."""
        card = await self.get(card_id)
        if version is not None:
            check_version(card.version, version)
        target = CardStatus(status)
        validate_transition(CardStatus(card.status), target)
        if requires_completeness(target):
            validate_completeness(card)
        return await self._write(card_id, card.version, {"status": target.value})

    async def delete(self, card_id: CardId) -> None:
        """Soft delete. A card that is already deleted reports not found."""
        deleted = await self.repository.soft_delete(
            card_id, datetime.now(timezone.utc),
        )
        if not deleted:
            raise CardNotFoundError(str(card_id))
        logger.info(f"Card {card_id} soft-deleted", extra={"card_id": str(card_id)})

    async def export(self, card_id: CardId) -> str:
        card = await self.get(card_id)
        return render_card_markdown(card)

    async def _write(
        self, card_id: CardId, expected_version: int, values: dict[str, Any],
    ) -> CardLike:
        updated = await self.repository.compare_and_set(
            card_id, expected_version, values,
        )
        if updated is None:
            current = await self.repository.get_including_deleted(card_id)
            if not is_visible(current):
                raise CardNotFoundError(str(card_id))
            logger.warning(
                f"Card {card_id} lost a concurrent write at version {expected_version}",
                extra={"card_id": str(card_id), "error_code": "VERSION_CONFLICT"},
            )
            raise VersionConflict(current.version, expected_version)
        logger.info(
            f"Card {card_id} now at version {updated.version}",
            extra={
                "card_id": str(card_id),
                "version": updated.version,
                "status": updated.status,
            },
        )
        return updated


def _to_column_values(changes: Mapping[CardField, object]) -> dict[str, Any]:
    """Translate wire-keyed changes to model attributes.

    Core fields are NOT NULL columns, so an explicit null clears them to ''.
    """
    values: dict[str, Any] = {}
    for field, value in changes.items():
        if field is CardField.TITLE:
            value = normalize_title(value)  # type: ignore[arg-type]
        elif field in CORE_FIELDS and value is None:
            value = ""
        values[field.attr] = value
    return values
