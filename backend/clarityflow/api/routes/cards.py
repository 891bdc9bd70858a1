"""Card Routes — HTTP surface for the seven card operations.

Invariants:
    - Path ids are parsed as UUID by FastAPI; malformed ids are 400 VALIDATION_ERROR
    - Each request builds its own CardService around the request's DB session
    - Responses use camelCase aliases (CardResponse)
    - DELETE returns 204 with an empty body; export returns text/markdown
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from clarityflow.core.domain_types import CardId, CardStatus
from clarityflow.core.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from clarityflow.infrastructure.card_repository import SqlCardRepository
from clarityflow.infrastructure.database import get_db
from clarityflow.schemas.card import (
    CardCreate,
    CardListResponse,
    CardResponse,
    CardTransition,
    CardUpdate,
    Pagination,
)
from clarityflow.services.card_service import CardService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/cards", tags=["cards"])


def get_card_service(db: AsyncSession = Depends(get_db)) -> CardService:
    return CardService(SqlCardRepository(db))


@router.post(
    "", response_model=CardResponse, status_code=status.HTTP_201_CREATED,
)
async def create_card(
    body: CardCreate, service: CardService = Depends(get_card_service),
):
    """Create a card in NEEDS_CLARIFICATION at version 0."""
    return await service.create(body.title)


@router.get("", response_model=CardListResponse)
async def list_cards(
    status_filter: CardStatus | None = Query(None, alias="status"),
    q: str | None = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize",
    ),
    service: CardService = Depends(get_card_service),
):
    """List visible cards, newest first, with status filter and title/problem search."""
    result = await service.list(status_filter, q, page, page_size)
    return CardListResponse(
        cards=[CardResponse.model_validate(c) for c in result.cards],
        pagination=Pagination(
            page=result.page,
            page_size=result.page_size,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get("/{card_id}", response_model=CardResponse)
async def get_card(
    card_id: UUID, service: CardService = Depends(get_card_service),
):
    return await service.get(CardId(card_id))


@router.put("/{card_id}", response_model=CardResponse)
async def update_card(
    card_id: UUID,
    body: CardUpdate,
    service: CardService = Depends(get_card_service),
):
    """Partial update; requires the version the caller last observed."""
    return await service.update(CardId(card_id), body.version, body.changes())


@router.post("/{card_id}/transition", response_model=CardResponse)
async def transition_card(
    card_id: UUID,
    body: CardTransition,
    service: CardService = Depends(get_card_service),
):
    """Move the card one step along its lifecycle."""
    return await service.transition(CardId(card_id), body.status, body.version)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: UUID, service: CardService = Depends(get_card_service),
):
    """Soft delete the card."""
    await service.delete(CardId(card_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{card_id}/export", response_class=PlainTextResponse)
async def export_card(
    card_id: UUID, service: CardService = Depends(get_card_service),
):
    """Export the card as a Markdown document."""
    markdown = await service.export(CardId(card_id))
    return PlainTextResponse(markdown, media_type="text/markdown; charset=utf-8")
