"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every repository read except get_including_deleted applies the visibility filter

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves
"""

from datetime import date, datetime
from typing import Any, Protocol, Sequence
from uuid import UUID

from clarityflow.core.domain_types import CardId, CardStatus


class CardLike(Protocol):
    """Structural contract for Card objects passed to pure rules and the exporter.

    Avoids coupling core rules to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: UUID
    title: str
    problem: str | None
    success_criteria: str | None
    out_of_scope: str | None
    stakeholders: str | None
    risks: str | None
    due_date: date | None
    status: str
    version: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None


class CardRepository(Protocol):
    """Contract for card persistence — implemented by shell."""
    async def insert(self, title: str) -> CardLike: ...
    async def get_visible(self, card_id: CardId) -> CardLike | None: ...
    async def get_including_deleted(self, card_id: CardId) -> CardLike | None: ...
    async def list_visible(
        self,
        status: CardStatus | None,
        query: str | None,
        offset: int,
        limit: int,
    ) -> tuple[Sequence[CardLike], int]: ...
    async def compare_and_set(
        self, card_id: CardId, expected_version: int, values: dict[str, Any],
    ) -> CardLike | None: ...
    async def soft_delete(self, card_id: CardId, deleted_at: datetime) -> bool: ...
