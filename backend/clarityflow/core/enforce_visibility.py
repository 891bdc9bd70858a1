"""Visibility Filter — soft-deleted cards do not exist from the caller's perspective.

Invariants:
    - A card is visible iff deleted_at is None
    - A deleted card and a missing card produce the same CardNotFoundError
"""

from clarityflow.core.errors import CardNotFoundError
from clarityflow.core.repository_protocols import CardLike


def is_visible(card: CardLike | None) -> bool:
    return card is not None and card.deleted_at is None


def ensure_visible(card: CardLike | None, card_id: object) -> CardLike:
    """Return the card if visible, else raise CardNotFoundError."""
    if not is_visible(card):
        raise CardNotFoundError(str(card_id))
    return card
