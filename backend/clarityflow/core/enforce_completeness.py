"""Completeness Contract — problem and successCriteria must be filled past NEEDS_CLARIFICATION.

Invariants:
    - validate_completeness checks the card as stored, before a transition applies
    - validate_update only forbids explicitly clearing a previously non-blank core field
    - A field absent from `changes` is untouched and never triggers the check
    - NEEDS_CLARIFICATION cards are exempt from the update check entirely
    - missingFields always lists fields in CORE_FIELDS order
"""

import logging
from typing import Mapping

from clarityflow.core.card_fields import is_blank
from clarityflow.core.domain_types import CORE_FIELDS, CardField, CardStatus
from clarityflow.core.errors import IncompletenessViolation
from clarityflow.core.repository_protocols import CardLike

logger = logging.getLogger(__name__)

GUARDED_STATUSES: frozenset[CardStatus] = frozenset({
    CardStatus.CONFIRMED,
    CardStatus.IN_PROGRESS,
    CardStatus.DONE,
})


def requires_completeness(status: CardStatus) -> bool:
    return CardStatus(status) in GUARDED_STATUSES


def missing_core_fields(card: CardLike) -> list[str]:
    """Wire names of core fields that are blank on the card."""
    return [
        f.value for f in CORE_FIELDS
        if is_blank(getattr(card, f.attr))
    ]


def validate_completeness(card: CardLike) -> None:
    """Raise IncompletenessViolation listing every blank core field."""
    missing = missing_core_fields(card)
    if missing:
        logger.warning(
            f"Card {card.id} incomplete: {missing}",
            extra={"error_code": "INCOMPLETE_CARD", "card_id": str(card.id)},
        )
        raise IncompletenessViolation(
            missing,
            "Fill in problem and successCriteria before moving past NEEDS_CLARIFICATION.",
        )


def validate_update(
    card: CardLike, changes: Mapping[CardField, object],
) -> None:
    """Anti-regression: a guarded card may not have a non-blank core field cleared.

    `changes` holds only fields explicitly present in the request; a value of
    None or a blank string means "clear this field".
    """
    if not requires_completeness(card.status):
        return
    cleared = [
        f.value for f in CORE_FIELDS
        if f in changes
        and is_blank(changes[f])  # type: ignore[arg-type]
        and not is_blank(getattr(card, f.attr))
    ]
    if cleared:
        logger.warning(
            f"Card {card.id} update would clear {cleared} in {card.status}",
            extra={"error_code": "INCOMPLETE_CARD", "card_id": str(card.id)},
        )
        raise IncompletenessViolation(
            cleared,
            f"Core fields cannot be cleared once a card is {CardStatus(card.status).value}.",
        )
