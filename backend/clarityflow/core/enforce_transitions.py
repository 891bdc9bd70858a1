"""State Machine — legal status transitions for the card lifecycle.

Enforces a strictly linear workflow:
- NEEDS_CLARIFICATION → CONFIRMED → IN_PROGRESS → DONE
- No self-loops, no backward moves, no skipped steps
- DONE is terminal

Invariants:
    - TRANSITIONS is the single source of truth; every edge is one (from, to) pair
    - Every CardStatus appears as a key in ALLOWED_NEXT (terminal states map to ())
    - All functions are PURE: no IO, no async
"""

import logging

from clarityflow.core.domain_types import CardStatus
from clarityflow.core.errors import StateMachineViolation

logger = logging.getLogger(__name__)


TRANSITIONS: frozenset[tuple[CardStatus, CardStatus]] = frozenset({
    (CardStatus.NEEDS_CLARIFICATION, CardStatus.CONFIRMED),
    (CardStatus.CONFIRMED, CardStatus.IN_PROGRESS),
    (CardStatus.IN_PROGRESS, CardStatus.DONE),
})

# Derived adjacency, in enum declaration order.
ALLOWED_NEXT: dict[CardStatus, tuple[CardStatus, ...]] = {
    current: tuple(s for s in CardStatus if (current, s) in TRANSITIONS)
    for current in CardStatus
}


def allowed_transitions(current_status: CardStatus) -> list[CardStatus]:
    """Statuses reachable in one step from current_status (empty for DONE)."""
    return list(ALLOWED_NEXT[CardStatus(current_status)])


def is_transition_valid(
    current_status: CardStatus, requested_status: CardStatus,
) -> bool:
    return (CardStatus(current_status), CardStatus(requested_status)) in TRANSITIONS


def validate_transition(
    current_status: CardStatus, requested_status: CardStatus,
) -> None:
    """Raise StateMachineViolation unless requested_status is a legal next step.

    Same-state requests are rejected like any other illegal edge.
    """
    current = CardStatus(current_status)
    requested = CardStatus(requested_status)
    if is_transition_valid(current, requested):
        return
    allowed = [s.value for s in allowed_transitions(current)]
    logger.warning(
        f"Blocked transition: {current.value} → {requested.value}",
        extra={"error_code": "INVALID_TRANSITION", "status": current.value},
    )
    raise StateMachineViolation(current.value, requested.value, allowed)
