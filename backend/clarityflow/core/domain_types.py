"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CardId wraps UUID — never use bare UUID in domain logic
    - CardStatus is closed: exactly four lifecycle states
    - CardField values are the wire names reported in error details

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CardId = NewType("CardId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class CardStatus(str, Enum):
    """Card lifecycle states — maps to DB `status` column."""
    NEEDS_CLARIFICATION = "NEEDS_CLARIFICATION"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class CardField(str, Enum):
    """Editable card fields, keyed by wire name; attr is the model attribute."""
    TITLE = "title"
    PROBLEM = "problem"
    SUCCESS_CRITERIA = "successCriteria"
    OUT_OF_SCOPE = "outOfScope"
    STAKEHOLDERS = "stakeholders"
    RISKS = "risks"
    DUE_DATE = "dueDate"

    @property
    def attr(self) -> str:
        return _ATTRS[self]


_ATTRS: dict[CardField, str] = {
    CardField.TITLE: "title",
    CardField.PROBLEM: "problem",
    CardField.SUCCESS_CRITERIA: "success_criteria",
    CardField.OUT_OF_SCOPE: "out_of_scope",
    CardField.STAKEHOLDERS: "stakeholders",
    CardField.RISKS: "risks",
    CardField.DUE_DATE: "due_date",
}

# Fields that must be non-blank once a card leaves NEEDS_CLARIFICATION.
CORE_FIELDS: tuple[CardField, ...] = (CardField.PROBLEM, CardField.SUCCESS_CRITERIA)
