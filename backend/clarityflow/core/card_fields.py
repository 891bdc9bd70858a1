"""Card Field Rules — length limits and blankness checks shared by schemas and core.

Invariants:
    - A value is blank when it is None or empty after stripping whitespace
    - Title is always stripped and 1..TITLE_MAX_LENGTH characters
    - All functions are PURE: no IO, no async
"""

from clarityflow.core.domain_types import CardField
from clarityflow.core.errors import CardValidationError

TITLE_MAX_LENGTH = 120

TEXT_MAX_LENGTHS: dict[CardField, int] = {
    CardField.PROBLEM: 1000,
    CardField.SUCCESS_CRITERIA: 2000,
    CardField.OUT_OF_SCOPE: 2000,
    CardField.STAKEHOLDERS: 1000,
    CardField.RISKS: 2000,
}


def is_blank(value: str | None) -> bool:
    """True for None, '' and whitespace-only strings."""
    return value is None or not value.strip()


def normalize_title(title: str | None) -> str:
    """Strip and bound the title. Raises CardValidationError."""
    if title is None or not title.strip():
        raise CardValidationError("Title is required", CardField.TITLE.value)
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise CardValidationError(
            f"Title must be at most {TITLE_MAX_LENGTH} characters",
            CardField.TITLE.value,
        )
    return title
