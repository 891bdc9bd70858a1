"""Card Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CardCreate.title: stripped, 1-120 chars
    - CardUpdate.version is required (optimistic locking); every other field optional
    - CardUpdate distinguishes absent (untouched) from present-null/empty (cleared)
      via model_fields_set, see changes()
    - CardTransition.version is optional; when present it is checked like an update

Design Decisions:
    - camelCase aliases so the wire format matches the web client (successCriteria, dueDate)
    - Text limits come from core/card_fields.py: schema and core agree on one number
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import (
    BaseModel, ConfigDict, Field, field_validator, model_validator,
)
from pydantic.alias_generators import to_camel

from clarityflow.core.card_fields import TEXT_MAX_LENGTHS, TITLE_MAX_LENGTH
from clarityflow.core.domain_types import CardField, CardStatus

_FIELDS_BY_ATTR: dict[str, CardField] = {f.attr: f for f in CardField}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _strip_title(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("title cannot be empty or whitespace")
    return v


class CardCreate(_CamelModel):
    """Card creation — only the title is accepted."""
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _strip_title(v)


class CardUpdate(_CamelModel):
    """Partial update guarded by the caller's last observed version."""
    version: int = Field(ge=0, strict=True)
    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    problem: str | None = Field(
        None, max_length=TEXT_MAX_LENGTHS[CardField.PROBLEM],
    )
    success_criteria: str | None = Field(
        None, max_length=TEXT_MAX_LENGTHS[CardField.SUCCESS_CRITERIA],
    )
    out_of_scope: str | None = Field(
        None, max_length=TEXT_MAX_LENGTHS[CardField.OUT_OF_SCOPE],
    )
    stakeholders: str | None = Field(
        None, max_length=TEXT_MAX_LENGTHS[CardField.STAKEHOLDERS],
    )
    risks: str | None = Field(None, max_length=TEXT_MAX_LENGTHS[CardField.RISKS])
    due_date: date | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return _strip_title(v)

    @model_validator(mode="after")
    def title_not_cleared(self):
        if "title" in self.model_fields_set and self.title is None:
            raise ValueError("title cannot be null")
        return self

    def changes(self) -> dict[CardField, object]:
        """Fields explicitly present in the request; None means "clear"."""
        return {
            _FIELDS_BY_ATTR[name]: getattr(self, name)
            for name in self.model_fields_set
            if name != "version"
        }


class CardTransition(_CamelModel):
    """Status transition request."""
    status: CardStatus
    version: int | None = Field(None, ge=0, strict=True)


class CardResponse(_CamelModel):
    """Card response — public-facing card data."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )

    id: UUID
    title: str
    problem: str | None
    success_criteria: str | None
    out_of_scope: str | None = None
    stakeholders: str | None = None
    risks: str | None = None
    due_date: date | None = None
    status: CardStatus
    version: int
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None


class Pagination(_CamelModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class CardListResponse(_CamelModel):
    cards: list[CardResponse]
    pagination: Pagination
