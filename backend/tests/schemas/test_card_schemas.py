"""Card Schemas — boundary validation and the absent / cleared / set tri-state.

Invariants:
    - CardCreate title is stripped and bounded
    - CardUpdate requires a non-negative integer version
    - changes() contains only fields present in the request, keyed by CardField
    - camelCase and snake_case both accepted; responses dump camelCase
"""

from datetime import date, datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest
from pydantic import ValidationError

from clarityflow.core.domain_types import CardField, CardStatus
from clarityflow.schemas.card import (
    CardCreate,
    CardResponse,
    CardTransition,
    CardUpdate,
)


# --- CardCreate ---------------------------------------------------------------

def test_create_strips_title():
    assert CardCreate(title="  Fix bug ").title == "Fix bug"


@pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   "}, {"title": "x" * 121}])
def test_create_rejects_bad_titles(payload):
    with pytest.raises(ValidationError):
        CardCreate.model_validate(payload)


# --- CardUpdate ---------------------------------------------------------------

def test_update_requires_version():
    with pytest.raises(ValidationError):
        CardUpdate.model_validate({"title": "New"})


@pytest.mark.parametrize("version", [-1, "1", 1.5])
def test_update_rejects_bad_version(version):
    with pytest.raises(ValidationError):
        CardUpdate.model_validate({"version": version})


def test_absent_fields_are_not_changes():
    update = CardUpdate.model_validate({"version": 0, "title": "New"})
    assert update.changes() == {CardField.TITLE: "New"}


def test_explicit_null_and_empty_are_changes():
    update = CardUpdate.model_validate(
        {"version": 2, "problem": "", "successCriteria": None},
    )
    assert update.changes() == {
        CardField.PROBLEM: "",
        CardField.SUCCESS_CRITERIA: None,
    }


def test_version_only_update_has_no_changes():
    assert CardUpdate.model_validate({"version": 4}).changes() == {}


def test_update_accepts_camel_and_snake_case():
    camel = CardUpdate.model_validate({"version": 0, "outOfScope": "Mobile"})
    snake = CardUpdate.model_validate({"version": 0, "out_of_scope": "Mobile"})
    assert camel.changes() == snake.changes() == {CardField.OUT_OF_SCOPE: "Mobile"}


def test_update_parses_due_date():
    update = CardUpdate.model_validate({"version": 0, "dueDate": "2026-12-31"})
    assert update.changes() == {CardField.DUE_DATE: date(2026, 12, 31)}


def test_update_rejects_null_title():
    with pytest.raises(ValidationError):
        CardUpdate.model_validate({"version": 0, "title": None})


def test_update_enforces_text_limits():
    with pytest.raises(ValidationError):
        CardUpdate.model_validate({"version": 0, "problem": "x" * 1001})
    CardUpdate.model_validate({"version": 0, "successCriteria": "x" * 2000})


# --- CardTransition -----------------------------------------------------------

def test_transition_version_is_optional():
    body = CardTransition.model_validate({"status": "CONFIRMED"})
    assert body.status is CardStatus.CONFIRMED
    assert body.version is None


def test_transition_rejects_unknown_status():
    with pytest.raises(ValidationError):
        CardTransition.model_validate({"status": "ARCHIVED"})


# --- CardResponse -------------------------------------------------------------

def test_response_dumps_camel_case_from_attributes():
    now = datetime(2026, 5, 1, tzinfo=timezone.utc)
    card = SimpleNamespace(
        id=uuid4(), title="T", problem="P", success_criteria="S",
        out_of_scope=None, stakeholders=None, risks=None, due_date=None,
        status="CONFIRMED", version=2, created_at=now, updated_at=now,
        deleted_at=None,
    )
    dumped = CardResponse.model_validate(card).model_dump(by_alias=True)
    assert dumped["successCriteria"] == "S"
    assert dumped["status"] == CardStatus.CONFIRMED
    assert "createdAt" in dumped and "success_criteria" not in dumped
