"""Completeness Contract — tests for transition and update completeness rules.

Tests cover:
    - missing_core_fields reports blank problem/successCriteria in fixed order
    - validate_completeness treats whitespace as blank
    - validate_update only blocks explicit clearing of non-blank core fields
    - NEEDS_CLARIFICATION cards are exempt from the update check
"""

from dataclasses import dataclass
from uuid import UUID, uuid4

import pytest

from clarityflow.core.domain_types import CardField, CardStatus
from clarityflow.core.enforce_completeness import (
    missing_core_fields,
    requires_completeness,
    validate_completeness,
    validate_update,
)
from clarityflow.core.errors import IncompletenessViolation


@dataclass
class _Card:
    status: str = "NEEDS_CLARIFICATION"
    problem: str | None = ""
    success_criteria: str | None = ""
    id: UUID = None

    def __post_init__(self):
        self.id = self.id or uuid4()


def _complete(status: str) -> _Card:
    return _Card(status=status, problem="Login fails", success_criteria="Users log in")


# ─── requires_completeness ───────────────────────────────────────

def test_requires_completeness_for_every_status_past_clarification():
    assert not requires_completeness(CardStatus.NEEDS_CLARIFICATION)
    assert requires_completeness(CardStatus.CONFIRMED)
    assert requires_completeness(CardStatus.IN_PROGRESS)
    assert requires_completeness(CardStatus.DONE)


# ─── validate_completeness ───────────────────────────────────────

def test_missing_core_fields_lists_both_in_order():
    assert missing_core_fields(_Card()) == ["problem", "successCriteria"]


def test_missing_core_fields_empty_when_complete():
    assert missing_core_fields(_complete("NEEDS_CLARIFICATION")) == []


def test_validate_completeness_passes_for_complete_card():
    validate_completeness(_complete("NEEDS_CLARIFICATION"))  # should not raise


def test_validate_completeness_lists_exactly_the_blank_field():
    card = _Card(problem="Something", success_criteria=None)
    with pytest.raises(IncompletenessViolation) as exc_info:
        validate_completeness(card)
    assert exc_info.value.missing_fields == ["successCriteria"]
    assert exc_info.value.details["missingFields"] == ["successCriteria"]
    assert exc_info.value.details["summary"]


def test_validate_completeness_treats_whitespace_as_blank():
    card = _Card(problem="   \n", success_criteria="Done when done")
    with pytest.raises(IncompletenessViolation) as exc_info:
        validate_completeness(card)
    assert exc_info.value.missing_fields == ["problem"]


# ─── validate_update (anti-regression) ───────────────────────────

@pytest.mark.parametrize("status", ["CONFIRMED", "IN_PROGRESS", "DONE"])
def test_clearing_problem_on_guarded_card_is_blocked(status):
    with pytest.raises(IncompletenessViolation) as exc_info:
        validate_update(_complete(status), {CardField.PROBLEM: ""})
    assert exc_info.value.missing_fields == ["problem"]


def test_null_counts_as_clearing():
    with pytest.raises(IncompletenessViolation) as exc_info:
        validate_update(
            _complete("IN_PROGRESS"), {CardField.SUCCESS_CRITERIA: None},
        )
    assert exc_info.value.missing_fields == ["successCriteria"]


def test_whitespace_counts_as_clearing():
    with pytest.raises(IncompletenessViolation):
        validate_update(_complete("CONFIRMED"), {CardField.PROBLEM: "  "})


def test_clearing_both_fields_reports_both():
    with pytest.raises(IncompletenessViolation) as exc_info:
        validate_update(
            _complete("DONE"),
            {CardField.PROBLEM: "", CardField.SUCCESS_CRITERIA: None},
        )
    assert exc_info.value.missing_fields == ["problem", "successCriteria"]


def test_absent_core_fields_never_trigger_the_check():
    validate_update(_complete("CONFIRMED"), {CardField.TITLE: "New title"})
    validate_update(_complete("CONFIRMED"), {})


def test_replacing_core_field_with_text_is_allowed():
    validate_update(_complete("CONFIRMED"), {CardField.PROBLEM: "Sharper problem"})


def test_clearing_optional_fields_on_guarded_card_is_allowed():
    validate_update(
        _complete("CONFIRMED"),
        {CardField.OUT_OF_SCOPE: "", CardField.RISKS: None},
    )


def test_needs_clarification_card_may_clear_core_fields():
    card = _complete("NEEDS_CLARIFICATION")
    validate_update(card, {CardField.PROBLEM: "", CardField.SUCCESS_CRITERIA: None})
