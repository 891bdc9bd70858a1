"""Card Field Rules — blankness and title normalization."""

import pytest

from clarityflow.core.card_fields import TITLE_MAX_LENGTH, is_blank, normalize_title
from clarityflow.core.errors import CardValidationError


@pytest.mark.parametrize("value", [None, "", "   ", "\n\t"])
def test_is_blank_true(value):
    assert is_blank(value)


def test_is_blank_false_for_text():
    assert not is_blank(" x ")


def test_normalize_title_strips():
    assert normalize_title("  Fix bug  ") == "Fix bug"


def test_normalize_title_accepts_max_length():
    assert normalize_title("x" * TITLE_MAX_LENGTH) == "x" * TITLE_MAX_LENGTH


@pytest.mark.parametrize("title", [None, "", "    "])
def test_normalize_title_rejects_blank(title):
    with pytest.raises(CardValidationError) as exc_info:
        normalize_title(title)
    assert exc_info.value.code == "VALIDATION_ERROR"
    assert exc_info.value.field == "title"


def test_normalize_title_rejects_too_long():
    with pytest.raises(CardValidationError):
        normalize_title("x" * (TITLE_MAX_LENGTH + 1))
