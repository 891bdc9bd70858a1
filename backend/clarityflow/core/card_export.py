"""Card Export — fixed-structure Markdown projection of a card.

Invariants:
    - Every section header is always emitted, even when its body is a placeholder
    - Blank optional fields render an explicit marker, never an empty section
    - Dates render date-only (YYYY-MM-DD), no time-of-day
    - Output is a pure function of the card: same card in, same bytes out
"""

from datetime import date, datetime

from clarityflow.core.card_fields import is_blank
from clarityflow.core.domain_types import CardStatus
from clarityflow.core.repository_protocols import CardLike

PLACEHOLDER_PENDING = "_To be clarified_"
PLACEHOLDER_NONE = "_None_"
PLACEHOLDER_UNCONFIRMED = "_Unconfirmed_"

# (header, card attribute, placeholder when blank)
SECTIONS: tuple[tuple[str, str, str], ...] = (
    ("## 🎯 Problem", "problem", PLACEHOLDER_PENDING),
    ("## ✅ Success Criteria (Definition of Done)", "success_criteria", PLACEHOLDER_PENDING),
    ("## 🚫 Out of Scope", "out_of_scope", PLACEHOLDER_NONE),
    ("## 👥 Stakeholders", "stakeholders", PLACEHOLDER_UNCONFIRMED),
    ("## ⚠️ Risks", "risks", PLACEHOLDER_NONE),
)


def _date_only(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def render_card_markdown(card: CardLike) -> str:
    """Render the export document for a visible card."""
    status = CardStatus(card.status).value
    lines: list[str] = [f"# [{status}] {card.title}", ""]

    for header, attr, placeholder in SECTIONS:
        body = getattr(card, attr)
        lines.append(header)
        lines.append(placeholder if is_blank(body) else body)
        lines.append("")

    lines += [
        "---",
        "",
        "**Metadata**",
        f"- **Status**: {status}",
        f"- **Version**: {card.version}",
        f"- **Last Updated**: {_date_only(card.updated_at)}",
    ]
    if card.due_date is not None:
        lines.append(f"- **Due Date**: {_date_only(card.due_date)}")

    return "\n".join(lines)
