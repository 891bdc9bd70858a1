"""Initial schema — cards.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cards",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("title", sa.String(120), nullable=False),
        sa.Column("problem", sa.Text, nullable=False, server_default=""),
        sa.Column("success_criteria", sa.Text, nullable=False, server_default=""),
        sa.Column("out_of_scope", sa.Text, nullable=True),
        sa.Column("stakeholders", sa.Text, nullable=True),
        sa.Column("risks", sa.Text, nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column(
            "status", sa.String(32), nullable=False,
            server_default="NEEDS_CLARIFICATION",
        ),
        sa.Column("version", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("version >= 0", name="ck_cards_version_non_negative"),
        sa.CheckConstraint("created_at <= updated_at", name="ck_cards_time_flow"),
    )
    op.create_index("ix_cards_status", "cards", ["status"])
    op.create_index("ix_cards_created_at", "cards", ["created_at"])
    op.create_index("ix_cards_deleted_at", "cards", ["deleted_at"])


def downgrade() -> None:
    op.drop_index("ix_cards_deleted_at", table_name="cards")
    op.drop_index("ix_cards_created_at", table_name="cards")
    op.drop_index("ix_cards_status", table_name="cards")
    op.drop_table("cards")
