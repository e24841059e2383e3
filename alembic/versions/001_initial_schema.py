"""Initial schema — support tickets and the work queue.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Tickets
    op.create_table(
        "support_tickets",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="RECEIVED"),
        sa.Column("customer_id", sa.String(200), nullable=False),
        sa.Column("urgency", sa.String(20), nullable=True),
        sa.Column("response", sa.Text, nullable=True),
        sa.Column("analytics_generated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        # analytics is all-or-nothing
        sa.CheckConstraint(
            "(urgency IS NULL AND response IS NULL AND analytics_generated_at IS NULL) OR "
            "(urgency IS NOT NULL AND response IS NOT NULL AND analytics_generated_at IS NOT NULL)",
            name="ck_support_tickets_analytics_complete",
        ),
    )
    op.create_index("idx_support_tickets_status", "support_tickets", ["status"])

    # Work queue
    op.create_table(
        "support_ticket_messages",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True),
        sa.Column("body", sa.Text, nullable=False),
        sa.Column("state", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("receive_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "visible_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("last_error", sa.Text, nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index(
        "idx_messages_state_visible", "support_ticket_messages", ["state", "visible_at"]
    )


def downgrade() -> None:
    op.drop_table("support_ticket_messages")
    op.drop_table("support_tickets")
