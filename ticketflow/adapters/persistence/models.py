"""SQLAlchemy ORM models — maps to PostgreSQL tables."""

from datetime import datetime

from sqlalchemy import BigInteger, CheckConstraint, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from ticketflow.adapters.persistence.database import Base


class SupportTicketModel(Base):
    __tablename__ = "support_tickets"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="RECEIVED")
    customer_id: Mapped[str] = mapped_column(String(200), nullable=False)
    # Analytics triple: all three are written together or not at all.
    urgency: Mapped[str | None] = mapped_column(String(20), nullable=True)
    response: Mapped[str | None] = mapped_column(Text, nullable=True)
    analytics_generated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_support_tickets_status", "status"),
        CheckConstraint(
            "(urgency IS NULL AND response IS NULL AND analytics_generated_at IS NULL) OR "
            "(urgency IS NOT NULL AND response IS NOT NULL AND analytics_generated_at IS NOT NULL)",
            name="ck_support_tickets_analytics_complete",
        ),
    )


class SupportTicketMessageModel(Base):
    __tablename__ = "support_ticket_messages"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    state: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    receive_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    visible_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("idx_messages_state_visible", "state", "visible_at"),)
