"""
StudySphere Backend: Order SQLAlchemy Model
=============================================

What:  ORM model for the `orders` table.
Who:   OrderService (insert, list, get); Alembic.

The line items are kept as a JSON document on the order row, a list of
{"lesson_id": int, "spaces": int}. They are a snapshot of what was asked
for: no foreign key to `lessons`, so deleting a lesson leaves past orders
untouched.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy import JSON, DateTime, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Order(Base):
    """A checkout naming the customer and the lessons they booked."""

    __tablename__ = "orders"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        comment="Customer name",
    )

    phone: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Customer phone number",
    )

    lessons: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Line items: [{lesson_id, spaces}]",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When the order was placed (UTC)",
    )

    # Listing is always newest first
    __table_args__ = (
        Index("idx_orders_created_at", created_at.desc()),
    )

    @property
    def total_spaces(self) -> int:
        """Sum of spaces across all line items."""
        return sum(int(item.get("spaces", 0)) for item in self.lessons or [])

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, name='{self.name}', items={len(self.lessons or [])})>"
