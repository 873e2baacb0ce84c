"""Create lessons and orders tables

Revision ID: 001
Revises: None
Create Date: 2024-05-01 00:00:00.000000+00:00

What:  Creates the two tables the API works on.
       - lessons: the catalog, keyed by the public integer id
       - orders:  checkouts, line items stored as a JSON document

Rollback: downgrade() drops both tables (all catalog and order data is lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "lessons",
        # Assigned by the catalog, never by a sequence
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False,
                  comment="Public lesson identifier used in URLs"),
        sa.Column("subject", sa.String(120), nullable=False,
                  comment="Lesson subject, e.g. Math"),
        sa.Column("location", sa.String(120), nullable=False,
                  comment="Where the lesson takes place"),
        sa.Column("price", sa.Float(), nullable=False, server_default=sa.text("0"),
                  comment="Price per space"),
        sa.Column("spaces", sa.Integer(), nullable=False, server_default=sa.text("0"),
                  comment="Remaining available spaces"),
        sa.Column("image", sa.String(255), nullable=False, server_default=sa.text("''"),
                  comment="Image file name relative to IMAGES_DIR"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_lessons_subject", "lessons", ["subject"])
    op.create_index("ix_lessons_location", "lessons", ["location"])

    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(120), nullable=False, comment="Customer name"),
        sa.Column("phone", sa.String(20), nullable=False, comment="Customer phone number"),
        sa.Column("lessons", sa.JSON(), nullable=False,
                  comment="Line items: [{lesson_id, spaces}]"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False,
                  server_default=sa.text("CURRENT_TIMESTAMP"),
                  comment="When the order was placed (UTC)"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_orders_created_at", "orders", [sa.text("created_at DESC")])


def downgrade() -> None:
    op.drop_index("idx_orders_created_at", table_name="orders")
    op.drop_table("orders")
    op.drop_index("ix_lessons_location", table_name="lessons")
    op.drop_index("ix_lessons_subject", table_name="lessons")
    op.drop_table("lessons")
