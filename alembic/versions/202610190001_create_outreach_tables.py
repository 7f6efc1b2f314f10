"""create outreach tables

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:01:00
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = "202610190001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="caller"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "regions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "hotels",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("hotel_name", sa.Text(), nullable=False),
        sa.Column("region", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("phone", sa.Text(), nullable=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="NEW"),
        sa.Column("assignee_id", sa.String(length=64), nullable=True),
        sa.Column("next_follow_up_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_hotels_name_region", "hotels", ["hotel_name", "region"], unique=False)
    op.create_index("ix_hotels_status", "hotels", ["status"], unique=False)
    op.create_index("ix_hotels_next_follow_up_date", "hotels", ["next_follow_up_date"], unique=False)
    op.create_index("ix_hotels_last_updated_at", "hotels", ["last_updated_at"], unique=False)

    op.create_table(
        "notes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("hotel_id", sa.String(length=36), nullable=False),
        sa.Column("author_name", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["hotel_id"], ["hotels.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_notes_hotel_created", "notes", ["hotel_id", "created_at"], unique=False)

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("hotel_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("user_name", sa.Text(), nullable=False),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("old_status", sa.String(length=32), nullable=True),
        sa.Column("new_status", sa.String(length=32), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["hotel_id"], ["hotels.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activity_logs_hotel_created", "activity_logs", ["hotel_id", "created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_activity_logs_hotel_created", table_name="activity_logs")
    op.drop_table("activity_logs")
    op.drop_index("ix_notes_hotel_created", table_name="notes")
    op.drop_table("notes")
    op.drop_index("ix_hotels_last_updated_at", table_name="hotels")
    op.drop_index("ix_hotels_next_follow_up_date", table_name="hotels")
    op.drop_index("ix_hotels_status", table_name="hotels")
    op.drop_index("ix_hotels_name_region", table_name="hotels")
    op.drop_table("hotels")
    op.drop_table("regions")
    op.drop_table("users")
