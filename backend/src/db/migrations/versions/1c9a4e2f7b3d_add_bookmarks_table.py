"""
Add bookmarks table.

Revision ID: 1c9a4e2f7b3d
Revises:
Create Date: 2026-10-19 09:12:40.118203
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "1c9a4e2f7b3d"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create the bookmarks table."""
    op.create_table(
        "bookmarks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        # Enforced in the database as well as in the API validator
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )


def downgrade() -> None:
    """Drop the bookmarks table."""
    op.drop_table("bookmarks")
