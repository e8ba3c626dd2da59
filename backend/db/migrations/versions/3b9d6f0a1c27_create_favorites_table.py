"""Create favorites table.

Revision ID: 3b9d6f0a1c27
Revises:
Create Date: 2025-11-12 10:15:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "3b9d6f0a1c27"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column(
            "type",
            sa.Enum(
                "MOVIE",
                "TV_SHOW",
                name="favorite_type",
                native_enum=False,
                length=16,
            ),
            nullable=False,
        ),
        sa.Column("director", sa.Text(), nullable=False),
        sa.Column("budget", sa.Text(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("duration", sa.Text(), nullable=False),
        sa.Column("year_time", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("favorites")
