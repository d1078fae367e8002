"""add availability, match format and detailed scores

Revision ID: 7c2e9a4f1b36
Revises: 4b8e2c1d7a90
Create Date: 2026-10-20 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "7c2e9a4f1b36"
down_revision: str | None = "4b8e2c1d7a90"
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    op.add_column("ladders", sa.Column("match_format", sa.JSON(), nullable=True))

    op.add_column("matches", sa.Column("team1_detailed_score", sa.String(), nullable=True))
    op.add_column("matches", sa.Column("team2_detailed_score", sa.String(), nullable=True))
    op.add_column(
        "matches",
        sa.Column(
            "created",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    )
    op.create_index(op.f("ix_matches_created"), "matches", ["created"], unique=False)

    op.create_table(
        "availability",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.BigInteger(), nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("week_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("availability", sa.String(), server_default="available", nullable=False),
        sa.Column("set_by_user_id", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["set_by_user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "start_at"),
    )
    op.create_index(op.f("ix_availability_id"), "availability", ["id"], unique=False)
    op.create_index(op.f("ix_availability_user_id"), "availability", ["user_id"], unique=False)
    op.create_index(
        op.f("ix_availability_week_start"), "availability", ["week_start"], unique=False
    )
    op.create_index(
        op.f("ix_availability_set_by_user_id"), "availability", ["set_by_user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_table("availability")
    op.drop_index(op.f("ix_matches_created"), table_name="matches")
    op.drop_column("matches", "created")
    op.drop_column("matches", "team2_detailed_score")
    op.drop_column("matches", "team1_detailed_score")
    op.drop_column("ladders", "match_format")
