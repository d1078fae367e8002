"""create ladders, users and matches tables

Revision ID: 4b8e2c1d7a90
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "4b8e2c1d7a90"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    op.create_table(
        "ladders",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("number"),
    )
    op.create_index(op.f("ix_ladders_id"), "ladders", ["id"], unique=False)
    op.create_index(op.f("ix_ladders_is_active"), "ladders", ["is_active"], unique=False)

    op.create_table(
        "users",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ladder_id", sa.BigInteger(), nullable=True),
        sa.Column("partner_id", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["ladder_id"], ["ladders.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["partner_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("partner_id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_ladder_id"), "users", ["ladder_id"], unique=False)

    op.create_table(
        "matches",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("team1_id", sa.String(), nullable=False),
        sa.Column("team2_id", sa.String(), nullable=False),
        sa.Column("team1_score", sa.Integer(), nullable=True),
        sa.Column("team2_score", sa.Integer(), nullable=True),
        sa.Column("completed", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("confirmed", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("ladder_id", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["ladder_id"], ["ladders.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_matches_id"), "matches", ["id"], unique=False)
    op.create_index(op.f("ix_matches_start_at"), "matches", ["start_at"], unique=False)
    op.create_index(op.f("ix_matches_team1_id"), "matches", ["team1_id"], unique=False)
    op.create_index(op.f("ix_matches_team2_id"), "matches", ["team2_id"], unique=False)
    op.create_index(op.f("ix_matches_confirmed"), "matches", ["confirmed"], unique=False)
    op.create_index(op.f("ix_matches_ladder_id"), "matches", ["ladder_id"], unique=False)


def downgrade() -> None:
    op.drop_table("matches")
    op.drop_table("users")
    op.drop_table("ladders")
