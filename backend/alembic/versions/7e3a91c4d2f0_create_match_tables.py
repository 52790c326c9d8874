"""create match tables

Revision ID: 7e3a91c4d2f0
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "7e3a91c4d2f0"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

team_side_enum = sa.Enum("Blue", "Red", name="team_side")


def upgrade() -> None:
    op.create_table(
        "matches",
        sa.Column("match_pid", sa.String(64), nullable=False),
        sa.Column("season_pid", sa.BigInteger(), nullable=True),
        sa.Column("tournament_pid", sa.BigInteger(), nullable=True),
        sa.Column("blue_team_pid", sa.BigInteger(), nullable=False),
        sa.Column("red_team_pid", sa.BigInteger(), nullable=False),
        sa.Column("blue_team_name", sa.String(255), nullable=False),
        sa.Column("red_team_name", sa.String(255), nullable=False),
        sa.Column("game_patch", sa.String(16), nullable=True),
        sa.Column("date_played", sa.DateTime(), nullable=False),
        sa.Column("created", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("match_pid"),
    )
    for column in ("match_pid", "season_pid", "tournament_pid", "blue_team_pid", "red_team_pid"):
        op.create_index(op.f(f"ix_matches_{column}"), "matches", [column], unique=False)

    op.create_table(
        "match_players",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("match_pid", sa.String(64), nullable=False),
        sa.Column("profile_pid", sa.BigInteger(), nullable=False),
        sa.Column("team_pid", sa.BigInteger(), nullable=False),
        sa.Column("side", team_side_enum, nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("champ_id", sa.String(16), nullable=True),
        sa.ForeignKeyConstraint(["match_pid"], ["matches.match_pid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("id", "match_pid", "profile_pid", "team_pid"):
        op.create_index(op.f(f"ix_match_players_{column}"), "match_players", [column], unique=False)

    op.create_table(
        "match_bans",
        sa.Column("id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("match_pid", sa.String(64), nullable=False),
        sa.Column("team_pid", sa.BigInteger(), nullable=False),
        sa.Column("side", team_side_enum, nullable=False),
        sa.Column("ban_order", sa.Integer(), nullable=False),
        sa.Column("champ_id", sa.String(16), nullable=False),
        sa.ForeignKeyConstraint(["match_pid"], ["matches.match_pid"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in ("id", "match_pid"):
        op.create_index(op.f(f"ix_match_bans_{column}"), "match_bans", [column], unique=False)


def downgrade() -> None:
    op.drop_table("match_bans")
    op.drop_table("match_players")
    op.drop_table("matches")
