from sqlalchemy import Column, ForeignKey, Integer, String, Table, func
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import BigInteger, DateTime, Enum

Base = declarative_base()
metadata = Base.metadata

matches = Table(
    "matches",
    metadata,
    Column("match_pid", String(64), primary_key=True, index=True),
    Column("season_pid", BigInteger, nullable=True, index=True),
    Column("tournament_pid", BigInteger, nullable=True, index=True),
    Column("blue_team_pid", BigInteger, nullable=False, index=True),
    Column("red_team_pid", BigInteger, nullable=False, index=True),
    Column("blue_team_name", String(255), nullable=False),
    Column("red_team_name", String(255), nullable=False),
    Column("game_patch", String(16), nullable=True),
    Column("date_played", DateTime, nullable=False),
    Column("created", DateTime, nullable=False, server_default=func.now()),
)

match_players = Table(
    "match_players",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column(
        "match_pid",
        String(64),
        ForeignKey("matches.match_pid", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    Column("profile_pid", BigInteger, nullable=False, index=True),
    Column("team_pid", BigInteger, nullable=False, index=True),
    Column("side", Enum("Blue", "Red", name="team_side"), nullable=False),
    Column("role", String(32), nullable=False),
    Column("champ_id", String(16), nullable=True),
)

match_bans = Table(
    "match_bans",
    metadata,
    Column("id", BigInteger, primary_key=True, index=True, autoincrement=True),
    Column(
        "match_pid",
        String(64),
        ForeignKey("matches.match_pid", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    Column("team_pid", BigInteger, nullable=False),
    Column("side", Enum("Blue", "Red", name="team_side"), nullable=False),
    Column("ban_order", Integer, nullable=False),
    Column("champ_id", String(16), nullable=False),
)
