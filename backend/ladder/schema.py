from sqlalchemy import (
    JSON,
    Column,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
    false,
    func,
    true,
)
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import BigInteger, Boolean, DateTime

Base = declarative_base()
metadata = Base.metadata
DateTimeTZ = DateTime(timezone=True)
# SQLite only autoincrements INTEGER primary keys.
IdType = BigInteger().with_variant(Integer(), "sqlite")

ladders = Table(
    "ladders",
    metadata,
    Column("id", IdType, primary_key=True, index=True, autoincrement=True),
    Column("number", Integer, nullable=False, unique=True),
    Column("name", String, nullable=False),
    Column("end_date", DateTimeTZ, nullable=False),
    Column("is_active", Boolean, nullable=False, server_default=true(), index=True),
    Column("match_format", JSON, nullable=True),
)

users = Table(
    "users",
    metadata,
    Column("id", IdType, primary_key=True, index=True, autoincrement=True),
    Column("email", String, nullable=False, unique=True, index=True),
    Column("name", String, nullable=True),
    Column("phone", String, nullable=True),
    Column("password_hash", String, nullable=False),
    Column("created", DateTimeTZ, nullable=False),
    Column("ladder_id", IdType, ForeignKey("ladders.id", ondelete="SET NULL"), index=True, nullable=True),
    Column(
        "partner_id",
        IdType,
        ForeignKey("users.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    ),
)

matches = Table(
    "matches",
    metadata,
    Column("id", IdType, primary_key=True, index=True, autoincrement=True),
    Column("start_at", DateTimeTZ, nullable=False, index=True),
    Column("team1_id", String, nullable=False, index=True),
    Column("team2_id", String, nullable=False, index=True),
    Column("team1_score", Integer, nullable=True),
    Column("team2_score", Integer, nullable=True),
    Column("team1_detailed_score", String, nullable=True),
    Column("team2_detailed_score", String, nullable=True),
    Column("completed", Boolean, nullable=False, server_default=false()),
    Column("confirmed", Boolean, nullable=False, server_default=false(), index=True),
    Column("created", DateTimeTZ, nullable=False, server_default=func.now(), index=True),
    Column("ladder_id", IdType, ForeignKey("ladders.id", ondelete="SET NULL"), index=True, nullable=True),
)

availability = Table(
    "availability",
    metadata,
    Column("id", IdType, primary_key=True, index=True, autoincrement=True),
    Column("user_id", IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("start_at", DateTimeTZ, nullable=False),
    Column("week_start", DateTimeTZ, nullable=False, index=True),
    Column("availability", String, nullable=False, server_default="available"),
    Column(
        "set_by_user_id",
        IdType,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    ),
    UniqueConstraint("user_id", "start_at"),
)
