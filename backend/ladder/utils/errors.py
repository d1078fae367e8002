import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from enum import auto

from asyncpg.exceptions import UniqueViolationError
from fastapi import HTTPException
from starlette import status

from ladder.utils.types import EnumAutoStr


class UniqueConstraint(EnumAutoStr):
    ix_users_email = auto()
    ladders_number_key = auto()
    users_partner_id_key = auto()


unique_constraint_violation_error_lookup = {
    UniqueConstraint.ix_users_email: "User with this email already exists",
    UniqueConstraint.ladders_number_key: "Another ladder was created at the same time, try again",
    UniqueConstraint.users_partner_id_key: "That user already has a partner",
}

# SQLite reports the violated columns instead of the constraint name.
sqlite_unique_columns_lookup = {
    "users.email": UniqueConstraint.ix_users_email,
    "ladders.number": UniqueConstraint.ladders_number_key,
    "users.partner_id": UniqueConstraint.users_partner_id_key,
}


def get_violated_unique_constraint(exc: Exception) -> UniqueConstraint | None:
    if isinstance(exc, UniqueViolationError):
        constraint_name = exc.as_dict().get("constraint_name")
        return next(
            (constraint for constraint in UniqueConstraint if constraint.value == constraint_name),
            None,
        )

    if isinstance(exc, sqlite3.IntegrityError):
        columns = str(exc).removeprefix("UNIQUE constraint failed: ")
        return sqlite_unique_columns_lookup.get(columns)

    return None


@contextmanager
def check_unique_constraint_violation(
    constraints_to_check: set[UniqueConstraint],
) -> Iterator[None]:
    try:
        yield
    except (UniqueViolationError, sqlite3.IntegrityError) as exc:
        constraint = get_violated_unique_constraint(exc)
        if constraint is not None and constraint in constraints_to_check:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=unique_constraint_violation_error_lookup[constraint],
            ) from exc
        raise
