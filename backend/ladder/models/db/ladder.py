import json
from typing import Any

from heliclockter import datetime_utc
from pydantic import Field, field_validator

from ladder.models.db.shared import BaseModelORM
from ladder.utils.id_types import LadderId


class MatchFormat(BaseModelORM):
    sets: int = Field(ge=1)
    games_per_set: int = 6
    winner_by: str = "sets"


class LadderInsertable(BaseModelORM):
    number: int
    name: str
    end_date: datetime_utc
    is_active: bool = True


class Ladder(LadderInsertable):
    id: LadderId
    match_format: MatchFormat | None = None

    @field_validator("match_format", mode="before")
    @classmethod
    def parse_stored_match_format(cls, value: Any) -> Any:
        # Raw queries hand back JSON columns as text.
        if isinstance(value, str):
            return json.loads(value)
        return value


class LadderCreateBody(BaseModelORM):
    name: str = ""
    end_date: datetime_utc | None = None


class LadderSwitchBody(BaseModelORM):
    new_ladder_id: LadderId


class LadderFormatUpdateBody(BaseModelORM):
    ladder_id: LadderId | None = None
    new_match_format: MatchFormat | None = None
