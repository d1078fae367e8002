from heliclockter import datetime_utc
from pydantic import Field, StrictInt

from ladder.models.db.shared import BaseModelORM
from ladder.utils.id_types import LadderId, MatchId


class MatchInsertable(BaseModelORM):
    start_at: datetime_utc
    team1_id: str
    team2_id: str
    team1_score: int | None = None
    team2_score: int | None = None
    team1_detailed_score: str | None = None
    team2_detailed_score: str | None = None
    completed: bool = False
    confirmed: bool = False
    ladder_id: LadderId | None = None
    created: datetime_utc = Field(default_factory=datetime_utc.now)


class Match(MatchInsertable):
    id: MatchId


class MatchView(BaseModelORM):
    id: MatchId
    start_at: datetime_utc
    team1_id: str
    team2_id: str
    team1_score: int | None = None
    team2_score: int | None = None
    team1_detailed_score: str | None = None
    team2_detailed_score: str | None = None
    completed: bool


class ScheduledMatchView(BaseModelORM):
    id: MatchId
    start_at: datetime_utc
    team1_id: str
    team2_id: str


class MatchConfirmBody(BaseModelORM):
    slot_key: datetime_utc | None = None
    opponent_team_id: str = ""


class MatchCancelBody(BaseModelORM):
    match_id: MatchId | None = None


class MatchRescheduleBody(BaseModelORM):
    match_id: MatchId | None = None
    new_time: datetime_utc | None = None


class MatchScore(BaseModelORM):
    match_id: MatchId | None = None
    team1_score: StrictInt | None = None
    team2_score: StrictInt | None = None
    team1_detailed_score: str | None = None
    team2_detailed_score: str | None = None


class MatchScoresBody(BaseModelORM):
    scores: list[MatchScore] | None = None
