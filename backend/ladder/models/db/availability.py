from enum import auto

from heliclockter import datetime_utc
from pydantic import Field

from ladder.models.db.shared import BaseModelORM
from ladder.utils.id_types import AvailabilityId, UserId
from ladder.utils.types import EnumAutoStr


class AvailabilityState(EnumAutoStr):
    available = auto()
    not_available = auto()


class AvailabilityInsertable(BaseModelORM):
    user_id: UserId
    start_at: datetime_utc
    week_start: datetime_utc
    availability: AvailabilityState = AvailabilityState.available
    # None when the user set the slot themselves, otherwise whoever set it on their behalf.
    set_by_user_id: UserId | None = None


class Availability(AvailabilityInsertable):
    id: AvailabilityId


class AvailabilityBody(BaseModelORM):
    week_start_iso: datetime_utc | None = Field(default=None, alias="weekStartISO")
    slots: list[datetime_utc] | None = None


class AvailabilityTakeoverBody(BaseModelORM):
    week_start_iso: datetime_utc | None = Field(default=None, alias="weekStartISO")
    target_user_id: UserId | None = None
    available_slots: list[datetime_utc] = Field(default_factory=list)
    unavailable_slots: list[datetime_utc] = Field(default_factory=list)
    none_slots: list[datetime_utc] = Field(default_factory=list)


class AvailabilityProxyBody(BaseModelORM):
    week_start_iso: datetime_utc | None = Field(default=None, alias="weekStartISO")
    target_user_id: UserId | None = None
    available_slots: list[datetime_utc] | None = None
    unavailable_slots: list[datetime_utc] = Field(default_factory=list)
    # Older clients send the available slots as `slots`.
    slots: list[datetime_utc] | None = None
