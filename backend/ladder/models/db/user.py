from heliclockter import datetime_utc

from ladder.models.db.shared import BaseModelORM
from ladder.utils.id_types import LadderId, UserId


class UserBase(BaseModelORM):
    email: str
    name: str | None = None
    phone: str | None = None
    created: datetime_utc


class UserInsertable(UserBase):
    password_hash: str


class User(UserBase):
    id: UserId
    ladder_id: LadderId | None = None
    partner_id: UserId | None = None


class UserInDB(User):
    password_hash: str


class UserPublic(BaseModelORM):
    """Directory entry, safe to show to any authenticated user."""

    email: str
    name: str | None = None


class UserProfile(UserPublic):
    phone: str | None = None


class UserProfileToUpdate(BaseModelORM):
    name: str | None = None
    phone: str | None = None


class UserToRegister(BaseModelORM):
    email: str = ""
    name: str | None = None
    phone: str | None = None
    password: str = ""


class PartnerInfo(BaseModelORM):
    partner_email: str | None = None
    partner_name: str | None = None


class PartnerLinkBody(BaseModelORM):
    partner_email: str = ""


class UserCredentials(BaseModelORM):
    email: str
    password: str
