from databases import Database

from ladder.models.db.user import (
    PartnerInfo,
    User,
    UserInDB,
    UserInsertable,
    UserProfile,
    UserProfileToUpdate,
    UserPublic,
)
from ladder.schema import users
from ladder.utils.id_types import LadderId, UserId


async def get_user_by_email(database: Database, email: str) -> UserInDB | None:
    query = """
        SELECT *
        FROM users
        WHERE email = :email
        """
    result = await database.fetch_one(query=query, values={"email": email})
    return UserInDB.model_validate(dict(result._mapping)) if result is not None else None


async def get_user_by_id(database: Database, user_id: UserId) -> User | None:
    query = """
        SELECT *
        FROM users
        WHERE id = :user_id
        """
    result = await database.fetch_one(query=query, values={"user_id": user_id})
    return User.model_validate(dict(result._mapping)) if result is not None else None


async def check_whether_email_is_in_use(database: Database, email: str) -> bool:
    query = """
        SELECT id
        FROM users
        WHERE email = :email
        """
    result = await database.fetch_one(query=query, values={"email": email})
    return result is not None


async def create_user(database: Database, user: UserInsertable) -> UserId:
    query = """
        INSERT INTO users (email, name, phone, password_hash, created)
        VALUES (:email, :name, :phone, :password_hash, :created)
        RETURNING id
        """
    new_id = await database.fetch_val(query=query, values=user.model_dump())
    return UserId(new_id)


async def get_partner_info(database: Database, email: str) -> PartnerInfo | None:
    query = """
        SELECT p.email AS partner_email, p.name AS partner_name
        FROM users u
        LEFT JOIN users p ON p.id = u.partner_id
        WHERE u.email = :email
        """
    result = await database.fetch_one(query=query, values={"email": email})
    return PartnerInfo.model_validate(dict(result._mapping)) if result is not None else None


async def get_users_available_as_partner(database: Database, email: str) -> list[UserPublic]:
    query = """
        SELECT email, name
        FROM users
        WHERE email != :email
          AND partner_id IS NULL
        ORDER BY email ASC
        """
    result = await database.fetch_all(query=query, values={"email": email})
    return [UserPublic.model_validate(dict(user._mapping)) for user in result]


async def get_users_in_ladder(database: Database, ladder_id: LadderId) -> list[User]:
    query = """
        SELECT *
        FROM users
        WHERE ladder_id = :ladder_id
        ORDER BY id ASC
        """
    result = await database.fetch_all(query=query, values={"ladder_id": ladder_id})
    return [User.model_validate(dict(user._mapping)) for user in result]


async def update_user_profile(
    database: Database, email: str, profile: UserProfileToUpdate
) -> UserProfile | None:
    query = """
        UPDATE users
        SET name = :name, phone = :phone
        WHERE email = :email
        RETURNING email, name, phone
        """
    result = await database.fetch_one(
        query=query,
        values={
            "email": email,
            "name": profile.name or None,
            "phone": profile.phone or None,
        },
    )
    return UserProfile.model_validate(dict(result._mapping)) if result is not None else None


async def set_ladder_for_users(
    database: Database, user_ids: list[UserId], ladder_id: LadderId
) -> None:
    await database.execute(
        query=users.update().where(users.c.id.in_(user_ids)).values(ladder_id=ladder_id)
    )


async def link_partners(database: Database, user_id: UserId, partner_id: UserId) -> None:
    """
    Point both users at each other. Callers must run this inside a transaction.
    """
    query = """
        UPDATE users
        SET partner_id = :partner_id
        WHERE id = :user_id
        """
    await database.execute(query=query, values={"user_id": user_id, "partner_id": partner_id})
    await database.execute(query=query, values={"user_id": partner_id, "partner_id": user_id})


async def unlink_partners(database: Database, user_id: UserId) -> None:
    """
    Clear the partner relation on both sides, including rows pointing at this user.
    """
    query = """
        UPDATE users
        SET partner_id = NULL
        WHERE id = :user_id
           OR partner_id = :user_id
        """
    await database.execute(query=query, values={"user_id": user_id})


async def delete_user(database: Database, user_id: UserId) -> None:
    query = """
        DELETE FROM users
        WHERE id = :user_id
        """
    await database.execute(query=query, values={"user_id": user_id})


async def has_partner_relation(database: Database, user_id: UserId) -> bool:
    query = """
        SELECT id
        FROM users
        WHERE (id = :user_id AND partner_id IS NOT NULL)
           OR partner_id = :user_id
        """
    result = await database.fetch_one(query=query, values={"user_id": user_id})
    return result is not None


async def get_all_users(database: Database) -> list[User]:
    query = """
        SELECT *
        FROM users
        ORDER BY id ASC
        """
    result = await database.fetch_all(query=query)
    return [User.model_validate(dict(user._mapping)) for user in result]
