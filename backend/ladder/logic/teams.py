from ladder.models.db.user import User
from ladder.models.team import LadderTeam, TeamMember
from ladder.utils.id_types import UserId

TEAM_COLORS = [
    "#3B82F6",
    "#EF4444",
    "#10B981",
    "#F59E0B",
    "#8B5CF6",
    "#F97316",
    "#06B6D4",
    "#84CC16",
    "#EC4899",
    "#6366F1",
]


def get_team_id(user_id: UserId, partner_id: UserId | None) -> str:
    """
    A solo player plays as their own user id, a pair as both ids sorted and joined by a dash.
    """
    if partner_id is None:
        return str(user_id)
    return "-".join(str(member_id) for member_id in sorted((user_id, partner_id)))


def get_team_id_for_user(user: User) -> str:
    return get_team_id(user.id, user.partner_id)


def get_all_team_ids_for_user(user: User) -> set[str]:
    team_ids = {str(user.id)}
    if user.partner_id is not None:
        team_ids.add(get_team_id(user.id, user.partner_id))
    return team_ids


def order_team_ids(team_a: str, team_b: str) -> tuple[str, str]:
    first, second = sorted((team_a, team_b))
    return first, second


def _to_member(user: User) -> TeamMember:
    return TeamMember(id=user.id, email=user.email, name=user.name, phone=user.phone)


def build_ladder_teams(users: list[User]) -> list[LadderTeam]:
    users_by_id = {user.id: user for user in users}
    processed: set[UserId] = set()
    teams: list[LadderTeam] = []

    for user in users:
        if user.id in processed:
            continue

        color = TEAM_COLORS[len(teams) % len(TEAM_COLORS)]
        partner = users_by_id.get(user.partner_id) if user.partner_id is not None else None
        if partner is not None and partner.id not in processed:
            teams.append(
                LadderTeam(
                    id=get_team_id(user.id, partner.id),
                    member1=_to_member(user),
                    member2=_to_member(partner),
                    color=color,
                    is_complete=True,
                )
            )
            processed.update({user.id, partner.id})
            continue

        # Solo players fill both rows until a partner joins.
        member = _to_member(user)
        teams.append(
            LadderTeam(
                id=str(user.id),
                member1=member,
                member2=member,
                color=color,
                is_complete=False,
                looking_for_partner=True,
            )
        )
        processed.add(user.id)

    return teams


def get_next_ladder_number(existing_numbers: list[int]) -> int:
    next_number = 1
    for number in sorted(existing_numbers):
        if number == next_number:
            next_number += 1
        elif number > next_number:
            break
    return next_number


def find_team_id_of_user(teams: list[LadderTeam], user_id: UserId) -> str | None:
    for team in teams:
        if user_id in (team.member1.id, team.member2.id):
            return team.id
    return None


def get_display_name(user: User | None) -> str:
    if user is None:
        return "Unknown"
    return user.name or user.email.split("@")[0]


def get_team_display_name(team_id: str, users_by_id: dict[UserId, User]) -> str:
    parts = team_id.split("-")
    names = [
        get_display_name(users_by_id.get(UserId(int(part))) if part.isdigit() else None)
        for part in parts
    ]
    if len(names) == 1:
        return f"{names[0]} (solo)"
    return " & ".join(names)
