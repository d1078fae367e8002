UNPLAYED_SET = "X"


def fit_detailed_score_to_sets(
    team1_detailed_score: str, team2_detailed_score: str, sets: int
) -> tuple[str, str] | None:
    """
    Shorten or pad comma separated set scores to the given number of sets.

    Returns None when neither score is set based, since only those follow the ladder format.
    Both scores are cut or padded by the length of team 1's score.
    """
    if "," not in team1_detailed_score and "," not in team2_detailed_score:
        return None

    team1_sets = [part.strip() for part in team1_detailed_score.split(",")]
    team2_sets = [part.strip() for part in team2_detailed_score.split(",")]

    if sets < len(team1_sets):
        team1_sets = team1_sets[:sets]
        team2_sets = team2_sets[:sets]
    elif sets > len(team1_sets):
        padding = [UNPLAYED_SET] * (sets - len(team1_sets))
        team1_sets = team1_sets + padding
        team2_sets = team2_sets + padding

    return ",".join(team1_sets), ",".join(team2_sets)
