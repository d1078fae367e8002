from ladder.logic.scores import fit_detailed_score_to_sets


def test_fit_detailed_score_shortens_sets() -> None:
    assert fit_detailed_score_to_sets("6-4, 3-6, 7-5", "4-6,6-3,5-7", 2) == ("6-4,3-6", "4-6,6-3")


def test_fit_detailed_score_pads_unplayed_sets() -> None:
    assert fit_detailed_score_to_sets("6,4", "3,6", 4) == ("6,4,X,X", "3,6,X,X")


def test_fit_detailed_score_keeps_matching_length() -> None:
    assert fit_detailed_score_to_sets("6,4,6", "3,6,2", 3) == ("6,4,6", "3,6,2")


def test_fit_detailed_score_ignores_single_scores() -> None:
    assert fit_detailed_score_to_sets("8", "6", 3) is None
    assert fit_detailed_score_to_sets("", "", 3) is None
