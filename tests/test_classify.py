import pytest

from cricket_insights.classify import (
    classify_finish,
    is_close_match,
    is_high_scoring,
    is_low_scoring,
    is_upset,
    last_over_finish,
    was_successful_chase,
)

from factories import CSK, KKR, MI, RCB, make_match, standings


@pytest.mark.parametrize(
    "margin,expected",
    [
        ("5 runs", "closeRuns"),
        ("15 runs", "closeRuns"),
        ("16 runs", "standard"),
        ("30 runs", "standard"),
        ("50 runs", "standard"),
        ("60 runs", "bigWin"),
        ("2 wickets", "closeWickets"),
        ("7 wickets", "standard"),
        ("Super Over", "superOver"),
        ("Match tied", "tie"),
        ("", "standard"),
        ("No result", "standard"),
    ],
)
def test_classify_finish(margin, expected):
    assert classify_finish(make_match(margin=margin)) == expected


@pytest.mark.parametrize(
    "margin,close",
    [("5 runs", True), ("1 wicket", True), ("super over", True), ("tie", True), ("60 runs", False), ("4 wickets", False)],
)
def test_is_close_match(margin, close):
    assert is_close_match(make_match(margin=margin)) is close


def test_high_scoring_threshold_is_inclusive():
    assert is_high_scoring(make_match(home_score=(180, 5, 20.0), away_score=(100, 10, 15.0)))
    assert not is_high_scoring(make_match(home_score=(179, 5, 20.0), away_score=(170, 10, 20.0)))


def test_low_scoring_needs_both_sides_at_or_under_120():
    assert is_low_scoring(make_match(home_score=(120, 9, 20.0), away_score=(95, 10, 17.2)))
    assert not is_low_scoring(make_match(home_score=(121, 9, 20.0), away_score=(95, 10, 17.2)))


def test_low_scoring_ignores_side_that_did_not_bat():
    assert not is_low_scoring(make_match(home_score=(110, 3, 20.0), away_score=(0, 0, 0.0)))
    assert not is_low_scoring(make_match(home_score=(0, 0, 0.0), away_score=(0, 0, 0.0)))


def test_upset_requires_standings():
    m = make_match(winner=CSK.id)
    assert is_upset(m, None) is False
    assert is_upset(m, []) is False


def test_upset_requires_both_positions():
    m = make_match(winner=CSK.id)
    assert is_upset(m, standings((CSK, 8))) is False
    assert is_upset(m, standings((MI, 1))) is False


def test_upset_rank_gap_must_exceed_two():
    m = make_match(winner=CSK.id)
    assert is_upset(m, standings((MI, 1), (CSK, 4))) is True
    assert is_upset(m, standings((MI, 1), (CSK, 3))) is False


def test_favourite_winning_is_not_upset():
    m = make_match(winner=MI.id)
    assert is_upset(m, standings((MI, 1), (CSK, 8))) is False


def test_no_winner_is_not_upset():
    m = make_match(winner="", margin="No result")
    assert is_upset(m, standings((MI, 1), (CSK, 8))) is False


def test_winner_outside_fixture_is_not_upset():
    m = make_match(winner="sm-99")
    assert is_upset(m, standings((MI, 1), (CSK, 7))) is False


def test_upset_with_home_winner_lower_ranked():
    m = make_match(home=KKR, away=RCB, winner=KKR.id)
    assert is_upset(m, standings((RCB, 2), (KKR, 9))) is True


def test_successful_chase(chase_upset_match):
    assert was_successful_chase(chase_upset_match) is True


def test_defended_total_is_not_a_chase():
    assert was_successful_chase(make_match(winner=MI.id)) is False


def test_chase_undetermined_without_overs_for_both_sides():
    m = make_match(home_score=(160, 6, 20.0), away_score=(161, 2, 0.0), winner=CSK.id, margin="8 wickets")
    assert was_successful_chase(m) is False


def test_chase_heuristic_when_home_has_no_runs():
    # home side without runs is taken as batting second
    m = make_match(home_score=(0, 0, 3.0), away_score=(140, 7, 20.0), winner=MI.id, margin="No result")
    assert was_successful_chase(m) is True


def test_chase_requires_winner():
    m = make_match(home_score=(150, 6, 20.0), away_score=(150, 8, 20.0), winner="", margin="Match tied")
    assert was_successful_chase(m) is False


def test_last_over_finish(chase_upset_match):
    assert last_over_finish(chase_upset_match) is True


def test_early_chase_is_not_last_over_finish():
    m = make_match(home_score=(140, 9, 20.0), away_score=(141, 2, 15.3), winner=CSK.id, margin="8 wickets")
    assert was_successful_chase(m) is True
    assert last_over_finish(m) is False


def test_last_over_finish_requires_successful_chase():
    m = make_match(home_score=(160, 6, 20.0), away_score=(150, 8, 20.0), winner=MI.id)
    assert last_over_finish(m) is False
