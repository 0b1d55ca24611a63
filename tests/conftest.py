from typing import List

import pytest

from cricket_insights.models import Match, StandingsRow

from factories import CSK, KKR, MI, RCB, make_match, standings


@pytest.fixture
def chase_upset_match() -> Match:
    # MI 180/4 (20), CSK 182/6 (19.4), CSK win by 4 wickets
    return make_match(
        home_score=(180, 4, 20.0),
        away_score=(182, 6, 19.4),
        winner=CSK.id,
        margin="Chennai Super Kings won by 4 wickets",
    )


@pytest.fixture
def chase_upset_table() -> List[StandingsRow]:
    return standings((MI, 1), (RCB, 2), (KKR, 3), (CSK, 7))
