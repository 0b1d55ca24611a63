# cricket_insights/classify.py
from __future__ import annotations

from typing import Dict, Optional, Sequence

from cricket_insights.margin import margin_of
from cricket_insights.models import FinishType, InningsScore, Match, StandingsRow

# T20 thresholds
HIGH_TOTAL = 180
LOW_TOTAL = 120
CLOSE_RUN_MARGIN = 15
CLOSE_WICKET_MARGIN = 2
BIG_WIN_RUN_MARGIN = 50
UPSET_RANK_GAP = 2
LAST_OVER_START = 19.0

CLOSE_FINISHES = ("closeRuns", "closeWickets", "superOver", "tie")


def classify_finish(match: Match) -> FinishType:
    """
    Finish type from the result margin:
    - superOver / tie by margin type
    - closeRuns: runs <= 15, closeWickets: wickets <= 2
    - bigWin: runs > 50
    - anything else (incl. unparseable) -> standard
    """
    margin = margin_of(match)
    value = margin.value or 0

    if margin.type == "superOver":
        return "superOver"
    if margin.type == "tie":
        return "tie"
    if margin.type == "runs" and value <= CLOSE_RUN_MARGIN:
        return "closeRuns"
    if margin.type == "wickets" and value <= CLOSE_WICKET_MARGIN:
        return "closeWickets"
    if margin.type == "runs" and value > BIG_WIN_RUN_MARGIN:
        return "bigWin"
    return "standard"


def is_close_match(match: Match) -> bool:
    return classify_finish(match) in CLOSE_FINISHES


def is_high_scoring(match: Match) -> bool:
    return match.score.home.runs >= HIGH_TOTAL or match.score.away.runs >= HIGH_TOTAL


def is_low_scoring(match: Match) -> bool:
    # A 0-run side usually did not bat; it must not make the match "low scoring".
    home = match.score.home.runs
    away = match.score.away.runs
    return home <= LOW_TOTAL and away <= LOW_TOTAL and min(home, away) > 0


def _position_map(standings: Sequence[StandingsRow]) -> Dict[str, int]:
    return {row.team.id: row.position for row in standings}


def is_upset(match: Match, standings: Optional[Sequence[StandingsRow]] = None) -> bool:
    """
    Winner sits more than 2 places below the loser in the table (pos 1 = top).
    False without standings or when a position cannot be resolved.
    A winner id matching neither side is unresolved too.
    """
    if not standings:
        return False

    winner = match.result.winner
    if not winner:
        return False

    pm = _position_map(standings)
    home_id = match.teams.home.id
    home_pos = pm.get(home_id)
    away_pos = pm.get(match.teams.away.id)
    if not home_pos or not away_pos:
        return False

    if winner == home_id:
        winner_pos, loser_pos = home_pos, away_pos
    elif winner == match.teams.away.id:
        winner_pos, loser_pos = away_pos, home_pos
    else:
        return False

    return winner_pos > loser_pos + UPSET_RANK_GAP


def _batting_first_side(match: Match) -> Optional[str]:
    """
    Heuristic: only decided when both sides have overs recorded; then the home
    side batted first if it has runs, else the away side.
    Can misclassify interrupted matches or incomplete run data.
    """
    home = match.score.home
    away = match.score.away
    if home.overs > 0 and away.overs > 0:
        return "home" if home.runs > 0 else "away"
    return None


def _chasing_side(match: Match) -> Optional[str]:
    first = _batting_first_side(match)
    if first is None:
        return None
    return "away" if first == "home" else "home"


def _side_score(match: Match, side: str) -> InningsScore:
    return match.score.home if side == "home" else match.score.away


def was_successful_chase(match: Match) -> bool:
    winner = match.result.winner
    if not winner:
        return False

    chaser = _chasing_side(match)
    if chaser is None:
        return False

    chaser_team = match.teams.home if chaser == "home" else match.teams.away
    return chaser_team.id == winner


def last_over_finish(match: Match) -> bool:
    # Assumes a 20-over innings
    if not was_successful_chase(match):
        return False
    chaser = _chasing_side(match)
    return _side_score(match, chaser).overs >= LAST_OVER_START
