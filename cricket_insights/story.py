# cricket_insights/story.py
from __future__ import annotations

from typing import List, Optional, Sequence

from cricket_insights.classify import (
    classify_finish,
    is_close_match,
    is_high_scoring,
    is_low_scoring,
    is_upset,
    last_over_finish,
    was_successful_chase,
)
from cricket_insights.margin import margin_of
from cricket_insights.models import Insights, Match, StandingsRow, Story

MAX_HIGHLIGHTS = 3
ONE_SIDED_WICKETS = 8
WIRE_RUN_MARGIN = 10
CLUSTER_WICKET_MARGIN = 2


def _home_label(match: Match) -> str:
    return match.teams.home.label or "Team A"


def _away_label(match: Match) -> str:
    return match.teams.away.label or "Team B"


def generate_highlights(match: Match, standings: Optional[Sequence[StandingsRow]] = None) -> List[str]:
    """
    Highlight chips in priority order, capped at 3:
    finish chip, chase, last over, high/low scoring, upset, dominant, one-sided.
    """
    chips: List[str] = []
    ft = classify_finish(match)

    if ft == "superOver":
        chips.append("Super Over")
    elif ft == "tie":
        chips.append("Tie")
    elif is_close_match(match):
        chips.append("Close finish")

    if was_successful_chase(match):
        chips.append("Successful chase")
    if last_over_finish(match):
        chips.append("Last over finish")
    if is_high_scoring(match):
        chips.append("High scoring")
    if is_low_scoring(match):
        chips.append("Low scoring")
    if is_upset(match, standings):
        chips.append("Upset")
    if ft == "bigWin":
        chips.append("Dominant win")

    margin = margin_of(match)
    if margin.type == "wickets" and (margin.value or 0) >= ONE_SIDED_WICKETS:
        chips.append("One-sided")

    return chips[:MAX_HIGHLIGHTS]


def generate_story(match: Match) -> Story:
    home = _home_label(match)
    away = _away_label(match)
    home_score = match.score.home

    margin = margin_of(match)
    value = margin.value or 0

    if margin.type == "runs" and value <= WIRE_RUN_MARGIN:
        turning_point = "The chase went down to the wire"
    elif margin.type == "wickets" and value <= CLUSTER_WICKET_MARGIN:
        turning_point = "Wickets fell in a cluster during the chase"
    elif margin.type == "superOver":
        turning_point = "Scores level, Super Over decided it"
    elif was_successful_chase(match):
        turning_point = f"{away} chased it down"
    else:
        turning_point = f"{home} defended their total"

    return Story(
        first_innings=f"{home} posted {home_score.runs}/{home_score.wickets}",
        turning_point=turning_point,
        finish=match.result.margin,
    )


def summarize_for_thirty_seconds(match: Match, insights: Optional[Insights] = None) -> Optional[List[str]]:
    """
    Three-line recap: both totals, the turning point, the margin (+ man of the match).
    Uses attached insights unless given explicitly; None for non-completed matches.
    """
    if match.status != "completed":
        return None

    insights = insights or match.insights
    if insights is None:
        return None

    home, away = _home_label(match), _away_label(match)
    hs, as_ = match.score.home, match.score.away
    line1 = f"{home} posted {hs.runs}/{hs.wickets}. {away} replied with {as_.runs}/{as_.wickets}."

    line2 = ""
    if insights.story.turning_point:
        line2 = insights.story.turning_point
    elif insights.key_moments.turning_point is not None:
        line2 = insights.key_moments.turning_point.description

    line3 = match.result.margin
    if match.man_of_match is not None and match.man_of_match.name:
        mom = f"MoM: {match.man_of_match.name}"
        line3 = f"{line3} - {mom}" if line3 else mom

    return [line for line in (line1, line2, line3) if line]
