# cricket_insights/relations.py
from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from cricket_insights.classify import classify_finish
from cricket_insights.metrics import generate_sort_metrics
from cricket_insights.models import HeadToHead, Match, TeamArchiveStats

DEFAULT_RELATED_LIMIT = 6
RECENT_MEETINGS = 5

# Related-match scoring weights
SAME_FIXTURE_SCORE = 50
SHARED_TEAM_SCORE = 20
SAME_SEASON_SCORE = 15
SAME_LEAGUE_SCORE = 10
SAME_FINISH_SCORE = 10


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _relatedness(target: Match, m: Match, target_finish: Optional[str]) -> int:
    t_home, t_away = target.teams.home.id, target.teams.away.id
    home, away = m.teams.home.id, m.teams.away.id

    score = 0
    same_fixture = (home == t_home and away == t_away) or (home == t_away and away == t_home)
    if same_fixture:
        score += SAME_FIXTURE_SCORE
    elif home in (t_home, t_away) or away in (t_home, t_away):
        score += SHARED_TEAM_SCORE

    if m.league.season == target.league.season:
        score += SAME_SEASON_SCORE
    if m.league.id == target.league.id:
        score += SAME_LEAGUE_SCORE

    if target_finish is not None and classify_finish(m) == target_finish:
        score += SAME_FINISH_SCORE

    return score


def find_related_matches(
    target: Optional[Match],
    pool: Sequence[Match],
    limit: int = DEFAULT_RELATED_LIMIT,
) -> List[Match]:
    """
    Rank completed matches in `pool` by relatedness to `target`:
      +50 same two teams (either order), else +20 one shared team
      +15 same season, +10 same league
      +10 same finish type (only when the target itself is completed)
    Zero scores are dropped; ties keep pool order. The target never appears.
    """
    if target is None or not pool:
        return []

    target_finish = classify_finish(target) if target.status == "completed" else None

    scored: List[Tuple[int, Match]] = []
    for m in pool:
        if m.id == target.id or m.status != "completed":
            continue
        score = _relatedness(target, m, target_finish)
        if score > 0:
            scored.append((score, m))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [m for _, m in scored[: max(limit, 0)]]


def compute_head_to_head(team_a_id: str, team_b_id: str, matches: Sequence[Match]) -> HeadToHead:
    """
    Completed meetings between two teams (input assumed oldest-first).
    Runs are credited by which side of each fixture the team played.
    recent5 is newest-first.
    """
    meetings = [
        m
        for m in matches or []
        if m.status == "completed" and team_a_id in m.team_ids and team_b_id in m.team_ids
    ]

    a_wins = b_wins = 0
    total_a = total_b = 0
    for m in meetings:
        if m.result.winner == team_a_id:
            a_wins += 1
        elif m.result.winner == team_b_id:
            b_wins += 1

        if m.teams.home.id == team_a_id:
            total_a += m.score.home.runs
            total_b += m.score.away.runs
        else:
            total_a += m.score.away.runs
            total_b += m.score.home.runs

    n = len(meetings)
    return HeadToHead(
        total=n,
        a_wins=a_wins,
        b_wins=b_wins,
        draws=n - a_wins - b_wins,
        avg_score_a=_round_half_up(total_a / n) if n else 0,
        avg_score_b=_round_half_up(total_b / n) if n else 0,
        recent5=list(reversed(meetings[-RECENT_MEETINGS:])),
    )


def _team_runs(m: Match, team_id: str) -> int:
    return m.score.home.runs if m.teams.home.id == team_id else m.score.away.runs


def _defeat_key(m: Match) -> Tuple[bool, int]:
    # Sorted with reverse=True: parsed margins first, widest first; unparseable ones last.
    sm = generate_sort_metrics(m)
    return (sm.margin_type != "none", sm.margin_value)


def compute_team_archive_stats(team_id: str, matches: Sequence[Match]) -> Optional[TeamArchiveStats]:
    """
    Season archive for one team over completed matches (assumed newest-first).
    None when the team played none of them.
    """
    played = [
        m for m in matches or [] if m.status == "completed" and team_id and team_id in m.team_ids
    ]
    if not played:
        return None

    form_line = ["W" if m.result.winner == team_id else "L" for m in played[:10]]
    wins = [m for m in played if m.result.winner == team_id]
    losses = [m for m in played if m.result.winner and m.result.winner != team_id]

    best_chases = sorted(
        (m for m in wins if m.insights is not None and "chase" in m.insights.tags),
        key=lambda m: _team_runs(m, team_id),
        reverse=True,
    )[:3]

    highest_totals = sorted(played, key=lambda m: _team_runs(m, team_id), reverse=True)[:3]

    biggest_defeats = sorted(
        losses,
        key=_defeat_key,
        reverse=True,
    )[:3]

    return TeamArchiveStats(
        form_line=form_line,
        total_played=len(played),
        wins=len(wins),
        losses=len(losses),
        best_chases=best_chases,
        highest_totals=highest_totals,
        biggest_defeats=biggest_defeats,
    )
