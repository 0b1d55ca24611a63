# cricket_insights/key_moments.py
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from cricket_insights.models import (
    Ball,
    BattingEntry,
    KeyMoments,
    Match,
    Partnership,
    PhaseScore,
    TurningPoint,
    WicketCluster,
)

POWERPLAY_OVERS = 6
DEATH_OVER_START = 16
LAST_OVER = 20

# Max over gap between successive wickets inside one cluster
CLUSTER_OVER_GAP = 2
MIN_CLUSTER_WICKETS = 2

# Turning point impact weights
WICKET_IMPACT = 15
BIG_OVER_RUNS = 15
QUIET_OVER_RUNS = 2
QUIET_OVER_BONUS = 5


def group_balls_by_over(balls: Sequence[Ball]) -> Dict[int, List[Ball]]:
    """over -> deliveries, in input order. A missing over number counts as over 0."""
    by_over: Dict[int, List[Ball]] = {}
    for b in balls or []:
        by_over.setdefault(b.over or 0, []).append(b)
    return by_over


def _totals(balls: Sequence[Ball]) -> Tuple[int, int]:
    runs = sum(b.runs for b in balls)
    wickets = sum(b.wickets for b in balls)
    return runs, wickets


def compute_powerplay(balls: Sequence[Ball]) -> Optional[PhaseScore]:
    if not balls:
        return None
    pp = [b for b in balls if b.over is not None and b.over < POWERPLAY_OVERS]
    runs, wickets = _totals(pp)
    return PhaseScore(runs=runs, wickets=wickets, overs=POWERPLAY_OVERS)


def compute_death_overs(balls: Sequence[Ball]) -> Optional[PhaseScore]:
    if not balls:
        return None
    death = [b for b in balls if (b.over or 0) >= DEATH_OVER_START]
    if not death:
        return None
    runs, wickets = _totals(death)
    return PhaseScore(runs=runs, wickets=wickets, overs=f"{DEATH_OVER_START}-{LAST_OVER}")


def compute_wicket_clusters(balls: Sequence[Ball]) -> List[WicketCluster]:
    """
    Groups wicket-taking deliveries (input order) whose over gap to the
    previous wicket is <= 2. Only groups of 2+ wickets are reported.

    Example: wickets in overs [3, 4, 9] -> one cluster, overs 3-4.
    """
    wicket_balls = [b for b in balls or [] if b.wickets > 0]
    if len(wicket_balls) < MIN_CLUSTER_WICKETS:
        return []

    groups: List[List[Ball]] = []
    current = [wicket_balls[0]]
    for prev, b in zip(wicket_balls, wicket_balls[1:]):
        gap = (b.over or 0) - (prev.over or 0)
        if gap <= CLUSTER_OVER_GAP:
            current.append(b)
        else:
            groups.append(current)
            current = [b]
    groups.append(current)

    clusters: List[WicketCluster] = []
    for g in groups:
        if len(g) < MIN_CLUSTER_WICKETS:
            continue
        first, last = g[0].over, g[-1].over
        clusters.append(
            WicketCluster(
                wickets=len(g),
                from_over=first,
                to_over=last,
                description=f"{len(g)} wickets in overs {first}-{last}",
            )
        )
    return clusters


def compute_biggest_partnership(batting: Sequence[Sequence[BattingEntry]]) -> Optional[Partnership]:
    """
    Approximation: a "partnership" is two batters adjacent in the lineup,
    runs = innings[i].runs + innings[i+1].runs. It does not track crease time.
    First maximum wins ties.
    """
    best: Optional[Partnership] = None
    for innings in batting or []:
        for a, b in zip(innings, innings[1:]):
            combined = a.runs + b.runs
            if best is None or combined > best.runs:
                best = Partnership(runs=combined, player1=a.player_name, player2=b.player_name)
    return best


def over_impact(runs: int, wickets: int) -> int:
    impact = wickets * WICKET_IMPACT
    if runs >= BIG_OVER_RUNS:
        impact += runs
    if runs <= QUIET_OVER_RUNS and wickets == 0:
        impact += QUIET_OVER_BONUS
    return impact


def _turning_point_text(over: int, runs: int, wickets: int) -> str:
    if wickets > 0:
        plural = "s" if wickets > 1 else ""
        return f"Over {over}: {wickets} wicket{plural} and {runs} runs, momentum shifted"
    if runs <= QUIET_OVER_RUNS:
        return f"Over {over}: only {runs} runs conceded, pressure built"
    return f"Over {over}: {runs} runs scored, big over changed the game"


def compute_turning_point(balls: Sequence[Ball]) -> Optional[TurningPoint]:
    """
    Highest-impact over, scanning overs in ascending order.
    Ties keep the earlier over; None when no over has positive impact.
    """
    if not balls:
        return None

    by_over = group_balls_by_over(balls)

    best: Optional[TurningPoint] = None
    best_impact = 0
    for over in sorted(by_over):
        runs, wickets = _totals(by_over[over])
        impact = over_impact(runs, wickets)
        if impact > best_impact:
            best_impact = impact
            best = TurningPoint(
                over=over,
                runs=runs,
                wickets=wickets,
                description=_turning_point_text(over, runs, wickets),
            )
    return best


def generate_key_moments(match: Match) -> KeyMoments:
    return KeyMoments(
        powerplay=compute_powerplay(match.balls),
        wicket_clusters=compute_wicket_clusters(match.balls),
        biggest_partnership=compute_biggest_partnership(match.batting),
        death_overs=compute_death_overs(match.balls),
        turning_point=compute_turning_point(match.balls),
    )
