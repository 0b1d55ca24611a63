# cricket_insights/momentum.py
from __future__ import annotations

from typing import List, Sequence

from cricket_insights.key_moments import (
    DEATH_OVER_START,
    POWERPLAY_OVERS,
    group_balls_by_over,
)
from cricket_insights.models import Ball, FallOfWicket, OverMomentum, Phase


def phase_of_over(over: int) -> Phase:
    if over < POWERPLAY_OVERS:
        return "powerplay"
    if over >= DEATH_OVER_START:
        return "death"
    return "middle"


def compute_fall_of_wickets(balls: Sequence[Ball]) -> List[FallOfWicket]:
    """
    Running score at each dismissal, deliveries ordered by (over, ball).
    The batter name is whatever the delivery record carries.
    """
    if not balls:
        return []

    ordered = sorted(balls, key=lambda b: (b.over or 0, b.ball or 0))

    total = 0
    fow: List[FallOfWicket] = []
    for b in ordered:
        total += b.runs
        if b.wickets > 0:
            fow.append(
                FallOfWicket(
                    wicket_num=len(fow) + 1,
                    over=b.over or 0,
                    ball=b.ball or 0,
                    runs=total,
                    batsman_name=b.batsman_name,
                )
            )
    return fow


def compute_momentum_data(balls: Sequence[Ball]) -> List[OverMomentum]:
    by_over = group_balls_by_over(balls)

    out: List[OverMomentum] = []
    for over in sorted(by_over):
        over_balls = by_over[over]
        out.append(
            OverMomentum(
                over=over,
                runs=sum(b.runs for b in over_balls),
                wickets=sum(b.wickets for b in over_balls),
                phase=phase_of_over(over),
            )
        )
    return out
