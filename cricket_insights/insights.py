# cricket_insights/insights.py
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from cricket_insights.classify import classify_finish
from cricket_insights.config import setup_logger
from cricket_insights.key_moments import generate_key_moments
from cricket_insights.metrics import generate_sort_metrics, generate_tags
from cricket_insights.models import Insights, Match, StandingsRow
from cricket_insights.story import generate_highlights, generate_story

logger = setup_logger(__name__)


def compute_match_insights(
    match: Optional[Match],
    standings: Optional[Sequence[StandingsRow]] = None,
) -> Optional[Insights]:
    """
    All derived metadata for one match.

    Pure: same (match, standings) -> equal Insights. Only completed matches
    get insights; upcoming/live (or None) return None.
    """
    if match is None or match.status != "completed":
        if match is not None:
            logger.debug("match %s: status=%s, no insights", match.id, match.status)
        return None

    return Insights(
        highlights=generate_highlights(match, standings),
        story=generate_story(match),
        finish_type=classify_finish(match),
        tags=generate_tags(match, standings),
        sort_metrics=generate_sort_metrics(match),
        key_moments=generate_key_moments(match),
    )


def attach_insights(match: Match, standings: Optional[Sequence[StandingsRow]] = None) -> Match:
    """Copy of the match with insights set (None for non-completed matches)."""
    return replace(match, insights=compute_match_insights(match, standings))


def attach_insights_all(
    matches: Sequence[Match],
    standings: Optional[Sequence[StandingsRow]] = None,
) -> List[Match]:
    return [attach_insights(m, standings) for m in matches]
