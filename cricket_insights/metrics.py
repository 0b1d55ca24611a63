# cricket_insights/metrics.py
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from dateutil.parser import isoparse

from cricket_insights.classify import (
    classify_finish,
    is_close_match,
    is_high_scoring,
    is_low_scoring,
    is_upset,
    was_successful_chase,
)
from cricket_insights.margin import margin_of
from cricket_insights.models import Match, SortMetrics, StandingsRow

# Closeness for unparseable margins; sorts last in "closest" mode
UNKNOWN_CLOSENESS = 999
UNKNOWN_MARGIN_VALUE = 999

# Wickets margin scaled so "2 wickets" ranks against "20 runs".
# A ranking convention, not an objective measure.
WICKET_CLOSENESS_SCALE = 10

TAGS = ("close", "high-scoring", "low-scoring", "upset", "chase", "super-over", "dominant")

_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def generate_tags(match: Match, standings: Optional[Sequence[StandingsRow]] = None) -> List[str]:
    tags: List[str] = []
    finish = classify_finish(match)

    if is_close_match(match):
        tags.append("close")
    if is_high_scoring(match):
        tags.append("high-scoring")
    if is_low_scoring(match):
        tags.append("low-scoring")
    if is_upset(match, standings):
        tags.append("upset")
    if was_successful_chase(match):
        tags.append("chase")
    if finish == "superOver":
        tags.append("super-over")
    if finish == "bigWin":
        tags.append("dominant")
    return tags


def generate_sort_metrics(match: Match) -> SortMetrics:
    margin = margin_of(match)

    closeness = UNKNOWN_CLOSENESS
    if margin.type in ("superOver", "tie"):
        closeness = 0
    elif margin.type == "runs":
        closeness = margin.value or 0
    elif margin.type == "wickets":
        closeness = (margin.value or 0) * WICKET_CLOSENESS_SCALE

    home, away = match.score.home, match.score.away
    highest_chase = max(home.runs, away.runs) if was_successful_chase(match) else 0

    return SortMetrics(
        closeness=closeness,
        total_runs=home.runs + away.runs,
        total_wickets=home.wickets + away.wickets,
        highest_chase=highest_chase,
        margin_value=margin.value if margin.value is not None else UNKNOWN_MARGIN_VALUE,
        margin_type=margin.type,
    )


# -----------------------------
# Sorting
# -----------------------------
def parse_match_date(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 -> aware datetime (naive values are taken as UTC). None if unparseable."""
    if not value:
        return None
    try:
        dt = isoparse(str(value).strip())
    except (ValueError, OverflowError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _metric(match: Match, name: str, default: int) -> int:
    if match.insights is None:
        return default
    return getattr(match.insights.sort_metrics, name)


def _newest_key(m: Match) -> Tuple[int, float]:
    dt = parse_match_date(m.date)
    if dt is None:
        return (1, 0.0)
    return (0, -dt.timestamp())


def _has_known_margin(match: Match) -> bool:
    return match.insights is not None and match.insights.sort_metrics.margin_type != "none"


def _biggest_win_key(m: Match) -> Tuple[bool, int]:
    # Unparseable margins (no result, abandoned) carry a 999 placeholder; keep them last.
    return (not _has_known_margin(m), -_metric(m, "margin_value", 0))


SortKey = Callable[[Match], object]

# Keys for sorted(); all descending modes negate, so ties keep input order.
SORT_MODES: Dict[str, SortKey] = {
    "newest": _newest_key,
    "closest": lambda m: _metric(m, "closeness", UNKNOWN_CLOSENESS),
    "biggestWin": _biggest_win_key,
    "mostWickets": lambda m: -_metric(m, "total_wickets", 0),
    "highestChase": lambda m: -_metric(m, "highest_chase", 0),
}

DEFAULT_SORT_MODE = "newest"


def sort_matches(matches: Iterable[Match], mode: str = DEFAULT_SORT_MODE) -> List[Match]:
    """Unknown modes fall back to newest-first. Sort metrics come from attached insights."""
    key = SORT_MODES.get(mode) or SORT_MODES[DEFAULT_SORT_MODE]
    return sorted(matches, key=key)


# -----------------------------
# Archive filters
# -----------------------------
def filter_by_tags(matches: Sequence[Match], active_tags: Optional[Sequence[str]]) -> List[Match]:
    """Keep matches carrying every active tag."""
    if not active_tags:
        return list(matches)
    out: List[Match] = []
    for m in matches:
        tags = m.insights.tags if m.insights is not None else []
        if all(t in tags for t in active_tags):
            out.append(m)
    return out


def filter_by_date_range(
    matches: Sequence[Match],
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> List[Match]:
    """
    Inclusive range. A date-only `date_to` ("2024-04-30") covers that whole day.
    Matches whose own date is unparseable are kept; an unparseable bound is ignored.
    """
    lo = parse_match_date(date_from)
    hi = parse_match_date(date_to)
    if hi is not None and _DATE_ONLY_RE.match(str(date_to).strip()):
        hi = hi + timedelta(days=1) - timedelta(microseconds=1)

    out: List[Match] = []
    for m in matches:
        d = parse_match_date(m.date)
        if d is not None:
            if lo is not None and d < lo:
                continue
            if hi is not None and d > hi:
                continue
        out.append(m)
    return out


def filter_by_team(matches: Sequence[Match], team_id: Optional[str]) -> List[Match]:
    if not team_id:
        return list(matches)
    return [m for m in matches if team_id in m.team_ids]
