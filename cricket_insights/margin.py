# cricket_insights/margin.py
from __future__ import annotations

import re
from typing import Optional

from cricket_insights.models import Margin, Match

_RUNS_RE = re.compile(r"(\d+)\s*run", re.IGNORECASE)
_WICKETS_RE = re.compile(r"(\d+)\s*wicket", re.IGNORECASE)
_SUPER_OVER_RE = re.compile(r"super\s*over", re.IGNORECASE)
_TIE_RE = re.compile(r"tie", re.IGNORECASE)

NO_MARGIN = Margin(type="none", value=None)


def parse_margin(text: Optional[str]) -> Margin:
    """
    Parse a free-text result margin.

    Examples:
      "Mumbai won by 5 runs"      -> Margin("runs", 5)
      "won by 3 wickets (4 balls)" -> Margin("wickets", 3)
      "Super Over"                -> Margin("superOver", 0)
      "Match tied"                -> Margin("tie", 0)
      "", None, "No result"       -> Margin("none", None)

    Patterns are tried in that order; first match wins.
    """
    if not text:
        return NO_MARGIN

    s = str(text)

    m = _RUNS_RE.search(s)
    if m:
        return Margin(type="runs", value=int(m.group(1)))

    m = _WICKETS_RE.search(s)
    if m:
        return Margin(type="wickets", value=int(m.group(1)))

    if _SUPER_OVER_RE.search(s):
        return Margin(type="superOver", value=0)

    if _TIE_RE.search(s):
        return Margin(type="tie", value=0)

    return NO_MARGIN


def margin_of(match: Match) -> Margin:
    """Structured margin when the source provides one, else parsed from result text."""
    structured = match.result.structured_margin
    if structured is not None:
        return structured
    return parse_margin(match.result.margin)
