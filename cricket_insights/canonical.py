# cricket_insights/canonical.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from cricket_insights.config import setup_logger
from cricket_insights.models import (
    Ball,
    BattingEntry,
    BowlingEntry,
    InningsScore,
    League,
    Margin,
    Match,
    MatchResult,
    PlayerRef,
    Score,
    StandingsRow,
    Team,
    Teams,
)

logger = setup_logger(__name__)

_STATUSES = ("upcoming", "live", "completed")
_MARGIN_TYPES = ("runs", "wickets", "superOver", "tie")


def _pick(d: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key wins. Accepts camelCase and snake_case spellings."""
    for k in keys:
        if k in d and d[k] is not None:
            return d[k]
    return default


def _as_dict(x: Any) -> Dict[str, Any]:
    return x if isinstance(x, dict) else {}


def _as_list(x: Any) -> List[Any]:
    return x if isinstance(x, list) else []


def _safe_int(x: Any, default: int = 0) -> int:
    try:
        if x is None:
            return default
        sx = str(x).strip()
        if not sx or sx.lower() == "nan":
            return default
        return int(float(sx))
    except (TypeError, ValueError, OverflowError):
        return default


def _safe_float(x: Any, default: float = 0.0) -> float:
    try:
        if x is None:
            return default
        sx = str(x).strip()
        if not sx or sx.lower() == "nan":
            return default
        return float(sx)
    except (TypeError, ValueError, OverflowError):
        return default


def _opt_int(x: Any) -> Optional[int]:
    if x is None:
        return None
    try:
        return int(float(str(x).strip()))
    except (TypeError, ValueError, OverflowError):
        return None


def _text(x: Any) -> str:
    if x is None:
        return ""
    return str(x).strip()


# -----------------------------
# Builders
# -----------------------------
def team_from_dict(raw: Any) -> Team:
    d = _as_dict(raw)
    return Team(
        id=_text(d.get("id")),
        name=_text(d.get("name")),
        short_name=_text(_pick(d, "shortName", "short_name", default="")),
        logo=_text(d.get("logo")),
    )


def innings_score_from_dict(raw: Any) -> InningsScore:
    d = _as_dict(raw)
    return InningsScore(
        runs=_safe_int(d.get("runs")),
        wickets=_safe_int(d.get("wickets")),
        overs=_safe_float(d.get("overs")),
    )


def _structured_margin(d: Mapping[str, Any]) -> Optional[Margin]:
    mtype = _pick(d, "marginType", "margin_type")
    if mtype not in _MARGIN_TYPES:
        return None
    value = _safe_int(_pick(d, "marginValue", "margin_value"), 0)
    return Margin(type=mtype, value=value)


def result_from_dict(raw: Any) -> MatchResult:
    d = _as_dict(raw)
    return MatchResult(
        winner=_text(d.get("winner")),
        margin=_text(d.get("margin")),
        method=_text(d.get("method")),
        structured_margin=_structured_margin(d),
    )


def batting_entry_from_dict(raw: Any) -> BattingEntry:
    d = _as_dict(raw)
    return BattingEntry(
        player_id=_text(_pick(d, "playerId", "player_id")),
        player_name=_text(_pick(d, "playerName", "player_name")),
        team_id=_text(_pick(d, "teamId", "team_id")),
        runs=_safe_int(d.get("runs")),
        balls=_safe_int(d.get("balls")),
        fours=_safe_int(d.get("fours")),
        sixes=_safe_int(d.get("sixes")),
        strike_rate=_safe_float(_pick(d, "strikeRate", "strike_rate")),
        out=bool(d.get("out", False)),
        how_out=_text(_pick(d, "howOut", "how_out")),
    )


def bowling_entry_from_dict(raw: Any) -> BowlingEntry:
    d = _as_dict(raw)
    return BowlingEntry(
        player_id=_text(_pick(d, "playerId", "player_id")),
        player_name=_text(_pick(d, "playerName", "player_name")),
        team_id=_text(_pick(d, "teamId", "team_id")),
        overs=_safe_float(d.get("overs")),
        maidens=_safe_int(d.get("maidens")),
        runs=_safe_int(d.get("runs")),
        wickets=_safe_int(d.get("wickets")),
        economy=_safe_float(d.get("economy")),
    )


def ball_from_dict(raw: Any) -> Ball:
    d = _as_dict(raw)
    return Ball(
        over=_opt_int(d.get("over")),
        ball=_opt_int(d.get("ball")),
        runs=_safe_int(d.get("runs")),
        wickets=_safe_int(d.get("wickets")),
        batsman_name=_text(_pick(d, "batsmanName", "batsman_name")),
        bowler_name=_text(_pick(d, "bowlerName", "bowler_name")),
        extras=_safe_int(d.get("extras")),
    )


def balls_from_list(raw: Any) -> List[Ball]:
    return [ball_from_dict(b) for b in _as_list(raw) if isinstance(b, dict)]


def match_from_dict(raw: Any) -> Optional[Match]:
    """
    Canonical match dict (as produced by the normalization layer) -> Match.

    Rules:
      - Non-mapping input returns None.
      - Missing numbers default to 0, missing text to "".
      - Unknown status degrades to "upcoming" so no insights are derived.
    """
    if not isinstance(raw, dict):
        return None

    status = _text(raw.get("status")).lower()
    if status not in _STATUSES:
        if status:
            logger.debug("match %s: unknown status %r treated as upcoming", raw.get("id"), status)
        status = "upcoming"

    teams = _as_dict(raw.get("teams"))
    score = _as_dict(raw.get("score"))
    league = _as_dict(raw.get("league"))

    mom_raw = _pick(raw, "manOfMatch", "man_of_match")
    man_of_match = None
    if isinstance(mom_raw, dict):
        man_of_match = PlayerRef(id=_text(mom_raw.get("id")), name=_text(mom_raw.get("name")))

    batting = [
        [batting_entry_from_dict(e) for e in innings if isinstance(e, dict)]
        for innings in _as_list(raw.get("batting"))
        if isinstance(innings, list)
    ]
    bowling = [
        [bowling_entry_from_dict(e) for e in innings if isinstance(e, dict)]
        for innings in _as_list(raw.get("bowling"))
        if isinstance(innings, list)
    ]

    return Match(
        id=_text(raw.get("id")),
        status=status,
        date=_text(raw.get("date")),
        teams=Teams(home=team_from_dict(teams.get("home")), away=team_from_dict(teams.get("away"))),
        score=Score(
            home=innings_score_from_dict(score.get("home")),
            away=innings_score_from_dict(score.get("away")),
        ),
        result=result_from_dict(raw.get("result")),
        league=League(
            id=_text(league.get("id")),
            name=_text(league.get("name")),
            season=_text(league.get("season")),
        ),
        man_of_match=man_of_match,
        batting=batting,
        bowling=bowling,
        balls=balls_from_list(raw.get("balls")),
    )


def matches_from_list(raw: Iterable[Any]) -> List[Match]:
    out: List[Match] = []
    for item in raw or []:
        m = match_from_dict(item)
        if m is not None:
            out.append(m)
    return out


def standings_from_list(raw: Iterable[Any]) -> List[StandingsRow]:
    """
    Standings rows -> StandingsRow list.
    Rows without a team id are skipped; a missing position becomes 0 (unresolvable).
    """
    rows: List[StandingsRow] = []
    for r in raw or []:
        if not isinstance(r, dict):
            continue
        team = _as_dict(r.get("team"))
        team_id = _text(team.get("id"))
        if not team_id:
            continue
        rows.append(
            StandingsRow(
                team=Team(id=team_id, name=_text(team.get("name"))),
                position=_safe_int(r.get("position")),
                played=_safe_int(r.get("played")),
                won=_safe_int(r.get("won")),
                lost=_safe_int(r.get("lost")),
                points=_safe_int(r.get("points")),
                nrr=_safe_float(r.get("nrr")),
            )
        )
    return rows
