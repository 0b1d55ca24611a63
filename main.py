# main.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from cricket_insights.canonical import (
    balls_from_list,
    match_from_dict,
    matches_from_list,
    standings_from_list,
)
from cricket_insights.config import (
    ARCHIVE_MAX_MATCHES,
    RELATED_MATCHES_LIMIT,
    setup_logger,
    validate_config,
)
from cricket_insights.insights import attach_insights, attach_insights_all, compute_match_insights
from cricket_insights.metrics import (
    DEFAULT_SORT_MODE,
    SORT_MODES,
    TAGS,
    filter_by_date_range,
    filter_by_tags,
    filter_by_team,
    sort_matches,
)
from cricket_insights.models import Match
from cricket_insights.momentum import compute_fall_of_wickets, compute_momentum_data
from cricket_insights.relations import (
    compute_head_to_head,
    compute_team_archive_stats,
    find_related_matches,
)
from cricket_insights.story import summarize_for_thirty_seconds

logger = setup_logger("cricket_insights.api")

# -----------------------
# App
# -----------------------
app = FastAPI(
    title="Cricket Match Insights API",
    version="0.1.0",
    description="Highlights, story arcs, key moments, sort metrics and head-to-head for completed cricket matches",
)


@app.on_event("startup")
def on_startup():
    validate_config()


@app.get("/health")
def health_check():
    return {"status": "ok", "time": datetime.utcnow().isoformat() + "Z"}


# -----------------------
# Helpers
# -----------------------
def _require_match(raw: Dict[str, Any]) -> Match:
    match = match_from_dict(raw)
    if match is None or not match.id:
        raise HTTPException(status_code=400, detail="match must be an object with a non-empty id")
    return match


def _require_matches(raw: List[Dict[str, Any]]) -> List[Match]:
    if len(raw) > ARCHIVE_MAX_MATCHES:
        raise HTTPException(
            status_code=400,
            detail=f"Too many matches: {len(raw)} (max {ARCHIVE_MAX_MATCHES})",
        )
    return matches_from_list(raw)


# -----------------------
# Single match endpoints
# -----------------------
class MatchRequest(BaseModel):
    match: Dict[str, Any] = Field(..., description="Canonical match record")
    standings: List[Dict[str, Any]] = Field(default_factory=list, description="Optional standings rows")


@app.post("/api/insights")
def match_insights(req: MatchRequest):
    match = _require_match(req.match)
    standings = standings_from_list(req.standings)
    insights = compute_match_insights(match, standings)
    logger.info("insights match=%s status=%s derived=%s", match.id, match.status, insights is not None)
    return {"match_id": match.id, "insights": insights}


@app.post("/api/matches/summary")
def match_summary(req: MatchRequest):
    match = attach_insights(_require_match(req.match), standings_from_list(req.standings))
    return {"match_id": match.id, "lines": summarize_for_thirty_seconds(match)}


class BallsRequest(BaseModel):
    balls: List[Dict[str, Any]] = Field(default_factory=list)


@app.post("/api/matches/fall-of-wickets")
def fall_of_wickets(req: BallsRequest):
    return {"fall_of_wickets": compute_fall_of_wickets(balls_from_list(req.balls))}


@app.post("/api/matches/momentum")
def momentum(req: BallsRequest):
    return {"momentum": compute_momentum_data(balls_from_list(req.balls))}


# -----------------------
# Archive endpoint (filter + sort)
# -----------------------
class ArchiveRequest(BaseModel):
    matches: List[Dict[str, Any]] = Field(default_factory=list)
    standings: List[Dict[str, Any]] = Field(default_factory=list)
    team_id: Optional[str] = None
    date_from: Optional[str] = Field(None, description="ISO date, inclusive")
    date_to: Optional[str] = Field(None, description="ISO date, inclusive (a bare date covers the whole day)")
    tags: List[str] = Field(default_factory=list, description="All listed tags must match")
    sort_mode: str = Field(DEFAULT_SORT_MODE, description="newest/closest/biggestWin/mostWickets/highestChase")


@app.post("/api/archive")
def archive(req: ArchiveRequest):
    if req.sort_mode not in SORT_MODES:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown sort_mode: {req.sort_mode}. Use one of {sorted(SORT_MODES)}",
        )

    unknown_tags = [t for t in req.tags if t not in TAGS]
    if unknown_tags:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown tags: {unknown_tags}. Use any of {list(TAGS)}",
        )

    standings = standings_from_list(req.standings)
    matches = attach_insights_all(_require_matches(req.matches), standings)

    matches = filter_by_team(matches, req.team_id)
    matches = filter_by_date_range(matches, req.date_from, req.date_to)
    matches = filter_by_tags(matches, req.tags)
    matches = sort_matches(matches, req.sort_mode)

    logger.info("archive in=%d out=%d sort=%s", len(req.matches), len(matches), req.sort_mode)
    return {"count": len(matches), "sort_mode": req.sort_mode, "matches": matches}


# -----------------------
# Cross-match endpoints
# -----------------------
class HeadToHeadRequest(BaseModel):
    team_a: str
    team_b: str
    matches: List[Dict[str, Any]] = Field(default_factory=list)


@app.post("/api/head-to-head")
def head_to_head(req: HeadToHeadRequest):
    a = req.team_a.strip()
    b = req.team_b.strip()
    if not a or not b:
        raise HTTPException(status_code=400, detail="team_a and team_b are required")
    if a == b:
        raise HTTPException(status_code=400, detail="team_a and team_b must be different")

    return {"team_a": a, "team_b": b, "result": compute_head_to_head(a, b, _require_matches(req.matches))}


class RelatedRequest(BaseModel):
    match: Dict[str, Any]
    matches: List[Dict[str, Any]] = Field(default_factory=list)
    limit: int = Field(RELATED_MATCHES_LIMIT, ge=1, le=50)


@app.post("/api/related")
def related(req: RelatedRequest):
    target = _require_match(req.match)
    pool = _require_matches(req.matches)
    out = find_related_matches(target, pool, limit=req.limit)
    return {"match_id": target.id, "count": len(out), "matches": out}


class TeamArchiveRequest(BaseModel):
    matches: List[Dict[str, Any]] = Field(default_factory=list)


@app.post("/api/teams/{team_id}/archive-stats")
def team_archive_stats(team_id: str, req: TeamArchiveRequest):
    stats = compute_team_archive_stats(team_id, attach_insights_all(_require_matches(req.matches)))
    if stats is None:
        raise HTTPException(status_code=404, detail=f"No completed matches for team {team_id}")
    return {"team_id": team_id, "result": stats}
