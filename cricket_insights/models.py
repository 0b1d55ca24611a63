from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Union


# -----------------------------
# Enumerations
# -----------------------------
MatchStatus = Literal["upcoming", "live", "completed"]

MarginType = Literal["runs", "wickets", "superOver", "tie", "none"]

FinishType = Literal["standard", "closeRuns", "closeWickets", "bigWin", "superOver", "tie"]

Phase = Literal["powerplay", "middle", "death"]


# -----------------------------
# Canonical Match
# -----------------------------
@dataclass(frozen=True)
class Team:
    id: str = ""
    name: str = ""
    short_name: str = ""
    logo: str = ""

    @property
    def label(self) -> str:
        return self.short_name or self.name


@dataclass(frozen=True)
class Teams:
    home: Team = field(default_factory=Team)
    away: Team = field(default_factory=Team)


@dataclass(frozen=True)
class InningsScore:
    runs: int = 0
    wickets: int = 0
    # 19.4 means 19 overs + 4 balls
    overs: float = 0.0


@dataclass(frozen=True)
class Score:
    home: InningsScore = field(default_factory=InningsScore)
    away: InningsScore = field(default_factory=InningsScore)


@dataclass(frozen=True)
class Margin:
    """
    Tagged result margin.
    value is the number of runs/wickets; 0 for superOver/tie, None for none.
    """
    type: MarginType = "none"
    value: Optional[int] = None


@dataclass(frozen=True)
class MatchResult:
    winner: str = ""
    margin: str = ""
    method: str = ""

    # Set when the source already knows the margin; skips text parsing
    structured_margin: Optional[Margin] = None


@dataclass(frozen=True)
class League:
    id: str = ""
    name: str = ""
    season: str = ""


@dataclass(frozen=True)
class PlayerRef:
    id: str = ""
    name: str = ""


@dataclass(frozen=True)
class BattingEntry:
    player_id: str = ""
    player_name: str = ""
    team_id: str = ""
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    strike_rate: float = 0.0
    out: bool = False
    how_out: str = ""


@dataclass(frozen=True)
class BowlingEntry:
    player_id: str = ""
    player_name: str = ""
    team_id: str = ""
    overs: float = 0.0
    maidens: int = 0
    runs: int = 0
    wickets: int = 0
    economy: float = 0.0


@dataclass(frozen=True)
class Ball:
    over: Optional[int] = None
    ball: Optional[int] = None
    runs: int = 0
    wickets: int = 0
    batsman_name: str = ""
    bowler_name: str = ""
    extras: int = 0


@dataclass(frozen=True)
class Match:
    id: str
    status: MatchStatus = "upcoming"
    date: str = ""
    teams: Teams = field(default_factory=Teams)
    score: Score = field(default_factory=Score)
    result: MatchResult = field(default_factory=MatchResult)
    league: League = field(default_factory=League)
    man_of_match: Optional[PlayerRef] = None

    batting: List[List[BattingEntry]] = field(default_factory=list)
    bowling: List[List[BowlingEntry]] = field(default_factory=list)
    balls: List[Ball] = field(default_factory=list)

    insights: Optional["Insights"] = None

    @property
    def team_ids(self) -> List[str]:
        return [self.teams.home.id, self.teams.away.id]


# -----------------------------
# Standings context
# -----------------------------
@dataclass(frozen=True)
class StandingsRow:
    team: Team
    position: int
    played: int = 0
    won: int = 0
    lost: int = 0
    points: int = 0
    nrr: float = 0.0


# -----------------------------
# Derived structures
# -----------------------------
@dataclass(frozen=True)
class Story:
    first_innings: str
    turning_point: str
    finish: str


@dataclass(frozen=True)
class PhaseScore:
    runs: int
    wickets: int
    overs: Union[int, str]


@dataclass(frozen=True)
class WicketCluster:
    wickets: int
    from_over: Optional[int]
    to_over: Optional[int]
    description: str


@dataclass(frozen=True)
class Partnership:
    runs: int
    player1: str
    player2: str


@dataclass(frozen=True)
class TurningPoint:
    over: int
    runs: int
    wickets: int
    description: str


@dataclass(frozen=True)
class KeyMoments:
    powerplay: Optional[PhaseScore]
    wicket_clusters: List[WicketCluster]
    biggest_partnership: Optional[Partnership]
    death_overs: Optional[PhaseScore]
    turning_point: Optional[TurningPoint]


@dataclass(frozen=True)
class SortMetrics:
    closeness: int
    total_runs: int
    total_wickets: int
    highest_chase: int
    margin_value: int
    margin_type: MarginType


@dataclass(frozen=True)
class Insights:
    highlights: List[str]
    story: Story
    finish_type: FinishType
    tags: List[str]
    sort_metrics: SortMetrics
    key_moments: KeyMoments


@dataclass(frozen=True)
class FallOfWicket:
    wicket_num: int
    over: int
    ball: int
    runs: int
    batsman_name: str


@dataclass(frozen=True)
class OverMomentum:
    over: int
    runs: int
    wickets: int
    phase: Phase


@dataclass(frozen=True)
class HeadToHead:
    total: int
    a_wins: int
    b_wins: int
    draws: int
    avg_score_a: int
    avg_score_b: int
    recent5: List[Match]


@dataclass(frozen=True)
class TeamArchiveStats:
    form_line: List[str]
    total_played: int
    wins: int
    losses: int
    best_chases: List[Match]
    highest_totals: List[Match]
    biggest_defeats: List[Match]
