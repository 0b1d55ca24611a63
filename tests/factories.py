from typing import List, Optional

from cricket_insights.models import (
    Ball,
    BattingEntry,
    InningsScore,
    League,
    Match,
    MatchResult,
    PlayerRef,
    Score,
    StandingsRow,
    Team,
    Teams,
)

MI = Team(id="sm-1", name="Mumbai Indians", short_name="MI")
CSK = Team(id="sm-2", name="Chennai Super Kings", short_name="CSK")
RCB = Team(id="sm-3", name="Royal Challengers Bengaluru", short_name="RCB")
KKR = Team(id="sm-4", name="Kolkata Knight Riders", short_name="KKR")


def make_match(
    id: str = "m1",
    *,
    status: str = "completed",
    date: str = "2024-04-01T14:00:00Z",
    home: Team = MI,
    away: Team = CSK,
    home_score=(160, 6, 20.0),
    away_score=(150, 8, 20.0),
    winner: Optional[str] = None,
    margin: str = "10 runs",
    league_id: str = "1",
    season: str = "2024",
    balls: Optional[List[Ball]] = None,
    batting: Optional[List[List[BattingEntry]]] = None,
    man_of_match: Optional[PlayerRef] = None,
) -> Match:
    return Match(
        id=id,
        status=status,
        date=date,
        teams=Teams(home=home, away=away),
        score=Score(home=InningsScore(*home_score), away=InningsScore(*away_score)),
        result=MatchResult(winner=home.id if winner is None else winner, margin=margin),
        league=League(id=league_id, name="IPL", season=season),
        man_of_match=man_of_match,
        batting=batting or [],
        balls=balls or [],
    )


def balls_for(*overs: int, runs: int = 1, wickets: int = 0) -> List[Ball]:
    return [Ball(over=o, ball=1, runs=runs, wickets=wickets) for o in overs]


def standings(*positions) -> List[StandingsRow]:
    """standings((team, pos), ...)"""
    return [StandingsRow(team=Team(id=t.id, name=t.name), position=p) for t, p in positions]
