from cricket_insights.canonical import (
    match_from_dict,
    matches_from_list,
    standings_from_list,
)
from cricket_insights.models import Margin

RAW_MATCH = {
    "id": "sm-60123",
    "status": "completed",
    "date": "2024-04-07T14:00:00.000000Z",
    "teams": {
        "home": {"id": "sm-1", "name": "Mumbai Indians", "shortName": "MI", "logo": "mi.png"},
        "away": {"id": "sm-2", "name": "Chennai Super Kings", "shortName": "CSK", "logo": "csk.png"},
    },
    "score": {
        "home": {"runs": 180, "wickets": 4, "overs": 20},
        "away": {"runs": 182, "wickets": 6, "overs": 19.4},
    },
    "result": {"winner": "sm-2", "margin": "Chennai Super Kings won by 4 wickets", "method": ""},
    "league": {"id": "1", "name": "IPL", "season": "1484"},
    "manOfMatch": {"id": "77", "name": "Shivam Dube"},
    "batting": [
        [
            {"playerId": "11", "playerName": "Rohit Sharma", "teamId": "sm-1", "runs": 60, "balls": 40,
             "fours": 6, "sixes": 3, "strikeRate": 150.0, "out": True, "howOut": "c Jadeja b Pathirana"},
            {"playerId": "12", "playerName": "Ishan Kishan", "teamId": "sm-1", "runs": "23"},
        ]
    ],
    "bowling": [[{"playerId": "21", "playerName": "Matheesha Pathirana", "teamId": "sm-2",
                  "overs": 4, "maidens": 0, "runs": 28, "wickets": 4, "economy": 7.0}]],
    "balls": [
        {"over": 0, "ball": None, "runs": 4, "wickets": 0, "batsmanName": "Rohit Sharma", "bowlerName": "Deepak Chahar"},
        {"over": "1", "runs": None, "wickets": 1, "batsmanName": "Ishan Kishan"},
    ],
}


def test_match_from_dict_full_record():
    m = match_from_dict(RAW_MATCH)
    assert m.id == "sm-60123"
    assert m.status == "completed"
    assert m.teams.home.short_name == "MI"
    assert m.score.away.overs == 19.4
    assert m.result.winner == "sm-2"
    assert m.result.structured_margin is None
    assert m.man_of_match.name == "Shivam Dube"
    assert m.batting[0][0].how_out == "c Jadeja b Pathirana"
    assert m.batting[0][1].runs == 23
    assert m.batting[0][1].team_id == "sm-1"
    assert m.bowling[0][0].wickets == 4
    assert m.balls[0].ball is None
    assert (m.balls[1].over, m.balls[1].runs, m.balls[1].wickets) == (1, 0, 1)


def test_missing_numbers_default_to_zero():
    m = match_from_dict({"id": "x", "status": "completed", "score": {"home": {"runs": None}, "away": {"runs": "abc"}}})
    assert (m.score.home.runs, m.score.home.wickets, m.score.home.overs) == (0, 0, 0.0)
    assert m.score.away.runs == 0
    assert m.batting == [] and m.balls == []
    assert m.man_of_match is None


def test_unknown_status_degrades_to_upcoming():
    assert match_from_dict({"id": "x", "status": "Finished"}).status == "upcoming"
    assert match_from_dict({"id": "x"}).status == "upcoming"


def test_non_mapping_input():
    assert match_from_dict(None) is None
    assert match_from_dict(["id", "x"]) is None
    assert matches_from_list([None, {"id": "a"}, "junk"])[0].id == "a"
    assert len(matches_from_list(None)) == 0


def test_structured_margin_fields():
    m = match_from_dict({"id": "x", "result": {"margin": "", "marginType": "runs", "marginValue": 12}})
    assert m.result.structured_margin == Margin("runs", 12)
    m2 = match_from_dict({"id": "x", "result": {"marginType": "innings"}})
    assert m2.result.structured_margin is None


def test_standings_from_list():
    rows = standings_from_list(
        [
            {"team": {"id": "sm-1", "name": "Mumbai Indians"}, "position": 1, "played": 14, "won": 10,
             "lost": 4, "points": 20, "nrr": "0.842"},
            {"team": {"name": "No id"}, "position": 2},
            {"team": {"id": "sm-2"}},
            "junk",
        ]
    )
    assert [r.team.id for r in rows] == ["sm-1", "sm-2"]
    assert rows[0].nrr == 0.842
    assert rows[1].position == 0
