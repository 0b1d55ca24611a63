from dataclasses import replace

import pytest

from cricket_insights.margin import margin_of, parse_margin
from cricket_insights.models import Margin, MatchResult

from factories import make_match


@pytest.mark.parametrize(
    "text,expected",
    [
        ("5 runs", Margin("runs", 5)),
        ("Mumbai Indians won by 1 run", Margin("runs", 1)),
        ("won by 7 wickets (with 12 balls remaining)", Margin("wickets", 7)),
        ("Super Over", Margin("superOver", 0)),
        ("won in the SUPEROVER", Margin("superOver", 0)),
        ("Match Tied", Margin("tie", 0)),
        ("No result", Margin("none", None)),
        ("", Margin("none", None)),
        (None, Margin("none", None)),
    ],
)
def test_parse_margin(text, expected):
    assert parse_margin(text) == expected


def test_runs_pattern_checked_before_super_over():
    assert parse_margin("Tied, super over won by 6 runs") == Margin("runs", 6)


def test_structured_margin_bypasses_text():
    m = make_match(margin="won by 40 runs")
    m = replace(m, result=MatchResult(winner=m.result.winner, margin="garbled", structured_margin=Margin("wickets", 1)))
    assert margin_of(m) == Margin("wickets", 1)


def test_margin_of_parses_result_text():
    assert margin_of(make_match(margin="3 wickets")) == Margin("wickets", 3)
