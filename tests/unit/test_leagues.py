"""Tests for league detection and game status normalization."""

import pytest

from augment_engine.sports.leagues import GameStatus, SportCategory, SportsLeague


@pytest.mark.parametrize(
    "query, league",
    [
        ("champions league results", SportsLeague.CHAMPIONS_LEAGUE),
        ("Premier League table", SportsLeague.PREMIER_LEAGUE),
        ("how did the NBA teams do", SportsLeague.NBA),
        ("basketball scores", SportsLeague.NBA),
        ("college football scores", SportsLeague.NCAA_FOOTBALL),
        ("college basketball tonight", SportsLeague.NCAA_BASKETBALL),
        ("march madness bracket", SportsLeague.NCAA_BASKETBALL),
        ("football scores", SportsLeague.NFL),
        ("NHL playoffs", SportsLeague.NHL),
        ("baseball game", SportsLeague.MLB),
    ],
)
def test_detect(query, league):
    assert SportsLeague.detect(query) == league


def test_detect_none():
    assert SportsLeague.detect("soccer football scores") is None
    assert SportsLeague.detect("who won the game") is None


def test_sport_and_display_name():
    assert SportsLeague.NBA.sport == SportCategory.BASKETBALL
    assert SportsLeague.LA_LIGA.sport == SportCategory.SOCCER
    assert SportsLeague.NCAA_FOOTBALL.display_name == "College Football"


@pytest.mark.parametrize(
    "status, detail, expected",
    [
        ("STATUS_FINAL", "Final", GameStatus.FINAL),
        ("post", "", GameStatus.FINAL),
        ("STATUS_IN_PROGRESS", "Q3 4:11", GameStatus.LIVE),
        ("STATUS_HALFTIME", "Halftime", GameStatus.LIVE),
        ("in", "", GameStatus.LIVE),
        ("STATUS_SCHEDULED", "7:30 PM ET", GameStatus.SCHEDULED),
        ("pre", "", GameStatus.SCHEDULED),
        ("STATUS_POSTPONED", "Postponed", GameStatus.POSTPONED),
        ("STATUS_WEIRD", "", GameStatus.UNKNOWN),
    ],
)
def test_status_from_provider(status, detail, expected):
    assert GameStatus.from_provider(status, detail) == expected
