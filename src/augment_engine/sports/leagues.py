"""Supported leagues, natural-language league detection and status mapping."""

from __future__ import annotations

from enum import Enum


class SportCategory(str, Enum):
    SOCCER = "soccer"
    FOOTBALL = "football"
    BASKETBALL = "basketball"
    BASEBALL = "baseball"
    HOCKEY = "hockey"


class SportsLeague(str, Enum):
    """League identifiers; values double as ESPN league slugs."""

    CHAMPIONS_LEAGUE = "uefa.champions"
    EUROPA_LEAGUE = "uefa.europa"
    PREMIER_LEAGUE = "eng.1"
    LA_LIGA = "esp.1"
    SERIE_A = "ita.1"
    BUNDESLIGA = "ger.1"
    LIGUE_1 = "fra.1"
    MLS = "usa.1"
    NFL = "nfl"
    NBA = "nba"
    MLB = "mlb"
    NHL = "nhl"
    NCAA_FOOTBALL = "college-football"
    NCAA_BASKETBALL = "mens-college-basketball"

    @property
    def sport(self) -> SportCategory:
        return _SPORT_BY_LEAGUE[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def detect(cls, query: str) -> SportsLeague | None:
        """Detect a league from free text; first matching rule wins."""
        lower = query.lower()
        # College rules must run before the generic football/basketball ones.
        for league, phrases in _DETECTION_RULES:
            if any(p in lower for p in phrases):
                return league
        if "football" in lower and "soccer" not in lower:
            return cls.NFL
        return None


_SPORT_BY_LEAGUE = {
    SportsLeague.CHAMPIONS_LEAGUE: SportCategory.SOCCER,
    SportsLeague.EUROPA_LEAGUE: SportCategory.SOCCER,
    SportsLeague.PREMIER_LEAGUE: SportCategory.SOCCER,
    SportsLeague.LA_LIGA: SportCategory.SOCCER,
    SportsLeague.SERIE_A: SportCategory.SOCCER,
    SportsLeague.BUNDESLIGA: SportCategory.SOCCER,
    SportsLeague.LIGUE_1: SportCategory.SOCCER,
    SportsLeague.MLS: SportCategory.SOCCER,
    SportsLeague.NFL: SportCategory.FOOTBALL,
    SportsLeague.NCAA_FOOTBALL: SportCategory.FOOTBALL,
    SportsLeague.NBA: SportCategory.BASKETBALL,
    SportsLeague.NCAA_BASKETBALL: SportCategory.BASKETBALL,
    SportsLeague.MLB: SportCategory.BASEBALL,
    SportsLeague.NHL: SportCategory.HOCKEY,
}

_DISPLAY_NAMES = {
    SportsLeague.CHAMPIONS_LEAGUE: "UEFA Champions League",
    SportsLeague.EUROPA_LEAGUE: "UEFA Europa League",
    SportsLeague.PREMIER_LEAGUE: "English Premier League",
    SportsLeague.LA_LIGA: "La Liga",
    SportsLeague.SERIE_A: "Serie A",
    SportsLeague.BUNDESLIGA: "Bundesliga",
    SportsLeague.LIGUE_1: "Ligue 1",
    SportsLeague.MLS: "MLS",
    SportsLeague.NFL: "NFL",
    SportsLeague.NBA: "NBA",
    SportsLeague.MLB: "MLB",
    SportsLeague.NHL: "NHL",
    SportsLeague.NCAA_FOOTBALL: "College Football",
    SportsLeague.NCAA_BASKETBALL: "College Basketball",
}

_DETECTION_RULES: list[tuple[SportsLeague, tuple[str, ...]]] = [
    (SportsLeague.CHAMPIONS_LEAGUE, ("champions league", "ucl")),
    (SportsLeague.EUROPA_LEAGUE, ("europa league",)),
    (SportsLeague.PREMIER_LEAGUE, ("premier league", "epl")),
    (SportsLeague.LA_LIGA, ("la liga", "laliga")),
    (SportsLeague.SERIE_A, ("serie a",)),
    (SportsLeague.BUNDESLIGA, ("bundesliga",)),
    (SportsLeague.LIGUE_1, ("ligue 1",)),
    (SportsLeague.MLS, ("mls", "major league soccer")),
    (SportsLeague.NCAA_FOOTBALL, ("college football", "ncaa football")),
    (
        SportsLeague.NCAA_BASKETBALL,
        ("college basketball", "ncaa basketball", "march madness"),
    ),
    (SportsLeague.NFL, ("nfl",)),
    (SportsLeague.NBA, ("nba", "basketball")),
    (SportsLeague.MLB, ("mlb", "baseball")),
    (SportsLeague.NHL, ("nhl", "hockey")),
]


class GameStatus(str, Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    FINAL = "final"
    POSTPONED = "postponed"
    UNKNOWN = "unknown"

    @classmethod
    def from_provider(cls, status: str, detail: str = "") -> GameStatus:
        """Map provider status strings such as ``STATUS_FINAL`` or ``in``."""
        lower = status.lower()
        detail_lower = detail.lower()

        if any(w in detail_lower for w in ("postponed", "canceled", "cancelled")):
            return cls.POSTPONED
        if "final" in lower or lower == "post":
            return cls.FINAL
        if lower == "in" or any(
            w in lower for w in ("in_progress", "half", "quarter", "period")
        ):
            return cls.LIVE
        if "scheduled" in lower or lower == "pre":
            return cls.SCHEDULED
        if "final" in detail_lower:
            return cls.FINAL
        if any(w in detail_lower for w in ("half", "quarter", "period")):
            return cls.LIVE
        return cls.UNKNOWN
