"""ESPN public scoreboard provider. No API key required."""

from __future__ import annotations

from collections.abc import Hashable
from datetime import datetime

import httpx

from augment_engine.exceptions import (
    LeagueNotDetected,
    NetworkUnavailable,
    ParseError,
    ProviderError,
)
from augment_engine.formatting.renderers import sports_context
from augment_engine.models.domain import ExternalContext, SportsGame, SportsResult
from augment_engine.observability.logger import get_logger
from augment_engine.sports.leagues import GameStatus, SportsLeague

logger = get_logger("espn")

DEFAULT_BASE_URL = "https://site.api.espn.com/apis/site/v2/sports"


class ESPNProvider:
    name = "ESPN"

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
        priority: int = 0,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self.priority = priority

    def supports(self, key: Hashable) -> bool:
        return isinstance(key, SportsLeague)

    async def is_available(self) -> bool:
        return True

    async def fetch(self, key: Hashable) -> ExternalContext:
        result = await self.fetch_scores(SportsLeague(key))
        return sports_context(result)

    async def fetch_scores_for_query(self, query: str) -> SportsResult:
        league = SportsLeague.detect(query)
        if league is None:
            raise LeagueNotDetected()
        return await self.fetch_scores(league)

    async def fetch_scores(self, league: SportsLeague) -> SportsResult:
        url = f"{self._base_url}/{league.sport.value}/{league.value}/scoreboard"
        logger.info("espn_fetch", league=league.display_name)

        try:
            response = await self._client.get(url)
        except httpx.TransportError as e:
            raise NetworkUnavailable() from e

        if response.status_code != 200:
            raise ProviderError(f"ESPN returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise ParseError(str(e)) from e

        return SportsResult(league=league, games=parse_scoreboard(payload, league), source=self.name)


def parse_scoreboard(payload: dict, league: SportsLeague) -> list[SportsGame]:
    """Convert an ESPN scoreboard document into games; malformed events are skipped."""
    events = payload.get("events") if isinstance(payload, dict) else None
    if not isinstance(events, list):
        raise ParseError("scoreboard has no events list")

    games = []
    for event in events:
        game = _parse_event(event, league)
        if game is not None:
            games.append(game)
    return games


def _parse_event(event: dict, league: SportsLeague) -> SportsGame | None:
    competitions = event.get("competitions") or []
    if not competitions:
        return None
    competitors = competitions[0].get("competitors") or []

    home = next((c for c in competitors if c.get("homeAway") == "home"), None)
    away = next((c for c in competitors if c.get("homeAway") == "away"), None)
    if home is None or away is None:
        return None

    status_type = (event.get("status") or {}).get("type") or {}
    status_name = status_type.get("name", "")
    detail = status_type.get("shortDetail") or status_type.get("detail") or ""

    return SportsGame(
        home_team=_team_name(home),
        away_team=_team_name(away),
        home_score=_score(home),
        away_score=_score(away),
        status=GameStatus.from_provider(status_name, detail),
        status_detail=detail,
        league=league,
        start_time=_parse_date(event.get("date")),
    )


def _team_name(competitor: dict) -> str:
    team = competitor.get("team") or {}
    return team.get("shortDisplayName") or team.get("displayName") or "Unknown"


def _score(competitor: dict) -> int | None:
    try:
        return int(competitor["score"])
    except (KeyError, TypeError, ValueError):
        return None


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    # ESPN uses "2026-01-15T00:30Z"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
