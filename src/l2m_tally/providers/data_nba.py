"""
data.nba.net season feed client.

Provides the teams and schedule envelopes for a season
(http://data.nba.net/prod/v2/{season}/...).
"""

import logging

from ..core.http import JsonFetcher
from ..core.models import LeagueResponse, ScheduleGame, Team

logger = logging.getLogger(__name__)


class DataNbaClient:
    """data.nba.net v2 feed client."""

    BASE_URL = "http://data.nba.net/prod/v2"

    def __init__(self, fetcher: JsonFetcher, base_url: str | None = None):
        self.fetcher = fetcher
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

    def url_for(self, season: int, endpoint: str) -> str:
        return f"{self.base_url}/{season}/{endpoint}"

    async def get_teams(self, season: int) -> LeagueResponse[Team]:
        """Get the teams envelope for a season."""
        response = await self.fetcher.fetch(self.url_for(season, "teams.json"), LeagueResponse[Team])
        logger.info(f"Fetched {len(response.league.standard)} standard teams for {season}")
        return response

    async def get_schedule(self, season: int) -> LeagueResponse[ScheduleGame]:
        """Get the schedule envelope for a season."""
        response = await self.fetcher.fetch(
            self.url_for(season, "schedule.json"), LeagueResponse[ScheduleGame]
        )
        logger.info(f"Fetched {len(response.league.standard)} standard games for {season}")
        return response
