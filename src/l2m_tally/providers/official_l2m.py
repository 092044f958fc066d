"""official.nba.com Last Two Minutes report client."""

from ..core.http import JsonFetcher
from ..core.models import LastTwoMinutesReport


class LastTwoMinutesClient:
    """Fetches one L2M report document per game."""

    BASE_URL = "https://official.nba.com/l2m/json"

    def __init__(self, fetcher: JsonFetcher, base_url: str | None = None):
        self.fetcher = fetcher
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

    def url_for(self, game_id: str) -> str:
        return f"{self.base_url}/{game_id}.json"

    async def get_report(self, game_id: str) -> LastTwoMinutesReport:
        """
        Get the L2M report for a game.

        Older games and games that were never close often have no report;
        callers should expect a FetchError for those.
        """
        return await self.fetcher.fetch(self.url_for(game_id), LastTwoMinutesReport)
