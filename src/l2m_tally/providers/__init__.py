"""
Upstream feed clients.

Usage:
    from l2m_tally.core.http import JsonFetcher
    from l2m_tally.providers import DataNbaClient, LastTwoMinutesClient

    async with JsonFetcher() as fetcher:
        teams = await DataNbaClient(fetcher).get_teams(2022)
        report = await LastTwoMinutesClient(fetcher).get_report("0022200001")
"""

from .data_nba import DataNbaClient
from .official_l2m import LastTwoMinutesClient

__all__ = [
    "DataNbaClient",
    "LastTwoMinutesClient",
]
