"""
l2m-tally

Tallies the NBA's Last Two Minutes officiating reports per team: how many
reviewed errors went in each team's favour, how many went against it, and
how many games had no report to review.

Usage:
    from l2m_tally import JsonFetcher, DataNbaClient, LastTwoMinutesClient, L2MAggregator

    async with JsonFetcher() as fetcher:
        aggregator = L2MAggregator(DataNbaClient(fetcher), LastTwoMinutesClient(fetcher))
        result = await aggregator.run(2022)

    for row in result.rows():
        print(row.tricode, row.calls_in_favor, row.calls_against, row.games_missed)
"""

from .aggregators import (
    AggregationError,
    AggregationResult,
    L2MAggregator,
    MissingIdentityError,
    TeamAggregate,
    TeamCallSummary,
)
from .core.http import DecodeError, FetchError, HttpError, JsonFetcher, TransportError
from .core.models import LastTwoMinutesReport, LeagueResponse, ScheduleGame, Team
from .providers import DataNbaClient, LastTwoMinutesClient

__version__ = "0.1.0"

__all__ = [
    # HTTP
    "JsonFetcher",
    "FetchError",
    "HttpError",
    "DecodeError",
    "TransportError",
    # Models
    "Team",
    "ScheduleGame",
    "LeagueResponse",
    "LastTwoMinutesReport",
    # Clients
    "DataNbaClient",
    "LastTwoMinutesClient",
    # Aggregation
    "L2MAggregator",
    "AggregationResult",
    "AggregationError",
    "MissingIdentityError",
    "TeamAggregate",
    "TeamCallSummary",
]
