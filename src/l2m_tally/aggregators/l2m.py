"""
Last Two Minutes call aggregator.

Joins L2M report tallies back to team identities and sums, per team, the
officiating errors that went in its favour and against it. Games whose
report cannot be retrieved are counted as missed instead.

The identity index is a plain dict owned by a single run. Each game is
folded at most once, and a fold applies all of its deltas without
yielding to the event loop, so an interrupted run leaves no half-applied
game behind.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Protocol

from ..core.http import FetchError
from ..core.models import LastTwoMinutesReport, ReportStat, ScheduleGame, Team
from ..providers import DataNbaClient, LastTwoMinutesClient

logger = logging.getLogger(__name__)

ERRORS_IN_FAVOR = "Errors in Favor"


class AggregationError(Exception):
    """Base exception for aggregation failures."""
    pass


class MissingIdentityError(AggregationError):
    """Raised when a game references a team id absent from the index."""

    def __init__(self, team_id: str, game_id: str):
        super().__init__(f"Game {game_id} references unknown team {team_id}")
        self.team_id = team_id
        self.game_id = game_id


class GameProgress(Protocol):
    """
    Observer notified as games are processed.

    Sinks may also define on_games_selected(count), called once before the
    first game.
    """

    def on_game_start(self, label: str) -> None: ...

    def on_game_complete(self, label: str) -> None: ...


# =============================================================================
# Records
# =============================================================================


@dataclass
class TeamAggregate:
    """Running call totals for one team."""

    team: Team
    calls_in_favor: int = 0
    calls_against: int = 0
    games_missed: int = 0


@dataclass(frozen=True)
class CallTally:
    """Call deltas for one game. Favor and against mirror between opponents."""

    home_in_favor: int = 0
    home_against: int = 0
    away_in_favor: int = 0
    away_against: int = 0

    def __add__(self, other: "CallTally") -> "CallTally":
        return CallTally(
            home_in_favor=self.home_in_favor + other.home_in_favor,
            home_against=self.home_against + other.home_against,
            away_in_favor=self.away_in_favor + other.away_in_favor,
            away_against=self.away_against + other.away_against,
        )


@dataclass(frozen=True)
class TeamCallSummary:
    """One output row."""

    tricode: str
    calls_in_favor: int
    calls_against: int
    games_missed: int


@dataclass
class AggregationResult:
    """Result of an aggregation run."""

    index: dict[str, TeamAggregate]
    games_selected: int = 0
    games_completed: int = 0
    games_missed: int = 0

    def rows(self) -> list[TeamCallSummary]:
        return summarize(self.index)


# =============================================================================
# Identity index & game selection
# =============================================================================


def build_identity_index(teams: Iterable[Team]) -> dict[str, TeamAggregate]:
    """Map team_id -> zeroed TeamAggregate. Duplicate ids: last one wins."""
    return {team.team_id: TeamAggregate(team=team) for team in teams}


def select_games(games: Iterable[ScheduleGame], now: datetime) -> list[ScheduleGame]:
    """Regular-season games that started before `now`."""
    return [g for g in games if g.is_regular_season and g.start_time_utc < now]


def lookup_teams(
    index: dict[str, TeamAggregate], game: ScheduleGame
) -> tuple[TeamAggregate, TeamAggregate]:
    """Return (home, away) aggregates for a game."""
    try:
        home = index[game.home_team_id]
    except KeyError:
        raise MissingIdentityError(game.home_team_id, game.game_id) from None
    try:
        away = index[game.away_team_id]
    except KeyError:
        raise MissingIdentityError(game.away_team_id, game.game_id) from None
    return home, away


def game_label(index: dict[str, TeamAggregate], game: ScheduleGame) -> str:
    home, away = lookup_teams(index, game)
    return f"{home.team.tricode} v {away.team.tricode}"


# =============================================================================
# Folding
# =============================================================================


def tally_report(stats: Iterable[ReportStat]) -> CallTally:
    """
    Compute call deltas from a report's stat lines.

    Only "Errors in Favor" counts. The home count is errors that helped
    the home team (and so hurt the away team), and vice versa. Repeated
    "Errors in Favor" lines are summed.
    """
    tally = CallTally()
    for stat in stats:
        if stat.stats_name == ERRORS_IN_FAVOR:
            tally = tally + CallTally(
                home_in_favor=stat.home,
                home_against=stat.away,
                away_in_favor=stat.away,
                away_against=stat.home,
            )
    return tally


def fold_report(
    index: dict[str, TeamAggregate],
    game: ScheduleGame,
    report: LastTwoMinutesReport,
) -> CallTally:
    """Apply a game's report to both teams' aggregates."""
    home, away = lookup_teams(index, game)
    tally = tally_report(report.stats)

    home.calls_in_favor += tally.home_in_favor
    home.calls_against += tally.home_against
    away.calls_in_favor += tally.away_in_favor
    away.calls_against += tally.away_against
    return tally


def record_missed(index: dict[str, TeamAggregate], game: ScheduleGame) -> None:
    """Count a game without a usable report against both teams."""
    home, away = lookup_teams(index, game)
    home.games_missed += 1
    away.games_missed += 1


def check_report_identity(game: ScheduleGame, report: LastTwoMinutesReport) -> bool:
    """Cross-check the report header against the schedule. True when consistent."""
    summary = report.summary
    if summary is None:
        return True
    expected = (game.home_team_id, game.away_team_id)
    reported = (str(summary.home_team_id), str(summary.away_team_id))
    if reported != expected:
        logger.warning(
            f"Report for {game.game_id} lists teams {reported}, schedule has {expected}"
        )
        return False
    return True


def summarize(index: dict[str, TeamAggregate]) -> list[TeamCallSummary]:
    """Output rows for NBA franchises, in index order."""
    return [
        TeamCallSummary(
            tricode=agg.team.tricode,
            calls_in_favor=agg.calls_in_favor,
            calls_against=agg.calls_against,
            games_missed=agg.games_missed,
        )
        for agg in index.values()
        if agg.team.is_nba_franchise
    ]


# =============================================================================
# Runner
# =============================================================================


class L2MAggregator:
    """Drives a full season run: teams, schedule, then one report per game."""

    def __init__(
        self,
        data_client: DataNbaClient,
        report_client: LastTwoMinutesClient,
        progress: GameProgress | None = None,
        concurrency: int = 1,
    ):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.data_client = data_client
        self.report_client = report_client
        self.progress = progress
        self.concurrency = concurrency
        self.index: dict[str, TeamAggregate] = {}
        self.result: AggregationResult | None = None

    async def run(self, season: int, now: datetime | None = None) -> AggregationResult:
        """
        Aggregate a season.

        Teams and schedule fetch failures propagate. Report failures are
        recorded as missed games.

        Args:
            season: Season start year
            now: Cut-off for "already played"; sampled once if omitted

        Raises:
            FetchError: If the teams or schedule feed cannot be fetched
            MissingIdentityError: If a selected game references an unknown team
        """
        now = now or datetime.now(timezone.utc)

        teams = await self.data_client.get_teams(season)
        self.index = build_identity_index(teams.league.standard)
        self.result = AggregationResult(index=self.index)

        schedule = await self.data_client.get_schedule(season)
        games = select_games(schedule.league.standard, now)
        for game in games:
            lookup_teams(self.index, game)
        self.result.games_selected = len(games)
        logger.info(f"Selected {len(games)} completed regular-season games")
        self._notify("on_games_selected", len(games))

        if self.concurrency == 1:
            for game in games:
                report = await self._fetch_report(game)
                self._apply(game, report)
        else:
            semaphore = asyncio.Semaphore(self.concurrency)

            async def fetch(game: ScheduleGame):
                async with semaphore:
                    return game, await self._fetch_report(game)

            tasks = [asyncio.create_task(fetch(game)) for game in games]
            try:
                for next_done in asyncio.as_completed(tasks):
                    game, report = await next_done
                    self._apply(game, report)
            finally:
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)

        logger.info(
            f"Processed {self.result.games_selected} games: "
            f"{self.result.games_completed} completed, {self.result.games_missed} missed"
        )
        return self.result

    async def _fetch_report(self, game: ScheduleGame) -> LastTwoMinutesReport | None:
        self._notify("on_game_start", game_label(self.index, game))
        try:
            return await self.report_client.get_report(game.game_id)
        except FetchError as e:
            logger.debug(f"No L2M report for {game.game_id}: {e.message}")
            return None

    def _apply(self, game: ScheduleGame, report: LastTwoMinutesReport | None) -> None:
        if report is None:
            record_missed(self.index, game)
            self.result.games_missed += 1
            return
        check_report_identity(game, report)
        fold_report(self.index, game, report)
        self.result.games_completed += 1
        self._notify("on_game_complete", game_label(self.index, game))

    def _notify(self, event: str, value) -> None:
        callback = getattr(self.progress, event, None)
        if callback is None:
            return
        try:
            callback(value)
        except Exception as e:
            logger.warning(f"Progress callback {event} failed: {e}")
