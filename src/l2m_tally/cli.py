"""
l2m-tally command-line interface.

Usage:
    l2m-tally run --season 2022 --output out.csv
    l2m-tally run --season 2021 --format json --output out.json --concurrency 8
    l2m-tally report 0022200001
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

import click

from .aggregators.l2m import AggregationError, L2MAggregator, summarize, tally_report
from .core.config import Settings, get_settings
from .core.http import FetchError, HttpError, JsonFetcher
from .providers import DataNbaClient, LastTwoMinutesClient
from .reporting import TqdmProgress, sort_rows, write_rows

logger = logging.getLogger(__name__)

BODY_EXCERPT = 500


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def build_fetcher(settings: Settings) -> JsonFetcher:
    """Create the fetcher used by all commands."""
    return JsonFetcher(timeout=settings.request_timeout)


def describe_fetch_error(e: FetchError) -> str:
    lines = [e.message, f"URL: {e.url}"]
    if isinstance(e, HttpError):
        lines.append(f"Status: {e.status}")
    if e.body:
        lines.append(f"Body: {e.body[:BODY_EXCERPT]}")
    return "\n".join(lines)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Tally Last Two Minutes officiating errors per NBA team."""
    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option("--season", type=int, help="Season start year (default: L2M_SEASON)")
@click.option("--output", "output_path", type=click.Path(dir_okay=False), help="Output file")
@click.option("--format", "output_format", type=click.Choice(["csv", "json"]), help="Output format")
@click.option("--concurrency", type=click.IntRange(1, 32), help="Parallel report fetches")
@click.option("--as-of", type=click.DateTime(), help="Only count games started before this UTC time")
@click.option("--sort/--no-sort", default=True, help="Sort rows by tricode")
@click.option("--progress/--no-progress", default=True, help="Show a progress bar")
@click.pass_obj
def run(
    settings: Settings,
    season: int | None,
    output_path: str | None,
    output_format: str | None,
    concurrency: int | None,
    as_of: datetime | None,
    sort: bool,
    progress: bool,
):
    """Aggregate a season and write one row per franchise."""
    season = season or settings.season
    output_path = output_path or settings.output_path
    output_format = output_format or settings.output_format
    now = as_of.replace(tzinfo=timezone.utc) if as_of else None

    sink = TqdmProgress(disable=not progress)
    fetcher = build_fetcher(settings)
    aggregator = L2MAggregator(
        DataNbaClient(fetcher, settings.data_base_url),
        LastTwoMinutesClient(fetcher, settings.report_base_url),
        progress=sink,
        concurrency=concurrency or settings.concurrency,
    )

    async def _run():
        async with fetcher:
            return await aggregator.run(season, now=now)

    try:
        with sink:
            result = asyncio.run(_run())
    except FetchError as e:
        raise click.ClickException(describe_fetch_error(e)) from e
    except AggregationError as e:
        raise click.ClickException(str(e)) from e
    except KeyboardInterrupt:
        logger.warning("Interrupted, writing partial results")
        rows = summarize(aggregator.index)
    else:
        rows = result.rows()
        click.echo(
            f"{result.games_completed} games tallied, {result.games_missed} without a report"
        )

    if sort:
        rows = sort_rows(rows)
    path = write_rows(rows, output_path, output_format)
    click.echo(f"Wrote {len(rows)} teams to {path}")


@cli.command()
@click.argument("game_id")
@click.pass_obj
def report(settings: Settings, game_id: str):
    """Show the call tally for a single game's L2M report."""
    fetcher = build_fetcher(settings)
    client = LastTwoMinutesClient(fetcher, settings.report_base_url)

    async def _fetch():
        async with fetcher:
            return await client.get_report(game_id)

    try:
        last_two = asyncio.run(_fetch())
    except FetchError as e:
        raise click.ClickException(describe_fetch_error(e)) from e

    summary = last_two.summary
    home = summary.home_team_abbr if summary else "home"
    away = summary.away_team_abbr if summary else "away"
    tally = tally_report(last_two.stats)
    click.echo(f"{home}: {tally.home_in_favor} in favor, {tally.home_against} against")
    click.echo(f"{away}: {tally.away_in_favor} in favor, {tally.away_against} against")
    click.echo(f"{len(last_two.l2m)} reviewed plays")


def main():
    cli()


if __name__ == "__main__":
    main()
