"""
Progress display and output writers.

The progress bar advances when a game's report download starts and shows
the most recent game in its postfix. Output writers persist the final
per-team rows as CSV or JSON.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, Sequence

import msgspec
from tqdm import tqdm

from .aggregators.l2m import TeamCallSummary

logger = logging.getLogger(__name__)

CSV_HEADER = ("team", "in_favor", "against", "missed_games")


class TqdmProgress:
    """GameProgress sink backed by a tqdm bar."""

    def __init__(self, total: int | None = None, **tqdm_kwargs):
        self.bar = tqdm(total=total, desc="L2M reports", unit="game", **tqdm_kwargs)

    def on_games_selected(self, count: int) -> None:
        self.bar.reset(total=count)

    def on_game_start(self, label: str) -> None:
        self.bar.update(1)
        self.bar.set_postfix_str(f"downloading {label}")

    def on_game_complete(self, label: str) -> None:
        self.bar.set_postfix_str(f"completed {label}")

    def close(self) -> None:
        self.bar.close()

    def __enter__(self) -> "TqdmProgress":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def sort_rows(rows: Iterable[TeamCallSummary]) -> list[TeamCallSummary]:
    return sorted(rows, key=lambda r: r.tricode)


def write_csv(rows: Sequence[TeamCallSummary], path: str | Path) -> Path:
    """Write rows as CSV with a header line."""
    path = Path(path)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for row in rows:
            writer.writerow((row.tricode, row.calls_in_favor, row.calls_against, row.games_missed))
    logger.info(f"Wrote {len(rows)} rows to {path}")
    return path


def write_json(rows: Sequence[TeamCallSummary], path: str | Path) -> Path:
    """Write rows as a JSON array of objects."""
    path = Path(path)
    path.write_bytes(msgspec.json.format(msgspec.json.encode(list(rows)), indent=2))
    logger.info(f"Wrote {len(rows)} rows to {path}")
    return path


WRITERS = {
    "csv": write_csv,
    "json": write_json,
}


def write_rows(rows: Sequence[TeamCallSummary], path: str | Path, fmt: str = "csv") -> Path:
    try:
        writer = WRITERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown output format: {fmt}") from None
    return writer(rows, path)
