"""
Tests for output writers and the progress sink.
"""

import csv
import io
import json

import pytest

from l2m_tally.aggregators.l2m import TeamCallSummary
from l2m_tally.reporting import TqdmProgress, sort_rows, write_csv, write_json, write_rows

ROWS = [
    TeamCallSummary(tricode="BOS", calls_in_favor=4, calls_against=2, games_missed=1),
    TeamCallSummary(tricode="ATL", calls_in_favor=0, calls_against=3, games_missed=0),
]


def test_write_csv(tmp_path):
    path = write_csv(ROWS, tmp_path / "out.csv")
    with path.open(newline="") as f:
        lines = list(csv.reader(f))
    assert lines == [
        ["team", "in_favor", "against", "missed_games"],
        ["BOS", "4", "2", "1"],
        ["ATL", "0", "3", "0"],
    ]


def test_write_json(tmp_path):
    path = write_json(ROWS, tmp_path / "out.json")
    data = json.loads(path.read_text())
    assert data[0] == {"tricode": "BOS", "calls_in_favor": 4, "calls_against": 2, "games_missed": 1}
    assert len(data) == 2


def test_write_rows_rejects_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        write_rows(ROWS, tmp_path / "out.xml", "xml")


def test_sort_rows():
    assert [r.tricode for r in sort_rows(ROWS)] == ["ATL", "BOS"]


def test_progress_counts_started_games():
    with TqdmProgress(file=io.StringIO()) as progress:
        progress.on_games_selected(3)
        progress.on_game_start("ATL v BOS")
        progress.on_game_complete("ATL v BOS")
        progress.on_game_start("BOS v ATL")
        assert progress.bar.total == 3
        assert progress.bar.n == 2
