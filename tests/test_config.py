import pytest
from pydantic import ValidationError

from l2m_tally.core.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("L2M_SEASON", raising=False)
    settings = Settings(_env_file=None)
    assert settings.data_base_url == "http://data.nba.net/prod/v2"
    assert settings.report_base_url == "https://official.nba.com/l2m/json"
    assert settings.concurrency == 1
    assert settings.output_format == "csv"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("L2M_SEASON", "2019")
    monkeypatch.setenv("L2M_CONCURRENCY", "4")
    monkeypatch.setenv("L2M_OUTPUT_FORMAT", "json")
    settings = Settings(_env_file=None)
    assert settings.season == 2019
    assert settings.concurrency == 4
    assert settings.output_format == "json"


def test_concurrency_bounds():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, concurrency=0)
