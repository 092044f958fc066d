"""
Pytest configuration for l2m-tally tests.

Payload builders mirror the upstream feeds closely enough to exercise the
aliases, and `mock_fetcher` serves them through httpx.MockTransport.
"""

import json

import httpx
import pytest

from l2m_tally.core.http import JsonFetcher

DATA_BASE = "http://data.test/prod/v2"
REPORT_BASE = "https://official.test/l2m/json"


def team_payload(team_id, tricode, franchise=True, **extra):
    payload = {
        "isNBAFranchise": franchise,
        "isAllStar": not franchise,
        "city": tricode.title(),
        "altCityName": tricode.title(),
        "fullName": f"{tricode} Team",
        "tricode": tricode,
        "teamId": team_id,
        "nickname": tricode.lower(),
        "urlName": tricode.lower(),
        "teamShortName": tricode.title(),
        "confName": "East",
        "divName": "Atlantic",
    }
    payload.update(extra)
    return payload


def game_payload(game_id, home_id, away_id, start="2022-10-18T23:30:00.000Z", stage=2):
    return {
        "gameId": game_id,
        "seasonStageId": stage,
        "gameUrlCode": f"20221018/{home_id}{away_id}",
        "statusNum": 3,
        "extendedStatusNum": 0,
        "isStartTimeTBD": False,
        "startTimeUTC": start,
        "startDateEastern": "20221018",
        "isNeutralVenue": False,
        "startTimeEastern": "7:30 PM ET",
        "isBuzzerBeater": False,
        "period": {"current": 4, "type": 0, "maxRegular": 4},
        "nugget": {"text": ""},
        "hTeam": {"teamId": home_id, "score": "117", "win": "1", "loss": "0"},
        "vTeam": {"teamId": away_id, "score": "126", "win": "0", "loss": "1"},
        "watch": {
            "broadcast": {
                "video": {
                    "regionalBlackoutCodes": "",
                    "isLeaguePass": True,
                    "isNationalBlackout": False,
                    "isTNTOT": False,
                    "canPurchase": False,
                    "isVR": False,
                    "isNextVR": False,
                    "isNBAOnTNTVR": False,
                    "isMagicLeap": False,
                    "isOculusVenues": False,
                    "national": {"broadcasters": [{"shortName": "TNT", "longName": "TNT"}]},
                    "canadian": [{"shortName": "TSN", "longName": "TSN"}],
                    "spanish_national": [],
                }
            }
        },
    }


def envelope(standard, **buckets):
    league = {"standard": standard}
    league.update(buckets)
    return {"_internal": {"pubDateTime": "2022-10-18 12:00:00.000 EDT"}, "league": league}


def report_payload(home_id=None, away_id=None, stats=None, plays=None):
    game = []
    if home_id is not None:
        game.append(
            {
                "Home_team": "Home",
                "Away_team": "Away",
                "GameId": "0022200001",
                "HomeTeamScore": 117,
                "VisitorTeamScore": 126,
                "GameDate": "10/18/2022",
                "HomeTeamId": int(home_id),
                "AwayTeamId": int(away_id),
                "Home_team_abbr": "HOM",
                "Away_team_abbr": "AWY",
                "L2M_Comments": None,
                "GameDateOut": "October 18, 2022",
            }
        )
    return {"game": game, "stats": stats or [], "l2m": plays or []}


def errors_in_favor(home, away):
    return {"stats_name": "Errors in Favor", "home": home, "away": away}


@pytest.fixture
def make_fetcher():
    """
    Build a JsonFetcher whose requests are answered from a URL map.

    Values are (status, body) where a non-string body is JSON encoded.
    Unknown URLs answer 404. Requested URLs are recorded on `.requested`.
    """

    def _make(routes):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested.append(url)
            status, body = routes.get(url, (404, "Not Found"))
            if isinstance(body, Exception):
                raise body
            if not isinstance(body, str):
                body = json.dumps(body)
            return httpx.Response(status, text=body)

        fetcher = JsonFetcher(transport=httpx.MockTransport(handler))
        fetcher.requested = requested
        return fetcher

    return _make
