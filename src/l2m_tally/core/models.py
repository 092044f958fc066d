"""
Pydantic models for the upstream NBA feeds.

These models are used for:
- Decoding the data.nba.net teams and schedule envelopes
- Decoding official.nba.com Last Two Minutes (L2M) reports
- Tolerating loosely versioned upstream payloads

Identity fields (team ids, game ids, start times) are required and fail
fast when missing. Everything else defaults, and fields the upstream types
inconsistently across seasons are kept as opaque JSON values.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

REGULAR_SEASON_STAGE = 2


class FeedModel(BaseModel):
    """Base for camelCase data.nba.net records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ReportModel(BaseModel):
    """Base for L2M report records, whose keys carry explicit aliases."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


# =============================================================================
# data.nba.net envelope
# =============================================================================


class LeagueBuckets(FeedModel, Generic[T]):
    """Records split by sub-league. Only `standard` is the NBA proper."""

    standard: list[T] = Field(default_factory=list)
    africa: list[T] = Field(default_factory=list)
    sacramento: list[T] = Field(default_factory=list)
    vegas: list[T] = Field(default_factory=list)
    utah: list[T] = Field(default_factory=list)


class LeagueResponse(FeedModel, Generic[T]):
    """Top-level data.nba.net document."""

    internal: Any = Field(default=None, alias="_internal")
    league: LeagueBuckets[T]


# =============================================================================
# Teams
# =============================================================================


class Team(FeedModel):
    """Team entry from teams.json."""

    team_id: str
    is_nba_franchise: bool = Field(default=False, alias="isNBAFranchise")
    is_all_star: bool = False
    city: str = ""
    alt_city_name: str = ""
    full_name: str = ""
    tricode: str = ""
    nickname: str = ""
    url_name: str = ""
    team_short_name: str = ""
    conf_name: str = ""
    div_name: str = ""


# =============================================================================
# Schedule
# =============================================================================


class GameTeam(FeedModel):
    """Per-team snapshot inside a schedule entry. Numbers arrive as text."""

    team_id: str
    score: str = ""
    win: str = ""
    loss: str = ""

    @property
    def points(self) -> Optional[int]:
        """Score as an integer, or None before tip-off."""
        try:
            return int(self.score)
        except ValueError:
            return None


class GamePeriod(FeedModel):
    current: int = 0
    kind: int = Field(default=0, alias="type")
    max_regular: int = 0


class GameNugget(FeedModel):
    text: str = ""


class Broadcaster(FeedModel):
    short_name: str = ""
    long_name: str = ""


class NationalWatch(FeedModel):
    broadcasters: list[Broadcaster] = Field(default_factory=list)


class GameWatchVideo(FeedModel):
    regional_blackout_codes: str = ""
    is_league_pass: bool = False
    is_national_blackout: bool = False
    is_tnt_ot: bool = Field(default=False, alias="isTNTOT")
    can_purchase: bool = False
    is_vr: bool = Field(default=False, alias="isVR")
    is_next_vr: bool = Field(default=False, alias="isNextVR")
    is_nba_on_tnt_vr: bool = Field(default=False, alias="isNBAOnTNTVR")
    is_magic_leap: bool = False
    is_oculus_venues: bool = False
    national: NationalWatch = Field(default_factory=NationalWatch)
    canadian: list[Any] = Field(default_factory=list)
    spanish_national: list[Any] = Field(default_factory=list, alias="spanish_national")


class GameWatchBroadcast(FeedModel):
    video: GameWatchVideo = Field(default_factory=GameWatchVideo)


class GameWatchDetails(FeedModel):
    broadcast: GameWatchBroadcast = Field(default_factory=GameWatchBroadcast)


class ScheduleGame(FeedModel):
    """Game entry from schedule.json."""

    game_id: str
    season_stage_id: int
    start_time_utc: AwareDatetime = Field(alias="startTimeUTC")
    h_team: GameTeam
    v_team: GameTeam

    game_url_code: str = ""
    status_num: int = 0
    extended_status_num: int = 0
    is_start_time_tbd: bool = Field(default=False, alias="isStartTimeTBD")
    start_date_eastern: str = ""
    start_time_eastern: str = ""
    is_neutral_venue: bool = False
    is_buzzer_beater: bool = False
    period: GamePeriod = Field(default_factory=GamePeriod)
    nugget: Optional[GameNugget] = None
    watch: GameWatchDetails = Field(default_factory=GameWatchDetails)

    @property
    def home_team_id(self) -> str:
        return self.h_team.team_id

    @property
    def away_team_id(self) -> str:
        return self.v_team.team_id

    @property
    def is_regular_season(self) -> bool:
        return self.season_stage_id == REGULAR_SEASON_STAGE


# =============================================================================
# Last Two Minutes report
# =============================================================================


class ReportGameSummary(ReportModel):
    """Header of an L2M report. Only used to cross-check team identity."""

    home_team: str = Field(default="", alias="Home_team")
    away_team: str = Field(default="", alias="Away_team")
    game_id: str = Field(default="", alias="GameId")
    home_team_score: int = Field(default=0, alias="HomeTeamScore")
    visitor_team_score: int = Field(default=0, alias="VisitorTeamScore")
    game_date: str = Field(default="", alias="GameDate")
    home_team_id: int = Field(alias="HomeTeamId")
    away_team_id: int = Field(alias="AwayTeamId")
    home_team_abbr: str = Field(default="", alias="Home_team_abbr")
    away_team_abbr: str = Field(default="", alias="Away_team_abbr")
    l2m_comments: Any = Field(default=None, alias="L2M_Comments")
    game_date_out: str = Field(default="", alias="GameDateOut")


class ReportStat(ReportModel):
    """One tally line, e.g. "Errors in Favor" with home/away counts."""

    stats_name: str = ""
    home: int = 0
    away: int = 0


class ReportEntry(ReportModel):
    """A single reviewed possession."""

    period_name: str = Field(default="", alias="PeriodName")
    pc_time: str = Field(default="", alias="PCTime")
    imposible_indicator: Any = Field(default=None, alias="ImposibleIndicator")
    comment: Optional[str] = Field(default=None, alias="Comment")
    call_rating_name: str = Field(default="", alias="CallRatingName")
    call_type: str = Field(default="", alias="CallType")
    committing_player: Optional[str] = Field(default=None, alias="CP")
    disadvantaged_player: Optional[str] = Field(default=None, alias="DP")
    difficulty: str = Field(default="", alias="Difficulty")
    video_link: str = Field(default="", alias="VideolLink")
    qualifier: Any = Field(default=None, alias="Qualifier")
    pos_id: Any = Field(default=None, alias="posID")
    pos_start: str = Field(default="", alias="posStart")
    pos_end: str = Field(default="", alias="posEnd")
    pos_team_id: Any = Field(default=None, alias="posTeamId")
    team_id_in_favor: Any = Field(default=None, alias="teamIdInFavor")
    error_in_favor: str = Field(default="", alias="errorInFavor")
    img_chart: Any = Field(default=None, alias="imgChart")


class LastTwoMinutesReport(ReportModel):
    """An L2M report document. All three sections must be present."""

    game: list[ReportGameSummary]
    stats: list[ReportStat]
    l2m: list[ReportEntry]

    @property
    def summary(self) -> Optional[ReportGameSummary]:
        return self.game[0] if self.game else None
