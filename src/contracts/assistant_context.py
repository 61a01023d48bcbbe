"""AI-assistant briefing contracts.

Every number is preformatted text so the briefing can be serialised into a
prompt as-is: one decimal for averages, two for KDA, "Perfect" for deathless
KDA and "N/A" for data that was never recorded.
"""

from pydantic import Field

from .common import BaseContract, OutputContract


class RankSummary(BaseContract):
    """Ranked queue standing supplied by the caller (League-V4 entry shape)."""

    tier: str
    rank: str
    league_points: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)

    @property
    def display(self) -> str:
        return f"{self.tier} {self.rank} ({self.league_points} LP)"


class OpponentMatchDetail(OutputContract):
    """Lane opponent line in a recent-match detail."""

    champion: str
    kda: str
    cs_per_min: float
    kill_participation: float
    vision_score: int
    turret_plates: float


class RecentMatchDetail(OutputContract):
    """One recent match as shown to the assistant."""

    match_id: str
    champion: str
    role: str | None = None
    win: bool
    kda: str
    cs_per_min: float
    kill_participation: float
    vision_score: int
    turret_plates: float
    game_minutes: float
    opponent: OpponentMatchDetail | None = None


class ChampionBrief(OutputContract):
    name: str
    games: int
    win_rate: str
    kda: str


class OpponentBrief(OutputContract):
    """Mirrored lane-opponent averages."""

    avg_kda: str
    avg_cs_per_min: str
    avg_kill_participation: str
    avg_solo_kills: str
    avg_turret_plates: str
    avg_vision_score: str


class MetricBrief(OutputContract):
    name: str
    consistency: str


class MatchupBrief(OutputContract):
    opponent_champion: str
    wins: int
    losses: int
    total: int
    win_rate: str


class AssistantContext(OutputContract):
    """Player briefing handed to the chat assistant."""

    summoner_name: str = Field(..., description="gameName#tagLine")
    rank: str = "Unranked"
    total_wins: int = 0
    total_losses: int = 0
    primary_role: str = "UNKNOWN"
    total_games_analyzed: int = 0
    win_rate: str = "0.0"
    kda: str = "0.00"
    avg_kills: str = "0.0"
    avg_deaths: str = "0.0"
    avg_assists: str = "0.0"
    avg_cs_per_min: str = "0.0"
    avg_kill_participation: str = "0.0"
    avg_solo_kills: str = "0.0"
    avg_turret_plates: str = "0.0"
    avg_vision_score: str = "0.0"
    top_champions: list[ChampionBrief] = Field(default_factory=list)
    blue_side_win_rate: str = "0.0"
    red_side_win_rate: str = "0.0"
    recent_matches: list[RecentMatchDetail] = Field(default_factory=list)
    opponent_stats: OpponentBrief | None = None
    top_strengths: list[MetricBrief] = Field(default_factory=list)
    top_weaknesses: list[MetricBrief] = Field(default_factory=list)
    champion_matchups: list[MatchupBrief] = Field(default_factory=list)
