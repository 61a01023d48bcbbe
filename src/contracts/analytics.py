"""Analytics output contracts: aggregate statistics and consistency scoring.

These are derived, ephemeral models recomputed from a match list on every
request. Ratios follow one rule set:

- win rates and kill participation are percentages (0-100)
- KDA is ``math.inf`` ("Perfect") when deaths are 0 and kills+assists > 0
- every other ratio is 0.0 when its denominator is 0
"""

import math

from pydantic import Field, computed_field

from .common import OutputContract


def kda_ratio(kills: int, deaths: int, assists: int) -> float:
    """(K+A)/D with the "Perfect" sentinel for deathless games."""
    if deaths > 0:
        return (kills + assists) / deaths
    if kills + assists > 0:
        return math.inf
    return 0.0


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


class RoleResolution(OutputContract):
    """Outcome of main-role detection across a match set."""

    role: str | None = Field(None, description="Most played role, None if undeterminable")
    is_multirole: bool = Field(False, description="Top two roles are tied")
    counts: dict[str, int] = Field(default_factory=dict, description="Games per role")

    @property
    def has_role(self) -> bool:
        return self.role is not None


class SideStats(OutputContract):
    """Games and wins on one map side."""

    games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def win_rate(self) -> float:
        return safe_ratio(self.wins, self.games) * 100


class ChampionStat(OutputContract):
    """Per-champion rollup for the tracked player."""

    champion_name: str
    games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    kills: int = Field(0, ge=0)
    deaths: int = Field(0, ge=0)
    assists: int = Field(0, ge=0)
    solo_kills: float = Field(0.0, ge=0)
    cs: int = Field(0, ge=0)
    minutes: float = Field(0.0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def win_rate(self) -> float:
        return safe_ratio(self.wins, self.games) * 100

    @computed_field  # type: ignore[prop-decorator]
    @property
    def kda(self) -> float:
        return kda_ratio(self.kills, self.deaths, self.assists)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cs_per_minute(self) -> float:
        return safe_ratio(self.cs, self.minutes)


class OverallStats(OutputContract):
    """Overall averages for the tracked player."""

    games: int = Field(0, ge=0)
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    win_rate: float = Field(0.0, ge=0, le=100)
    kda: float = Field(0.0, ge=0)
    avg_kills: float = 0.0
    avg_deaths: float = 0.0
    avg_assists: float = 0.0
    avg_cs_per_minute: float = 0.0
    avg_kill_participation: float = Field(0.0, description="Mean per-match KP, percent")
    avg_vision_score: float = 0.0
    avg_gold_earned: float = 0.0
    avg_solo_kills: float = 0.0
    avg_turret_plates: float = 0.0
    avg_game_minutes: float = 0.0
    blue_side: SideStats = Field(default_factory=SideStats)
    red_side: SideStats = Field(default_factory=SideStats)


class OpponentAverages(OutputContract):
    """Mirrored statistics of the direct lane opponents."""

    games: int = Field(0, ge=0, description="Matches where a lane opponent was found")
    kda: float = Field(0.0, ge=0)
    avg_cs_per_minute: float = 0.0
    avg_kill_participation: float = 0.0
    avg_vision_score: float = 0.0
    avg_gold_earned: float = 0.0
    avg_solo_kills: float = 0.0
    avg_turret_plates: float = 0.0


class AggregateStats(OutputContract):
    """Aggregate performance statistics for one player."""

    overall: OverallStats = Field(default_factory=OverallStats)
    opponent: OpponentAverages = Field(default_factory=OpponentAverages)
    champion_stats: list[ChampionStat] = Field(default_factory=list)


class ChampionMatchup(OutputContract):
    """Results against one lane-opponent champion."""

    opponent_champion: str
    wins: int = 0
    losses: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total(self) -> int:
        return self.wins + self.losses

    @computed_field  # type: ignore[prop-decorator]
    @property
    def win_rate(self) -> float:
        return safe_ratio(self.wins, self.wins + self.losses) * 100


class ConsistencyStat(OutputContract):
    """How reliably the player wins or loses one metric against the lane opponent."""

    key: str = Field(..., description="Challenge metric name")
    display_name: str = Field(..., description="Human readable metric label")
    wins: int = Field(0, ge=0)
    losses: int = Field(0, ge=0)
    ties: int = Field(0, ge=0)
    lower_is_better: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_games(self) -> int:
        return self.wins + self.losses + self.ties

    @computed_field  # type: ignore[prop-decorator]
    @property
    def consistency(self) -> float:
        """Percentage of observed matches the player won on this metric."""
        return safe_ratio(self.wins, self.total_games) * 100

    @computed_field  # type: ignore[prop-decorator]
    @property
    def loss_consistency(self) -> float:
        """Percentage of observed matches the opponent won on this metric."""
        return safe_ratio(self.losses, self.total_games) * 100


class ConsistencyReport(OutputContract):
    """Ranked strengths and weaknesses versus the lane opponent."""

    role: str | None = None
    is_multirole: bool = False
    matches_considered: int = Field(0, ge=0)
    matches_with_opponent: int = Field(0, ge=0)
    strengths: list[ConsistencyStat] = Field(default_factory=list)
    weaknesses: list[ConsistencyStat] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.strengths and not self.weaknesses
