"""
Match information data contracts for Riot API Match-V5.

Only the subset of fields the analytics engine reads is modelled; unknown
fields in the payload are ignored.
"""

import math
from datetime import UTC, datetime
from numbers import Real
from typing import Any

from pydantic import Field, field_validator

from .common import BaseContract, is_valid_role


class Participant(BaseContract):
    """Participant (player) information in a match."""

    # Identity
    puuid: str = Field(..., description="Player's PUUID")
    participant_id: int | None = Field(None, ge=1, le=16, description="Timeline slot")
    team_id: int = Field(..., description="100 (blue) or 200 (red)")
    riot_id_game_name: str | None = Field(None, description="Riot ID game name")
    riot_id_tagline: str | None = Field(None, description="Riot ID tagline")

    # Champion and role
    champion_id: int | None = Field(None, description="Champion ID")
    champion_name: str | None = Field(None, description="Champion name (Data Dragon id)")
    team_position: str | None = Field(None, description="Assigned position")

    # Core stats (None = not recorded)
    kills: int | None = Field(None, ge=0)
    deaths: int | None = Field(None, ge=0)
    assists: int | None = Field(None, ge=0)
    gold_earned: int | None = Field(None, ge=0)
    total_minions_killed: int | None = Field(None, ge=0)
    neutral_minions_killed: int | None = Field(None, ge=0)
    vision_score: int | None = Field(None, ge=0)

    # Game flow
    win: bool = Field(False)
    game_ended_in_early_surrender: bool = Field(False)

    # Challenges: sparse metric name -> value map
    challenges: dict[str, float] = Field(default_factory=dict)

    @field_validator("challenges", mode="before")
    @classmethod
    def keep_numeric_challenges(cls, v: Any) -> dict[str, float]:
        """Drop absent and non-numeric entries (id lists, flags)."""
        if not isinstance(v, dict):
            return {}
        cleaned: dict[str, float] = {}
        for key, value in v.items():
            if isinstance(value, bool) or not isinstance(value, Real):
                continue
            number = float(value)
            if math.isnan(number):
                continue
            cleaned[str(key)] = number
        return cleaned

    @property
    def has_valid_role(self) -> bool:
        return is_valid_role(self.team_position)

    @property
    def creep_score(self) -> int:
        """Lane minions plus jungle monsters."""
        return (self.total_minions_killed or 0) + (self.neutral_minions_killed or 0)

    @property
    def display_name(self) -> str:
        if self.riot_id_game_name and self.riot_id_tagline:
            return f"{self.riot_id_game_name}#{self.riot_id_tagline}"
        return self.riot_id_game_name or self.champion_name or "Unknown"

    def challenge(self, key: str) -> float | None:
        """Recorded challenge value or None when absent."""
        return self.challenges.get(key)


class MatchInfo(BaseContract):
    """Match information used by the analytics engine."""

    game_creation: int | None = Field(None, description="Game creation timestamp (epoch ms)")
    game_duration: int = Field(0, ge=0, description="Game duration in seconds")
    game_mode: str | None = Field(None, description="Game mode")
    queue_id: int | None = Field(None, description="Queue ID")
    participants: tuple[Participant, ...] = Field(default_factory=tuple)

    @property
    def game_duration_minutes(self) -> float:
        return self.game_duration / 60

    @property
    def game_creation_date(self) -> datetime | None:
        """Convert game creation to datetime."""
        if self.game_creation is None:
            return None
        return datetime.fromtimestamp(self.game_creation / 1000, tz=UTC)

    def get_participant_by_puuid(self, puuid: str) -> Participant | None:
        """Get participant by PUUID."""
        for participant in self.participants:
            if participant.puuid == puuid:
                return participant
        return None

    def get_participant_by_slot(self, participant_id: int) -> Participant | None:
        for participant in self.participants:
            if participant.participant_id == participant_id:
                return participant
        return None

    def get_team_participants(self, team_id: int) -> list[Participant]:
        """Get all participants for a team."""
        return [p for p in self.participants if p.team_id == team_id]

    def team_kills(self, team_id: int) -> int:
        return sum(p.kills or 0 for p in self.participants if p.team_id == team_id)


class MatchMetadata(BaseContract):
    """Match metadata."""

    match_id: str = Field(..., description="Match ID")
    participants: tuple[str, ...] = Field(default_factory=tuple, description="Participant PUUIDs")


class Match(BaseContract):
    """Complete match data from Riot API."""

    metadata: MatchMetadata
    info: MatchInfo

    @property
    def match_id(self) -> str:
        return self.metadata.match_id
