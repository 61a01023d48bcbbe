"""
Match Timeline data contracts for Riot API Match-V5.

The timeline feed identifies players by small integer slots
(``participantId``), not by PUUID; ``MatchTimeline.get_participant_by_puuid``
bridges the two.
"""

from typing import Any

from pydantic import Field, field_validator

from .common import BaseContract, Position


class TimelineEvent(BaseContract):
    """A discrete timeline event.

    Only the fields used by the analytics engine are typed; which ones are
    populated depends on ``type``.
    """

    type: str = Field(..., description="Event type, e.g. CHAMPION_KILL")
    timestamp: int = Field(0, description="Game time in milliseconds")

    participant_id: int | None = Field(None, description="Acting slot for item/skill events")
    creator_id: int | None = Field(None, description="Ward owner slot")
    killer_id: int | None = Field(None, description="Killer slot (0 = minion/turret)")
    victim_id: int | None = Field(None)
    assisting_participant_ids: tuple[int, ...] = Field(default_factory=tuple)

    item_id: int | None = Field(None)
    before_id: int | None = Field(None, description="Item id reverted by ITEM_UNDO")
    after_id: int | None = Field(None)

    skill_slot: int | None = Field(None, ge=1, le=4, description="1=Q, 2=W, 3=E, 4=R")
    level_up_type: str | None = Field(None, description="NORMAL or EVOLVE")

    ward_type: str | None = Field(None)
    building_type: str | None = Field(None)
    tower_type: str | None = Field(None)
    lane_type: str | None = Field(None)
    monster_type: str | None = Field(None)
    monster_sub_type: str | None = Field(None)
    team_id: int | None = Field(None)
    position: Position | None = Field(None)

    @field_validator("assisting_participant_ids", mode="before")
    @classmethod
    def default_assists(cls, v: Any) -> Any:
        return () if v is None else v

    @property
    def minute_mark(self) -> int:
        return max(0, self.timestamp) // 60000

    @property
    def second_mark(self) -> int:
        return (max(0, self.timestamp) % 60000) // 1000

    def involves(self, participant_id: int) -> bool:
        """Killer, victim or assist on this event."""
        return (
            self.killer_id == participant_id
            or self.victim_id == participant_id
            or participant_id in self.assisting_participant_ids
        )


class ParticipantFrame(BaseContract):
    """Participant state at a specific frame."""

    participant_id: int | None = Field(None)
    total_gold: int | None = Field(None, ge=0)
    current_gold: int | None = Field(None)
    level: int | None = Field(None)
    xp: int | None = Field(None)
    minions_killed: int | None = Field(None)
    jungle_minions_killed: int | None = Field(None)
    position: Position | None = Field(None)


class Frame(BaseContract):
    """A single per-minute snapshot in the match timeline."""

    timestamp: int = Field(..., description="Frame timestamp in milliseconds")
    participant_frames: dict[str, ParticipantFrame] = Field(
        default_factory=dict, description="Participant states indexed by slot string"
    )
    events: tuple[TimelineEvent, ...] = Field(
        default_factory=tuple, description="Events that occurred during this frame"
    )

    @property
    def minute(self) -> int:
        return max(0, self.timestamp) // 60000

    def frame_for(self, participant_id: int) -> ParticipantFrame | None:
        return self.participant_frames.get(str(participant_id))


class TimelineParticipant(BaseContract):
    """Participant slot mapping in timeline."""

    participant_id: int = Field(..., ge=1, le=16)
    puuid: str = Field(..., description="Player's PUUID")


class TimelineInfo(BaseContract):
    """Timeline information containing frames and metadata."""

    frame_interval: int = Field(60000, description="Milliseconds between frames (usually 60000)")
    frames: tuple[Frame, ...] = Field(default_factory=tuple)
    participants: tuple[TimelineParticipant, ...] = Field(default_factory=tuple)


class TimelineMetadata(BaseContract):
    """Timeline metadata."""

    match_id: str = Field(..., description="Match ID")
    participants: tuple[str, ...] = Field(default_factory=tuple)


class MatchTimeline(BaseContract):
    """Complete match timeline from Riot API Match-V5."""

    metadata: TimelineMetadata
    info: TimelineInfo

    def get_participant_by_puuid(self, puuid: str) -> int | None:
        """Get participant slot by PUUID."""
        for participant in self.info.participants:
            if participant.puuid == puuid:
                return participant.participant_id
        return None

    def known_slots(self) -> set[int]:
        return {p.participant_id for p in self.info.participants}

    def iter_events(self):
        """Yield events of every frame in feed order."""
        for frame in self.info.frames:
            yield from frame.events
