"""Shared pytest fixtures: Match-V5 payload factories.

Factories build contracts from Riot-shaped (camelCase) payloads so the tests
exercise alias handling the same way real API data does.
"""

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from src.config.settings import get_settings
from src.contracts.match import Match, Participant
from src.contracts.timeline import MatchTimeline

PLAYER = "player-puuid"
OPPONENT = "opponent-puuid"


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Isolate every test from a developer .env and cached settings."""
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def participant_payload(
    puuid: str,
    *,
    team_id: int = 100,
    position: str = "TOP",
    champion: str = "Garen",
    participant_id: int | None = None,
    challenges: dict[str, Any] | None = None,
    **stats: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "puuid": puuid,
        "teamId": team_id,
        "teamPosition": position,
        "championName": champion,
        "challenges": challenges or {},
    }
    if participant_id is not None:
        payload["participantId"] = participant_id
    payload.update(stats)
    return payload


@pytest.fixture
def make_participant() -> Callable[..., Participant]:
    def _make(puuid: str = PLAYER, **kwargs: Any) -> Participant:
        return Participant.model_validate(participant_payload(puuid, **kwargs))

    return _make


@pytest.fixture
def make_match() -> Callable[..., Match]:
    """Match from participant payloads (see ``participant_payload``)."""

    def _make(
        participants: list[dict[str, Any]],
        *,
        match_id: str = "NA1_1000",
        duration: int = 1800,
        game_mode: str = "CLASSIC",
        creation: int = 1_700_000_000_000,
    ) -> Match:
        return Match.model_validate(
            {
                "metadata": {
                    "matchId": match_id,
                    "participants": [p["puuid"] for p in participants],
                },
                "info": {
                    "gameCreation": creation,
                    "gameDuration": duration,
                    "gameMode": game_mode,
                    "queueId": 420,
                    "participants": participants,
                },
            }
        )

    return _make


@pytest.fixture
def lane_match(make_match: Callable[..., Match]) -> Callable[..., Match]:
    """Two-player lane matchup: PLAYER on blue versus OPPONENT on red.

    Keyword arguments prefixed ``player_`` / ``opponent_`` are routed to the
    respective participant payload.
    """

    def _make(
        match_id: str = "NA1_1000",
        *,
        position: str = "TOP",
        player_challenges: dict[str, Any] | None = None,
        opponent_challenges: dict[str, Any] | None = None,
        win: bool = True,
        duration: int = 1800,
        opponent_position: str | None = None,
        **overrides: Any,
    ) -> Match:
        player_stats = {k[7:]: v for k, v in overrides.items() if k.startswith("player_")}
        opponent_stats = {k[9:]: v for k, v in overrides.items() if k.startswith("opponent_")}
        player_stats.setdefault("champion", "Garen")
        opponent_stats.setdefault("champion", "Darius")
        return make_match(
            [
                participant_payload(
                    PLAYER,
                    team_id=100,
                    position=position,
                    participant_id=1,
                    challenges=player_challenges,
                    win=win,
                    **player_stats,
                ),
                participant_payload(
                    OPPONENT,
                    team_id=200,
                    position=opponent_position or position,
                    participant_id=6,
                    challenges=opponent_challenges,
                    win=not win,
                    **opponent_stats,
                ),
            ],
            match_id=match_id,
            duration=duration,
        )

    return _make


@pytest.fixture
def make_timeline() -> Callable[..., MatchTimeline]:
    """Timeline from raw frame payloads.

    ``slots`` maps participantId -> puuid; defaults to PLAYER=1, OPPONENT=6.
    """

    def _make(
        frames: list[dict[str, Any]],
        *,
        match_id: str = "NA1_1000",
        slots: dict[int, str] | None = None,
    ) -> MatchTimeline:
        slots = slots if slots is not None else {1: PLAYER, 6: OPPONENT}
        return MatchTimeline.model_validate(
            {
                "metadata": {"matchId": match_id, "participants": list(slots.values())},
                "info": {
                    "frameInterval": 60000,
                    "frames": frames,
                    "participants": [
                        {"participantId": slot, "puuid": puuid} for slot, puuid in slots.items()
                    ],
                },
            }
        )

    return _make


def _frame_payload(
    minute: int,
    events: list[dict[str, Any]] | None = None,
    gold: dict[int, int] | None = None,
    positions: dict[int, tuple[int, int]] | None = None,
) -> dict[str, Any]:
    """Raw frame payload at ``minute`` with optional per-slot gold/positions."""
    slots = set(gold or {}) | set(positions or {})
    participant_frames: dict[str, Any] = {}
    for slot in sorted(slots):
        entry: dict[str, Any] = {"participantId": slot}
        if gold and slot in gold:
            entry["totalGold"] = gold[slot]
        if positions and slot in positions:
            x, y = positions[slot]
            entry["position"] = {"x": x, "y": y}
        participant_frames[str(slot)] = entry
    return {
        "timestamp": minute * 60000,
        "participantFrames": participant_frames,
        "events": events or [],
    }


@pytest.fixture
def make_frame() -> Callable[..., dict[str, Any]]:
    return _frame_payload
