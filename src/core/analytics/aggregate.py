"""Aggregate performance statistics - pure domain functions with zero I/O.

Reduces a match list into overall and per-champion statistics for the
tracked player, plus mirrored averages for the direct lane opponents.

Missing numeric fields are absent, not zero: an unrecorded value neither
adds to a total nor counts toward that metric's average. Kill participation
is averaged per match (not recomputed from summed totals) so high-kill games
do not dominate.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from src.config.settings import get_settings
from src.contracts.analytics import (
    AggregateStats,
    ChampionMatchup,
    ChampionStat,
    OpponentAverages,
    OverallStats,
    SideStats,
    kda_ratio,
    safe_ratio,
)
from src.contracts.common import TeamSide
from src.contracts.match import Match, Participant
from src.core.analytics.roles import find_lane_opponent, find_participant
from src.core.observability import trace_performance

logger = logging.getLogger(__name__)

SOLO_KILLS = "soloKills"
TURRET_PLATES = "turretPlatesTaken"


@dataclass
class _Mean:
    """Running mean that ignores absent values."""

    values: list[float] = field(default_factory=list)

    def add(self, value: float | None) -> None:
        if value is not None:
            self.values.append(float(value))

    @property
    def total(self) -> float:
        return float(sum(self.values))

    @property
    def mean(self) -> float:
        return float(np.mean(self.values)) if self.values else 0.0


@dataclass
class _PerformanceTotals:
    """Accumulated per-match statistics for one side of the lane."""

    games: int = 0
    kills: _Mean = field(default_factory=_Mean)
    deaths: _Mean = field(default_factory=_Mean)
    assists: _Mean = field(default_factory=_Mean)
    kill_participation: _Mean = field(default_factory=_Mean)
    vision_score: _Mean = field(default_factory=_Mean)
    gold_earned: _Mean = field(default_factory=_Mean)
    solo_kills: _Mean = field(default_factory=_Mean)
    turret_plates: _Mean = field(default_factory=_Mean)
    cs: float = 0.0
    cs_minutes: float = 0.0

    def add(self, match: Match, participant: Participant) -> None:
        minutes = match.info.game_duration_minutes
        self.games += 1
        self.kills.add(participant.kills)
        self.deaths.add(participant.deaths)
        self.assists.add(participant.assists)
        self.vision_score.add(participant.vision_score)
        self.gold_earned.add(participant.gold_earned)
        self.solo_kills.add(participant.challenge(SOLO_KILLS))
        self.turret_plates.add(participant.challenge(TURRET_PLATES))

        if participant.total_minions_killed is not None or participant.neutral_minions_killed is not None:
            self.cs += participant.creep_score
            self.cs_minutes += minutes

        team_kills = match.info.team_kills(participant.team_id)
        if team_kills > 0:
            takedowns = (participant.kills or 0) + (participant.assists or 0)
            self.kill_participation.add(takedowns / team_kills)

    @property
    def kda(self) -> float:
        return kda_ratio(int(self.kills.total), int(self.deaths.total), int(self.assists.total))

    @property
    def cs_per_minute(self) -> float:
        return safe_ratio(self.cs, self.cs_minutes)


def _champion_key(player: Participant) -> str:
    if player.champion_name:
        return player.champion_name
    if player.champion_id is not None:
        return str(player.champion_id)
    return "Unknown"


def _recent(matches: Sequence[Match], limit: int | None) -> Sequence[Match]:
    if limit is None:
        limit = get_settings().recent_match_limit
    return matches[:limit] if limit > 0 else matches


@trace_performance
def calculate_aggregate_stats(
    matches: Sequence[Match],
    puuid: str,
    limit: int | None = None,
) -> AggregateStats:
    """Overall, per-champion and mirrored lane-opponent statistics.

    Args:
        matches: Match list, newest first (role-filtered or not)
        puuid: Tracked player
        limit: Cap to the most recent N matches; None uses the configured
            default and 0 disables the cap

    Returns:
        AggregateStats; empty (all zero) when no match qualifies
    """
    player_totals = _PerformanceTotals()
    opponent_totals = _PerformanceTotals()
    wins = 0
    total_minutes = 0.0
    sides = {TeamSide.BLUE.value: SideStats(), TeamSide.RED.value: SideStats()}
    champions: dict[str, ChampionStat] = {}

    for match in _recent(matches, limit):
        player = find_participant(match, puuid)
        if player is None or not match.info.game_duration:
            continue

        player_totals.add(match, player)
        total_minutes += match.info.game_duration_minutes
        if player.win:
            wins += 1

        side = sides.get(player.team_id)
        if side is not None:
            side.games += 1
            if player.win:
                side.wins += 1

        opponent = find_lane_opponent(match, player)
        if opponent is not None:
            opponent_totals.add(match, opponent)

        key = _champion_key(player)
        champ = champions.get(key)
        if champ is None:
            champ = ChampionStat(champion_name=key)
            champions[key] = champ
        champ.games += 1
        if player.win:
            champ.wins += 1
        else:
            champ.losses += 1
        champ.kills += player.kills or 0
        champ.deaths += player.deaths or 0
        champ.assists += player.assists or 0
        champ.solo_kills += player.challenge(SOLO_KILLS) or 0.0
        champ.cs += player.creep_score
        champ.minutes += match.info.game_duration_minutes

    games = player_totals.games
    overall = OverallStats(
        games=games,
        wins=wins,
        losses=games - wins,
        win_rate=safe_ratio(wins, games) * 100,
        kda=player_totals.kda,
        avg_kills=player_totals.kills.mean,
        avg_deaths=player_totals.deaths.mean,
        avg_assists=player_totals.assists.mean,
        avg_cs_per_minute=player_totals.cs_per_minute,
        avg_kill_participation=player_totals.kill_participation.mean * 100,
        avg_vision_score=player_totals.vision_score.mean,
        avg_gold_earned=player_totals.gold_earned.mean,
        avg_solo_kills=player_totals.solo_kills.mean,
        avg_turret_plates=player_totals.turret_plates.mean,
        avg_game_minutes=safe_ratio(total_minutes, games),
        blue_side=sides[TeamSide.BLUE.value],
        red_side=sides[TeamSide.RED.value],
    )
    opponent_avg = OpponentAverages(
        games=opponent_totals.games,
        kda=opponent_totals.kda,
        avg_cs_per_minute=opponent_totals.cs_per_minute,
        avg_kill_participation=opponent_totals.kill_participation.mean * 100,
        avg_vision_score=opponent_totals.vision_score.mean,
        avg_gold_earned=opponent_totals.gold_earned.mean,
        avg_solo_kills=opponent_totals.solo_kills.mean,
        avg_turret_plates=opponent_totals.turret_plates.mean,
    )

    # Stable sort: equal game counts keep first-seen (most recent) order
    champion_stats = sorted(champions.values(), key=lambda c: c.games, reverse=True)

    logger.debug(
        "Aggregated %d games for %s (%d with lane opponent, %d champions)",
        games,
        puuid,
        opponent_totals.games,
        len(champion_stats),
    )
    return AggregateStats(overall=overall, opponent=opponent_avg, champion_stats=champion_stats)


def calculate_champion_matchups(
    matches: Sequence[Match],
    puuid: str,
    limit: int | None = None,
) -> list[ChampionMatchup]:
    """Win/loss record against each lane-opponent champion, most faced first."""
    matchups: dict[str, ChampionMatchup] = {}
    for match in _recent(matches, limit):
        player = find_participant(match, puuid)
        if player is None:
            continue
        opponent = find_lane_opponent(match, player)
        if opponent is None or not opponent.champion_name:
            continue
        entry = matchups.setdefault(
            opponent.champion_name, ChampionMatchup(opponent_champion=opponent.champion_name)
        )
        if player.win:
            entry.wins += 1
        else:
            entry.losses += 1
    return sorted(matchups.values(), key=lambda m: m.total, reverse=True)
