"""AI-assistant briefing builder.

Pure function over the engine outputs: it formats aggregate statistics,
consistency rankings and a window of recent matches into an
``AssistantContext``. Delivering the briefing to a chat service is the
caller's job.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from src.config.settings import get_settings
from src.contracts.analytics import kda_ratio, safe_ratio
from src.contracts.assistant_context import (
    AssistantContext,
    ChampionBrief,
    MatchupBrief,
    MetricBrief,
    OpponentBrief,
    OpponentMatchDetail,
    RankSummary,
    RecentMatchDetail,
)
from src.contracts.common import MULTIROLE
from src.contracts.match import Match, Participant
from src.core.analytics.aggregate import calculate_aggregate_stats, calculate_champion_matchups
from src.core.analytics.consistency import calculate_consistency
from src.core.analytics.formatters import format_decimal, format_kda, format_percent
from src.core.analytics.roles import find_lane_opponent, find_participant, resolve_main_role
from src.core.observability import trace_critical

logger = logging.getLogger(__name__)

TURRET_PLATES = "turretPlatesTaken"


def _per_match_line(match: Match, participant: Participant) -> dict[str, Any]:
    minutes = match.info.game_duration_minutes
    team_kills = match.info.team_kills(participant.team_id)
    takedowns = (participant.kills or 0) + (participant.assists or 0)
    return {
        "champion": participant.champion_name or "Unknown",
        "kda": format_kda(
            kda_ratio(participant.kills or 0, participant.deaths or 0, participant.assists or 0)
        ),
        "cs_per_min": round(safe_ratio(participant.creep_score, minutes), 1),
        "kill_participation": round(safe_ratio(takedowns, team_kills) * 100, 1),
        "vision_score": participant.vision_score or 0,
        "turret_plates": participant.challenge(TURRET_PLATES) or 0.0,
    }


def recent_match_details(
    matches: Sequence[Match],
    puuid: str,
    limit: int | None = None,
) -> list[RecentMatchDetail]:
    """Per-match lines with the lane opponent alongside, newest first."""
    if limit is None:
        limit = get_settings().assistant_recent_matches

    details: list[RecentMatchDetail] = []
    for match in matches:
        if len(details) >= limit:
            break
        player = find_participant(match, puuid)
        if player is None:
            continue
        opponent = find_lane_opponent(match, player)
        details.append(
            RecentMatchDetail(
                match_id=match.match_id,
                role=player.team_position if player.has_valid_role else None,
                win=bool(player.win),
                game_minutes=round(match.info.game_duration_minutes, 1),
                opponent=(
                    OpponentMatchDetail(**_per_match_line(match, opponent))
                    if opponent is not None
                    else None
                ),
                **_per_match_line(match, player),
            )
        )
    return details


def _coerce_rank(rank: RankSummary | Mapping[str, Any] | None) -> RankSummary | None:
    if rank is None or isinstance(rank, RankSummary):
        return rank
    return RankSummary.model_validate(rank)


@trace_critical
def build_assistant_context(
    summoner_name: str,
    tag_line: str,
    matches: Sequence[Match],
    puuid: str,
    rank: RankSummary | Mapping[str, Any] | None = None,
) -> AssistantContext:
    """Briefing for the chat assistant.

    Args:
        summoner_name: Riot ID game name
        tag_line: Riot ID tag line
        matches: Match list, newest first
        puuid: Tracked player
        rank: Ranked standing (tier, rank, leaguePoints, wins, losses)

    Returns:
        AssistantContext; defaults ("0.0", "Unranked", empty lists) when no
        match contains the player
    """
    settings = get_settings()
    standing = _coerce_rank(rank)
    context = AssistantContext(
        summoner_name=f"{summoner_name}#{tag_line}",
        rank=standing.display if standing else "Unranked",
        total_wins=standing.wins if standing else 0,
        total_losses=standing.losses if standing else 0,
        total_games_analyzed=len(matches),
    )

    stats = calculate_aggregate_stats(matches, puuid)
    if stats.overall.games == 0:
        logger.debug("No games with %s; returning empty briefing", puuid)
        return context

    resolution = resolve_main_role(matches, puuid)
    if resolution.is_multirole:
        context.primary_role = MULTIROLE
    elif resolution.role:
        context.primary_role = resolution.role

    overall = stats.overall
    context.win_rate = format_decimal(overall.win_rate)
    context.kda = format_kda(overall.kda)
    context.avg_kills = format_decimal(overall.avg_kills)
    context.avg_deaths = format_decimal(overall.avg_deaths)
    context.avg_assists = format_decimal(overall.avg_assists)
    context.avg_cs_per_min = format_decimal(overall.avg_cs_per_minute)
    context.avg_kill_participation = format_decimal(overall.avg_kill_participation)
    context.avg_solo_kills = format_decimal(overall.avg_solo_kills)
    context.avg_turret_plates = format_decimal(overall.avg_turret_plates)
    context.avg_vision_score = format_decimal(overall.avg_vision_score)
    context.blue_side_win_rate = format_decimal(overall.blue_side.win_rate)
    context.red_side_win_rate = format_decimal(overall.red_side.win_rate)

    context.top_champions = [
        ChampionBrief(
            name=c.champion_name,
            games=c.games,
            win_rate=format_decimal(c.win_rate, 0),
            kda=format_kda(c.kda),
        )
        for c in stats.champion_stats[: settings.assistant_top_champions]
    ]

    opponent = stats.opponent
    if opponent.games:
        context.opponent_stats = OpponentBrief(
            avg_kda=format_kda(opponent.kda),
            avg_cs_per_min=format_decimal(opponent.avg_cs_per_minute),
            avg_kill_participation=format_decimal(opponent.avg_kill_participation),
            avg_solo_kills=format_decimal(opponent.avg_solo_kills),
            avg_turret_plates=format_decimal(opponent.avg_turret_plates),
            avg_vision_score=format_decimal(opponent.avg_vision_score),
        )

    context.recent_matches = recent_match_details(matches, puuid, settings.assistant_recent_matches)

    report = calculate_consistency(matches, puuid)
    display_limit = settings.consistency_display_limit
    context.top_strengths = [
        MetricBrief(name=s.display_name, consistency=format_percent(s.consistency))
        for s in report.strengths[:display_limit]
    ]
    context.top_weaknesses = [
        MetricBrief(name=s.display_name, consistency=format_percent(s.loss_consistency))
        for s in report.weaknesses[:display_limit]
    ]

    context.champion_matchups = [
        MatchupBrief(
            opponent_champion=m.opponent_champion,
            wins=m.wins,
            losses=m.losses,
            total=m.total,
            win_rate=format_percent(m.win_rate),
        )
        for m in calculate_champion_matchups(matches, puuid, settings.assistant_recent_matches)
    ]
    return context
