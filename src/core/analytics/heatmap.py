"""Positional heatmap samples and multi-match timeline summary."""

import logging
from collections import Counter
from collections.abc import Iterable, Sequence

import numpy as np

from src.contracts.common import Position
from src.contracts.events import AnnotatedEventKind, EventType, HeatmapCategory
from src.contracts.match import Match
from src.contracts.timeline import MatchTimeline
from src.contracts.timeline_analysis import (
    HeatmapData,
    HeatmapSample,
    MatchTimelineAnalysis,
    TimelineAggregateSummary,
    TimelineAnalysisReport,
)
from src.core.analytics.timeline_aggregator import analyze_match_timeline, resolve_slots
from src.core.observability import trace_performance
from src.core.utils.map_zones import zone_label

logger = logging.getLogger(__name__)

MatchWithTimeline = tuple[Match, MatchTimeline]


def _sample(match_id: str, category: HeatmapCategory, timestamp: int, pos: Position) -> HeatmapSample:
    return HeatmapSample(
        match_id=match_id,
        category=category,
        minute=max(0, timestamp) // 60000,
        x=pos.x,
        y=pos.y,
        zone=zone_label(pos.x, pos.y),
    )


def samples_for_timeline(match_id: str, timeline: MatchTimeline, slot: int) -> list[HeatmapSample]:
    """Frame positions, fights and ward placements for one slot in one match."""
    samples: list[HeatmapSample] = []
    last_position: Position | None = None

    for frame in timeline.info.frames:
        participant_frame = frame.frame_for(slot)
        if participant_frame is not None and participant_frame.position is not None:
            last_position = participant_frame.position
            samples.append(_sample(match_id, HeatmapCategory.POSITION, frame.timestamp, last_position))

        for event in frame.events:
            if event.type == EventType.CHAMPION_KILL.value and event.position is not None:
                if event.killer_id == slot:
                    category = HeatmapCategory.KILL
                elif event.victim_id == slot:
                    category = HeatmapCategory.DEATH
                elif slot in event.assisting_participant_ids:
                    category = HeatmapCategory.ASSIST
                else:
                    continue
                samples.append(_sample(match_id, category, event.timestamp, event.position))

            elif event.type == EventType.WARD_PLACED.value and event.creator_id == slot:
                # Ward events carry no coordinates; use the nearest known frame position
                position = event.position or last_position
                if position is None:
                    continue
                samples.append(_sample(match_id, HeatmapCategory.WARD, event.timestamp, position))

    return samples


def extract_heatmap(pairs: Iterable[MatchWithTimeline], puuid: str) -> HeatmapData:
    """Pool positional samples for ``puuid`` across matches."""
    samples: list[HeatmapSample] = []
    for match, timeline in pairs:
        slot, _ = resolve_slots(match, timeline, puuid)
        if slot is None:
            logger.debug("Player %s not in timeline %s", puuid, timeline.metadata.match_id)
            continue
        samples.extend(samples_for_timeline(match.match_id, timeline, slot))
    return HeatmapData(samples=samples)


def _mean_or_none(values: list[float]) -> float | None:
    if not values:
        return None
    return round(float(np.mean(values)), 1)


def summarize_timelines(
    analyses: Sequence[MatchTimelineAnalysis],
    heatmap: HeatmapData | None = None,
) -> TimelineAggregateSummary:
    """Headline numbers across analysed matches.

    Deaths and kills come from the annotated events; ward counts and the most
    dangerous zone need the heatmap and stay empty without it.
    """
    first_deaths: list[float] = []
    leads_at_10: list[float] = []
    leads_at_15: list[float] = []
    deaths = kills = 0

    for analysis in analyses:
        player_deaths = [
            e for e in analysis.events if e.is_player and e.kind == AnnotatedEventKind.DEATH.value
        ]
        deaths += len(player_deaths)
        kills += sum(
            1 for e in analysis.events if e.is_player and e.kind == AnnotatedEventKind.KILL.value
        )
        if player_deaths:
            first_deaths.append(player_deaths[0].timestamp / 60000)

        lead = analysis.gold_lead_at(10)
        if lead is not None:
            leads_at_10.append(lead)
        lead = analysis.gold_lead_at(15)
        if lead is not None:
            leads_at_15.append(lead)

    wards = 0
    dangerous_zone = None
    if heatmap is not None:
        wards = len(heatmap.filter([HeatmapCategory.WARD]))
        death_zones = Counter(
            s.zone for s in heatmap.filter([HeatmapCategory.DEATH]) if s.zone is not None
        )
        if death_zones:
            dangerous_zone = death_zones.most_common(1)[0][0]

    return TimelineAggregateSummary(
        games_analyzed=len(analyses),
        avg_first_death_minute=_mean_or_none(first_deaths),
        most_dangerous_zone=dangerous_zone,
        avg_gold_lead_at_10=_mean_or_none(leads_at_10),
        avg_gold_lead_at_15=_mean_or_none(leads_at_15),
        wards_placed_total=wards,
        deaths_total=deaths,
        kills_total=kills,
    )


@trace_performance
def build_timeline_report(pairs: Sequence[MatchWithTimeline], puuid: str) -> TimelineAnalysisReport:
    """Analyse every match, pool the heatmap and summarise."""
    analyses = [analyze_match_timeline(match, timeline, puuid) for match, timeline in pairs]
    heatmap = extract_heatmap(pairs, puuid)
    return TimelineAnalysisReport(
        matches=analyses,
        heatmap=heatmap,
        summary=summarize_timelines(analyses, heatmap),
    )
