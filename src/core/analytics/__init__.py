"""Match performance analytics engine.

Pure domain logic (zero I/O) that turns Match-V5 match and timeline payloads
into lane-opponent consistency rankings, aggregate statistics and structured
timeline views.

Components:
1. Role resolution and lane-opponent lookup
2. Aggregate statistics (overall, per-champion, mirrored opponent)
3. Consistency scoring against the lane opponent
4. Timeline aggregation and positional heatmaps
5. AI-assistant briefing
"""

from src.core.analytics.aggregate import calculate_aggregate_stats, calculate_champion_matchups
from src.core.analytics.assistant_context import build_assistant_context
from src.core.analytics.consistency import calculate_consistency
from src.core.analytics.heatmap import build_timeline_report, extract_heatmap, summarize_timelines
from src.core.analytics.metric_rules import DEFAULT_RULES, MetricRules
from src.core.analytics.roles import (
    filter_matches_for_role,
    find_lane_opponent,
    find_participant,
    resolve_main_role,
)
from src.core.analytics.timeline_aggregator import analyze_match_timeline

__all__ = [
    "DEFAULT_RULES",
    "MetricRules",
    "resolve_main_role",
    "filter_matches_for_role",
    "find_participant",
    "find_lane_opponent",
    "calculate_aggregate_stats",
    "calculate_champion_matchups",
    "calculate_consistency",
    "analyze_match_timeline",
    "extract_heatmap",
    "summarize_timelines",
    "build_timeline_report",
    "build_assistant_context",
]
