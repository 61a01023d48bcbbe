"""Contract models for data validation."""

from .analytics import (
    AggregateStats,
    ChampionMatchup,
    ChampionStat,
    ConsistencyReport,
    ConsistencyStat,
    OpponentAverages,
    OverallStats,
    RoleResolution,
    SideStats,
)
from .assistant_context import AssistantContext, RankSummary
from .common import MULTIROLE, Position, TeamPosition, TeamSide
from .events import AnnotatedEventKind, EventSide, EventType, HeatmapCategory
from .match import Match, MatchInfo, Participant
from .timeline import Frame, MatchTimeline, ParticipantFrame, TimelineEvent
from .timeline_analysis import (
    BuildOrder,
    GoldLeadPoint,
    HeatmapData,
    HeatmapSample,
    MatchEventEntry,
    MatchTimelineAnalysis,
    SkillOrder,
    TimelineAggregateSummary,
    TimelineAnalysisReport,
)

__all__ = [
    "Match",
    "MatchInfo",
    "Participant",
    "MatchTimeline",
    "Frame",
    "ParticipantFrame",
    "TimelineEvent",
    "EventType",
    "AnnotatedEventKind",
    "EventSide",
    "HeatmapCategory",
    "Position",
    "TeamPosition",
    "TeamSide",
    "MULTIROLE",
    "RoleResolution",
    "SideStats",
    "ChampionStat",
    "OverallStats",
    "OpponentAverages",
    "AggregateStats",
    "ChampionMatchup",
    "ConsistencyStat",
    "ConsistencyReport",
    "BuildOrder",
    "SkillOrder",
    "MatchEventEntry",
    "GoldLeadPoint",
    "MatchTimelineAnalysis",
    "HeatmapSample",
    "HeatmapData",
    "TimelineAggregateSummary",
    "TimelineAnalysisReport",
    "AssistantContext",
    "RankSummary",
]
