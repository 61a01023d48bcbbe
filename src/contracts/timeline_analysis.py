"""Timeline analysis output contracts.

Structured representation of one match's timeline (build order, skill order,
annotated events, gold-lead curve) plus multi-match heatmap samples and the
aggregate timeline summary.
"""

from collections.abc import Iterable

from pydantic import Field

from .common import OutputContract, Position
from .events import AnnotatedEventKind, EventSide, HeatmapCategory


class BuildItem(OutputContract):
    """One item purchase."""

    item_id: int
    timestamp: int = Field(..., description="Game time in milliseconds")
    minute_mark: int = Field(..., ge=0)


class BuildCluster(OutputContract):
    """Purchases made during one shopping trip."""

    start_minute: int = Field(..., ge=0)
    end_minute: int = Field(..., ge=0)
    items: list[BuildItem] = Field(default_factory=list)


class BuildOrder(OutputContract):
    """Chronological purchases and their recall clusters."""

    items: list[BuildItem] = Field(default_factory=list)
    clusters: list[BuildCluster] = Field(default_factory=list)


class SkillUp(OutputContract):
    """One ability level-up."""

    skill_slot: int = Field(..., ge=1, le=4, description="1=Q, 2=W, 3=E, 4=R")
    level: int = Field(..., ge=1, description="Champion level reached with this point")
    minute_mark: int = Field(..., ge=0)
    is_ultimate: bool = False
    is_evolve: bool = Field(False, description="Ability evolution; not a skill point")


class SkillOrder(OutputContract):
    """Level-up sequence and ability max priority."""

    level_ups: list[SkillUp] = Field(default_factory=list)
    max_order: list[int] = Field(
        default_factory=list, description="Basic ability slots, most leveled first"
    )


class MatchEventEntry(OutputContract):
    """Kill, structure or objective event involving the player or the opponent."""

    kind: AnnotatedEventKind
    timestamp: int
    minute_mark: int
    second_mark: int
    time_display: str = Field(..., description="m:ss")
    actor: str | None = None
    target: str | None = None
    is_player: bool = False
    is_opponent: bool = False
    side: EventSide
    lane_type: str | None = None
    monster_type: str | None = None
    position: Position | None = None


class GoldLeadPoint(OutputContract):
    """Gold comparison at one minute mark."""

    minute: int = Field(..., ge=0)
    player_gold: int
    opponent_gold: int
    gold_lead: int = Field(..., description="player - opponent")
    player_items: list[int] = Field(default_factory=list)
    opponent_items: list[int] = Field(default_factory=list)
    events: list[MatchEventEntry] = Field(default_factory=list)


class MatchTimelineAnalysis(OutputContract):
    """Everything the timeline view needs for one match."""

    match_id: str
    player_slot: int | None = None
    opponent_slot: int | None = None
    player_champion: str | None = None
    opponent_champion: str | None = None
    win: bool = False
    build_order: BuildOrder = Field(default_factory=BuildOrder)
    skill_order: SkillOrder = Field(default_factory=SkillOrder)
    events: list[MatchEventEntry] = Field(default_factory=list)
    gold_lead: list[GoldLeadPoint] = Field(default_factory=list)

    def gold_lead_at(self, minute: int) -> int | None:
        for point in self.gold_lead:
            if point.minute == minute:
                return point.gold_lead
        return None


class HeatmapSample(OutputContract):
    """A positional sample for heatmap rendering."""

    match_id: str
    category: HeatmapCategory
    minute: int = Field(..., ge=0)
    x: int
    y: int
    zone: str | None = None


class HeatmapData(OutputContract):
    """Positional samples across many matches."""

    samples: list[HeatmapSample] = Field(default_factory=list)

    def filter(
        self,
        categories: Iterable[HeatmapCategory | str] | None = None,
        max_minute: int | None = None,
    ) -> list[HeatmapSample]:
        """Samples in ``categories`` up to and including ``max_minute``."""
        wanted = None
        if categories is not None:
            wanted = {HeatmapCategory(c).value for c in categories}
        return [
            s
            for s in self.samples
            if (wanted is None or s.category in wanted)
            and (max_minute is None or s.minute <= max_minute)
        ]


class TimelineAggregateSummary(OutputContract):
    """Headline numbers across the analysed timelines."""

    games_analyzed: int = 0
    avg_first_death_minute: float | None = None
    most_dangerous_zone: str | None = None
    avg_gold_lead_at_10: float | None = None
    avg_gold_lead_at_15: float | None = None
    wards_placed_total: int = 0
    deaths_total: int = 0
    kills_total: int = 0


class TimelineAnalysisReport(OutputContract):
    """Per-match analyses, pooled heatmap and summary for one player."""

    matches: list[MatchTimelineAnalysis] = Field(default_factory=list)
    heatmap: HeatmapData = Field(default_factory=HeatmapData)
    summary: TimelineAggregateSummary = Field(default_factory=TimelineAggregateSummary)
