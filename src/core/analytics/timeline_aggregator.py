"""Per-match timeline aggregation - pure domain functions with zero I/O.

Turns one match's Match-V5 timeline into the structures the timeline view
and the assistant briefing need:

- build order, grouped into recall clusters
- skill order and ability max priority
- kill, structure, objective and ward events involving the player or opponent
- player-vs-opponent gold-lead curve with those events attached

The timeline feed identifies players by slot (``participantId``), so the
tracked PUUIDs are resolved against the timeline's own participant list
first. Events that reference slots the feed does not know are skipped.
"""

import logging
from dataclasses import dataclass, field

from src.config.settings import get_settings
from src.contracts.events import AnnotatedEventKind, EventSide, EventType
from src.contracts.match import Match
from src.contracts.timeline import MatchTimeline, TimelineEvent
from src.contracts.timeline_analysis import (
    BuildCluster,
    BuildItem,
    BuildOrder,
    GoldLeadPoint,
    MatchEventEntry,
    MatchTimelineAnalysis,
    SkillOrder,
    SkillUp,
)
from src.core.analytics.formatters import format_game_clock
from src.core.analytics.roles import find_lane_opponent, find_participant
from src.core.observability import trace_performance

logger = logging.getLogger(__name__)

ULTIMATE_SLOT = 4
BASIC_ABILITY_SLOTS = (1, 2, 3)
EVOLVE_LEVEL_UP = "EVOLVE"

_WARD_TYPES = {EventType.WARD_PLACED.value, EventType.WARD_KILL.value}
_ANNOTATED_TYPES = {
    EventType.CHAMPION_KILL.value,
    EventType.BUILDING_KILL.value,
    EventType.ELITE_MONSTER_KILL.value,
    EventType.TURRET_PLATE_DESTROYED.value,
    *_WARD_TYPES,
}


@dataclass
class SlotDirectory:
    """Timeline slot <-> champion label lookup for one match."""

    known_slots: set[int] = field(default_factory=set)
    champions: dict[int, str] = field(default_factory=dict)

    @classmethod
    def build(cls, match: Match, timeline: MatchTimeline) -> "SlotDirectory":
        directory = cls(known_slots=timeline.known_slots())
        for entry in timeline.info.participants:
            participant = match.info.get_participant_by_puuid(entry.puuid)
            if participant is not None and participant.champion_name:
                directory.champions[entry.participant_id] = participant.champion_name
        for participant in match.info.participants:
            slot = participant.participant_id
            if slot is None or slot in directory.champions or not participant.champion_name:
                continue
            if not directory.known_slots or slot in directory.known_slots:
                directory.champions[slot] = participant.champion_name
        return directory

    def label(self, slot: int | None) -> str | None:
        if not slot:
            return None
        return self.champions.get(slot, f"Participant {slot}")

    def references_unknown(self, event: TimelineEvent) -> bool:
        """True when the event names a slot missing from the feed's roster."""
        if not self.known_slots:
            return False
        referenced = [event.killer_id, event.victim_id, event.participant_id, event.creator_id]
        referenced.extend(event.assisting_participant_ids)
        return any(slot and slot not in self.known_slots for slot in referenced)


def _pretty(value: str | None) -> str | None:
    """``MID_LANE`` -> ``Mid Lane``."""
    if not value:
        return None
    return value.replace("_", " ").title()


# ----------------------------------------------------------------------------
# Build order
# ----------------------------------------------------------------------------


def extract_purchases(timeline: MatchTimeline, slot: int) -> list[BuildItem]:
    """Item purchases for ``slot`` in chronological order, undos applied."""
    purchases: list[BuildItem] = []
    for event in timeline.iter_events():
        if event.participant_id != slot:
            continue
        if event.type == EventType.ITEM_PURCHASED.value and event.item_id:
            purchases.append(
                BuildItem(
                    item_id=event.item_id,
                    timestamp=event.timestamp,
                    minute_mark=event.minute_mark,
                )
            )
        elif event.type == EventType.ITEM_UNDO.value and event.before_id:
            for index in range(len(purchases) - 1, -1, -1):
                if purchases[index].item_id == event.before_id:
                    del purchases[index]
                    break
    purchases.sort(key=lambda item: item.timestamp)
    return purchases


def cluster_purchases(items: list[BuildItem], gap_minutes: int) -> list[BuildCluster]:
    """Group consecutive purchases at most ``gap_minutes`` apart into one recall."""
    clusters: list[BuildCluster] = []
    for item in items:
        current = clusters[-1] if clusters else None
        if current is not None and item.minute_mark - current.end_minute <= gap_minutes:
            current.items.append(item)
            current.end_minute = item.minute_mark
            continue
        clusters.append(
            BuildCluster(start_minute=item.minute_mark, end_minute=item.minute_mark, items=[item])
        )
    return clusters


def build_order_for(
    timeline: MatchTimeline,
    slot: int,
    gap_minutes: int | None = None,
) -> BuildOrder:
    if gap_minutes is None:
        gap_minutes = get_settings().build_cluster_gap_minutes
    items = extract_purchases(timeline, slot)
    return BuildOrder(items=items, clusters=cluster_purchases(items, gap_minutes))


# ----------------------------------------------------------------------------
# Skill order
# ----------------------------------------------------------------------------


def skill_order_for(timeline: MatchTimeline, slot: int) -> SkillOrder:
    """Level-up sequence plus basic abilities ranked by points invested.

    Equal point counts rank by which slot received its last point first,
    which is the order the abilities were maxed. Evolutions (``EVOLVE``
    level-ups) are listed but neither raise the champion level nor count
    toward the max order.
    """
    level_ups: list[SkillUp] = []
    points = 0
    counts = {s: 0 for s in BASIC_ABILITY_SLOTS}
    last_point_at = {s: 0 for s in BASIC_ABILITY_SLOTS}

    for event in timeline.iter_events():
        if event.type != EventType.SKILL_LEVEL_UP.value or event.participant_id != slot:
            continue
        if event.skill_slot is None:
            continue
        is_evolve = event.level_up_type == EVOLVE_LEVEL_UP
        if not is_evolve:
            points += 1
        level_ups.append(
            SkillUp(
                skill_slot=event.skill_slot,
                level=max(points, 1),
                minute_mark=event.minute_mark,
                is_ultimate=event.skill_slot == ULTIMATE_SLOT,
                is_evolve=is_evolve,
            )
        )
        if not is_evolve and event.skill_slot in counts:
            counts[event.skill_slot] += 1
            last_point_at[event.skill_slot] = event.timestamp

    max_order = sorted(
        (s for s in BASIC_ABILITY_SLOTS if counts[s] > 0),
        key=lambda s: (-counts[s], last_point_at[s], s),
    )
    return SkillOrder(level_ups=level_ups, max_order=max_order)


# ----------------------------------------------------------------------------
# Annotated events
# ----------------------------------------------------------------------------


def _acting_slot(event: TimelineEvent) -> int | None:
    if event.type == EventType.WARD_PLACED.value:
        return event.creator_id
    return event.killer_id


def _involves(event: TimelineEvent, slot: int | None) -> bool:
    """Wards belong to their owner or destroyer; fights to every participant."""
    if slot is None:
        return False
    if event.type in _WARD_TYPES:
        return _acting_slot(event) == slot
    return event.involves(slot)


def _event_kind(event: TimelineEvent, subject: int | None) -> AnnotatedEventKind:
    if event.type == EventType.CHAMPION_KILL.value:
        if event.killer_id == subject:
            return AnnotatedEventKind.KILL
        if event.victim_id == subject:
            return AnnotatedEventKind.DEATH
        return AnnotatedEventKind.ASSIST
    if event.type == EventType.BUILDING_KILL.value:
        return AnnotatedEventKind.BUILDING
    if event.type == EventType.TURRET_PLATE_DESTROYED.value:
        return AnnotatedEventKind.PLATE
    if event.type == EventType.WARD_PLACED.value:
        return AnnotatedEventKind.WARD_PLACED
    if event.type == EventType.WARD_KILL.value:
        return AnnotatedEventKind.WARD_KILLED
    return AnnotatedEventKind.OBJECTIVE


def _event_target(event: TimelineEvent, slots: SlotDirectory) -> str | None:
    if event.type == EventType.CHAMPION_KILL.value:
        return slots.label(event.victim_id)
    if event.type == EventType.BUILDING_KILL.value:
        parts = [_pretty(event.lane_type), _pretty(event.tower_type or event.building_type)]
        return " ".join(p for p in parts if p) or None
    if event.type == EventType.TURRET_PLATE_DESTROYED.value:
        lane = _pretty(event.lane_type)
        return f"{lane} Plate" if lane else "Turret Plate"
    if event.type in _WARD_TYPES:
        return _pretty(event.ward_type)
    return _pretty(event.monster_sub_type or event.monster_type)


def annotate_events(
    timeline: MatchTimeline,
    slots: SlotDirectory,
    player_slot: int | None,
    opponent_slot: int | None,
) -> list[MatchEventEntry]:
    """Kill, structure, objective and ward events involving either tracked slot."""
    entries: list[MatchEventEntry] = []
    for event in timeline.iter_events():
        if event.type not in _ANNOTATED_TYPES:
            continue
        is_player = _involves(event, player_slot)
        is_opponent = _involves(event, opponent_slot)
        if not (is_player or is_opponent):
            continue
        if slots.references_unknown(event):
            logger.debug("Skipping %s at %d: unknown participant slot", event.type, event.timestamp)
            continue

        if is_player and is_opponent:
            side = EventSide.BOTH
        elif is_player:
            side = EventSide.PLAYER
        else:
            side = EventSide.OPPONENT

        entries.append(
            MatchEventEntry(
                kind=_event_kind(event, player_slot if is_player else opponent_slot),
                timestamp=event.timestamp,
                minute_mark=event.minute_mark,
                second_mark=event.second_mark,
                time_display=format_game_clock(event.timestamp),
                actor=slots.label(_acting_slot(event)),
                target=_event_target(event, slots),
                is_player=is_player,
                is_opponent=is_opponent,
                side=side,
                lane_type=event.lane_type,
                monster_type=event.monster_type,
                position=event.position,
            )
        )
    entries.sort(key=lambda e: e.timestamp)
    return entries


# ----------------------------------------------------------------------------
# Gold lead
# ----------------------------------------------------------------------------


def gold_lead_series(
    timeline: MatchTimeline,
    player_slot: int,
    opponent_slot: int,
    events: list[MatchEventEntry],
    player_items: list[BuildItem],
    opponent_items: list[BuildItem],
) -> list[GoldLeadPoint]:
    """Player and opponent total gold at every frame, one point per minute.

    Frames missing either participant are skipped; a later frame falling in
    the same minute (the game-end frame) replaces the earlier values.
    """
    points: dict[int, GoldLeadPoint] = {}
    previous_ts = -1

    for frame in timeline.info.frames:
        player_frame = frame.frame_for(player_slot)
        opponent_frame = frame.frame_for(opponent_slot)
        if (
            player_frame is None
            or opponent_frame is None
            or player_frame.total_gold is None
            or opponent_frame.total_gold is None
        ):
            continue

        bought = [i.item_id for i in player_items if previous_ts < i.timestamp <= frame.timestamp]
        opp_bought = [
            i.item_id for i in opponent_items if previous_ts < i.timestamp <= frame.timestamp
        ]
        previous_ts = frame.timestamp

        minute = frame.minute
        point = points.get(minute)
        if point is None:
            point = GoldLeadPoint(
                minute=minute,
                player_gold=player_frame.total_gold,
                opponent_gold=opponent_frame.total_gold,
                gold_lead=player_frame.total_gold - opponent_frame.total_gold,
                events=[e for e in events if e.minute_mark == minute],
            )
            points[minute] = point
        else:
            point.player_gold = player_frame.total_gold
            point.opponent_gold = opponent_frame.total_gold
            point.gold_lead = player_frame.total_gold - opponent_frame.total_gold
        point.player_items.extend(bought)
        point.opponent_items.extend(opp_bought)

    return list(points.values())


# ----------------------------------------------------------------------------
# Entry point
# ----------------------------------------------------------------------------


def resolve_slots(
    match: Match,
    timeline: MatchTimeline,
    puuid: str,
    opponent_puuid: str | None = None,
) -> tuple[int | None, int | None]:
    """Timeline slots for the player and lane opponent."""
    if opponent_puuid is None:
        player = find_participant(match, puuid)
        opponent = find_lane_opponent(match, player) if player is not None else None
        opponent_puuid = opponent.puuid if opponent is not None else None
    player_slot = _slot_for(match, timeline, puuid)
    opponent_slot = _slot_for(match, timeline, opponent_puuid) if opponent_puuid else None
    return player_slot, opponent_slot


def _slot_for(match: Match, timeline: MatchTimeline, puuid: str) -> int | None:
    slot = timeline.get_participant_by_puuid(puuid)
    if slot is not None:
        return slot
    # Older timelines ship without a participant list; fall back to the match slot
    participant = find_participant(match, puuid)
    if participant is None or participant.participant_id is None:
        return None
    known = timeline.known_slots()
    if known and participant.participant_id not in known:
        return None
    return participant.participant_id


@trace_performance
def analyze_match_timeline(
    match: Match,
    timeline: MatchTimeline,
    puuid: str,
    opponent_puuid: str | None = None,
    *,
    gap_minutes: int | None = None,
) -> MatchTimelineAnalysis:
    """Structured timeline view for one match.

    Args:
        match: The match the timeline belongs to (champion labels, result)
        timeline: Raw Match-V5 timeline
        puuid: Tracked player
        opponent_puuid: Override for the lane opponent; resolved from
            ``match`` when omitted

    Returns:
        MatchTimelineAnalysis; sections that need an unresolvable slot are
        left empty
    """
    if timeline.metadata.match_id != match.match_id:
        logger.warning(
            "Timeline %s does not belong to match %s",
            timeline.metadata.match_id,
            match.match_id,
        )

    player = find_participant(match, puuid)
    player_slot, opponent_slot = resolve_slots(match, timeline, puuid, opponent_puuid)
    slots = SlotDirectory.build(match, timeline)

    analysis = MatchTimelineAnalysis(
        match_id=match.match_id,
        player_slot=player_slot,
        opponent_slot=opponent_slot,
        player_champion=slots.label(player_slot) if player_slot else None,
        opponent_champion=slots.label(opponent_slot) if opponent_slot else None,
        win=player.win if player is not None else False,
    )
    if player_slot is None:
        logger.debug("Player %s not found in timeline %s", puuid, timeline.metadata.match_id)
        return analysis

    analysis.build_order = build_order_for(timeline, player_slot, gap_minutes)
    analysis.skill_order = skill_order_for(timeline, player_slot)
    analysis.events = annotate_events(timeline, slots, player_slot, opponent_slot)

    if opponent_slot is not None:
        analysis.gold_lead = gold_lead_series(
            timeline,
            player_slot,
            opponent_slot,
            analysis.events,
            analysis.build_order.items,
            extract_purchases(timeline, opponent_slot),
        )
    return analysis
