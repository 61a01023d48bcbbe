"""
Timeline event vocabulary for Match-V5 API.
"""

from enum import Enum


class EventType(str, Enum):
    """Timeline event types read by the analytics engine."""

    SKILL_LEVEL_UP = "SKILL_LEVEL_UP"
    ITEM_PURCHASED = "ITEM_PURCHASED"
    ITEM_UNDO = "ITEM_UNDO"
    TURRET_PLATE_DESTROYED = "TURRET_PLATE_DESTROYED"
    CHAMPION_KILL = "CHAMPION_KILL"
    WARD_PLACED = "WARD_PLACED"
    WARD_KILL = "WARD_KILL"
    BUILDING_KILL = "BUILDING_KILL"
    ELITE_MONSTER_KILL = "ELITE_MONSTER_KILL"


class AnnotatedEventKind(str, Enum):
    """Categories of events drawn on the timeline and gold-lead chart."""

    KILL = "KILL"
    DEATH = "DEATH"
    ASSIST = "ASSIST"
    BUILDING = "BUILDING"
    OBJECTIVE = "OBJECTIVE"
    PLATE = "PLATE"
    WARD_PLACED = "WARD_PLACED"
    WARD_KILLED = "WARD_KILLED"


class EventSide(str, Enum):
    """Which tracked participant an annotated event belongs to."""

    PLAYER = "player"
    OPPONENT = "opponent"
    BOTH = "both"


class HeatmapCategory(str, Enum):
    """Positional sample categories."""

    POSITION = "POSITION"
    KILL = "KILL"
    DEATH = "DEATH"
    ASSIST = "ASSIST"
    WARD = "WARD"
