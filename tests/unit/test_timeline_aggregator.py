"""Unit tests for per-match timeline aggregation.

Timelines are built from Riot-shaped frame payloads. Slot 1 is the player
(Garen), slot 6 the lane opponent (Darius) unless a test says otherwise.
"""

import pytest

from src.core.analytics.timeline_aggregator import (
    analyze_match_timeline,
    build_order_for,
    resolve_slots,
    skill_order_for,
)

PLAYER = "player-puuid"
OPPONENT = "opponent-puuid"
FULL_ROSTER = {1: PLAYER, 2: "ally-puuid", 6: OPPONENT, 7: "enemy-puuid"}


def purchase(slot: int, item_id: int, ts: int) -> dict:
    return {"type": "ITEM_PURCHASED", "timestamp": ts, "participantId": slot, "itemId": item_id}


def skill(slot: int, skill_slot: int, ts: int) -> dict:
    return {
        "type": "SKILL_LEVEL_UP",
        "timestamp": ts,
        "participantId": slot,
        "skillSlot": skill_slot,
        "levelUpType": "NORMAL",
    }


def kill(killer: int, victim: int, ts: int, assists=None, position=(7400, 7400)) -> dict:
    return {
        "type": "CHAMPION_KILL",
        "timestamp": ts,
        "killerId": killer,
        "victimId": victim,
        "assistingParticipantIds": assists,
        "position": {"x": position[0], "y": position[1]},
    }


# ============================================================================
# Build order
# ============================================================================


@pytest.mark.parametrize(
    ("second_purchase_ms", "expected_clusters"),
    [
        (3 * 60000 + 10000, 1),  # minute 2 then minute 3: one shopping trip
        (10 * 60000 + 5000, 2),  # minute 2 then minute 10: two trips
    ],
)
def test_purchases_cluster_by_minute_gap(
    make_timeline, make_frame, second_purchase_ms: int, expected_clusters: int
) -> None:
    timeline = make_timeline(
        [
            make_frame(0),
            make_frame(
                1,
                events=[
                    purchase(1, 1001, 2 * 60000 + 30000),
                    purchase(1, 3006, second_purchase_ms),
                ],
            ),
        ]
    )

    order = build_order_for(timeline, 1)

    assert [i.item_id for i in order.items] == [1001, 3006]
    assert len(order.clusters) == expected_clusters
    assert order.clusters[0].start_minute == 2


def test_cluster_gap_is_configurable(make_timeline, make_frame) -> None:
    timeline = make_timeline(
        [make_frame(0, events=[purchase(1, 1001, 2 * 60000), purchase(1, 3006, 5 * 60000)])]
    )

    assert len(build_order_for(timeline, 1, gap_minutes=1).clusters) == 2
    assert len(build_order_for(timeline, 1, gap_minutes=3).clusters) == 1


def test_item_undo_removes_latest_matching_purchase(make_timeline, make_frame) -> None:
    timeline = make_timeline(
        [
            make_frame(
                0,
                events=[
                    purchase(1, 1055, 10000),
                    purchase(1, 2003, 11000),
                    purchase(1, 2003, 12000),
                    {"type": "ITEM_UNDO", "timestamp": 13000, "participantId": 1, "beforeId": 2003, "afterId": 0},
                    purchase(6, 1054, 14000),
                ],
            )
        ]
    )

    order = build_order_for(timeline, 1)

    assert [(i.item_id, i.timestamp) for i in order.items] == [(1055, 10000), (2003, 11000)]


# ============================================================================
# Skill order
# ============================================================================


def test_skill_order_and_max_priority(make_timeline, make_frame) -> None:
    sequence = [1, 3, 1, 2, 1, 4, 1, 3]
    timeline = make_timeline(
        [make_frame(0, events=[skill(1, s, 30000 * (n + 1)) for n, s in enumerate(sequence)])]
    )

    order = skill_order_for(timeline, 1)

    assert [u.skill_slot for u in order.level_ups] == sequence
    assert [u.level for u in order.level_ups] == list(range(1, 9))
    assert [u.is_ultimate for u in order.level_ups].count(True) == 1
    assert order.max_order == [1, 3, 2]


def test_equal_points_rank_by_last_level_up(make_timeline, make_frame) -> None:
    # E reaches two points before W does
    sequence = [2, 3, 3, 2, 1]
    timeline = make_timeline(
        [make_frame(0, events=[skill(1, s, 10000 * (n + 1)) for n, s in enumerate(sequence)])]
    )

    assert skill_order_for(timeline, 1).max_order == [3, 2, 1]


def test_evolve_is_listed_but_not_a_skill_point(make_timeline, make_frame) -> None:
    # Q, W and E reach five points in that order; R takes three
    sequence = [1] * 5 + [2] * 5 + [3] * 5 + [4] * 3
    events = [skill(1, s, 30000 * (n + 1)) for n, s in enumerate(sequence)]
    evolve = skill(1, 3, 65000)
    evolve["levelUpType"] = "EVOLVE"
    events.insert(2, evolve)
    timeline = make_timeline([make_frame(0, events=events)])

    order = skill_order_for(timeline, 1)

    assert len(order.level_ups) == 19
    assert max(u.level for u in order.level_ups) == 18
    (evolution,) = [u for u in order.level_ups if u.is_evolve]
    assert (evolution.skill_slot, evolution.level) == (3, 2)
    assert order.max_order == [1, 2, 3]


# ============================================================================
# Annotated events
# ============================================================================


@pytest.fixture
def eventful_analysis(lane_match, make_timeline, make_frame):
    events = [
        {
            "type": "BUILDING_KILL",
            "timestamp": 600000,
            "killerId": 1,
            "teamId": 200,
            "buildingType": "TOWER_BUILDING",
            "laneType": "MID_LANE",
            "towerType": "OUTER_TURRET",
        },
        kill(1, 6, 185000),
        kill(2, 7, 240000, assists=[1]),
        kill(2, 7, 250000),
        {
            "type": "ELITE_MONSTER_KILL",
            "timestamp": 420000,
            "killerId": 6,
            "killerTeamId": 200,
            "monsterType": "DRAGON",
            "monsterSubType": "FIRE_DRAGON",
        },
        {"type": "TURRET_PLATE_DESTROYED", "timestamp": 480000, "killerId": 1, "laneType": "TOP_LANE", "teamId": 200},
        kill(6, 1, 500000, assists=[9]),
    ]
    timeline = make_timeline([make_frame(0, events=events)], slots=FULL_ROSTER)
    return analyze_match_timeline(lane_match(), timeline, PLAYER)


def test_annotated_events_are_time_sorted(eventful_analysis) -> None:
    timestamps = [e.timestamp for e in eventful_analysis.events]
    assert timestamps == sorted(timestamps)
    assert [e.kind for e in eventful_analysis.events] == ["KILL", "ASSIST", "OBJECTIVE", "PLATE", "BUILDING"]


def test_solo_kill_on_opponent(eventful_analysis) -> None:
    first = eventful_analysis.events[0]

    assert first.kind == "KILL"
    assert first.side == "both"
    assert first.is_player and first.is_opponent
    assert first.actor == "Garen"
    assert first.target == "Darius"
    assert first.time_display == "3:05"
    assert (first.minute_mark, first.second_mark) == (3, 5)
    assert first.position is not None and first.position.x == 7400


def test_event_targets_and_sides(eventful_analysis) -> None:
    by_kind = {e.kind: e for e in eventful_analysis.events}

    assert by_kind["ASSIST"].side == "player"
    assert by_kind["OBJECTIVE"].side == "opponent"
    assert by_kind["OBJECTIVE"].target == "Fire Dragon"
    assert by_kind["OBJECTIVE"].monster_type == "DRAGON"
    assert by_kind["PLATE"].target == "Top Lane Plate"
    assert by_kind["BUILDING"].target == "Mid Lane Outer Turret"


def test_uninvolved_and_unknown_slot_events_are_skipped(eventful_analysis) -> None:
    # The 250s kill involves neither tracked slot; the 500s kill names slot 9
    assert all(e.timestamp not in (250000, 500000) for e in eventful_analysis.events)


def test_ward_events_are_attributed_to_owner_and_destroyer(lane_match, make_timeline, make_frame) -> None:
    events = [
        {"type": "WARD_PLACED", "timestamp": 61000, "creatorId": 1, "wardType": "CONTROL_WARD"},
        {"type": "WARD_PLACED", "timestamp": 62000, "creatorId": 2, "wardType": "YELLOW_TRINKET"},
        {"type": "WARD_KILL", "timestamp": 75000, "killerId": 6, "wardType": "CONTROL_WARD"},
        {"type": "WARD_KILL", "timestamp": 80000, "killerId": 7, "wardType": "YELLOW_TRINKET"},
    ]
    timeline = make_timeline([make_frame(0, events=events)], slots=FULL_ROSTER)

    analysis = analyze_match_timeline(lane_match(), timeline, PLAYER)

    placed, killed = analysis.events
    assert (placed.kind, placed.side, placed.actor, placed.target) == (
        "WARD_PLACED",
        "player",
        "Garen",
        "Control Ward",
    )
    assert (killed.kind, killed.side, killed.actor) == ("WARD_KILLED", "opponent", "Darius")
    assert killed.time_display == "1:15"


# ============================================================================
# Gold lead
# ============================================================================


def test_gold_lead_series(lane_match, make_timeline, make_frame) -> None:
    timeline = make_timeline(
        [
            make_frame(0, gold={1: 500, 6: 500}),
            make_frame(
                1,
                gold={1: 700, 6: 650},
                events=[purchase(1, 1055, 15000), purchase(6, 1054, 20000)],
            ),
            make_frame(2, gold={1: 1200, 6: 1000}, events=[kill(1, 6, 100000)]),
            make_frame(3, gold={1: 1500}),
        ]
    )

    analysis = analyze_match_timeline(lane_match(), timeline, PLAYER)
    points = analysis.gold_lead

    # Frame 3 lacks the opponent and is skipped
    assert [p.minute for p in points] == [0, 1, 2]
    assert [p.gold_lead for p in points] == [0, 50, 200]
    assert points[1].player_items == [1055]
    assert points[1].opponent_items == [1054]
    assert [e.kind for e in points[1].events] == ["KILL"]
    assert analysis.gold_lead_at(2) == 200
    assert analysis.gold_lead_at(10) is None


def test_game_end_frame_replaces_same_minute_point(lane_match, make_timeline, make_frame) -> None:
    end_frame = make_frame(2, gold={1: 1400, 6: 1000}, events=[purchase(1, 3006, 140000)])
    end_frame["timestamp"] = 2 * 60000 + 31000
    timeline = make_timeline(
        [
            make_frame(1, gold={1: 700, 6: 700}),
            make_frame(2, gold={1: 1200, 6: 1000}),
            end_frame,
        ]
    )

    points = analyze_match_timeline(lane_match(), timeline, PLAYER).gold_lead

    assert [p.minute for p in points] == [1, 2]
    assert points[-1].gold_lead == 400
    assert points[-1].player_items == [3006]


# ============================================================================
# Slot resolution and degraded data
# ============================================================================


def test_analysis_headline_fields(lane_match, make_timeline, make_frame) -> None:
    analysis = analyze_match_timeline(lane_match(win=False), make_timeline([make_frame(0)]), PLAYER)

    assert analysis.match_id == "NA1_1000"
    assert (analysis.player_slot, analysis.opponent_slot) == (1, 6)
    assert (analysis.player_champion, analysis.opponent_champion) == ("Garen", "Darius")
    assert analysis.win is False


def test_no_lane_opponent_keeps_player_sections(lane_match, make_timeline, make_frame) -> None:
    timeline = make_timeline(
        [make_frame(0, gold={1: 500, 6: 500}, events=[purchase(1, 1055, 5000), skill(1, 1, 6000)])]
    )

    analysis = analyze_match_timeline(lane_match(opponent_position="MIDDLE"), timeline, PLAYER)

    assert analysis.opponent_slot is None
    assert analysis.gold_lead == []
    assert [i.item_id for i in analysis.build_order.items] == [1055]
    assert analysis.skill_order.max_order == [1]


def test_opponent_override(lane_match, make_timeline, make_frame) -> None:
    timeline = make_timeline([make_frame(0)], slots=FULL_ROSTER)

    assert resolve_slots(lane_match(), timeline, PLAYER, "enemy-puuid") == (1, 7)


def test_unresolvable_player_yields_empty_analysis(lane_match, make_timeline, make_frame) -> None:
    timeline = make_timeline(
        [make_frame(0, events=[purchase(1, 1055, 5000)])],
        slots={2: "someone-else"},
    )

    analysis = analyze_match_timeline(lane_match(), timeline, PLAYER)

    assert analysis.player_slot is None
    assert analysis.build_order.items == []
    assert analysis.events == []


def test_slot_falls_back_to_match_participant_id(lane_match, make_timeline, make_frame) -> None:
    timeline = make_timeline([make_frame(0, events=[purchase(1, 1055, 5000)])], slots={})

    analysis = analyze_match_timeline(lane_match(), timeline, PLAYER)

    assert analysis.player_slot == 1
    assert analysis.player_champion == "Garen"
    assert [i.item_id for i in analysis.build_order.items] == [1055]
