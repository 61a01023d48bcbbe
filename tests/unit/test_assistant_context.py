"""Unit tests for the AI-assistant briefing builder."""

import pytest

from src.contracts.assistant_context import RankSummary
from src.core.analytics.assistant_context import build_assistant_context, recent_match_details

PLAYER = "player-puuid"


@pytest.fixture
def history(lane_match):
    return [
        lane_match(
            f"NA1_{i}",
            win=i % 2 == 0,
            duration=1500,
            player_kills=4,
            player_deaths=2,
            player_assists=6,
            player_totalMinionsKilled=180,
            player_visionScore=18,
            player_challenges={"damagePerMinute": 800, "turretPlatesTaken": 2},
            opponent_champion="Sett" if i == 0 else "Darius",
            opponent_kills=2,
            opponent_deaths=4,
            opponent_assists=2,
            opponent_totalMinionsKilled=150,
            opponent_challenges={"damagePerMinute": 500, "turretPlatesTaken": 0},
        )
        for i in range(4)
    ]


def test_empty_history_gives_default_briefing() -> None:
    context = build_assistant_context("Faker", "KR1", [], PLAYER)

    assert context.summoner_name == "Faker#KR1"
    assert context.rank == "Unranked"
    assert context.primary_role == "UNKNOWN"
    assert context.win_rate == "0.0"
    assert context.kda == "0.00"
    assert context.recent_matches == []
    assert context.opponent_stats is None


def test_briefing_formats_aggregates(history) -> None:
    context = build_assistant_context(
        "Tester",
        "NA1",
        history,
        PLAYER,
        rank={
            "queueType": "RANKED_SOLO_5x5",
            "tier": "GOLD",
            "rank": "II",
            "leaguePoints": 54,
            "wins": 30,
            "losses": 25,
            "hotStreak": False,
        },
    )

    assert context.rank == "GOLD II (54 LP)"
    assert (context.total_wins, context.total_losses) == (30, 25)
    assert context.primary_role == "TOP"
    assert context.total_games_analyzed == 4
    assert context.win_rate == "50.0"
    assert context.kda == "5.00"
    assert context.avg_kills == "4.0"
    assert context.avg_cs_per_min == "7.2"
    assert context.avg_turret_plates == "2.0"
    assert context.blue_side_win_rate == "50.0"
    assert [c.name for c in context.top_champions] == ["Garen"]
    assert context.top_champions[0].win_rate == "50"
    assert context.opponent_stats is not None
    assert context.opponent_stats.avg_kda == "1.00"


def test_briefing_strengths_and_matchups(history) -> None:
    context = build_assistant_context("Tester", "NA1", history, PLAYER)

    assert [s.name for s in context.top_strengths] == ["Damage per minute (dpm)", "Plates lead vs opponent"]
    assert context.top_strengths[0].consistency == "100%"
    assert context.top_weaknesses == []
    assert [(m.opponent_champion, m.total, m.win_rate) for m in context.champion_matchups] == [
        ("Darius", 3, "33%"),
        ("Sett", 1, "100%"),
    ]


def test_strength_list_respects_display_limit(lane_match, monkeypatch) -> None:
    monkeypatch.setenv("CONSISTENCY_DISPLAY_LIMIT", "1")
    metrics = {"a": 5, "b": 5, "c": 5}
    matches = [
        lane_match(f"NA1_{i}", player_challenges=metrics, opponent_challenges={}) for i in range(3)
    ]

    assert len(build_assistant_context("T", "NA1", matches, PLAYER).top_strengths) == 1


def test_recent_match_details(history) -> None:
    details = recent_match_details(history, PLAYER, limit=2)

    assert [d.match_id for d in details] == ["NA1_0", "NA1_1"]
    first = details[0]
    assert first.kda == "5.00"
    assert first.cs_per_min == pytest.approx(7.2)
    assert first.game_minutes == pytest.approx(25.0)
    assert first.role == "TOP"
    assert first.opponent is not None
    assert first.opponent.champion == "Sett"
    assert first.opponent.kda == "1.00"


def test_perfect_kda_in_match_detail(lane_match) -> None:
    (detail,) = recent_match_details([lane_match(player_kills=2, player_deaths=0)], PLAYER)
    assert detail.kda == "Perfect"


def test_multirole_primary_role(lane_match) -> None:
    matches = [lane_match("NA1_1", position="TOP"), lane_match("NA1_2", position="MIDDLE")]
    assert build_assistant_context("T", "NA1", matches, PLAYER).primary_role == "MULTIROLE"


def test_rank_summary_display() -> None:
    assert RankSummary(tier="DIAMOND", rank="IV", league_points=0).display == "DIAMOND IV (0 LP)"
