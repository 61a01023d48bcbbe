#!/usr/bin/env python3
"""Preview engine output for a folder of Match-V5 payloads.

Reads match JSON files (and, when present, ``<match_id>_timeline.json``
files) from disk and prints the aggregate stats, consistency ranking,
timeline summary and assistant briefing for one player.

Usage:
    # Aggregate + consistency for a player
    python scripts/preview_insights.py data/matches --puuid <PUUID>

    # Include timeline analysis and dump raw JSON
    python scripts/preview_insights.py data/matches --puuid <PUUID> --timelines --json
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.settings import get_settings  # noqa: E402
from src.contracts.match import Match  # noqa: E402
from src.contracts.timeline import MatchTimeline  # noqa: E402
from src.core.analytics import (  # noqa: E402
    build_assistant_context,
    build_timeline_report,
    calculate_aggregate_stats,
    calculate_consistency,
)
from src.core.analytics.formatters import (  # noqa: E402
    format_decimal,
    format_gold,
    format_kda,
    format_percent,
)

TIMELINE_SUFFIX = "_timeline"


def setup_logging() -> None:
    """Send engine logs to stderr at the configured level."""
    settings = get_settings()
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=settings.log_level.upper())


def print_section(title: str, symbol: str = "=") -> None:
    """Print a formatted section header."""
    print(f"\n{symbol * 60}")
    print(f"{title}")
    print(f"{symbol * 60}")


def load_payloads(directory: Path) -> tuple[list[Match], dict[str, MatchTimeline]]:
    """Matches sorted newest first and timelines keyed by match id."""
    matches: list[Match] = []
    timelines: dict[str, MatchTimeline] = {}
    for path in sorted(directory.glob("*.json")):
        payload = json.loads(path.read_text(encoding="utf-8"))
        if path.stem.endswith(TIMELINE_SUFFIX):
            timeline = MatchTimeline.model_validate(payload)
            timelines[timeline.metadata.match_id] = timeline
        else:
            matches.append(Match.model_validate(payload))
    matches.sort(key=lambda m: m.info.game_creation or 0, reverse=True)
    return matches, timelines


def preview_aggregate(matches: list[Match], puuid: str) -> None:
    stats = calculate_aggregate_stats(matches, puuid)
    overall = stats.overall
    print_section("📊 AGGREGATE STATS")
    print(f"Games: {overall.games}  W/L: {overall.wins}/{overall.losses}  WR: {format_percent(overall.win_rate, 1)}")
    print(f"KDA: {format_kda(overall.kda)}  CS/min: {format_decimal(overall.avg_cs_per_minute)}")
    print(f"KP: {format_percent(overall.avg_kill_participation, 1)}  Vision: {format_decimal(overall.avg_vision_score)}")
    print(f"Opponent KDA: {format_kda(stats.opponent.kda)} over {stats.opponent.games} games")
    for champ in stats.champion_stats[:5]:
        print(f"  {champ.champion_name:<14} {champ.games:>3} games  {format_percent(champ.win_rate)}  KDA {format_kda(champ.kda)}")


def preview_consistency(matches: list[Match], puuid: str) -> None:
    report = calculate_consistency(matches, puuid)
    role = "MULTIROLE" if report.is_multirole else (report.role or "UNKNOWN")
    print_section(f"🎯 CONSISTENCY ({role}, {report.matches_with_opponent} lane matchups)")
    print("Strengths:")
    for stat in report.strengths:
        print(f"  ✅ {stat.display_name:<40} {format_percent(stat.consistency)}")
    print("Weaknesses:")
    for stat in report.weaknesses:
        print(f"  ❌ {stat.display_name:<40} {format_percent(stat.loss_consistency)}")


def preview_timelines(matches: list[Match], timelines: dict[str, MatchTimeline], puuid: str) -> None:
    pairs = [(m, timelines[m.match_id]) for m in matches if m.match_id in timelines]
    print_section(f"⏱️  TIMELINES ({len(pairs)} matched)")
    if not pairs:
        print("No timeline files found")
        return
    report = build_timeline_report(pairs, puuid)
    summary = report.summary
    print(f"First death (avg min): {format_decimal(summary.avg_first_death_minute)}")
    print(f"Most dangerous zone: {summary.most_dangerous_zone or 'N/A'}")
    if summary.avg_gold_lead_at_10 is not None:
        print(f"Gold lead @10: {format_gold(summary.avg_gold_lead_at_10)}")
    if summary.avg_gold_lead_at_15 is not None:
        print(f"Gold lead @15: {format_gold(summary.avg_gold_lead_at_15)}")
    print(f"Kills/Deaths/Wards: {summary.kills_total}/{summary.deaths_total}/{summary.wards_placed_total}")
    for analysis in report.matches[:3]:
        print_section(f"{analysis.match_id}: {analysis.player_champion} vs {analysis.opponent_champion}", "-")
        for cluster in analysis.build_order.clusters:
            items = ", ".join(str(i.item_id) for i in cluster.items)
            print(f"  [{cluster.start_minute:>2}m] {items}")
        print(f"  Max order: {analysis.skill_order.max_order}")


def main() -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Preview analytics engine output")
    parser.add_argument("directory", type=Path, help="Folder of Match-V5 JSON payloads")
    parser.add_argument("--puuid", required=True, help="Player PUUID to analyse")
    parser.add_argument("--name", default="Player", help="Riot ID game name for the briefing")
    parser.add_argument("--tag", default="NA1", help="Riot ID tag line for the briefing")
    parser.add_argument("--timelines", action="store_true", help="Analyse *_timeline.json files")
    parser.add_argument("--json", action="store_true", help="Dump the assistant briefing as JSON")

    args = parser.parse_args()
    setup_logging()
    if not args.directory.is_dir():
        print(f"❌ Not a directory: {args.directory}")
        return 1

    matches, timelines = load_payloads(args.directory)
    print(f"Loaded {len(matches)} matches, {len(timelines)} timelines")

    preview_aggregate(matches, args.puuid)
    preview_consistency(matches, args.puuid)
    if args.timelines:
        preview_timelines(matches, timelines, args.puuid)

    if args.json:
        context = build_assistant_context(args.name, args.tag, matches, args.puuid)
        print_section("🤖 ASSISTANT CONTEXT")
        print(json.dumps(context.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))

    print_section("✅ PREVIEW COMPLETE")
    return 0


if __name__ == "__main__":
    sys.exit(main())
