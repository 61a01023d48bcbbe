"""Consistency scoring against the direct lane opponent.

For every challenge metric recorded on either side of a lane matchup, the
engine tallies whether the player beat, lost to, or tied the opponent, then
ranks the metrics the player reliably wins (strengths) or loses
(weaknesses).

Pipeline:
1. Resolve the main role; multirole players keep the full match list,
   everyone else is filtered to main-role games.
2. Skip matches without a lane opponent.
3. Compare each metric under the rule tables in ``metric_rules``.
4. Drop metrics observed in fewer than ``min_sample`` matches.
5. Rank strengths by consistency and weaknesses by loss consistency.

Ties count toward the sample size and the consistency denominator but never
toward wins or losses, so "10%" means "won in 1 of 10 observed games".
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from src.config.settings import get_settings
from src.contracts.analytics import ConsistencyReport, ConsistencyStat
from src.contracts.match import Match
from src.core.analytics.formatters import metric_display_name
from src.core.analytics.metric_rules import DEFAULT_RULES, MetricRules, champion_tags_for
from src.core.analytics.roles import (
    filter_matches_for_role,
    find_lane_opponent,
    find_participant,
    resolve_main_role,
)
from src.core.data.champion_tags import TagLookup, get_champion_tags
from src.core.observability import trace_performance

logger = logging.getLogger(__name__)


class Outcome:
    WIN = 1
    LOSS = -1
    TIE = 0


@dataclass
class _Tally:
    wins: int = 0
    losses: int = 0
    ties: int = 0
    lower_is_better: bool = False

    def record(self, outcome: int) -> None:
        if outcome == Outcome.WIN:
            self.wins += 1
        elif outcome == Outcome.LOSS:
            self.losses += 1
        else:
            self.ties += 1

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.ties


def normalize_metric_value(value: float | None, lower_is_better: bool) -> float:
    """Map absent values to the losing extreme for their direction.

    A missing higher-is-better metric counts as 0. A missing or zero
    lower-is-better metric (a timing that never happened) counts as infinitely
    late so it can never win by being absent.
    """
    if lower_is_better:
        if value is None or value == 0:
            return math.inf
        return value
    return 0.0 if value is None else value


def compare_metric(
    player_value: float | None,
    opponent_value: float | None,
    lower_is_better: bool,
) -> int:
    """Outcome for the player on one metric in one match."""
    p = normalize_metric_value(player_value, lower_is_better)
    o = normalize_metric_value(opponent_value, lower_is_better)
    if p == o:
        return Outcome.TIE
    if lower_is_better:
        return Outcome.WIN if p < o else Outcome.LOSS
    return Outcome.WIN if p > o else Outcome.LOSS


def _metric_keys(player_challenges: dict[str, float], opponent_challenges: dict[str, float]) -> list[str]:
    # dict.fromkeys keeps first-seen order; set iteration order is not stable across runs
    return list(dict.fromkeys([*player_challenges, *opponent_challenges]))


@trace_performance
def calculate_consistency(
    matches: Sequence[Match],
    puuid: str,
    *,
    rules: MetricRules = DEFAULT_RULES,
    tag_lookup: TagLookup = get_champion_tags,
    min_sample: int | None = None,
    max_results: int | None = None,
) -> ConsistencyReport:
    """Rank the metrics the player consistently wins or loses in lane.

    Args:
        matches: Match list (any order; results do not depend on it beyond
            tie ordering)
        puuid: Tracked player
        rules: Metric rule tables
        tag_lookup: Champion name -> archetype tags
        min_sample: Minimum observed matches per metric (settings default 3)
        max_results: Cap for each list (settings default 10)

    Returns:
        ConsistencyReport; empty lists when no lane opponent is ever found
    """
    settings = get_settings()
    min_sample = settings.consistency_min_sample if min_sample is None else min_sample
    max_results = settings.consistency_max_results if max_results is None else max_results

    resolution = resolve_main_role(matches, puuid)
    considered = filter_matches_for_role(matches, puuid, resolution)

    tallies: dict[str, _Tally] = {}
    with_opponent = 0

    for match in considered:
        player = find_participant(match, puuid)
        if player is None:
            continue
        opponent = find_lane_opponent(match, player)
        if opponent is None:
            continue
        with_opponent += 1

        role = player.team_position
        tags = champion_tags_for(tag_lookup, player.champion_name)

        for key in _metric_keys(player.challenges, opponent.challenges):
            if rules.skip_reason(key, role, tags) is not None:
                continue
            lower_is_better = rules.is_lower_better(key, role, tags)
            outcome = compare_metric(player.challenge(key), opponent.challenge(key), lower_is_better)

            tally = tallies.get(key)
            if tally is None:
                tally = _Tally(lower_is_better=lower_is_better)
                tallies[key] = tally
            tally.record(outcome)

    stats = [
        ConsistencyStat(
            key=key,
            display_name=metric_display_name(key),
            wins=t.wins,
            losses=t.losses,
            ties=t.ties,
            lower_is_better=t.lower_is_better,
        )
        for key, t in tallies.items()
        if t.total >= min_sample
    ]

    strengths = sorted(
        (s for s in stats if s.wins > s.losses), key=lambda s: s.consistency, reverse=True
    )[:max_results]
    weaknesses = sorted(
        (s for s in stats if s.losses > s.wins), key=lambda s: s.loss_consistency, reverse=True
    )[:max_results]

    logger.debug(
        "Consistency for %s: role=%s multirole=%s matches=%d with_opponent=%d metrics=%d",
        puuid,
        resolution.role,
        resolution.is_multirole,
        len(considered),
        with_opponent,
        len(stats),
    )
    return ConsistencyReport(
        role=resolution.role,
        is_multirole=resolution.is_multirole,
        matches_considered=len(considered),
        matches_with_opponent=with_opponent,
        strengths=strengths,
        weaknesses=weaknesses,
    )
