"""Role and lane-opponent resolution.

Pure functions over Match contracts. A player's role is only meaningful when
it is neither empty nor "NONE"; such games are left out of role counting.
"""

import logging
from collections.abc import Sequence

from src.contracts.analytics import RoleResolution
from src.contracts.common import is_valid_role
from src.contracts.match import Match, Participant

logger = logging.getLogger(__name__)


def find_participant(match: Match, puuid: str) -> Participant | None:
    """The tracked player's record in ``match``, if present."""
    return match.info.get_participant_by_puuid(puuid)


def count_roles(matches: Sequence[Match], puuid: str) -> dict[str, int]:
    """Games per valid role, keyed in first-seen order."""
    counts: dict[str, int] = {}
    for match in matches:
        player = find_participant(match, puuid)
        if player is None or not is_valid_role(player.team_position):
            continue
        role = str(player.team_position)
        counts[role] = counts.get(role, 0) + 1
    return counts


def resolve_main_role(matches: Sequence[Match], puuid: str) -> RoleResolution:
    """Most played role, flagging a tie between the top two as multirole.

    ``role`` is None when no match yields a valid role.
    """
    counts = count_roles(matches, puuid)
    if not counts:
        return RoleResolution(role=None, is_multirole=False, counts={})

    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    top_role, top_count = ranked[0]
    is_multirole = len(ranked) > 1 and ranked[1][1] == top_count
    return RoleResolution(role=top_role, is_multirole=is_multirole, counts=counts)


def filter_matches_for_role(
    matches: Sequence[Match],
    puuid: str,
    resolution: RoleResolution,
) -> list[Match]:
    """Matches played in the main role, or all of them for multirole players."""
    if resolution.is_multirole or resolution.role is None:
        return list(matches)
    filtered = []
    for match in matches:
        player = find_participant(match, puuid)
        if player is not None and player.team_position == resolution.role:
            filtered.append(match)
    return filtered


def find_lane_opponent(match: Match, player: Participant) -> Participant | None:
    """First participant on the other team sharing ``player``'s role.

    Returns None for roleless players and for modes without symmetric roles.
    """
    if not is_valid_role(player.team_position):
        return None
    for candidate in match.info.participants:
        if candidate.puuid == player.puuid:
            continue
        if candidate.team_position == player.team_position and candidate.team_id != player.team_id:
            return candidate
    logger.debug(
        "No lane opponent for %s in %s (role=%s)",
        player.puuid,
        match.match_id,
        player.team_position,
    )
    return None


def resolve_lane_matchup(match: Match, puuid: str) -> tuple[Participant, Participant] | None:
    """(player, opponent) pair for ``puuid`` in ``match`` or None."""
    player = find_participant(match, puuid)
    if player is None:
        return None
    opponent = find_lane_opponent(match, player)
    if opponent is None:
        return None
    return player, opponent
