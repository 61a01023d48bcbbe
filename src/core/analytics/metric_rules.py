"""Data-driven rules for comparing challenge metrics against a lane opponent.

Challenge keys are open-ended (Riot adds new ones every few patches), so the
engine never enumerates them. Instead each rule below is a table lookup:

- ``excluded``: metrics that are non-comparative or too noisy to score
- ``role_gated``: metric -> position the player must hold in that match
- ``support_only``: healing/shielding throughput, scored for Support-tagged
  champions only
- ``assassin_skipped``: crowd-control metrics, skipped for Assassin-tagged
  champions where a low value is usually intentional
- ``lower_is_better_prefixes``: timing metrics where smaller wins
- ``champion_directed``: metrics whose direction depends on the champion's
  archetype (frontline vs backline)
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.contracts.common import TeamPosition
from src.core.data.champion_tags import (
    TAG_ASSASSIN,
    TAG_FIGHTER,
    TAG_MAGE,
    TAG_MARKSMAN,
    TAG_SUPPORT,
    TAG_TANK,
    TagLookup,
)

ROLE_ALL = "ALL"
DAMAGE_TAKEN_SHARE = "damageTakenOnTeamPercentage"


class SkipReason(str, Enum):
    """Why a metric was not compared for a match."""

    EXCLUDED = "excluded"
    ROLE_GATED = "role_gated"
    ARCHETYPE_GATED = "archetype_gated"


class MetricRules(BaseModel):
    """Immutable rule tables; pass a custom instance to change scoring."""

    model_config = ConfigDict(frozen=True)

    excluded: frozenset[str] = Field(
        default=frozenset(
            {
                "legendaryItemUsed",
                "legendaryCount",
                "playedChampSelectPosition",
                "soloKills",
                "abilityUses",
                "fullTeamTakedown",
                "flawlessAces",
                "acesBefore15Minutes",
                "firstTurretKilledTime",
                "bountyGold",
                "getTakedownsInAllLanesEarlyJungleAsLaner",
            }
        )
    )
    role_gated: dict[str, str] = Field(
        default_factory=lambda: {
            "controlWardTimeCoverageInRiverOrEnemyHalf": TeamPosition.UTILITY.value,
            "completeSupportQuestInTime": TeamPosition.UTILITY.value,
            "fasterSupportQuestCompletion": TeamPosition.UTILITY.value,
            "earliestBaron": TeamPosition.JUNGLE.value,
            "earliestDragonTakedown": TeamPosition.JUNGLE.value,
            "epicMonsterKillsNearEnemyJungler": TeamPosition.JUNGLE.value,
            "buffsStolen": TeamPosition.JUNGLE.value,
            "junglerKillsEarlyJungle": TeamPosition.JUNGLE.value,
            "killsOnLanersEarlyJungleAsJungler": TeamPosition.JUNGLE.value,
            "jungleCsBefore10Minutes": TeamPosition.JUNGLE.value,
            "initialBuffCount": TeamPosition.JUNGLE.value,
            "initialCrabCount": TeamPosition.JUNGLE.value,
            "scuttleCrabKills": TeamPosition.JUNGLE.value,
            "moreEnemyJungleThanOpponent": TeamPosition.JUNGLE.value,
            "junglerTakedownsNearDamagedEpicMonster": TeamPosition.JUNGLE.value,
            "firstTurretKilled": ROLE_ALL,
        }
    )
    support_only: frozenset[str] = Field(
        default=frozenset({"effectiveHealAndShielding", "saveAllyFromDeath"})
    )
    assassin_skipped: frozenset[str] = Field(
        default=frozenset(
            {
                "enemyChampionImmobilizations",
                "highestCrowdControlScore",
                "immobilizeAndKillWithAlly",
            }
        )
    )
    lower_is_better_prefixes: tuple[str, ...] = ("earliest", "fastest", "shortest")
    champion_directed: frozenset[str] = Field(default=frozenset({DAMAGE_TAKEN_SHARE}))
    frontline_tags: frozenset[str] = Field(default=frozenset({TAG_TANK, TAG_FIGHTER}))
    backline_tags: frozenset[str] = Field(
        default=frozenset({TAG_MARKSMAN, TAG_MAGE, TAG_SUPPORT, TAG_ASSASSIN})
    )
    # Fallback when tags are absent or mixed: these lanes prefer taking less damage
    backline_roles: frozenset[str] = Field(
        default=frozenset(
            {TeamPosition.MIDDLE.value, TeamPosition.BOTTOM.value, TeamPosition.UTILITY.value}
        )
    )

    def skip_reason(
        self,
        key: str,
        role: str | None,
        champion_tags: tuple[str, ...],
    ) -> SkipReason | None:
        """None when ``key`` should be compared for this player and match."""
        if key in self.excluded:
            return SkipReason.EXCLUDED

        required_role = self.role_gated.get(key, ROLE_ALL)
        if required_role != ROLE_ALL and role != required_role:
            return SkipReason.ROLE_GATED

        if key in self.support_only and TAG_SUPPORT not in champion_tags:
            return SkipReason.ARCHETYPE_GATED
        if key in self.assassin_skipped and TAG_ASSASSIN in champion_tags:
            return SkipReason.ARCHETYPE_GATED
        return None

    def is_prefix_lower_better(self, key: str) -> bool:
        return key.lower().startswith(self.lower_is_better_prefixes)

    def is_lower_better(
        self,
        key: str,
        role: str | None,
        champion_tags: tuple[str, ...],
    ) -> bool:
        """Resolve the comparison direction for ``key``."""
        if key in self.champion_directed:
            return self._backline_prefers_lower(role, champion_tags)
        return self.is_prefix_lower_better(key)

    def _backline_prefers_lower(self, role: str | None, champion_tags: tuple[str, ...]) -> bool:
        tags = set(champion_tags)
        frontline = bool(tags & self.frontline_tags)
        backline = bool(tags & self.backline_tags)
        if frontline and not backline:
            return False
        if backline and not frontline:
            return True
        return role in self.backline_roles


DEFAULT_RULES = MetricRules()


def champion_tags_for(lookup: TagLookup, champion_name: str | None) -> tuple[str, ...]:
    """Tags from ``lookup``, tolerating lookups that return lists or None."""
    tags = lookup(champion_name)
    return tuple(tags) if tags else ()
