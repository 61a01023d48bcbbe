"""Display formatting for analytics outputs.

Downstream consumers (UI, assistant briefing) rely on these exact rules:
one decimal for averages, two for KDA, "Perfect" for deathless KDA and
"N/A" for values that were never recorded.
"""

import math
import re

PERFECT_KDA = "Perfect"
NOT_AVAILABLE = "N/A"

# Labels that read better than the generated title case
DISPLAY_NAME_OVERRIDES: dict[str, str] = {
    "earliestBaron": "First Baron",
    "earliestDragonTakedown": "First Dragon",
    "maxCsAdvantageOnLaneOpponent": "CS lead vs opponent",
    "maxLevelLeadLaneOpponent": "Level lead vs opponent",
    "damageTakenOnTeamPercentage": "Damage taken compared to opponent",
    "turretPlatesTaken": "Plates lead vs opponent",
    "buffsStolen": "Buffs stolen",
}

STAT_NAME_MAPPING: dict[str, str] = {
    "abilityUses": "Abilities used",
    "acesBefore15Minutes": "Aces before 15 min",
    "baronTakedowns": "Baron nashor takedowns",
    "blastConeOppositeOpponentCount": "Blast cone hits on opponent",
    "controlWardsPlaced": "Control wards placed",
    "damagePerMinute": "Damage per minute (dpm)",
    "deathsByEnemyChamps": "Deaths to champions",
    "dodgeSkillShotsSmallWindow": "Quick reaction dodges",
    "doubleKills": "Double kills",
    "dragonTakedowns": "Dragon takedowns",
    "earlyLaningPhaseGoldExpAdvantage": "Early gold/xp lead",
    "effectiveHealAndShielding": "Effective healing & shielding",
    "elderDragonMultikills": "Multikills w/ elder dragon",
    "enemyChampionImmobilizations": "Enemies immobilized",
    "enemyJungleMonsterKills": "Enemy jungle camps",
    "epicMonsterKillsNearEnemyJungler": "Objectives taken near enemy jungler",
    "epicMonsterKillsWithin30SecondsOfSpawn": "Objectives taken on spawn (<30s)",
    "epicMonsterSteals": "Objectives stolen",
    "epicMonsterStolenWithoutSmite": "Objectives stolen (no smite)",
    "firstTurretKilled": "First turret destroyed",
    "firstTurretKilledTime": "First turret time",
    "flawlessAces": "Flawless aces",
    "fullTeamTakedown": "Full team takedown",
    "gameLength": "Game length",
    "getTakedownsInAllLanesEarlyJungleAsLaner": "Early roaming takedowns (laner)",
    "goldPerMinute": "Gold per minute (gpm)",
    "hadOpenNexus": "Nexus exposed",
    "highestChampionDamage": "Highest champion damage",
    "highestCrowdControlScore": "Highest cc score",
    "immobilizeAndKillWithAlly": "Immobilize & kill w/ ally",
    "initialBuffCount": "Initial buffs taken",
    "initialCrabCount": "Initial scuttles taken",
    "jungleCsBefore10Minutes": "Jungle cs @ 10 min",
    "junglerKillsEarlyJungle": "Early jungle kills",
    "kda": "Kda",
    "killParticipation": "Kill participation (kp%)",
    "killsOnLanersEarlyJungleAsJungler": "Early ganks (jungler)",
    "killsOnRecentlyHealedByAramPack": "Kills on aram healed enemies",
    "killsUnderOwnTurret": "Kills under own turret",
    "killsWithHelpFromEpicMonster": "Kills w/ objectives help",
    "landSkillShotsEarlyGame": "Skillshots landed (early)",
    "laneMinionsFirst10Minutes": "Lane minions @ 10 min",
    "laningPhaseGoldExpAdvantage": "Laning gold/xp lead",
    "legendaryCount": "Legendary streaks",
    "lostAnInhibitor": "Inhibitor lost",
    "maxCsAdvantageOnLaneOpponent": "Max cs lead vs opponent",
    "maxKillDeficit": "Max kill deficit",
    "maxLevelLeadLaneOpponent": "Max level lead vs opponent",
    "moreEnemyJungleThanOpponent": "Jungle counter-jungle gap",
    "multiKillOneSpell": "Multikill (one spell)",
    "multiTurretRiftHeraldCount": "Turrets taken w/ herald",
    "multikills": "Multikills",
    "multikillsAfterAggressiveFlash": "Flash multikills",
    "outerTurretExecutesBefore10Minutes": "Outer turret executed (<10 min)",
    "outnumberedKills": "Outnumbered kills",
    "outnumberedNexusKill": "Outnumbered nexus kill",
    "perfectDragonSoulsTaken": "Perfect dragon souls",
    "perfectGame": "Perfect game",
    "pickKillWithAlly": "Pick kill w/ ally",
    "playedChampSelectPosition": "Played assigned role",
    "poroExplosions": "Poro explosions (aram)",
    "quickCleanse": "Quick cleanse/qss usage",
    "quickFirstTurret": "Quick first turret",
    "quickSoloKills": "Quick solo kills",
    "riftHeraldTakedowns": "Rift herald takedowns",
    "saveAllyFromDeath": "Ally saved from death",
    "scuttleCrabKills": "Scuttle crabs killed",
    "skillshotsDodged": "Skillshots dodged",
    "skillshotsHit": "Skillshots hit",
    "soloBaronKills": "Solo baron kills",
    "soloKills": "Solo kills",
    "soloTurretsLategame": "Solo turrets (late game)",
    "stealthWardsPlaced": "Stealth wards placed",
    "survivedSingleDigitHpCount": "Survived w/ single digit hp",
    "survivedThreeImmobilizesInFight": "Survived 3+ immobilizations",
    "takedownOnFirstTurret": "First turret assist",
    "takedowns": "Takedowns",
    "takedownsAfterGainingLevelAdvantage": "Takedowns w/ level lead",
    "takedownsBeforeJungleMinionSpawn": "Invade takedowns (pre-spawn)",
    "takedownsFirst25Minutes": "Takedowns @ 25 min",
    "takedownsInEnemyFountain": "Fountain dives",
    "takedownsInAlcove": "Alcove takedowns",
    "teamBaronKills": "Team baron kills",
    "teamDamagePercentage": "Team damage share (%)",
    "teamElderDragonKills": "Team elder dragon kills",
    "teamRiftHeraldKills": "Team rift herald kills",
    "teleportTakedowns": "Teleport takedowns",
    "threeWardsOneSweeperCount": "3 wards cleared (1 sweep)",
    "tookLargeDamageSurvived": "Heavy damage survived",
    "turretPlatesTaken": "Turret plates taken",
    "turretTakedowns": "Turret takedowns",
    "turretsTakenWithRiftHerald": "Turrets taken w/ herald",
    "twentyMinionsIn3SecondsCount": "20 minions in 3 seconds",
    "unseenRecalls": "Unseen recalls",
    "visionScore": "Vision score",
    "visionScoreAdvantageLaneOpponent": "Vision score lead vs opponent",
    "visionScorePerMinute": "Vision score per minute",
    "wardTakedowns": "Wards destroyed",
    "wardTakedownsBefore20M": "Wards destroyed @ 20 min",
    "wardsGuarded": "Wards guarded",
}

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def camel_case_to_title_case(text: str) -> str:
    """``damagePerMinute`` -> ``Damage Per Minute`` unless a friendly name exists."""
    if text in STAT_NAME_MAPPING:
        return STAT_NAME_MAPPING[text]
    spaced = _CAMEL_BOUNDARY.sub(r" \1", text)
    return spaced[:1].upper() + spaced[1:]


def metric_display_name(key: str) -> str:
    """Label for a consistency metric."""
    return DISPLAY_NAME_OVERRIDES.get(key) or camel_case_to_title_case(key)


def format_kda(kda: float | None) -> str:
    if kda is None:
        return NOT_AVAILABLE
    if math.isinf(kda):
        return PERFECT_KDA
    return f"{kda:.2f}"


def format_decimal(value: float | None, digits: int = 1) -> str:
    if value is None or math.isnan(value):
        return NOT_AVAILABLE
    return f"{value:.{digits}f}"


def format_percent(value: float | None, digits: int = 0) -> str:
    """Percentage already on a 0-100 scale."""
    if value is None or math.isnan(value):
        return NOT_AVAILABLE
    return f"{value:.{digits}f}%"


def format_game_clock(ms: int) -> str:
    """Game time in milliseconds as ``m:ss``."""
    ms = max(0, int(ms))
    m = ms // 60000
    s = (ms % 60000) // 1000
    return f"{m}:{s:02d}"


def format_duration(seconds: int) -> str:
    m = seconds // 60
    s = seconds % 60
    return f"{m}m {s}s"


def format_gold(gold: float) -> str:
    """Signed gold difference, e.g. ``+1,250g``."""
    sign = "+" if gold >= 0 else "-"
    return f"{sign}{abs(round(gold)):,}g"
