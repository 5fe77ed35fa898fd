"""Chaos RPG rule tables.

This module contains the static data the rules engine reads:
- XP needed per level, with the overflow curve past the table
- Starting pool values and per-archetype gains
- Reward categories by archetype level
- Class gating limits
- Resource die presets

Everything here is TRUTH for the engine. Functions elsewhere compute with
these values but never redefine them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from chaos_sheet.models.components import ResourceDie
from chaos_sheet.models.enums import (
    AbilitySource,
    ArchetypeName,
    Attribute,
    DieSize,
    LevelUpGainType,
    RewardCategory,
)


# =============================================================================
# Experience
# =============================================================================

# XP needed to go from level N to N+1, indexed by N (0->1 .. 30->31).
XP_TABLE: tuple[int, ...] = (
    15, 50, 125, 250, 425,
    650, 925, 1250, 1625, 2050,
    2500, 3050, 3625, 4250, 4925,
    5650, 7710, 8700, 9750, 10860,
    12030, 13260, 14550, 15900, 17310,
    18780, 20310, 21900, 23550, 25260,
    30000,
)

# Each level past the table costs the previous one times this, floored.
XP_OVERFLOW_MULTIPLIER = 1.07


def xp_for_next_level(current_level: int) -> int:
    """XP needed to advance from ``current_level`` to the next level.

    Example:
        >>> xp_for_next_level(1)
        50
        >>> xp_for_next_level(31)
        32100
    """
    if current_level < 0:
        return XP_TABLE[0]
    if current_level < len(XP_TABLE):
        return XP_TABLE[current_level]

    xp = XP_TABLE[-1]
    for _ in range(current_level - (len(XP_TABLE) - 1)):
        xp = math.floor(xp * XP_OVERFLOW_MULTIPLIER)
    return xp


def can_level_up(current_xp: int, to_next_level: int) -> bool:
    """True when the character holds enough XP for the next level."""
    return current_xp >= to_next_level


# =============================================================================
# Pools
# =============================================================================

GA_BASE_LEVEL_1 = 15
PP_BASE_LEVEL_1 = 2

# Recovery points spent per point of Vitality restored.
PV_RECOVERY_COST = 5

# Dying rounds before death = base + Body + modifiers.
DYING_BASE_ROUNDS = 2


# =============================================================================
# Archetypes
# =============================================================================

# Attribute whose value is added to Guard max on every level in the archetype.
ARCHETYPE_GUARD_ATTRIBUTE: dict[ArchetypeName, Attribute] = {
    ArchetypeName.COMBATANT: Attribute.BODY,
    ArchetypeName.ROGUE: Attribute.AGILITY,
    ArchetypeName.ACOLYTE: Attribute.INFLUENCE,
    ArchetypeName.NATURAL: Attribute.INSTINCT,
    ArchetypeName.ACADEMIC: Attribute.MIND,
    ArchetypeName.SORCERER: Attribute.ESSENCE,
}

# Fixed Power Point gain per level, added to Essence.
ARCHETYPE_PP_BASE: dict[ArchetypeName, int] = {
    ArchetypeName.COMBATANT: 1,
    ArchetypeName.ROGUE: 2,
    ArchetypeName.ACOLYTE: 3,
    ArchetypeName.NATURAL: 3,
    ArchetypeName.ACADEMIC: 4,
    ArchetypeName.SORCERER: 5,
}


# =============================================================================
# Rewards by archetype level
# =============================================================================

# Highest archetype level covered by REWARD_LEVELS.
STANDARD_MAX_ARCHETYPE_LEVEL = 15

REWARD_LEVELS: dict[RewardCategory, frozenset[int]] = {
    RewardCategory.FEATURE: frozenset({1, 5, 10, 15}),
    RewardCategory.POWER_OR_TALENT: frozenset({2, 4, 6, 8, 9, 11, 13, 14}),
    RewardCategory.COMPETENCE: frozenset({3, 7, 12}),
    RewardCategory.ATTRIBUTE_INCREASE: frozenset({4, 8, 13}),
    RewardCategory.SKILL_DEGREE_INCREASE: frozenset({5, 9, 14}),
    RewardCategory.DEFENSE_STEP: frozenset({5, 10, 15}),
}

# Past the standard table, every archetype level keeps granting these.
EXTENDED_LEVEL_REWARDS: frozenset[RewardCategory] = frozenset(
    {RewardCategory.POWER_OR_TALENT}
)

# Where a chosen gain lands on the sheet.
GAIN_TYPE_SOURCE: dict[LevelUpGainType, AbilitySource] = {
    LevelUpGainType.POWER: AbilitySource.POWER,
    LevelUpGainType.TALENT: AbilitySource.POWER,
    LevelUpGainType.COMPETENCE: AbilitySource.COMPETENCE,
    LevelUpGainType.FEATURE: AbilitySource.ARCHETYPE_FEATURE,
}


# =============================================================================
# Classes
# =============================================================================

CLASS_UNLOCK_LEVEL = 3
MAX_CLASSES = 3


# =============================================================================
# Resource dice presets
# =============================================================================


@dataclass(frozen=True)
class PresetResource:
    """Template for a commonly tracked resource die.

    Attributes:
        name: Resource name shown on the sheet.
        min_die: Floor die; stepping down from it depletes the resource.
        max_die: Ceiling die and reset value.
        current_die: Die the resource starts at.
        description: Short description.
    """

    name: str
    min_die: DieSize
    max_die: DieSize
    current_die: DieSize
    description: str

    def create_die(self) -> ResourceDie:
        """Build a fresh, active resource die from this preset."""
        return ResourceDie(
            name=self.name,
            current_die=self.current_die,
            min_die=self.min_die,
            max_die=self.max_die,
            is_custom=False,
        )


PRESET_RESOURCES: dict[str, PresetResource] = {
    preset.name: preset
    for preset in (
        PresetResource("Water", DieSize.D2, DieSize.D12, DieSize.D12, "Drinking water supply"),
        PresetResource("Food", DieSize.D2, DieSize.D12, DieSize.D12, "Rations"),
        PresetResource("Torch", DieSize.D2, DieSize.D8, DieSize.D8, "Torches for light"),
        PresetResource("Arrows", DieSize.D2, DieSize.D12, DieSize.D12, "Arrows for bows"),
        PresetResource("Weapon", DieSize.D2, DieSize.D20, DieSize.D20, "Main weapon durability"),
        PresetResource("Armor", DieSize.D2, DieSize.D20, DieSize.D20, "Armor durability"),
        PresetResource("Gunpowder", DieSize.D2, DieSize.D10, DieSize.D10, "Powder for firearms"),
    )
}


__all__ = [
    "XP_TABLE",
    "XP_OVERFLOW_MULTIPLIER",
    "xp_for_next_level",
    "can_level_up",
    "GA_BASE_LEVEL_1",
    "PP_BASE_LEVEL_1",
    "PV_RECOVERY_COST",
    "DYING_BASE_ROUNDS",
    "ARCHETYPE_GUARD_ATTRIBUTE",
    "ARCHETYPE_PP_BASE",
    "STANDARD_MAX_ARCHETYPE_LEVEL",
    "REWARD_LEVELS",
    "EXTENDED_LEVEL_REWARDS",
    "GAIN_TYPE_SOURCE",
    "CLASS_UNLOCK_LEVEL",
    "MAX_CLASSES",
    "PresetResource",
    "PRESET_RESOURCES",
]
