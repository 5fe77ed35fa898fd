"""Pydantic V2 schemas for the Chaos Sheet rules engine.

This package provides the data records the engine consumes and produces,
the closed enumerations they are keyed by, and the static rule tables.

Submodules:
    enums: Enumeration types (DieSize, ArchetypeName, CombatState, etc.)
    components: Pool and tracker records (GuardPoints, ResourceDie, etc.)
    character: The character aggregate and its archetype/class entries
    progression: Rule tables (XP curve, reward levels, presets)

Example:
    >>> from chaos_sheet.models import GuardPoints, VitalityPoints
    >>> guard = GuardPoints(current=15, max=15, temporary=3)
    >>> vitality = VitalityPoints(current=5, max=5)
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from chaos_sheet.models.enums import (
    AbilitySource,
    ArchetypeName,
    Attribute,
    CombatState,
    DieSize,
    LevelUpGainType,
    ProficiencyLevel,
    ResourceDieState,
    RewardCategory,
    VulnerabilityDieSize,
)

# =============================================================================
# Components
# =============================================================================
from chaos_sheet.models.components import (
    AttributeSet,
    DyingState,
    Experience,
    GuardPoints,
    Modifier,
    PowerPoints,
    ResourceDie,
    SpellPoints,
    VitalityPoints,
    VulnerabilityDie,
)

# =============================================================================
# Character
# =============================================================================
from chaos_sheet.models.character import (
    Archetype,
    Character,
    CharacterClass,
    LevelHistoryEntry,
    LevelProgressionEntry,
    SpecialAbility,
    SpecialGain,
)

# =============================================================================
# Rule tables
# =============================================================================
from chaos_sheet.models.progression import (
    PRESET_RESOURCES,
    PresetResource,
    can_level_up,
    xp_for_next_level,
)


__all__ = [
    # Enumerations
    "AbilitySource",
    "ArchetypeName",
    "Attribute",
    "CombatState",
    "DieSize",
    "LevelUpGainType",
    "ProficiencyLevel",
    "ResourceDieState",
    "RewardCategory",
    "VulnerabilityDieSize",
    # Components
    "AttributeSet",
    "DyingState",
    "Experience",
    "GuardPoints",
    "Modifier",
    "PowerPoints",
    "ResourceDie",
    "SpellPoints",
    "VitalityPoints",
    "VulnerabilityDie",
    # Character
    "Archetype",
    "Character",
    "CharacterClass",
    "LevelHistoryEntry",
    "LevelProgressionEntry",
    "SpecialAbility",
    "SpecialGain",
    # Rule tables
    "PRESET_RESOURCES",
    "PresetResource",
    "can_level_up",
    "xp_for_next_level",
]
