"""Pydantic V2 schemas for the character aggregate.

The host application owns the long-lived character record. The engine is
handed a snapshot (or a working copy for ``apply_level_up``) and returns
updated sub-records; it never creates or stores characters on its own.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chaos_sheet.models.components import (
    AttributeSet,
    DyingState,
    Experience,
    GuardPoints,
    PowerPoints,
    ResourceDie,
    SpellPoints,
    VitalityPoints,
    VulnerabilityDie,
)
from chaos_sheet.models.enums import (
    AbilitySource,
    ArchetypeName,
    CombatState,
    LevelUpGainType,
    ProficiencyLevel,
)


# =============================================================================
# Archetypes and Classes
# =============================================================================


class Archetype(BaseModel):
    """Levels a character has invested in one archetype.

    ``level`` accepts zero so that progression validation, not model
    parsing, reports non-positive levels in stored snapshots.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: ArchetypeName = Field(description="Archetype name")
    level: Annotated[int, Field(ge=0, description="Levels in this archetype")] = 1
    features: list[str] = Field(
        default_factory=list,
        description="Names of archetype features gained",
    )


class CharacterClass(BaseModel):
    """A class, unlocked from character level 3."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: str = Field(min_length=1, max_length=100, description="Class name")
    level: Annotated[int, Field(ge=0, description="Levels in this class")] = 1


# =============================================================================
# Abilities and Level Log
# =============================================================================


class SpecialAbility(BaseModel):
    """An ability on the sheet, tagged with where it came from."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(min_length=1, description="Ability name")
    description: str = ""
    effects: str = ""
    source: AbilitySource = AbilitySource.OTHER
    source_name: str | None = Field(
        default=None,
        description="Archetype or class that granted the ability",
    )
    level_gained: Annotated[int, Field(ge=0)] | None = None


class LevelProgressionEntry(BaseModel):
    """Human-readable summary of what one level granted."""

    model_config = ConfigDict(extra="forbid")

    level: Annotated[int, Field(ge=1)]
    gains: list[str] = Field(default_factory=list)
    achieved: bool = True


class LevelHistoryEntry(BaseModel):
    """Audit record of a single level-up."""

    model_config = ConfigDict(extra="forbid")

    level: Annotated[int, Field(ge=1, description="Character level reached")]
    archetype: ArchetypeName
    gain_type: LevelUpGainType | None = None
    gain_name: str | None = None
    gain_description: str | None = None
    timestamp: datetime = Field(default_factory=datetime.now)


class SpecialGain(BaseModel):
    """A player choice recorded during a level-up (power, talent, ...)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: LevelUpGainType
    name: str = Field(min_length=1)
    description: str = ""
    effects: str = ""


# =============================================================================
# Character Aggregate
# =============================================================================


class Character(BaseModel):
    """Character aggregate as far as the rules engine reads and writes it.

    Attributes:
        id: Unique character identifier.
        name: Character name.
        level: Character level, equal to the sum of archetype levels.
        attributes: The six attributes.
        guard: Guard (GA) pool.
        vitality: Vitality (PV) pool, max derived from Guard max.
        power_points: Power Points (PP) pool.
        spell_points: Spell Points (PF) pool, max mirrors PP max.
        experience: Experience held and needed.
        archetypes: Archetypes with levels, distinct by name.
        classes: Classes with levels.
        skills: Proficiency degree per skill name.
        special_abilities: Abilities gained from any source.
        resource_dice: Tracked consumables.
        dying: Dying round counter.
        vulnerability: Vulnerability die.
        combat_state: Combat state label last assigned by the host.
        level_progression: Per-level gain summaries.
        level_history: Level-up audit log.
        updated_at: Last modification time.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique identifier")
    name: str = Field(min_length=1, max_length=100, description="Character name")
    level: Annotated[int, Field(ge=1, description="Character level")] = 1
    attributes: AttributeSet = Field(default_factory=AttributeSet)
    guard: GuardPoints = Field(default_factory=GuardPoints)
    vitality: VitalityPoints = Field(default_factory=VitalityPoints)
    power_points: PowerPoints = Field(default_factory=PowerPoints)
    spell_points: SpellPoints = Field(default_factory=SpellPoints)
    experience: Experience = Field(default_factory=Experience)
    archetypes: list[Archetype] = Field(default_factory=list)
    classes: list[CharacterClass] = Field(default_factory=list)
    skills: dict[str, ProficiencyLevel] = Field(default_factory=dict)
    special_abilities: list[SpecialAbility] = Field(default_factory=list)
    resource_dice: list[ResourceDie] = Field(default_factory=list)
    dying: DyingState = Field(default_factory=DyingState)
    vulnerability: VulnerabilityDie = Field(default_factory=VulnerabilityDie)
    combat_state: CombatState = CombatState.NORMAL
    level_progression: list[LevelProgressionEntry] = Field(default_factory=list)
    level_history: list[LevelHistoryEntry] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("archetypes")
    @classmethod
    def validate_distinct_archetypes(cls, value: list[Archetype]) -> list[Archetype]:
        """Ensure each archetype appears at most once."""
        names = [archetype.name for archetype in value]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"Duplicate archetypes: {', '.join(duplicates)}"
            raise ValueError(msg)
        return value

    def get_archetype(self, name: ArchetypeName) -> Archetype | None:
        """Get the archetype entry for ``name``, if the character has one.

        Args:
            name: The archetype to look up.

        Returns:
            The stored entry or None.
        """
        for archetype in self.archetypes:
            if archetype.name == name:
                return archetype
        return None

    @property
    def total_archetype_levels(self) -> int:
        """Sum of all archetype levels."""
        return sum(archetype.level for archetype in self.archetypes)


__all__ = [
    "Archetype",
    "CharacterClass",
    "SpecialAbility",
    "LevelProgressionEntry",
    "LevelHistoryEntry",
    "SpecialGain",
    "Character",
]
