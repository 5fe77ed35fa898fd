"""Enumeration types for the Chaos Sheet rules engine.

Every string-keyed concept the engine looks up (die sizes, archetypes,
attributes, reward categories) is a closed enumeration, so rule tables
keyed by them can be checked for completeness.
"""

from __future__ import annotations

from enum import StrEnum

from chaos_sheet.core.exceptions import UnknownDieSizeError


class DieSize(StrEnum):
    """Resource die sizes, declared in ascending scale order.

    Resource dice degrade one step at a time along
    d2 -> d3 -> d4 -> d6 -> d8 -> d10 -> d12 -> d20 -> d100.
    """

    D2 = "d2"
    D3 = "d3"
    D4 = "d4"
    D6 = "d6"
    D8 = "d8"
    D10 = "d10"
    D12 = "d12"
    D20 = "d20"
    D100 = "d100"

    @property
    def sides(self) -> int:
        """Number of faces on the die (e.g. 12 for d12)."""
        return int(self.value[1:])

    @property
    def rank(self) -> int:
        """0-based position on the ascending scale."""
        return list(DieSize).index(self)

    @classmethod
    def parse(cls, value: str) -> DieSize:
        """Parse die notation such as ``"d8"`` or ``"D8"``.

        Args:
            value: Die notation from an external snapshot.

        Returns:
            The matching DieSize.

        Raises:
            UnknownDieSizeError: If the notation is not on the scale.
        """
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError) as exc:
            raise UnknownDieSizeError(
                f"Unknown resource die: {value!r}",
                die=str(value),
            ) from exc


class ResourceDieState(StrEnum):
    """Lifecycle of a resource die."""

    ACTIVE = "active"
    DEPLETED = "depleted"


class VulnerabilityDieSize(StrEnum):
    """Vulnerability die sizes, declared from largest to smallest."""

    D20 = "d20"
    D12 = "d12"
    D10 = "d10"
    D8 = "d8"
    D6 = "d6"
    D4 = "d4"


class Attribute(StrEnum):
    """The six character attributes."""

    AGILITY = "agility"
    BODY = "body"
    INFLUENCE = "influence"
    MIND = "mind"
    ESSENCE = "essence"
    INSTINCT = "instinct"


class ArchetypeName(StrEnum):
    """The six archetypes a character can invest levels in."""

    ACADEMIC = "academic"
    ACOLYTE = "acolyte"
    COMBATANT = "combatant"
    SORCERER = "sorcerer"
    ROGUE = "rogue"
    NATURAL = "natural"

    @property
    def label(self) -> str:
        """Display label (e.g. 'Combatant')."""
        return self.value.capitalize()


class CombatState(StrEnum):
    """Combat status label derived from the defensive pools."""

    NORMAL = "normal"
    DIRECT_WOUND = "direct-wound"
    CRITICAL_WOUND = "critical-wound"
    DYING = "dying"
    UNCONSCIOUS = "unconscious"
    DEAD = "dead"


class RewardCategory(StrEnum):
    """Reward categories unlocked at specific archetype levels."""

    FEATURE = "feature"
    POWER_OR_TALENT = "power-or-talent"
    COMPETENCE = "competence"
    ATTRIBUTE_INCREASE = "attribute-increase"
    SKILL_DEGREE_INCREASE = "skill-degree-increase"
    DEFENSE_STEP = "defense-step"


class LevelUpGainType(StrEnum):
    """Kinds of player-chosen gains recorded during a level-up."""

    POWER = "power"
    TALENT = "talent"
    COMPETENCE = "competence"
    FEATURE = "feature"

    @property
    def label(self) -> str:
        """Display label used in the progression log."""
        labels: dict[LevelUpGainType, str] = {
            LevelUpGainType.POWER: "Power/Talent",
            LevelUpGainType.TALENT: "Power/Talent",
            LevelUpGainType.COMPETENCE: "Competence",
            LevelUpGainType.FEATURE: "Archetype feature",
        }
        return labels[self]


class ProficiencyLevel(StrEnum):
    """Ordered skill proficiency degrees, lowest first."""

    NONE = "none"
    BASIC = "basic"
    EXPERT = "expert"
    MASTER = "master"

    @property
    def multiplier(self) -> int:
        """Proficiency multiplier: 0 for none up to 3 for master."""
        return list(ProficiencyLevel).index(self)

    def step_up(self) -> ProficiencyLevel:
        """Next degree, staying at master."""
        levels = list(ProficiencyLevel)
        return levels[min(self.multiplier + 1, len(levels) - 1)]


class AbilitySource(StrEnum):
    """Where a special ability on the sheet came from."""

    ORIGIN = "origin"
    LINEAGE = "lineage"
    ARCHETYPE_FEATURE = "archetype-feature"
    CLASS = "class"
    POWER = "power"
    COMPETENCE = "competence"
    OTHER = "other"


__all__ = [
    "DieSize",
    "ResourceDieState",
    "VulnerabilityDieSize",
    "Attribute",
    "ArchetypeName",
    "CombatState",
    "RewardCategory",
    "LevelUpGainType",
    "ProficiencyLevel",
    "AbilitySource",
]
