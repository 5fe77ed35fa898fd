"""Whole-character progression checks.

Rules:
- Every character level is invested in exactly one archetype, so archetype
  levels sum to the character level. A level-1 character with no archetype
  yet is the one exception.
- Archetype levels are at least 1.
- Classes unlock at character level 3; at most 3 classes, and their levels
  never sum past the character level.
- The level history never mentions a level the character has not reached.

Problems are reported as descriptive strings. Nothing here raises; the
host decides whether an error blocks an action.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from chaos_sheet.core.logging import get_logger
from chaos_sheet.models.character import Archetype, Character, CharacterClass
from chaos_sheet.models.progression import CLASS_UNLOCK_LEVEL, MAX_CLASSES


logger = get_logger(__name__)


@dataclass
class ClassValidationResult:
    """Outcome of the class rules."""

    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass
class ProgressionReport:
    """Outcome of the full progression check.

    Attributes:
        errors: Rule violations.
        warnings: Informational notes that never block anything.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when there are no errors; warnings do not count."""
        return not self.errors


# =============================================================================
# Archetypes
# =============================================================================


def get_total_archetype_levels(archetypes: Sequence[Archetype]) -> int:
    """Sum of all archetype levels."""
    return sum(archetype.level for archetype in archetypes)


def validate_archetype_levels_sum(archetypes: Sequence[Archetype], character_level: int) -> bool:
    """Archetype levels must add up to the character level.

    A level-1 character that has not picked an archetype yet passes.

    Example:
        >>> validate_archetype_levels_sum([], 1)
        True
    """
    if character_level == 1 and not archetypes:
        return True
    return get_total_archetype_levels(archetypes) == character_level


def validate_archetype_levels_positive(archetypes: Sequence[Archetype]) -> bool:
    """Every archetype must hold at least one level."""
    return all(archetype.level >= 1 for archetype in archetypes)


# =============================================================================
# Classes
# =============================================================================


def can_have_classes(character_level: int) -> bool:
    """True from the class unlock level onwards."""
    return character_level >= CLASS_UNLOCK_LEVEL


def get_available_class_levels(classes: Sequence[CharacterClass], character_level: int) -> int:
    """Class levels that can still be assigned without exceeding the character level."""
    return max(0, character_level - sum(cls.level for cls in classes))


def validate_classes(
    classes: Sequence[CharacterClass],
    character_level: int,
) -> ClassValidationResult:
    """Check the class rules, one error string per broken rule.

    Args:
        classes: The character's classes.
        character_level: Current character level.

    Returns:
        ClassValidationResult; no classes at all is always valid.
    """
    result = ClassValidationResult()
    if not classes:
        return result

    if not can_have_classes(character_level):
        result.errors.append(
            f"Classes unlock at level {CLASS_UNLOCK_LEVEL}. Current level: {character_level}."
        )

    if len(classes) > MAX_CLASSES:
        result.errors.append(f"At most {MAX_CLASSES} classes allowed. Currently: {len(classes)}.")

    total_class_levels = sum(cls.level for cls in classes)
    if total_class_levels > character_level:
        result.errors.append(
            f"Class levels ({total_class_levels}) exceed the character level "
            f"({character_level})."
        )

    return result


# =============================================================================
# Full check
# =============================================================================


def validate_progression(character: Character) -> ProgressionReport:
    """Run every progression rule against a character.

    Args:
        character: Character snapshot.

    Returns:
        ProgressionReport with errors and warnings.
    """
    report = ProgressionReport()

    if not validate_archetype_levels_sum(character.archetypes, character.level):
        total = get_total_archetype_levels(character.archetypes)
        report.errors.append(
            f"Archetype levels ({total}) do not match the character level ({character.level})."
        )

    if not validate_archetype_levels_positive(character.archetypes):
        report.errors.append("Every archetype must have level 1 or higher.")

    report.errors.extend(validate_classes(character.classes, character.level).errors)

    if character.level >= CLASS_UNLOCK_LEVEL and not character.classes:
        report.warnings.append(
            f"A class can be chosen from level {CLASS_UNLOCK_LEVEL} onwards."
        )

    if character.level >= 1 and not character.archetypes:
        report.warnings.append("No archetype chosen yet.")

    if character.level_history:
        max_history_level = max(entry.level for entry in character.level_history)
        if max_history_level > character.level:
            report.errors.append(
                f"Level history has entries for level {max_history_level}, "
                f"but the character is level {character.level}."
            )

    if report.errors:
        logger.debug(
            "Progression check failed",
            character_id=character.id,
            errors=len(report.errors),
        )
    return report


__all__ = [
    "ClassValidationResult",
    "ProgressionReport",
    "get_total_archetype_levels",
    "validate_archetype_levels_sum",
    "validate_archetype_levels_positive",
    "can_have_classes",
    "get_available_class_levels",
    "validate_classes",
    "validate_progression",
]
