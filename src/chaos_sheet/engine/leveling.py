"""Archetype level-up calculation.

Each level is taken in one archetype. The archetype decides how much Guard
the level adds (the value of one mapped attribute) and how many Power
Points (a fixed base plus Essence). Vitality max is always recomputed from
Guard max, never written independently.

``preview_level_up_gains`` computes the deltas without touching the
character; ``apply_level_up`` commits exactly those deltas to a working
copy the caller owns.

Example:
    >>> preview = preview_level_up_gains(character, ArchetypeName.COMBATANT)
    >>> if preview.remaining_xp >= 0:
    ...     apply_level_up(character, ArchetypeName.COMBATANT)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from chaos_sheet.core.config import get_settings
from chaos_sheet.core.exceptions import InsufficientExperienceError
from chaos_sheet.core.logging import character_scope, get_logger
from chaos_sheet.engine.pools import calculate_vitality
from chaos_sheet.models.character import (
    Archetype,
    Character,
    LevelHistoryEntry,
    LevelProgressionEntry,
    SpecialAbility,
    SpecialGain,
)
from chaos_sheet.models.components import AttributeSet
from chaos_sheet.models.enums import ArchetypeName, LevelUpGainType, RewardCategory
from chaos_sheet.models.progression import (
    ARCHETYPE_GUARD_ATTRIBUTE,
    ARCHETYPE_PP_BASE,
    CLASS_UNLOCK_LEVEL,
    EXTENDED_LEVEL_REWARDS,
    GAIN_TYPE_SOURCE,
    REWARD_LEVELS,
    STANDARD_MAX_ARCHETYPE_LEVEL,
    xp_for_next_level,
)


logger = get_logger(__name__)


@dataclass(frozen=True)
class LevelUpPreview:
    """What one level in an archetype would change.

    Attributes:
        archetype: Archetype the level is taken in.
        new_character_level: Character level after the level-up.
        new_archetype_level: Archetype level after the level-up.
        ga_gained: Guard added to both current and max.
        pp_gained: Power Points added to both current and max.
        new_ga_max: Base Guard max after the level-up.
        new_pp_max: Power Point max after the level-up.
        new_pv_max: Vitality max derived from ``new_ga_max``.
        remaining_xp: Experience left after paying for the level. Negative
            when the character cannot afford it yet.
        rewards: Reward categories unlocked at ``new_archetype_level``.
        unlocks_classes: True when this level makes classes available.
    """

    archetype: ArchetypeName
    new_character_level: int
    new_archetype_level: int
    ga_gained: int
    pp_gained: int
    new_ga_max: int
    new_pp_max: int
    new_pv_max: int
    remaining_xp: int
    rewards: frozenset[RewardCategory]
    unlocks_classes: bool

    @property
    def grants_feature(self) -> bool:
        return RewardCategory.FEATURE in self.rewards

    @property
    def grants_power_or_talent(self) -> bool:
        return RewardCategory.POWER_OR_TALENT in self.rewards

    @property
    def grants_competence(self) -> bool:
        return RewardCategory.COMPETENCE in self.rewards

    @property
    def grants_attribute_increase(self) -> bool:
        return RewardCategory.ATTRIBUTE_INCREASE in self.rewards

    @property
    def grants_skill_degree_increase(self) -> bool:
        return RewardCategory.SKILL_DEGREE_INCREASE in self.rewards

    @property
    def grants_defense_step(self) -> bool:
        return RewardCategory.DEFENSE_STEP in self.rewards

    @property
    def can_afford(self) -> bool:
        """True when the experience remainder is not negative."""
        return self.remaining_xp >= 0


# =============================================================================
# Gains
# =============================================================================


def get_archetype_level(character: Character, name: ArchetypeName) -> int:
    """Levels the character holds in ``name``, 0 if none."""
    archetype = character.get_archetype(name)
    return archetype.level if archetype is not None else 0


def calculate_guard_gain(archetype: ArchetypeName, attributes: AttributeSet) -> int:
    """Guard gained per level: the value of the archetype's Guard attribute.

    Example:
        >>> calculate_guard_gain(ArchetypeName.COMBATANT, AttributeSet(body=3))
        3
    """
    return attributes.get(ARCHETYPE_GUARD_ATTRIBUTE[archetype])


def calculate_power_point_gain(archetype: ArchetypeName, essence: int) -> int:
    """Power Points gained per level: archetype base plus Essence."""
    return ARCHETYPE_PP_BASE[archetype] + essence


def get_reward_categories(archetype_level: int) -> frozenset[RewardCategory]:
    """Reward categories unlocked on reaching ``archetype_level``.

    Levels past the standard table keep granting a power or talent.

    Example:
        >>> sorted(str(category) for category in get_reward_categories(5))
        ['defense-step', 'feature', 'skill-degree-increase']
    """
    if archetype_level > STANDARD_MAX_ARCHETYPE_LEVEL:
        return EXTENDED_LEVEL_REWARDS
    return frozenset(
        category for category, levels in REWARD_LEVELS.items() if archetype_level in levels
    )


def determine_gain_type(archetype_level: int) -> LevelUpGainType:
    """Headline gain recorded in the level history for an archetype level."""
    rewards = get_reward_categories(archetype_level)
    if RewardCategory.FEATURE in rewards:
        return LevelUpGainType.FEATURE
    if RewardCategory.COMPETENCE in rewards:
        return LevelUpGainType.COMPETENCE
    return LevelUpGainType.POWER


def preview_level_up_gains(character: Character, archetype: ArchetypeName) -> LevelUpPreview:
    """Compute the deltas of one level in ``archetype`` without changing anything.

    Args:
        character: Character snapshot.
        archetype: Archetype the level would be taken in.

    Returns:
        LevelUpPreview with the new maxima, reward flags and XP remainder.
    """
    new_character_level = character.level + 1
    new_archetype_level = get_archetype_level(character, archetype) + 1
    ga_gained = calculate_guard_gain(archetype, character.attributes)
    pp_gained = calculate_power_point_gain(archetype, character.attributes.essence)
    new_ga_max = character.guard.max + ga_gained

    return LevelUpPreview(
        archetype=archetype,
        new_character_level=new_character_level,
        new_archetype_level=new_archetype_level,
        ga_gained=ga_gained,
        pp_gained=pp_gained,
        new_ga_max=new_ga_max,
        new_pp_max=character.power_points.max + pp_gained,
        new_pv_max=calculate_vitality(new_ga_max),
        remaining_xp=character.experience.current - character.experience.to_next_level,
        rewards=get_reward_categories(new_archetype_level),
        unlocks_classes=new_character_level == CLASS_UNLOCK_LEVEL,
    )


# =============================================================================
# Commit
# =============================================================================


def _build_gain_summary(preview: LevelUpPreview, special_gains: Sequence[SpecialGain]) -> list[str]:
    gains = [
        f"Archetype: {preview.archetype.label} (level {preview.new_archetype_level})",
        f"+{preview.ga_gained} GA",
        f"+{preview.pp_gained} PP",
    ]
    gains.extend(f"{gain.type.label}: {gain.name}" for gain in special_gains)
    return gains


def apply_level_up(
    character: Character,
    archetype: ArchetypeName,
    special_gains: Sequence[SpecialGain] | None = None,
) -> LevelUpPreview:
    """Commit one level in ``archetype`` to a working copy of a character.

    The character passed in is modified in place; callers hand in a copy
    they own (``character.model_copy(deep=True)``) and persist it
    afterwards. Current Vitality is not healed by the level-up.

    Paying for the level is the caller's job: check ``preview.remaining_xp``
    first. With ``game.enforce_xp_precondition`` enabled an unaffordable
    level raises instead; otherwise it is committed with a warning and the
    carried experience floors at zero.

    Args:
        character: Working copy to modify.
        archetype: Archetype the level is taken in.
        special_gains: Powers, talents, competences or features chosen for
            this level.

    Returns:
        The LevelUpPreview that was committed.

    Raises:
        InsufficientExperienceError: If strict XP checking is enabled and
            the character cannot afford the level.
    """
    with character_scope(character):
        return _commit_level_up(character, archetype, list(special_gains or []))


def _commit_level_up(
    character: Character,
    archetype: ArchetypeName,
    special_gains: list[SpecialGain],
) -> LevelUpPreview:
    preview = preview_level_up_gains(character, archetype)

    if not preview.can_afford:
        if get_settings().game.enforce_xp_precondition:
            raise InsufficientExperienceError(
                "Not enough experience to level up",
                current_xp=character.experience.current,
                required_xp=character.experience.to_next_level,
                character_id=character.id,
                archetype=archetype.value,
            )
        logger.warning(
            "Level up committed without enough experience",
            archetype=archetype.value,
            remaining_xp=preview.remaining_xp,
        )

    character.level = preview.new_character_level

    entry = character.get_archetype(archetype)
    if entry is None:
        entry = Archetype(name=archetype, level=0)
        character.archetypes.append(entry)
    entry.level = preview.new_archetype_level

    guard = character.guard
    character.guard = guard.model_copy(
        update={
            "max": preview.new_ga_max,
            "current": guard.current + preview.ga_gained,
        }
    )
    pp = character.power_points
    character.power_points = pp.model_copy(
        update={
            "max": preview.new_pp_max,
            "current": pp.current + preview.pp_gained,
        }
    )
    character.spell_points = character.spell_points.model_copy(
        update={
            "max": preview.new_pp_max,
            "current": min(character.spell_points.current, preview.new_pp_max),
        }
    )
    vitality = character.vitality
    character.vitality = vitality.model_copy(
        update={
            "max": preview.new_pv_max,
            "current": min(vitality.current, preview.new_pv_max),
        }
    )

    character.experience = character.experience.model_copy(
        update={
            "current": max(0, preview.remaining_xp),
            "to_next_level": xp_for_next_level(preview.new_character_level),
        }
    )

    for gain in special_gains:
        character.special_abilities.append(
            SpecialAbility(
                name=gain.name,
                description=gain.description,
                effects=gain.effects,
                source=GAIN_TYPE_SOURCE[gain.type],
                source_name=archetype.label,
                level_gained=preview.new_character_level,
            )
        )
        if gain.type == LevelUpGainType.FEATURE:
            entry.features.append(gain.name)

    character.level_progression.append(
        LevelProgressionEntry(
            level=preview.new_character_level,
            gains=_build_gain_summary(preview, special_gains),
        )
    )

    primary = special_gains[0] if special_gains else None
    now = datetime.now()
    character.level_history.append(
        LevelHistoryEntry(
            level=preview.new_character_level,
            archetype=archetype,
            gain_type=determine_gain_type(preview.new_archetype_level),
            gain_name=primary.name if primary else None,
            gain_description=primary.description if primary else None,
            timestamp=now,
        )
    )
    character.updated_at = now

    logger.info(
        "Level up committed",
        archetype=archetype.value,
        character_level=preview.new_character_level,
        archetype_level=preview.new_archetype_level,
        ga_gained=preview.ga_gained,
        pp_gained=preview.pp_gained,
    )
    return preview


__all__ = [
    "LevelUpPreview",
    "get_archetype_level",
    "calculate_guard_gain",
    "calculate_power_point_gain",
    "get_reward_categories",
    "determine_gain_type",
    "preview_level_up_gains",
    "apply_level_up",
]
