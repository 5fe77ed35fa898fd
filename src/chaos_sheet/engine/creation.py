"""Level-1 character factory and snapshot loading."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from chaos_sheet.core.config import get_settings
from chaos_sheet.core.exceptions import ValidationError
from chaos_sheet.core.logging import character_scope, get_logger
from chaos_sheet.engine.combat_state import calculate_max_dying_rounds
from chaos_sheet.engine.pools import calculate_vitality
from chaos_sheet.models.character import Archetype, Character
from chaos_sheet.models.components import (
    AttributeSet,
    DyingState,
    Experience,
    GuardPoints,
    PowerPoints,
    SpellPoints,
    VitalityPoints,
)
from chaos_sheet.models.enums import ArchetypeName
from chaos_sheet.models.progression import (
    ARCHETYPE_GUARD_ATTRIBUTE,
    ARCHETYPE_PP_BASE,
    GA_BASE_LEVEL_1,
    PP_BASE_LEVEL_1,
    PRESET_RESOURCES,
    xp_for_next_level,
)


logger = get_logger(__name__)


def create_character(
    name: str,
    attributes: AttributeSet | None = None,
    archetype: ArchetypeName | None = None,
) -> Character:
    """Create a level-1 character with full pools.

    Guard starts at 15 plus the archetype's Guard attribute, Power Points at
    2 plus the archetype's base and Essence. Without an archetype only the
    flat bases apply. Default resource dice come from the
    ``game.default_resources`` setting.

    Args:
        name: Character name.
        attributes: Starting attributes; all 1 when omitted.
        archetype: Archetype of the first level, if already chosen.

    Returns:
        The new Character.

    Example:
        >>> hero = create_character("Ayla", AttributeSet(body=3), ArchetypeName.COMBATANT)
        >>> hero.guard.max, hero.vitality.max
        (18, 6)
    """
    attributes = attributes or AttributeSet()

    guard_max = GA_BASE_LEVEL_1
    pp_max = PP_BASE_LEVEL_1
    archetypes: list[Archetype] = []
    if archetype is not None:
        guard_max += attributes.get(ARCHETYPE_GUARD_ATTRIBUTE[archetype])
        pp_max += ARCHETYPE_PP_BASE[archetype] + attributes.essence
        archetypes.append(Archetype(name=archetype, level=1))

    vitality_max = calculate_vitality(guard_max)
    resource_dice = [
        PRESET_RESOURCES[preset].create_die()
        for preset in get_settings().game.default_resources
    ]

    character = Character(
        name=name,
        level=1,
        attributes=attributes,
        guard=GuardPoints(current=guard_max, max=guard_max),
        vitality=VitalityPoints(current=vitality_max, max=vitality_max),
        power_points=PowerPoints(current=pp_max, max=pp_max),
        spell_points=SpellPoints(current=pp_max, max=pp_max),
        experience=Experience(current=0, to_next_level=xp_for_next_level(1)),
        archetypes=archetypes,
        resource_dice=resource_dice,
        dying=DyingState(max_rounds=calculate_max_dying_rounds(attributes.body)),
    )
    with character_scope(character):
        logger.info(
            "Character created",
            archetype=archetype.value if archetype else None,
            guard_max=guard_max,
            pp_max=pp_max,
        )
    return character


def load_character(snapshot: Mapping[str, Any]) -> Character:
    """Build a Character from a host snapshot (e.g. parsed JSON).

    Args:
        snapshot: Plain data as produced by ``Character.model_dump``.

    Returns:
        The validated Character.

    Raises:
        ValidationError: If the snapshot does not describe a valid character.
        UnknownDieSizeError: If a resource die uses notation off the scale.
    """
    try:
        return Character.model_validate(snapshot)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            f"Invalid character snapshot: {first['msg']}",
            field_name=field_name or None,
            invalid_value=first.get("input"),
            details={"error_count": exc.error_count()},
        ) from exc


__all__ = [
    "create_character",
    "load_character",
]
