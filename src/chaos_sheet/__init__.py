"""Chaos Sheet - rules engine for a tabletop RPG character sheet.

Pure, synchronous calculations over character data records:

- Python owns the RULES (pool arithmetic, die steps, level-up deltas)
- The host owns the CHARACTER (persistence, UI, when to commit)
- The engine never stores characters or produces user-facing text

Example:
    >>> from chaos_sheet import (
    ...     ArchetypeName, AttributeSet, apply_level_up, create_character,
    ...     preview_level_up_gains, validate_progression,
    ... )
    >>> hero = create_character("Ayla", AttributeSet(body=3), ArchetypeName.COMBATANT)
    >>> working = hero.model_copy(deep=True)
    >>> preview = preview_level_up_gains(working, ArchetypeName.COMBATANT)
    >>> if preview.can_afford:
    ...     apply_level_up(working, ArchetypeName.COMBATANT)
    >>> validate_progression(working).valid

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 records, enumerations and rule tables.
    engine: Pools, resource dice, combat state, leveling, validation.
"""

from __future__ import annotations

# Core
from chaos_sheet.core.config import Settings, get_settings
from chaos_sheet.core.exceptions import ChaosSheetError
from chaos_sheet.core.logging import configure_logging, get_logger

# Models
from chaos_sheet.models import (
    ArchetypeName,
    Attribute,
    AttributeSet,
    Character,
    CombatState,
    DieSize,
    GuardPoints,
    PowerPoints,
    ResourceDie,
    SpecialGain,
    VitalityPoints,
)

# Engine
from chaos_sheet.engine import (
    apply_damage,
    apply_delta_to_pp,
    apply_level_up,
    create_character,
    determine_combat_state,
    heal_guard,
    heal_vitality,
    load_character,
    preview_level_up_gains,
    process_resource_use,
    validate_progression,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "ChaosSheetError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "ArchetypeName",
    "Attribute",
    "AttributeSet",
    "Character",
    "CombatState",
    "DieSize",
    "GuardPoints",
    "PowerPoints",
    "ResourceDie",
    "SpecialGain",
    "VitalityPoints",
    # Engine
    "apply_damage",
    "apply_delta_to_pp",
    "apply_level_up",
    "create_character",
    "determine_combat_state",
    "heal_guard",
    "heal_vitality",
    "load_character",
    "preview_level_up_gains",
    "process_resource_use",
    "validate_progression",
]
