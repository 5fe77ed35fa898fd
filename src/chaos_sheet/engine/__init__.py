"""Rules engine for the Chaos Sheet character manager.

Pure calculations over the records in ``chaos_sheet.models``: damage and
healing across Guard, Vitality and Power Points, step-die resources,
combat state, archetype level-ups and progression checks.

Submodules:
    pools: Guard/Vitality/Power Point arithmetic
    resource_dice: Step-die consumable resources
    dice: d20-backed roller producing resource die rolls
    combat_state: Combat state label, dying counter, vulnerability die
    leveling: Archetype level-up preview and commit
    validation: Whole-character progression checks
    creation: Level-1 character factory and snapshot loading

Example:
    >>> from chaos_sheet.engine import apply_damage, determine_combat_state
    >>> result = apply_damage(character.guard, character.vitality, 20)
    >>> determine_combat_state(
    ...     result.guard.current, result.guard.max,
    ...     result.vitality.current, result.vitality.max,
    ... )
"""

from __future__ import annotations

# =============================================================================
# Resource Pools
# =============================================================================
from chaos_sheet.engine.pools import (
    PV_RECOVERY_COST,
    DamageResult,
    VitalityHealResult,
    adjust_ga_on_pv_crossing,
    apply_damage,
    apply_damage_with_crossing,
    apply_delta_to_pp,
    calculate_pp_per_round,
    calculate_rest_ga_recovery,
    calculate_vitality,
    get_effective_ga_max,
    heal_guard,
    heal_vitality,
)

# =============================================================================
# Resource Dice
# =============================================================================
from chaos_sheet.engine.resource_dice import (
    SCALE,
    SIDES,
    ResourceDieRollResult,
    apply_roll_result,
    create_resource,
    create_resource_from_preset,
    index_of,
    process_resource_use,
    reconfigure_resource,
    reset_resource,
    step_down,
    step_down_resource,
    step_up,
    step_up_resource,
    use_resource,
)

# =============================================================================
# Dice Rolling
# =============================================================================
from chaos_sheet.engine.dice import (
    DiceExpression,
    DiceRoller,
    roll,
)

# =============================================================================
# Combat State
# =============================================================================
from chaos_sheet.engine.combat_state import (
    advance_dying_round,
    calculate_max_dying_rounds,
    determine_combat_state,
    enter_dying,
    is_dead,
    recover_dying_round,
    reset_vulnerability_die,
    resolve_character_state,
    stabilize,
    step_down_vulnerability_die,
    sync_dying_with_vitality,
)

# =============================================================================
# Leveling
# =============================================================================
from chaos_sheet.engine.leveling import (
    LevelUpPreview,
    apply_level_up,
    calculate_guard_gain,
    calculate_power_point_gain,
    determine_gain_type,
    get_archetype_level,
    get_reward_categories,
    preview_level_up_gains,
)

# =============================================================================
# Validation
# =============================================================================
from chaos_sheet.engine.validation import (
    ClassValidationResult,
    ProgressionReport,
    can_have_classes,
    get_available_class_levels,
    get_total_archetype_levels,
    validate_archetype_levels_positive,
    validate_archetype_levels_sum,
    validate_classes,
    validate_progression,
)

# =============================================================================
# Creation
# =============================================================================
from chaos_sheet.engine.creation import (
    create_character,
    load_character,
)


__all__ = [
    # Resource Pools
    "PV_RECOVERY_COST",
    "DamageResult",
    "VitalityHealResult",
    "adjust_ga_on_pv_crossing",
    "apply_damage",
    "apply_damage_with_crossing",
    "apply_delta_to_pp",
    "calculate_pp_per_round",
    "calculate_rest_ga_recovery",
    "calculate_vitality",
    "get_effective_ga_max",
    "heal_guard",
    "heal_vitality",
    # Resource Dice
    "SCALE",
    "SIDES",
    "ResourceDieRollResult",
    "apply_roll_result",
    "create_resource",
    "create_resource_from_preset",
    "index_of",
    "process_resource_use",
    "reconfigure_resource",
    "reset_resource",
    "step_down",
    "step_down_resource",
    "step_up",
    "step_up_resource",
    "use_resource",
    # Dice Rolling
    "DiceExpression",
    "DiceRoller",
    "roll",
    # Combat State
    "advance_dying_round",
    "calculate_max_dying_rounds",
    "determine_combat_state",
    "enter_dying",
    "is_dead",
    "recover_dying_round",
    "reset_vulnerability_die",
    "resolve_character_state",
    "stabilize",
    "step_down_vulnerability_die",
    "sync_dying_with_vitality",
    # Leveling
    "LevelUpPreview",
    "apply_level_up",
    "calculate_guard_gain",
    "calculate_power_point_gain",
    "determine_gain_type",
    "get_archetype_level",
    "get_reward_categories",
    "preview_level_up_gains",
    # Validation
    "ClassValidationResult",
    "ProgressionReport",
    "can_have_classes",
    "get_available_class_levels",
    "get_total_archetype_levels",
    "validate_archetype_levels_positive",
    "validate_archetype_levels_sum",
    "validate_classes",
    "validate_progression",
    # Creation
    "create_character",
    "load_character",
]
