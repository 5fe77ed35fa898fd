"""Combat state classification and the dying round counter.

The combat state label is derived from Vitality alone: Guard can be empty
while the character is still ``normal``. Once Vitality reaches zero the
host starts the dying counter; this module keeps that counter and its
maximum consistent, and ``resolve_character_state`` turns the whole
picture into the label the host stores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chaos_sheet.core.config import get_settings
from chaos_sheet.core.logging import get_logger
from chaos_sheet.models.components import DyingState
from chaos_sheet.models.enums import CombatState, VulnerabilityDieSize
from chaos_sheet.models.progression import DYING_BASE_ROUNDS


if TYPE_CHECKING:
    from chaos_sheet.models.character import Character


logger = get_logger(__name__)


# Vulnerability die steps, largest first.
VULNERABILITY_DIE_STEPS: tuple[VulnerabilityDieSize, ...] = tuple(VulnerabilityDieSize)


def determine_combat_state(
    ga_current: int,
    ga_max: int,
    pv_current: int,
    pv_max: int,
) -> CombatState:
    """Classify combat status from the defensive pools.

    Guard values are accepted alongside Vitality but do not affect the
    result.

    Example:
        >>> determine_combat_state(0, 15, 5, 5)
        <CombatState.NORMAL: 'normal'>
    """
    if pv_current <= 0:
        return CombatState.CRITICAL_WOUND
    if pv_current < pv_max:
        return CombatState.DIRECT_WOUND
    return CombatState.NORMAL


# =============================================================================
# Dying counter
# =============================================================================


def calculate_max_dying_rounds(body: int, other: int = 0) -> int:
    """Rounds a character can stay dying: base + Body + other, at least 0.

    Example:
        >>> calculate_max_dying_rounds(3)
        5
    """
    return max(0, DYING_BASE_ROUNDS + body + other)


def enter_dying(dying: DyingState, body: int) -> DyingState:
    """Start the dying counter at round 1."""
    max_rounds = calculate_max_dying_rounds(body, dying.other_modifiers)
    return dying.model_copy(
        update={
            "is_dying": True,
            "current_rounds": min(1, max_rounds),
            "max_rounds": max_rounds,
        }
    )


def advance_dying_round(dying: DyingState) -> DyingState:
    """Count one more round spent dying, up to the maximum."""
    current_rounds = min(dying.current_rounds + 1, dying.max_rounds)
    return dying.model_copy(update={"is_dying": True, "current_rounds": current_rounds})


def recover_dying_round(dying: DyingState) -> DyingState:
    """Take one round off the counter; at zero the character is no longer dying."""
    current_rounds = max(dying.current_rounds - 1, 0)
    return dying.model_copy(
        update={"is_dying": current_rounds > 0, "current_rounds": current_rounds}
    )


def stabilize(dying: DyingState) -> DyingState:
    """Stop the counter and clear it."""
    return dying.model_copy(update={"is_dying": False, "current_rounds": 0})


def is_dead(dying: DyingState) -> bool:
    """True once a running counter has reached its maximum."""
    return dying.is_dying and dying.current_rounds >= dying.max_rounds


def sync_dying_with_vitality(dying: DyingState, pv_current: int, body: int) -> DyingState:
    """Bring the counter in line with current Vitality and Body.

    The maximum is recomputed from Body. Zero Vitality starts the counter
    if it is not running; positive Vitality stops it.

    Args:
        dying: Counter before the change.
        pv_current: Current Vitality.
        body: Current Body attribute.

    Returns:
        The consistent counter.
    """
    max_rounds = calculate_max_dying_rounds(body, dying.other_modifiers)
    synced = dying.model_copy(
        update={
            "max_rounds": max_rounds,
            "current_rounds": min(dying.current_rounds, max_rounds),
        }
    )

    if pv_current <= 0 and not synced.is_dying:
        logger.debug("Vitality at zero, dying counter started", max_rounds=max_rounds)
        return enter_dying(synced, body)
    if pv_current > 0 and synced.is_dying:
        logger.debug("Vitality restored, dying counter stopped")
        return stabilize(synced)
    return synced


def resolve_character_state(
    character: Character,
    zero_vitality_state: CombatState | str | None = None,
) -> CombatState:
    """Label to store on the character for its current pools and counter.

    Args:
        character: Character snapshot.
        zero_vitality_state: Label while dying; defaults to the
            ``game.zero_vitality_state`` setting.

    Returns:
        ``dead`` when the counter ran out, the zero-Vitality label while the
        counter runs, otherwise the Vitality-based classification.
    """
    if is_dead(character.dying):
        return CombatState.DEAD
    if character.dying.is_dying:
        label = zero_vitality_state or get_settings().game.zero_vitality_state
        return CombatState(label)
    return determine_combat_state(
        character.guard.current,
        character.guard.effective_max,
        character.vitality.current,
        character.vitality.max,
    )


# =============================================================================
# Vulnerability die
# =============================================================================


def step_down_vulnerability_die(
    current: VulnerabilityDieSize | str,
) -> VulnerabilityDieSize:
    """Next smaller vulnerability die; d4 (or anything unknown) gives d4.

    Example:
        >>> step_down_vulnerability_die("d20")
        <VulnerabilityDieSize.D12: 'd12'>
    """
    try:
        index = VULNERABILITY_DIE_STEPS.index(VulnerabilityDieSize(current))
    except ValueError:
        return VulnerabilityDieSize.D4
    if index >= len(VULNERABILITY_DIE_STEPS) - 1:
        return VulnerabilityDieSize.D4
    return VULNERABILITY_DIE_STEPS[index + 1]


def reset_vulnerability_die() -> VulnerabilityDieSize:
    """Vulnerability die at the start of combat."""
    return VulnerabilityDieSize.D20


__all__ = [
    "VULNERABILITY_DIE_STEPS",
    "determine_combat_state",
    "calculate_max_dying_rounds",
    "enter_dying",
    "advance_dying_round",
    "recover_dying_round",
    "stabilize",
    "is_dead",
    "sync_dying_with_vitality",
    "resolve_character_state",
    "step_down_vulnerability_die",
    "reset_vulnerability_die",
]
