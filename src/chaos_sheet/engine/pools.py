"""Guard, Vitality and Power Point arithmetic.

Damage is absorbed in a fixed order: temporary Guard, then Guard, then
whatever is left overflows into Vitality. Every function here is pure:
the pool records are frozen and each call returns new instances. Out of
range requests are clamped, never rejected.

Example:
    >>> guard = GuardPoints(current=10, max=15, temporary=3)
    >>> vitality = VitalityPoints(current=5, max=5)
    >>> result = apply_damage(guard, vitality, 15)
    >>> result.guard.current, result.vitality.current
    (0, 3)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from chaos_sheet.core.logging import get_logger
from chaos_sheet.models.components import GuardPoints, PowerPoints, VitalityPoints
from chaos_sheet.models.progression import PV_RECOVERY_COST


logger = get_logger(__name__)


@dataclass(frozen=True)
class DamageResult:
    """Pools after damage was absorbed."""

    guard: GuardPoints
    vitality: VitalityPoints


@dataclass(frozen=True)
class VitalityHealResult:
    """Outcome of spending recovery points on Vitality.

    Attributes:
        vitality: Vitality after healing.
        remaining_recovery: Recovery points left unspent.
        healed: Vitality points restored.
    """

    vitality: VitalityPoints
    remaining_recovery: int
    healed: int


# =============================================================================
# Derived values
# =============================================================================


def calculate_vitality(ga_max: int) -> int:
    """Vitality max derived from Guard max: ``floor(ga_max / 3)``.

    Example:
        >>> calculate_vitality(17)
        5
    """
    return math.floor(ga_max / 3)


def get_effective_ga_max(ga_max: int, pv_current: int) -> int:
    """Guard max is halved (rounded down) while Vitality is at zero.

    Example:
        >>> get_effective_ga_max(15, 0)
        7
        >>> get_effective_ga_max(15, 1)
        15
    """
    if pv_current > 0:
        return ga_max
    return math.floor(ga_max / 2)


def calculate_pp_per_round(level: int, essence: int, other: int = 0) -> int:
    """Most Power Points a character may spend in one round."""
    return level + essence + other


def calculate_rest_ga_recovery(level: int, body: int, other: int = 0) -> int:
    """Recovery points gained from a rest: ``level * body + other``."""
    return level * body + other


# =============================================================================
# Guard and Vitality
# =============================================================================


def apply_damage(guard: GuardPoints, vitality: VitalityPoints, amount: int) -> DamageResult:
    """Apply damage across temporary Guard, Guard and Vitality.

    Args:
        guard: Guard before the hit.
        vitality: Vitality before the hit.
        amount: Damage dealt. Zero or negative amounts change nothing.

    Returns:
        DamageResult with the new pools. Maxima are untouched.
    """
    if amount <= 0:
        return DamageResult(guard=guard, vitality=vitality)

    remaining = amount

    absorbed_by_temporary = min(guard.temporary, remaining)
    new_temporary = guard.temporary - absorbed_by_temporary
    remaining -= absorbed_by_temporary

    absorbed_by_guard = min(guard.current, remaining)
    new_guard_current = guard.current - absorbed_by_guard
    remaining -= absorbed_by_guard

    new_vitality_current = max(0, vitality.current - remaining)

    logger.debug(
        "Damage applied",
        amount=amount,
        temporary_absorbed=absorbed_by_temporary,
        guard_absorbed=absorbed_by_guard,
        vitality_lost=vitality.current - new_vitality_current,
    )

    return DamageResult(
        guard=guard.model_copy(update={"current": new_guard_current, "temporary": new_temporary}),
        vitality=vitality.model_copy(update={"current": new_vitality_current}),
    )


def adjust_ga_on_pv_crossing(
    ga_current: int,
    ga_max: int,
    pv_was_zero: bool,
    pv_is_zero: bool,
) -> int:
    """Reconcile stored Guard with the halved max when Vitality hits or leaves zero.

    Crossing down clamps Guard to half its max; crossing up raises it back to
    at least half. Without a crossing Guard is returned unchanged.

    Args:
        ga_current: Guard before the crossing.
        ga_max: Guard max (not the halved one).
        pv_was_zero: Whether Vitality was zero before the change.
        pv_is_zero: Whether Vitality is zero after the change.

    Returns:
        The adjusted current Guard.
    """
    half = math.floor(ga_max / 2)
    if not pv_was_zero and pv_is_zero:
        return min(ga_current, half)
    if pv_was_zero and not pv_is_zero:
        return max(ga_current, half)
    return ga_current


def apply_damage_with_crossing(
    guard: GuardPoints,
    vitality: VitalityPoints,
    amount: int,
) -> DamageResult:
    """Apply damage, then reconcile Guard if Vitality dropped to zero."""
    result = apply_damage(guard, vitality, amount)
    adjusted = adjust_ga_on_pv_crossing(
        result.guard.current,
        guard.effective_max,
        pv_was_zero=vitality.current == 0,
        pv_is_zero=result.vitality.current == 0,
    )
    if adjusted == result.guard.current:
        return result
    return DamageResult(
        guard=result.guard.model_copy(update={"current": adjusted}),
        vitality=result.vitality,
    )


def heal_guard(guard: GuardPoints, amount: int) -> GuardPoints:
    """Restore Guard up to its base max. Temporary Guard is never restored.

    Guard lifted past its base max by modifiers is brought back down to it.
    """
    if amount <= 0:
        return guard
    return guard.model_copy(update={"current": min(guard.max, guard.current + amount)})


def heal_vitality(vitality: VitalityPoints, recovery_points: int) -> VitalityHealResult:
    """Spend recovery points on Vitality at PV_RECOVERY_COST points each.

    Only whole Vitality points are bought; leftover recovery is returned.

    Args:
        vitality: Vitality before healing.
        recovery_points: Recovery points available.

    Returns:
        VitalityHealResult with the healed pool and unspent recovery.

    Example:
        >>> result = heal_vitality(VitalityPoints(current=3, max=5), 12)
        >>> result.vitality.current, result.remaining_recovery
        (5, 2)
    """
    healed = max(0, min(vitality.max - vitality.current, recovery_points // PV_RECOVERY_COST))
    if healed == 0:
        return VitalityHealResult(
            vitality=vitality,
            remaining_recovery=recovery_points,
            healed=0,
        )

    logger.debug("Vitality healed", healed=healed, recovery_spent=healed * PV_RECOVERY_COST)
    return VitalityHealResult(
        vitality=vitality.model_copy(update={"current": vitality.current + healed}),
        remaining_recovery=recovery_points - healed * PV_RECOVERY_COST,
        healed=healed,
    )


# =============================================================================
# Power Points
# =============================================================================


def apply_delta_to_pp(pp: PowerPoints, delta: int) -> PowerPoints:
    """Spend (negative delta) or recover (positive delta) Power Points.

    Spending drains temporary PP first, then current, each floored at zero.
    Recovery only raises current, capped at max; temporary PP is never
    restored.

    Example:
        >>> pp = apply_delta_to_pp(PowerPoints(max=10, current=5, temporary=3), -4)
        >>> pp.temporary, pp.current
        (0, 4)
    """
    if delta == 0:
        return pp

    if delta > 0:
        return pp.model_copy(update={"current": min(pp.max, pp.current + delta)})

    cost = -delta
    from_temporary = min(pp.temporary, cost)
    from_current = min(pp.current, cost - from_temporary)
    return pp.model_copy(
        update={
            "temporary": pp.temporary - from_temporary,
            "current": pp.current - from_current,
        }
    )


__all__ = [
    "PV_RECOVERY_COST",
    "DamageResult",
    "VitalityHealResult",
    "calculate_vitality",
    "get_effective_ga_max",
    "calculate_pp_per_round",
    "calculate_rest_ga_recovery",
    "apply_damage",
    "adjust_ga_on_pv_crossing",
    "apply_damage_with_crossing",
    "heal_guard",
    "heal_vitality",
    "apply_delta_to_pp",
]
