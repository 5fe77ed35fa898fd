"""Step-die consumable resources.

A resource die (water, torches, arrows, ...) is rolled on each use. A 1
uses the resource up; anything higher shrinks the die one step along the
scale. Stepping down from the floor die also uses it up.

The scale, smallest first:
    d2 -> d3 -> d4 -> d6 -> d8 -> d10 -> d12 -> d20 -> d100
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chaos_sheet.core.logging import get_logger
from chaos_sheet.models.components import ResourceDie
from chaos_sheet.models.enums import DieSize, ResourceDieState
from chaos_sheet.models.progression import PRESET_RESOURCES


if TYPE_CHECKING:
    from chaos_sheet.engine.dice import DiceRoller


logger = get_logger(__name__)


SCALE: tuple[DieSize, ...] = tuple(DieSize)
SIDES: dict[DieSize, int] = {die: die.sides for die in SCALE}


@dataclass(frozen=True)
class ResourceDieRollResult:
    """Outcome of one resource use.

    Attributes:
        resource_id: Id of the resource rolled.
        resource_name: Name of the resource rolled.
        die_rolled: Die that was rolled (the floor die for a depleted resource).
        value: The roll value received.
        is_stepped_down: True when the roll was 2 or higher on an active die.
        is_depleted: True when the resource is used up after this use.
        new_die: Die after the use, None when depleted.
    """

    resource_id: str
    resource_name: str
    die_rolled: DieSize
    value: int
    is_stepped_down: bool
    is_depleted: bool
    new_die: DieSize | None


# =============================================================================
# Scale arithmetic
# =============================================================================


def index_of(die: DieSize | str | None) -> int:
    """0-based position of ``die`` on the scale, or -1 if it is not on it.

    Example:
        >>> index_of("d8")
        4
        >>> index_of("d7")
        -1
    """
    try:
        return SCALE.index(DieSize(die))
    except ValueError:
        return -1


def step_down(current: DieSize, min_die: DieSize) -> DieSize | None:
    """One step smaller, or None when ``current`` is already at the floor.

    Example:
        >>> step_down(DieSize.D8, DieSize.D2)
        <DieSize.D6: 'd6'>
        >>> step_down(DieSize.D4, DieSize.D4) is None
        True
    """
    current_index = index_of(current)
    if current_index <= index_of(min_die):
        return None
    return SCALE[current_index - 1]


def step_up(current: DieSize, max_die: DieSize) -> DieSize:
    """One step larger, never past ``max_die``."""
    current_index = index_of(current)
    max_index = index_of(max_die)
    if current_index >= max_index:
        return DieSize(max_die)
    return SCALE[current_index + 1]


def process_resource_use(resource: ResourceDie, roll_value: int) -> ResourceDieRollResult:
    """Work out what a use roll does to a resource.

    Args:
        resource: The resource being used.
        roll_value: Face rolled on the resource's current die. A 1 uses the
            resource up; any other value shrinks the die one step.

    Returns:
        ResourceDieRollResult describing the new die. The resource itself is
        not changed; see ``apply_roll_result``.
    """
    if resource.current_die is None:
        return ResourceDieRollResult(
            resource_id=resource.id,
            resource_name=resource.name,
            die_rolled=resource.min_die,
            value=roll_value,
            is_stepped_down=False,
            is_depleted=True,
            new_die=None,
        )

    if roll_value == 1:
        return ResourceDieRollResult(
            resource_id=resource.id,
            resource_name=resource.name,
            die_rolled=resource.current_die,
            value=roll_value,
            is_stepped_down=False,
            is_depleted=True,
            new_die=None,
        )

    new_die = step_down(resource.current_die, resource.min_die)
    return ResourceDieRollResult(
        resource_id=resource.id,
        resource_name=resource.name,
        die_rolled=resource.current_die,
        value=roll_value,
        is_stepped_down=True,
        is_depleted=new_die is None,
        new_die=new_die,
    )


# =============================================================================
# Resource updates
# =============================================================================


def _with_die(resource: ResourceDie, die: DieSize | None) -> ResourceDie:
    state = ResourceDieState.DEPLETED if die is None else ResourceDieState.ACTIVE
    return resource.model_copy(update={"current_die": die, "state": state})


def apply_roll_result(resource: ResourceDie, result: ResourceDieRollResult) -> ResourceDie:
    """Write a roll result back onto the resource it came from."""
    if result.resource_id != resource.id:
        logger.warning(
            "Roll result applied to a different resource",
            resource_id=resource.id,
            result_resource_id=result.resource_id,
        )
    return _with_die(resource, result.new_die)


def use_resource(
    resource: ResourceDie,
    roller: DiceRoller,
) -> tuple[ResourceDie, ResourceDieRollResult]:
    """Roll the resource's current die and apply the outcome.

    A depleted resource is not rolled; its result reports a value of 0.

    Args:
        resource: The resource being used.
        roller: Source of the roll.

    Returns:
        The updated resource and the roll result.
    """
    if resource.current_die is None:
        result = process_resource_use(resource, 0)
        return resource, result

    rolled = roller.roll_die(resource.current_die)
    result = process_resource_use(resource, rolled.natural)
    logger.info(
        "Resource used",
        resource=resource.name,
        die=str(result.die_rolled),
        value=result.value,
        new_die=str(result.new_die) if result.new_die else None,
        depleted=result.is_depleted,
    )
    return apply_roll_result(resource, result), result


def step_down_resource(resource: ResourceDie) -> ResourceDie:
    """Shrink the die one step by hand; from the floor die this depletes it."""
    if resource.current_die is None:
        return resource
    return _with_die(resource, step_down(resource.current_die, resource.min_die))


def step_up_resource(resource: ResourceDie) -> ResourceDie:
    """Grow the die one step. A depleted resource comes back at its floor die."""
    if resource.current_die is None:
        return _with_die(resource, resource.min_die)
    return _with_die(resource, step_up(resource.current_die, resource.max_die))


def reset_resource(resource: ResourceDie) -> ResourceDie:
    """Refill the resource to its ceiling die."""
    return _with_die(resource, resource.max_die)


def reconfigure_resource(
    resource: ResourceDie,
    min_die: DieSize,
    max_die: DieSize,
) -> ResourceDie:
    """Change the die range, keeping the current die inside it.

    Bounds given the wrong way round are swapped. A depleted resource stays
    depleted.
    """
    if index_of(min_die) > index_of(max_die):
        min_die, max_die = max_die, min_die

    current = resource.current_die
    if current is not None:
        if index_of(current) < index_of(min_die):
            current = min_die
        elif index_of(current) > index_of(max_die):
            current = max_die

    return resource.model_copy(
        update={"min_die": min_die, "max_die": max_die, "current_die": current}
    )


def create_resource(
    name: str,
    min_die: DieSize = DieSize.D2,
    max_die: DieSize = DieSize.D12,
    current_die: DieSize | None = None,
    *,
    is_custom: bool = True,
) -> ResourceDie:
    """Create an active resource, starting at ``max_die`` unless told otherwise."""
    if index_of(min_die) > index_of(max_die):
        min_die, max_die = max_die, min_die
    return ResourceDie(
        name=name,
        min_die=min_die,
        max_die=max_die,
        current_die=current_die or max_die,
        is_custom=is_custom,
    )


def create_resource_from_preset(preset_name: str) -> ResourceDie | None:
    """Create a resource from a named preset, or None if there is no such preset."""
    preset = PRESET_RESOURCES.get(preset_name)
    if preset is None:
        logger.debug("Unknown resource preset", preset=preset_name)
        return None
    return preset.create_die()


__all__ = [
    "SCALE",
    "SIDES",
    "ResourceDieRollResult",
    "index_of",
    "step_down",
    "step_up",
    "process_resource_use",
    "apply_roll_result",
    "use_resource",
    "step_down_resource",
    "step_up_resource",
    "reset_resource",
    "reconfigure_resource",
    "create_resource",
    "create_resource_from_preset",
]
