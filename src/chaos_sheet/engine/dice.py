"""Dice rolling for resource dice.

The rules engine itself treats roll values as opaque input. This module is
the default source of those values, built on the d20 library, so that hosts
can roll a resource die's current size and hand the result straight to
``process_resource_use``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import d20

from chaos_sheet.core.exceptions import DiceRollError
from chaos_sheet.core.logging import get_logger
from chaos_sheet.models.enums import DieSize


logger = get_logger(__name__)


@dataclass(frozen=True)
class DiceExpression:
    """A rolled dice expression.

    Attributes:
        expression: The original dice expression string.
        total: The total result of the roll.
        dice: Individual kept dice results.
        modifier: Static modifier applied.
    """

    expression: str
    total: int
    dice: list[int]
    modifier: int

    @property
    def natural(self) -> int:
        """Face shown by the first kept die, or the total for flat rolls."""
        return self.dice[0] if self.dice else self.total


class DiceRoller:
    """Dice roller backed by the d20 library.

    Example:
        >>> roller = DiceRoller()
        >>> result = roller.roll_die(DieSize.D8)
        >>> 1 <= result.total <= 8
        True
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the dice roller.

        Args:
            seed: Optional random seed for reproducible rolls.
        """
        self._seed = seed
        if seed is not None:
            import random

            random.seed(seed)
        logger.debug("DiceRoller initialized", seed=seed)

    def roll(self, expression: str) -> DiceExpression:
        """Roll dice according to the given expression.

        Args:
            expression: Dice expression (e.g., '1d8', '2d6+1').

        Returns:
            DiceExpression containing roll results.

        Raises:
            DiceRollError: If the expression is invalid.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        try:
            result: d20.RollResult = d20.roll(expression)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        dice_values = self._extract_dice_values(result.expr)
        rolled = DiceExpression(
            expression=expression,
            total=result.total,
            dice=dice_values,
            modifier=result.total - sum(dice_values),
        )
        logger.debug("Dice rolled", expression=expression, total=result.total)
        return rolled

    def roll_die(self, die: DieSize) -> DiceExpression:
        """Roll a single die of the given size, e.g. ``1d12`` for d12."""
        return self.roll(f"1d{die.sides}")

    def _extract_dice_values(self, expr: Any) -> list[int]:
        """Extract individual kept dice values from a d20 expression tree.

        Args:
            expr: The d20 expression tree.

        Returns:
            List of individual dice values.
        """
        values: list[int] = []

        def traverse(node: Any) -> None:
            if isinstance(node, d20.Dice):
                for die in node.values:
                    if die.kept:
                        values.append(die.number)
            elif hasattr(node, "children"):
                for child in node.children:
                    traverse(child)

        traverse(expr)
        return values


# Module-level convenience roller
_default_roller: DiceRoller | None = None


def roll(expression: str) -> DiceExpression:
    """Convenience function to roll dice.

    Example:
        >>> result = roll("1d20")
        >>> print(result.total)
    """
    global _default_roller  # noqa: PLW0603
    if _default_roller is None:
        _default_roller = DiceRoller()
    return _default_roller.roll(expression)


__all__ = [
    "DiceExpression",
    "DiceRoller",
    "roll",
]
