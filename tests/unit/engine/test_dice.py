"""Tests for dice rolling mechanics."""

from __future__ import annotations

import pytest

from chaos_sheet.core.exceptions import DiceRollError
from chaos_sheet.engine.dice import DiceExpression, DiceRoller, roll
from chaos_sheet.models.enums import DieSize


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_simple_roll(self, dice_roller: DiceRoller) -> None:
        """Test simple d12 roll."""
        result = dice_roller.roll("1d12")

        assert isinstance(result, DiceExpression)
        assert 1 <= result.total <= 12
        assert len(result.dice) == 1
        assert result.natural == result.dice[0]

    def test_roll_with_modifier(self, dice_roller: DiceRoller) -> None:
        """Test roll with positive modifier."""
        result = dice_roller.roll("1d20+5")

        assert result.modifier == 5
        assert 6 <= result.total <= 25

    def test_multiple_dice(self, dice_roller: DiceRoller) -> None:
        """Test rolling multiple dice."""
        result = dice_roller.roll("3d6")

        assert 3 <= result.total <= 18
        assert len(result.dice) == 3

    def test_flat_roll_natural(self, dice_roller: DiceRoller) -> None:
        """Test a roll without dice reports its total as natural."""
        result = dice_roller.roll("4")

        assert result.dice == []
        assert result.natural == 4

    @pytest.mark.parametrize("die", list(DieSize))
    def test_roll_die_bounds(self, dice_roller: DiceRoller, die: DieSize) -> None:
        """Test each die size rolls within its faces."""
        for _ in range(20):
            result = dice_roller.roll_die(die)
            assert 1 <= result.total <= die.sides
            assert result.expression == f"1d{die.sides}"

    def test_seeded_rolls_repeat(self) -> None:
        """Test the same seed gives the same rolls."""
        first = DiceRoller(seed=7).roll("4d100").dice
        second = DiceRoller(seed=7).roll("4d100").dice

        assert first == second

    def test_invalid_expression(self, dice_roller: DiceRoller) -> None:
        """Test invalid expressions raise DiceRollError."""
        with pytest.raises(DiceRollError) as exc_info:
            dice_roller.roll("1dx")

        assert exc_info.value.details["expression"] == "1dx"

    @pytest.mark.parametrize("expression", ["", "   "])
    def test_empty_expression(self, dice_roller: DiceRoller, expression: str) -> None:
        """Test empty expressions raise DiceRollError."""
        with pytest.raises(DiceRollError):
            dice_roller.roll(expression)


class TestConvenienceRoll:
    """Tests for the module-level roll function."""

    def test_roll(self) -> None:
        """Test the convenience function rolls."""
        result = roll("1d8")

        assert 1 <= result.total <= 8
