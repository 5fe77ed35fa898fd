"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Chaos Sheet test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from chaos_sheet.models import (
    ArchetypeName,
    AttributeSet,
    Character,
    DieSize,
    GuardPoints,
    PowerPoints,
    ResourceDie,
    VitalityPoints,
)


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from chaos_sheet.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty directory so no stray .env file is read."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def strict_xp(monkeypatch: pytest.MonkeyPatch, isolated_env: None) -> None:
    """Enable strict experience checking on level-up."""
    from chaos_sheet.core.config import clear_settings_cache

    monkeypatch.setenv("CHAOS_SHEET_GAME_ENFORCE_XP_PRECONDITION", "true")
    clear_settings_cache()


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def fighter_attributes() -> AttributeSet:
    """Attributes of a Body-focused character (Body 3, Essence 1)."""
    return AttributeSet(agility=2, body=3, influence=1, mind=1, essence=1, instinct=2)


@pytest.fixture
def guard() -> GuardPoints:
    """Guard with 10 of 15 and 3 temporary."""
    return GuardPoints(current=10, max=15, temporary=3)


@pytest.fixture
def vitality() -> VitalityPoints:
    """Full Vitality of 5."""
    return VitalityPoints(current=5, max=5)


@pytest.fixture
def power_points() -> PowerPoints:
    """Power Points at 5 of 10 with 3 temporary."""
    return PowerPoints(current=5, max=10, temporary=3)


@pytest.fixture
def torch() -> ResourceDie:
    """A full torch resource (d2..d8, at d8)."""
    return ResourceDie(
        name="Torch",
        current_die=DieSize.D8,
        min_die=DieSize.D2,
        max_die=DieSize.D8,
        is_custom=False,
    )


@pytest.fixture
def level_one_fighter(fighter_attributes: AttributeSet, isolated_env: None) -> Character:
    """A fresh level-1 combatant with enough XP for level 2."""
    from chaos_sheet.engine.creation import create_character

    character = create_character("Ayla", fighter_attributes, ArchetypeName.COMBATANT)
    character.experience = character.experience.model_copy(update={"current": 60})
    return character


@pytest.fixture
def fresh_character(isolated_env: None) -> Character:
    """A level-1 character that has not chosen an archetype."""
    from chaos_sheet.engine.creation import create_character

    return create_character("Nobody")


# =============================================================================
# Dice Fixtures
# =============================================================================


class FixedRoller:
    """Roller stand-in that returns queued faces in order."""

    def __init__(self, *faces: int, modifier: int = 0) -> None:
        self._faces = list(faces)
        self._modifier = modifier
        self.rolled: list[DieSize] = []

    def roll_die(self, die: DieSize):
        from chaos_sheet.engine.dice import DiceExpression

        self.rolled.append(die)
        face = self._faces.pop(0)
        return DiceExpression(
            expression=f"1d{die.sides}",
            total=face + self._modifier,
            dice=[face],
            modifier=self._modifier,
        )


@pytest.fixture
def dice_roller():
    """Create a seeded dice roller."""
    from chaos_sheet.engine.dice import DiceRoller

    return DiceRoller(seed=42)


@pytest.fixture
def fixed_roller():
    """Factory for rollers that return the given faces."""
    return FixedRoller
