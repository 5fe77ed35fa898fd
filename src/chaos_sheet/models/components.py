"""Component records nested inside the character aggregate.

Each record is a small immutable pydantic model. Engine functions never
edit them in place; they return a new instance built with ``model_copy``.

Components:
    AttributeSet: The six attribute values.
    Modifier: A named bonus applied to a pool maximum.
    GuardPoints: Guard (GA), the absorbing shield pool.
    VitalityPoints: Vitality (PV), the health pool beneath Guard.
    PowerPoints: Power Points (PP), the spendable ability pool.
    SpellPoints: Spell Points (PF), whose max mirrors PP max.
    Experience: Experience held and needed for the next level.
    ResourceDie: A named consumable tracked as a step die.
    DyingState: Dying round counter.
    VulnerabilityDie: Vulnerability die tracker.
"""

from __future__ import annotations

from typing import Annotated, Any
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from chaos_sheet.models.enums import (
    Attribute,
    DieSize,
    ResourceDieState,
    VulnerabilityDieSize,
)


# =============================================================================
# Type Definitions
# =============================================================================

NonNegativeInt = Annotated[int, Field(ge=0)]
AttributeValue = Annotated[int, Field(ge=0, description="Attribute value (>= 0)")]


# =============================================================================
# Attributes
# =============================================================================


class AttributeSet(BaseModel):
    """The six character attributes.

    The engine enforces only the lower bound; the game has no hard cap.

    Example:
        >>> attrs = AttributeSet(body=3, essence=1)
        >>> attrs.get(Attribute.BODY)
        3
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    agility: AttributeValue = Field(default=1, description="Agility: reflexes and coordination")
    body: AttributeValue = Field(default=1, description="Body: strength and endurance")
    influence: AttributeValue = Field(default=1, description="Influence: presence and persuasion")
    mind: AttributeValue = Field(default=1, description="Mind: reasoning and memory")
    essence: AttributeValue = Field(default=1, description="Essence: supernatural potential")
    instinct: AttributeValue = Field(default=1, description="Instinct: perception and intuition")

    def get(self, attribute: Attribute) -> int:
        """Get the value of a single attribute.

        Args:
            attribute: The attribute to look up.

        Returns:
            The attribute value.
        """
        return int(getattr(self, attribute.value))


# =============================================================================
# Defensive Pools
# =============================================================================


class Modifier(BaseModel):
    """A named bonus (or penalty) to a pool maximum."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(default="", description="Where the modifier comes from")
    value: int = Field(description="Amount added to the maximum")


class GuardPoints(BaseModel):
    """Guard (GA): the shield layer that absorbs damage before Vitality.

    Attributes:
        current: Guard currently available.
        max: Base maximum, before modifiers.
        temporary: Temporary Guard, consumed before ``current``.
        max_modifiers: Bonuses to the maximum from items or effects.

    Example:
        >>> guard = GuardPoints(current=18, max=15, max_modifiers=[Modifier(value=3)])
        >>> guard.effective_max
        18
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: NonNegativeInt = Field(default=15, description="Current Guard")
    max: NonNegativeInt = Field(default=15, description="Base maximum Guard")
    temporary: NonNegativeInt = Field(default=0, description="Temporary Guard")
    max_modifiers: list[Modifier] = Field(
        default_factory=list,
        description="Bonuses applied on top of the base maximum",
    )

    @property
    def effective_max(self) -> int:
        """Base maximum plus the sum of all modifiers."""
        return self.max + sum(modifier.value for modifier in self.max_modifiers)

    @model_validator(mode="after")
    def validate_current_within_max(self) -> GuardPoints:
        """Ensure current Guard does not exceed the modified maximum."""
        if self.current > self.effective_max:
            msg = f"Guard current ({self.current}) exceeds maximum ({self.effective_max})"
            raise ValueError(msg)
        return self


class VitalityPoints(BaseModel):
    """Vitality (PV): the health pool beneath Guard.

    ``max`` is derived from Guard max by the leveling rules; hosts should not
    set it independently.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: NonNegativeInt = Field(default=5, description="Current Vitality")
    max: NonNegativeInt = Field(default=5, description="Maximum Vitality")

    @model_validator(mode="after")
    def validate_current_within_max(self) -> VitalityPoints:
        """Ensure current Vitality does not exceed its maximum."""
        if self.current > self.max:
            msg = f"Vitality current ({self.current}) exceeds maximum ({self.max})"
            raise ValueError(msg)
        return self

    @property
    def missing(self) -> int:
        """Points of Vitality below the maximum."""
        return self.max - self.current


class PowerPoints(BaseModel):
    """Power Points (PP): spent on abilities, recovered up to ``max``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: NonNegativeInt = Field(default=2, description="Current Power Points")
    max: NonNegativeInt = Field(default=2, description="Maximum Power Points")
    temporary: NonNegativeInt = Field(default=0, description="Temporary Power Points")

    @model_validator(mode="after")
    def validate_current_within_max(self) -> PowerPoints:
        """Ensure current PP does not exceed its maximum."""
        if self.current > self.max:
            msg = f"Power Points current ({self.current}) exceeds maximum ({self.max})"
            raise ValueError(msg)
        return self

    @property
    def available(self) -> int:
        """Current plus temporary PP."""
        return self.current + self.temporary


class SpellPoints(BaseModel):
    """Spell Points (PF). Their maximum always mirrors the PP maximum."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: NonNegativeInt = Field(default=2, description="Current Spell Points")
    max: NonNegativeInt = Field(default=2, description="Maximum Spell Points")


class Experience(BaseModel):
    """Experience held and experience needed to reach the next level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: NonNegativeInt = Field(default=0, description="Experience held")
    to_next_level: NonNegativeInt = Field(default=50, description="XP needed for next level")


# =============================================================================
# Resource Dice
# =============================================================================


class ResourceDie(BaseModel):
    """A named consumable tracked as a step die.

    A resource degrades one step along the die scale each time a use roll
    comes up 2 or higher and depletes outright on a 1. A depleted resource
    has no current die.

    Attributes:
        id: Unique identifier.
        name: Resource name (e.g. "Torch").
        current_die: Current die, or None when depleted.
        min_die: Floor die; stepping down from it depletes the resource.
        max_die: Ceiling die and reset value.
        state: Active or depleted.
        is_custom: False for resources created from a preset.

    Example:
        >>> torch = ResourceDie(name="Torch", current_die="d8", min_die="d2", max_die="d8")
        >>> torch.current_die
        <DieSize.D8: 'd8'>
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(default_factory=lambda: str(uuid4()), description="Resource identifier")
    name: str = Field(min_length=1, description="Resource name")
    current_die: DieSize | None = Field(default=None, description="Current die, None when depleted")
    min_die: DieSize = Field(default=DieSize.D2, description="Floor die")
    max_die: DieSize = Field(default=DieSize.D12, description="Ceiling die")
    state: ResourceDieState = Field(default=ResourceDieState.ACTIVE, description="Resource state")
    is_custom: bool = Field(default=True, description="Created by the player, not a preset")

    @field_validator("current_die", "min_die", "max_die", mode="before")
    @classmethod
    def parse_die(cls, value: Any) -> Any:
        """Accept die notation in any case, e.g. ``"D8"``."""
        if isinstance(value, str) and not isinstance(value, DieSize):
            return DieSize.parse(value)
        return value

    @model_validator(mode="after")
    def validate_die_bounds(self) -> ResourceDie:
        """Check the depleted state and the die ordering."""
        is_depleted = self.state == ResourceDieState.DEPLETED
        if (self.current_die is None) != is_depleted:
            msg = "current_die must be None exactly when the resource is depleted"
            raise ValueError(msg)
        if self.min_die.rank > self.max_die.rank:
            msg = f"min_die ({self.min_die}) is above max_die ({self.max_die})"
            raise ValueError(msg)
        if self.current_die is not None and not (
            self.min_die.rank <= self.current_die.rank <= self.max_die.rank
        ):
            msg = (
                f"current_die ({self.current_die}) is outside "
                f"{self.min_die}..{self.max_die}"
            )
            raise ValueError(msg)
        return self

    @property
    def is_depleted(self) -> bool:
        """True when the resource has no current die."""
        return self.current_die is None


# =============================================================================
# Dying and Vulnerability
# =============================================================================


class DyingState(BaseModel):
    """Dying round counter.

    Attributes:
        is_dying: Whether the counter is running.
        current_rounds: Rounds spent dying so far.
        max_rounds: Rounds before death (base + Body + modifiers).
        other_modifiers: Extra rounds from abilities or items.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_dying: bool = False
    current_rounds: NonNegativeInt = 0
    max_rounds: NonNegativeInt = 3
    other_modifiers: int = 0

    @property
    def rounds_remaining(self) -> int:
        """Rounds left on the counter, never negative."""
        return max(0, self.max_rounds - self.current_rounds)


class VulnerabilityDie(BaseModel):
    """Vulnerability die, shrinking from d20 towards d4 as it is used."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    current_die: VulnerabilityDieSize = VulnerabilityDieSize.D20
    is_active: bool = False


__all__ = [
    "NonNegativeInt",
    "AttributeValue",
    "AttributeSet",
    "Modifier",
    "GuardPoints",
    "VitalityPoints",
    "PowerPoints",
    "SpellPoints",
    "Experience",
    "ResourceDie",
    "DyingState",
    "VulnerabilityDie",
]
