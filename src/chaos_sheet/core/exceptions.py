"""Custom exception hierarchy for the Chaos Sheet rules engine.

The rules engine resolves almost every out-of-range condition by clamping
or by returning a structured report, so this hierarchy is small. It covers
configuration failures, untrusted input that cannot be coerced into the
closed enumerations, bad dice expressions and the opt-in strict
experience check on level-up.
All exceptions inherit from ChaosSheetError so a host application can
catch them at its boundary.

Example:
    >>> from chaos_sheet.core.exceptions import InsufficientExperienceError
    >>> raise InsufficientExperienceError("Not enough XP", current_xp=10, required_xp=50)
"""

from __future__ import annotations

from typing import Any


class ChaosSheetError(Exception):
    """Base exception for all Chaos Sheet errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = dict(details or {})
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Rules Engine Exceptions
# =============================================================================


class RulesEngineError(ChaosSheetError):
    """Base exception for rules engine errors.

    Pool arithmetic, resource dice and progression validation never raise;
    this family is reserved for inputs the engine cannot interpret at all.
    """


class UnknownDieSizeError(RulesEngineError):
    """Raised when a string cannot be parsed into a resource die size."""

    def __init__(
        self,
        message: str,
        *,
        die: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown die error with the offending value.

        Args:
            message: Human-readable error description.
            die: The die notation that was not recognized.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if die is not None:
            combined_details["die"] = die
        super().__init__(message, details=combined_details)


class DiceRollError(RulesEngineError):
    """Raised when a dice expression cannot be rolled."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with the expression.

        Args:
            message: Human-readable error description.
            expression: The dice expression that failed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class ProgressionError(RulesEngineError):
    """Raised when a level-up cannot be committed."""

    def __init__(
        self,
        message: str,
        *,
        character_id: str | None = None,
        archetype: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize progression error with character context.

        Args:
            message: Human-readable error description.
            character_id: Identifier of the character being leveled.
            archetype: The archetype chosen for the level-up.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if character_id:
            combined_details["character_id"] = character_id
        if archetype:
            combined_details["archetype"] = archetype
        super().__init__(message, details=combined_details)


class InsufficientExperienceError(ProgressionError):
    """Raised by strict level-ups when the XP remainder would be negative."""

    def __init__(
        self,
        message: str,
        *,
        current_xp: int | None = None,
        required_xp: int | None = None,
        character_id: str | None = None,
        archetype: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize insufficient experience error.

        Args:
            message: Human-readable error description.
            current_xp: Experience the character currently holds.
            required_xp: Experience needed for the next level.
            character_id: Identifier of the character being leveled.
            archetype: The archetype chosen for the level-up.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if current_xp is not None:
            combined_details["current_xp"] = current_xp
        if required_xp is not None:
            combined_details["required_xp"] = required_xp
        super().__init__(
            message,
            character_id=character_id,
            archetype=archetype,
            details=combined_details,
        )


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(ChaosSheetError):
    """Raised when engine configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(ChaosSheetError):
    """Raised when external data cannot be coerced into an engine record.

    Not to be confused with progression validation, which reports problems
    as a list of strings and never raises.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = dict(details or {})
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "ChaosSheetError",
    "RulesEngineError",
    "UnknownDieSizeError",
    "DiceRollError",
    "ProgressionError",
    "InsufficientExperienceError",
    "ConfigurationError",
    "ValidationError",
]
