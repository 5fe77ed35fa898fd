"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        ChaosSheetError: Base exception for all engine errors.
        RulesEngineError: Inputs the rules engine cannot interpret.
        DiceRollError: Invalid dice expressions.
        ConfigurationError: Configuration-related errors.
        ValidationError: Snapshot coercion errors.

    Configuration:
        Settings, GameSettings, get_settings, clear_settings_cache

    Logging:
        configure_logging, get_logger, character_scope
"""

from __future__ import annotations

from chaos_sheet.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from chaos_sheet.core.exceptions import (
    ChaosSheetError,
    ConfigurationError,
    DiceRollError,
    InsufficientExperienceError,
    ProgressionError,
    RulesEngineError,
    UnknownDieSizeError,
    ValidationError,
)
from chaos_sheet.core.logging import (
    character_scope,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "ChaosSheetError",
    "RulesEngineError",
    "UnknownDieSizeError",
    "DiceRollError",
    "ProgressionError",
    "InsufficientExperienceError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "character_scope",
]
