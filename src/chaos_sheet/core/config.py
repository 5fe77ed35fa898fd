"""Configuration management for the Chaos Sheet rules engine.

Configuration is loaded with pydantic-settings from environment variables
and an optional .env file. The rule constants themselves (die scale,
recovery cost, reward tables) are fixed by the game and live in
``chaos_sheet.models.progression``; settings only cover host policy.

Example:
    >>> from chaos_sheet.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.zero_vitality_state
    'dying'

Environment Variables:
    CHAOS_SHEET_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    CHAOS_SHEET_JSON_LOGS: Emit JSON log lines instead of console output
    CHAOS_SHEET_GAME_ENFORCE_XP_PRECONDITION: Refuse level-ups without enough XP
    CHAOS_SHEET_GAME_ZERO_VITALITY_STATE: Label used while the dying counter runs
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chaos_sheet.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Host policy knobs for the rules engine.

    Attributes:
        enforce_xp_precondition: Raise instead of warning when a level-up
            would leave a negative XP remainder.
        zero_vitality_state: Combat state assigned while a character is dying.
        default_resources: Preset resource dice given to new characters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAOS_SHEET_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enforce_xp_precondition: bool = Field(
        default=False,
        description="Raise InsufficientExperienceError on negative XP remainder",
    )
    zero_vitality_state: Literal["dying", "unconscious"] = Field(
        default="dying",
        description="Combat state label while the dying counter is running",
    )
    default_resources: list[str] = Field(
        default_factory=lambda: ["Water", "Food"],
        description="Preset resource dice added to new characters",
    )

    @field_validator("default_resources", mode="after")
    @classmethod
    def validate_presets_exist(cls, value: list[str]) -> list[str]:
        """Ensure every default resource names a known preset.

        Raises:
            ConfigurationError: If a name has no preset.
        """
        from chaos_sheet.models.progression import PRESET_RESOURCES

        unknown = [name for name in value if name not in PRESET_RESOURCES]
        if unknown:
            raise ConfigurationError(
                f"Unknown resource presets: {', '.join(unknown)}",
                config_key="default_resources",
            )
        return value


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        game: Rules engine policy settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAOS_SHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Chaos Sheet",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """True if not in debug mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
