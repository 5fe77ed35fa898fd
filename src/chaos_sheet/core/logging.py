"""Structured logging for the Chaos Sheet rules engine.

Engine modules log key/value events through structlog. Every event from an
engine module names the rules component that emitted it, and events emitted
inside ``character_scope`` also carry the character's id and name, so a
host can follow one character through damage, resource use and level-ups.

Hosts call ``configure_logging`` once at startup. Without arguments it
takes the level and renderer from ``Settings``; until then structlog's
defaults apply.

Example:
    >>> from chaos_sheet.core.logging import character_scope, get_logger
    >>> logger = get_logger("chaos_sheet.engine.leveling")
    >>> with character_scope(character):
    ...     logger.info("Level up committed", archetype="combatant", character_level=4)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from collections.abc import Iterator

    from chaos_sheet.models.character import Character


# Rules component reported for each engine module.
ENGINE_COMPONENTS: dict[str, str] = {
    "chaos_sheet.engine.pools": "resource_pool",
    "chaos_sheet.engine.resource_dice": "resource_dice",
    "chaos_sheet.engine.dice": "dice",
    "chaos_sheet.engine.combat_state": "combat_state",
    "chaos_sheet.engine.leveling": "progression",
    "chaos_sheet.engine.validation": "progression_validator",
    "chaos_sheet.engine.creation": "character_factory",
}


def configure_logging(
    *,
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Configure structlog for the engine.

    Args:
        level: Minimum level to emit. Defaults to ``Settings.log_level``.
        json_format: Emit JSON lines instead of console output. Defaults to
            ``Settings.json_logs``.
    """
    if level is None or json_format is None:
        from chaos_sheet.core.config import get_settings

        settings = get_settings()
        level = settings.log_level if level is None else level
        json_format = settings.json_logs if json_format is None else json_format

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a logger, tagged with its rules component for engine modules.

    Args:
        name: Module name (typically __name__).

    Returns:
        A lazily configured structlog logger.
    """
    component = ENGINE_COMPONENTS.get(name or "")
    if component is None:
        return structlog.get_logger(name)
    return structlog.get_logger(name, component=component)


@contextmanager
def character_scope(character: Character) -> Iterator[None]:
    """Attach a character's id and name to every event logged in the block."""
    with structlog.contextvars.bound_contextvars(
        character_id=character.id,
        character_name=character.name,
    ):
        yield


__all__ = [
    "ENGINE_COMPONENTS",
    "configure_logging",
    "get_logger",
    "character_scope",
]
