"""Shared logging helpers for boletipy."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import InvalidConfigurationValueError

LOG_LEVEL_ENV = "BOLETIPY_LOG_LEVEL"

# chatty third-party loggers that only matter when debugging the HTTP adapter
_QUIET_LOGGERS = ("httpx", "httpcore", "hishel")


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    name = level or optional_env_var(LOG_LEVEL_ENV) or "INFO"
    resolved = logging.getLevelNamesMapping().get(name.upper())
    if resolved is None:
        raise InvalidConfigurationValueError(LOG_LEVEL_ENV, name, "a logging level name")
    return resolved


def configure_logging(*, level: int | str | None = None, force: bool = False) -> None:
    """Initialise the root logger once for CLI output.

    ``level`` falls back to ``BOLETIPY_LOG_LEVEL`` and then INFO. Pass ``force=True`` to
    reconfigure during tests or specialised entry points.
    """

    resolved = _resolve_level(level)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if resolved > logging.DEBUG:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
