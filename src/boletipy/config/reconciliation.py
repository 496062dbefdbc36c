"""Weekly reconciliation settings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from boletipy.domain.draw_calendar import PublicationGate

from .env import optional_env_var
from .errors import InvalidConfigurationValueError

TIMEZONE_ENV = "BOLETIPY_TIMEZONE"
PUBLICATION_TIME_ENV = "BOLETIPY_PUBLICATION_TIME"
DEFAULT_TIMEZONE = "Europe/Madrid"
DEFAULT_PUBLICATION_TIME = time(22, 0)


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    timezone: ZoneInfo
    publication_time: time = DEFAULT_PUBLICATION_TIME

    def publication_gate(self) -> PublicationGate:
        return PublicationGate(timezone=self.timezone, publication_time=self.publication_time)


def _parse_timezone(value: str) -> ZoneInfo:
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvalidConfigurationValueError(TIMEZONE_ENV, value, "an IANA zone name") from None


def _parse_publication_time(value: str) -> time:
    try:
        parsed = time.fromisoformat(value)
    except ValueError:
        raise InvalidConfigurationValueError(PUBLICATION_TIME_ENV, value, "HH:MM") from None
    return parsed.replace(second=0, microsecond=0)


def get_reconciliation_config() -> ReconciliationConfig:
    zone = optional_env_var(TIMEZONE_ENV) or DEFAULT_TIMEZONE
    published = optional_env_var(PUBLICATION_TIME_ENV)
    return ReconciliationConfig(
        timezone=_parse_timezone(zone),
        publication_time=(
            _parse_publication_time(published) if published else DEFAULT_PUBLICATION_TIME
        ),
    )
