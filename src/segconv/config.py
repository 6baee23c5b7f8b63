"""Runtime settings resolved from CLI options and the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

STRICT_ENV = "SEGCONV_DEFAULT_STRICT_MODE"
LOG_LEVEL_ENV = "SEGCONV_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one invocation."""

    default_strict: bool
    log_level: str

    @property
    def log_level_value(self) -> int:
        """Numeric logging level, WARNING for unknown names."""
        value = logging.getLevelName(self.log_level.upper())
        return value if isinstance(value, int) else logging.WARNING


def _resolve_strict(strict_option: Optional[bool]) -> bool:
    if strict_option is not None:
        return strict_option
    # Only the literal "false" turns strict mode off.
    return os.environ.get(STRICT_ENV, "").strip().lower() != "false"


def _resolve_log_level(log_level_option: Optional[str]) -> str:
    if log_level_option:
        return log_level_option.upper()
    return os.environ.get(LOG_LEVEL_ENV, "").strip().upper() or DEFAULT_LOG_LEVEL


def load_settings(
    strict_option: Optional[bool] = None,
    log_level_option: Optional[str] = None,
) -> Settings:
    """Resolve settings.

    Resolution order (per setting):
    1. Explicit option (CLI flag)
    2. Environment variable ($SEGCONV_DEFAULT_STRICT_MODE, $SEGCONV_LOG_LEVEL)
    3. Default (strict on, WARNING)

    Reads fresh from environment each time.
    """
    return Settings(
        default_strict=_resolve_strict(strict_option),
        log_level=_resolve_log_level(log_level_option),
    )


__all__ = ["LOG_LEVEL_ENV", "STRICT_ENV", "Settings", "load_settings"]
