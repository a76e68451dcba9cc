"""Environment variable reader with dependency injection support.

EnvReader parses typed values from the environment (or an injected mapping,
for tests). logging_config_from_env builds a LoggingConfig from the
TS_LOG_* variables.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from transcode_strategy.config.models import LoggingConfig

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "TS_LOG_LEVEL"
ENV_LOG_FORMAT = "TS_LOG_FORMAT"
ENV_LOG_FILE = "TS_LOG_FILE"
ENV_LOG_INCLUDE_STDERR = "TS_LOG_INCLUDE_STDERR"
ENV_LOG_MAX_BYTES = "TS_LOG_MAX_BYTES"
ENV_LOG_BACKUP_COUNT = "TS_LOG_BACKUP_COUNT"


class EnvReader:
    """Environment variable reader with type conversion.

    Example:
        # Production usage (reads from os.environ)
        reader = EnvReader()
        level = reader.get_str("TS_LOG_LEVEL", "info")

        # Testing usage (inject custom env)
        reader = EnvReader(env={"TS_LOG_MAX_BYTES": "1024"})
        reader.get_int("TS_LOG_MAX_BYTES", 0)  # Returns 1024
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the environment reader.

        Args:
            env: Optional mapping to use instead of os.environ.
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        value = self._env.get(var)
        if value is None:
            return default
        return value

    def get_int(self, var: str, default: int | None = None) -> int | None:
        """Get an integer from environment variable.

        Logs a warning and returns default if the value cannot be parsed.
        """
        value = self._env.get(var)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid integer value for %s: %s", var, value)
            return default

    def get_bool(self, var: str, default: bool | None = None) -> bool | None:
        """Get a boolean from environment variable.

        "true", "1", "yes" and "on" (any case) are true; any other value
        is false.
        """
        value = self._env.get(var)
        if value is None:
            return default
        return value.casefold() in ("true", "1", "yes", "on")

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        value = self._env.get(var)
        if not value:
            return default
        return Path(value).expanduser()


def logging_config_from_env(
    reader: EnvReader | None = None,
    base: LoggingConfig | None = None,
) -> LoggingConfig:
    """Build LoggingConfig from TS_LOG_* environment variables.

    Args:
        reader: Environment reader. Defaults to reading os.environ.
        base: Configuration supplying values for unset variables.

    Returns:
        New LoggingConfig. Invalid level or format values raise ValueError
        from LoggingConfig validation.
    """
    reader = reader or EnvReader()
    base = base or LoggingConfig()
    return LoggingConfig(
        level=reader.get_str(ENV_LOG_LEVEL, base.level),
        file=reader.get_path(ENV_LOG_FILE, base.file),
        format=reader.get_str(ENV_LOG_FORMAT, base.format),
        include_stderr=reader.get_bool(ENV_LOG_INCLUDE_STDERR, base.include_stderr),
        max_bytes=reader.get_int(ENV_LOG_MAX_BYTES, base.max_bytes),
        backup_count=reader.get_int(ENV_LOG_BACKUP_COUNT, base.backup_count),
    )
