"""Configuration for logging and strategy profiles."""

from transcode_strategy.config.env import EnvReader, logging_config_from_env
from transcode_strategy.config.loader import (
    load_strategy,
    load_strategy_from_dict,
    load_strategy_from_yaml,
)
from transcode_strategy.config.models import LoggingConfig

__all__ = [
    "EnvReader",
    "LoggingConfig",
    "load_strategy",
    "load_strategy_from_dict",
    "load_strategy_from_yaml",
    "logging_config_from_env",
]
