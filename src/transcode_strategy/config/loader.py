"""Strategy profile loading.

Profiles are mappings (typically YAML documents) describing a resizer chain
and target parameters. They are validated with the pydantic models in
schema.py and converted into frozen Options.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from transcode_strategy.config.schema import (
    AtMostResizerModel,
    ExactResizerModel,
    FractionResizerModel,
    PassThroughResizerModel,
    ResizerModel,
    VideoStrategyModel,
)
from transcode_strategy.exceptions import StrategyConfigError
from transcode_strategy.resizers import (
    AtMostResizer,
    ExactResizer,
    FractionResizer,
    PassThroughResizer,
    Resizer,
)
from transcode_strategy.video import Builder, Options

logger = logging.getLogger(__name__)


def _convert_resizer(model: ResizerModel) -> Resizer:
    if isinstance(model, ExactResizerModel):
        return ExactResizer(model.first, model.second)
    if isinstance(model, FractionResizerModel):
        return FractionResizer(model.fraction)
    if isinstance(model, AtMostResizerModel):
        return AtMostResizer(model.minor, model.major)
    if isinstance(model, PassThroughResizerModel):
        return PassThroughResizer()
    raise StrategyConfigError(f"Unsupported resizer: {model!r}")


def _format_validation_error(error: Exception) -> tuple[str, str | None]:
    """Format a pydantic error into a message and the offending field path."""
    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            first_error = errors[0]
            loc = ".".join(str(x) for x in first_error.get("loc", []))
            msg = first_error.get("msg", str(error))
            if loc:
                return f"Strategy validation failed: {loc}: {msg}", loc
            return f"Strategy validation failed: {msg}", None

    return f"Strategy validation failed: {error}", None


def load_strategy_from_dict(data: Mapping[str, Any]) -> Options:
    """Load and validate strategy options from a mapping.

    Args:
        data: Strategy profile.

    Returns:
        Frozen Options.

    Raises:
        StrategyConfigError: If the profile is invalid.
    """
    try:
        model = VideoStrategyModel.model_validate(dict(data))
    except ValidationError as e:
        message, field = _format_validation_error(e)
        raise StrategyConfigError(message, field=field) from e

    builder = Builder()
    for resizer_model in model.resizers:
        builder.add_resizer(_convert_resizer(resizer_model))
    options = (
        builder.bit_rate(model.bit_rate)
        .frame_rate(model.frame_rate)
        .keyframe_interval(model.keyframe_interval)
        .options()
    )
    logger.debug(
        "Loaded strategy with %d resizer(s), %dfps",
        len(options.resizer),
        model.frame_rate,
    )
    return options


def load_strategy_from_yaml(text: str) -> Options:
    """Load strategy options from YAML text.

    Raises:
        StrategyConfigError: If the YAML is malformed or the profile invalid.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise StrategyConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise StrategyConfigError("Strategy profile is empty")

    if not isinstance(data, dict):
        raise StrategyConfigError("Strategy profile must be a YAML mapping")

    return load_strategy_from_dict(data)


def load_strategy(path: Path) -> Options:
    """Load strategy options from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        StrategyConfigError: If the profile is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Strategy profile not found: {path}")

    return load_strategy_from_yaml(path.read_text(encoding="utf-8"))
