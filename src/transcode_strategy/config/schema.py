"""Pydantic models for strategy profile parsing and validation.

These models validate mapping/YAML strategy profiles. The loader converts
them into frozen Options.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from transcode_strategy.bitrate import parse_bit_rate
from transcode_strategy.video import DEFAULT_FRAME_RATE, DEFAULT_KEYFRAME_INTERVAL


class ExactResizerModel(BaseModel):
    """Pydantic model for an exact resize step."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["exact"]
    first: int = Field(gt=0)
    second: int = Field(gt=0)


class FractionResizerModel(BaseModel):
    """Pydantic model for a fractional downscale step."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["fraction"]
    fraction: float = Field(gt=0.0, le=1.0)


class AtMostResizerModel(BaseModel):
    """Pydantic model for an at-most clamp step."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["at_most"]
    minor: int = Field(gt=0)
    major: int | None = Field(default=None, gt=0)


class PassThroughResizerModel(BaseModel):
    """Pydantic model for a step that leaves the size unchanged."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["pass_through"]


ResizerModel = Annotated[
    Union[
        ExactResizerModel,
        FractionResizerModel,
        AtMostResizerModel,
        PassThroughResizerModel,
    ],
    Field(discriminator="type"),
]


class VideoStrategyModel(BaseModel):
    """Pydantic model for a video strategy profile.

    Example YAML:
        resizers:
          - type: at_most
            minor: 720
          - type: fraction
            fraction: 0.5
        bit_rate: 2500k
        frame_rate: 24
        keyframe_interval: 2.5
    """

    model_config = ConfigDict(extra="forbid")

    resizers: list[ResizerModel] = Field(default_factory=list)
    bit_rate: int | str | None = None
    frame_rate: int = Field(default=DEFAULT_FRAME_RATE, gt=0)
    keyframe_interval: float = Field(default=DEFAULT_KEYFRAME_INTERVAL, ge=0.0)

    @field_validator("bit_rate")
    @classmethod
    def validate_bit_rate(cls, v: int | str | None) -> int | None:
        """Normalize bit rate to bits per second (None = estimate)."""
        if v is None:
            return None
        if isinstance(v, str):
            parsed = parse_bit_rate(v)
            if parsed is None:
                raise ValueError(
                    f"Invalid bit_rate '{v}'. Use bits per second or a "
                    f"value like '5M' or '2500k'."
                )
            v = parsed
        if v <= 0:
            raise ValueError(f"bit_rate must be positive, got {v}")
        return v
