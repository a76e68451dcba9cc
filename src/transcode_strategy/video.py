"""Default output strategy for video tracks.

Converts a video track to AVC, resizing it through a resizer chain and
negotiating frame rate, keyframe interval and bit rate. The output aspect
ratio orientation always matches the input.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from transcode_strategy.bitrate import estimate_bit_rate
from transcode_strategy.exceptions import (
    AlreadyCompressedError,
    StrategyUnavailableError,
)
from transcode_strategy.formats import (
    COLOR_FORMAT_SURFACE,
    DEFAULT_CAPABILITIES,
    KEY_BIT_RATE,
    KEY_COLOR_FORMAT,
    KEY_FRAME_RATE,
    KEY_HEIGHT,
    KEY_KEYFRAME_INTERVAL,
    KEY_MIME_TYPE,
    KEY_WIDTH,
    MIME_TYPE_AVC,
    EncoderCapabilities,
    TrackFormat,
    create_video_format,
)
from transcode_strategy.resizers import (
    AtMostResizer,
    ExactResizer,
    FractionResizer,
    MultiResizer,
    Resizer,
)
from transcode_strategy.size import ExactSize, Size

logger = logging.getLogger(__name__)

MIME_TYPE = MIME_TYPE_AVC
BITRATE_UNKNOWN: int | None = None
DEFAULT_KEYFRAME_INTERVAL = 3.0
DEFAULT_FRAME_RATE = 30

# Stands in for an input value the track format does not declare
_UNKNOWN = -1


@dataclass(frozen=True)
class Options:
    """Immutable configuration for DefaultVideoStrategy."""

    resizer: MultiResizer = field(default_factory=MultiResizer)
    target_frame_rate: int = DEFAULT_FRAME_RATE
    target_bit_rate: int | None = BITRATE_UNKNOWN  # None = estimate
    target_keyframe_interval: float = DEFAULT_KEYFRAME_INTERVAL  # seconds

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.target_frame_rate <= 0:
            raise ValueError(
                f"target_frame_rate must be positive, got {self.target_frame_rate}"
            )
        if self.target_bit_rate is not None and self.target_bit_rate <= 0:
            raise ValueError(
                f"target_bit_rate must be positive or BITRATE_UNKNOWN, "
                f"got {self.target_bit_rate}"
            )
        if self.target_keyframe_interval < 0:
            raise ValueError(
                f"target_keyframe_interval must be >= 0, "
                f"got {self.target_keyframe_interval}"
            )


class Builder:
    """Accumulates strategy settings and freezes them into Options.

    Example:
        strategy = (
            DefaultVideoStrategy.at_most(720)
            .add_resizer(FractionResizer(0.5))
            .frame_rate(24)
            .build()
        )
    """

    def __init__(self, resizer: Resizer | None = None) -> None:
        self._resizers: list[Resizer] = []
        self._target_frame_rate = DEFAULT_FRAME_RATE
        self._target_bit_rate: int | None = BITRATE_UNKNOWN
        self._target_keyframe_interval = DEFAULT_KEYFRAME_INTERVAL
        if resizer is not None:
            self._resizers.append(resizer)

    def add_resizer(self, resizer: Resizer) -> Builder:
        """Append a resizer to the chain."""
        self._resizers.append(resizer)
        return self

    def bit_rate(self, bit_rate: int | None) -> Builder:
        """Set the desired bit rate in bits per second.

        BITRATE_UNKNOWN makes the strategy estimate one from the output
        size and frame rate.
        """
        self._target_bit_rate = bit_rate
        return self

    def frame_rate(self, frame_rate: int) -> Builder:
        """Set the desired frame rate.

        The output never exceeds the input frame rate when the input
        declares one.
        """
        self._target_frame_rate = frame_rate
        return self

    def keyframe_interval(self, interval: float) -> Builder:
        """Set the interval between keyframes, in seconds."""
        self._target_keyframe_interval = interval
        return self

    def options(self) -> Options:
        return Options(
            resizer=MultiResizer(resizers=tuple(self._resizers)),
            target_frame_rate=self._target_frame_rate,
            target_bit_rate=self._target_bit_rate,
            target_keyframe_interval=self._target_keyframe_interval,
        )

    def build(self) -> DefaultVideoStrategy:
        return DefaultVideoStrategy(self.options())


def _read_dimension(input_format: TrackFormat, key: str) -> int:
    value = input_format.get(key)
    if value is None:
        raise StrategyUnavailableError(f"Input format has no {key}")
    try:
        value = int(value)
    except (TypeError, ValueError) as e:
        raise StrategyUnavailableError(
            f"Input {key} is not a number: {value!r}"
        ) from e
    if value <= 0:
        raise StrategyUnavailableError(f"Input {key} must be positive, got {value}")
    return value


def _read_frame_rate(input_format: TrackFormat) -> int:
    value = input_format[KEY_FRAME_RATE]
    try:
        frame_rate = int(value)
    except (TypeError, ValueError) as e:
        raise StrategyUnavailableError(
            f"Input {KEY_FRAME_RATE} is not a number: {value!r}"
        ) from e
    if frame_rate <= 0:
        raise StrategyUnavailableError(
            f"Input {KEY_FRAME_RATE} must be positive, got {frame_rate}"
        )
    return frame_rate


def _read_keyframe_interval(input_format: TrackFormat) -> float:
    value = input_format[KEY_KEYFRAME_INTERVAL]
    try:
        interval = float(value)
    except (TypeError, ValueError) as e:
        raise StrategyUnavailableError(
            f"Input {KEY_KEYFRAME_INTERVAL} is not a number: {value!r}"
        ) from e
    if math.isnan(interval) or interval < 0:
        raise StrategyUnavailableError(
            f"Input {KEY_KEYFRAME_INTERVAL} must be >= 0, got {value!r}"
        )
    return interval


class DefaultVideoStrategy:
    """Output strategy that converts video to AVC with the configured size."""

    def __init__(self, options: Options) -> None:
        self._options = options

    @property
    def options(self) -> Options:
        return self._options

    @staticmethod
    def exact(first: int, second: int) -> Builder:
        """Start a builder with an ExactResizer.

        Args:
            first: First exact dimension.
            second: Second exact dimension.

        Returns:
            A strategy builder.
        """
        return Builder(ExactResizer(first, second))

    @staticmethod
    def fraction(fraction: float) -> Builder:
        """Start a builder with a FractionResizer.

        Args:
            fraction: Downscale fraction in (0, 1].

        Returns:
            A strategy builder.
        """
        return Builder(FractionResizer(fraction))

    @staticmethod
    def at_most(at_most_minor: int, at_most_major: int | None = None) -> Builder:
        """Start a builder with an AtMostResizer.

        Args:
            at_most_minor: Constraint for the minor dimension.
            at_most_major: Optional constraint for the major dimension.

        Returns:
            A strategy builder.
        """
        return Builder(AtMostResizer(at_most_minor, at_most_major))

    def create_output_format(
        self,
        input_format: TrackFormat,
        capabilities: EncoderCapabilities = DEFAULT_CAPABILITIES,
    ) -> dict[str, Any]:
        """Compute the output format for a video track.

        The input format is only read; a new mapping is returned.

        Args:
            input_format: Input track format. Must hold mime type, width and
                height; frame rate and keyframe interval are optional.
            capabilities: What the downstream encoder accepts.

        Returns:
            New output track format.

        Raises:
            StrategyUnavailableError: If no output size can be computed.
            AlreadyCompressedError: If transcoding would not improve the track.
        """
        options = self._options
        in_mime = input_format.get(KEY_MIME_TYPE)
        if in_mime is None:
            raise StrategyUnavailableError("Input format has no mime type")
        type_done = in_mime == MIME_TYPE

        # Compute output size.
        in_width = _read_dimension(input_format, KEY_WIDTH)
        in_height = _read_dimension(input_format, KEY_HEIGHT)
        logger.info("Input width&height: %dx%d", in_width, in_height)
        in_size = ExactSize(in_width, in_height)
        try:
            out_size: Size = options.resizer.get_output_size(in_size)
        except Exception as e:
            raise StrategyUnavailableError(f"Could not resize {in_size}: {e}") from e
        if out_size.minor <= 0:
            raise StrategyUnavailableError(
                f"Resizer chain produced a degenerate size {out_size}"
            )

        if in_size.is_portrait:
            out_width, out_height = out_size.minor, out_size.major
        else:
            out_width, out_height = out_size.major, out_size.minor
        logger.info("Output width&height: %dx%d", out_width, out_height)
        size_done = in_size.minor <= out_size.minor

        # Output frame rate can't be bigger than the input frame rate.
        if input_format.get(KEY_FRAME_RATE) is not None:
            in_frame_rate = _read_frame_rate(input_format)
            out_frame_rate = min(in_frame_rate, options.target_frame_rate)
        else:
            in_frame_rate = _UNKNOWN
            out_frame_rate = options.target_frame_rate
        frame_rate_done = in_frame_rate <= out_frame_rate

        in_interval: float = _UNKNOWN
        if input_format.get(KEY_KEYFRAME_INTERVAL) is not None:
            in_interval = _read_keyframe_interval(input_format)
        interval_done = in_interval >= options.target_keyframe_interval

        logger.debug(
            "Decision for %s: type=%s size=%s frame_rate=%s keyframe_interval=%s",
            in_size,
            type_done,
            size_done,
            frame_rate_done,
            interval_done,
            extra={
                "input_size": str(in_size),
                "output_size": f"{out_width}x{out_height}",
                "type_done": type_done,
                "size_done": size_done,
                "frame_rate_done": frame_rate_done,
                "interval_done": interval_done,
            },
        )
        if type_done and size_done and frame_rate_done and interval_done:
            raise AlreadyCompressedError(
                input_minor=in_size.minor,
                output_minor=out_size.minor,
                input_frame_rate=in_frame_rate,
                output_frame_rate=out_frame_rate,
                input_keyframe_interval=in_interval,
                target_keyframe_interval=options.target_keyframe_interval,
            )

        output = create_video_format(MIME_TYPE, out_width, out_height)
        output[KEY_FRAME_RATE] = out_frame_rate
        if capabilities.float_keyframe_interval:
            output[KEY_KEYFRAME_INTERVAL] = float(options.target_keyframe_interval)
        else:
            output[KEY_KEYFRAME_INTERVAL] = math.ceil(options.target_keyframe_interval)
        output[KEY_COLOR_FORMAT] = COLOR_FORMAT_SURFACE
        if options.target_bit_rate is BITRATE_UNKNOWN:
            out_bit_rate = estimate_bit_rate(out_width, out_height, out_frame_rate)
        else:
            out_bit_rate = options.target_bit_rate
        output[KEY_BIT_RATE] = out_bit_rate
        logger.debug(
            "Output format: %dfps, keyframe interval %s, %d bps",
            out_frame_rate,
            output[KEY_KEYFRAME_INTERVAL],
            out_bit_rate,
            extra={"output_format": output},
        )
        return output
