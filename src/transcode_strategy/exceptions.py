"""Exceptions raised while negotiating an output track format.

Two outcomes of the decision procedure are modelled as exceptions and must
not be confused: StrategyUnavailableError is a hard failure, while
AlreadyCompressedError is the expected signal that the track should be
passed through untouched.
"""

from __future__ import annotations


class StrategyError(Exception):
    """Base class for output strategy errors."""

    pass


class ResizeError(StrategyError):
    """Raised when a resizer cannot produce a valid output size."""

    def __init__(self, resizer: str, message: str) -> None:
        """Initialize the error.

        Args:
            resizer: Short description of the resizer that failed.
            message: What went wrong.
        """
        self.resizer = resizer
        super().__init__(f"{resizer}: {message}")


class StrategyUnavailableError(StrategyError):
    """Raised when no output format can be produced for the input track.

    The underlying cause, if any, is chained as ``__cause__``.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class AlreadyCompressedError(StrategyError):
    """Raised when the input track is already as compressed as requested.

    This is not a failure: callers should pass the track through unchanged.
    """

    def __init__(
        self,
        input_minor: int,
        output_minor: int,
        input_frame_rate: int,
        output_frame_rate: int,
        input_keyframe_interval: float,
        target_keyframe_interval: float,
    ) -> None:
        """Initialize the error.

        Args:
            input_minor: Minor dimension of the input track.
            output_minor: Minor dimension requested by the resizer chain.
            input_frame_rate: Input frame rate, or -1 if unknown.
            output_frame_rate: Negotiated output frame rate.
            input_keyframe_interval: Input keyframe interval, or -1 if unknown.
            target_keyframe_interval: Configured keyframe interval.
        """
        self.input_minor = input_minor
        self.output_minor = output_minor
        self.input_frame_rate = input_frame_rate
        self.output_frame_rate = output_frame_rate
        self.input_keyframe_interval = input_keyframe_interval
        self.target_keyframe_interval = target_keyframe_interval
        super().__init__(
            f"Input minSize: {input_minor}, desired minSize: {output_minor}\n"
            f"Input frameRate: {input_frame_rate}, "
            f"desired frameRate: {output_frame_rate}\n"
            f"Input keyframeInterval: {input_keyframe_interval}, "
            f"desired keyframeInterval: {target_keyframe_interval}"
        )


class StrategyConfigError(StrategyError):
    """Raised when strategy configuration data is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)
