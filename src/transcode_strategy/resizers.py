"""Resizing policies.

Each resizer maps an input Size to an output Size under a single policy.
Resizers work on major/minor sides only; restoring the width/height
orientation is the caller's job. MultiResizer chains several policies.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from transcode_strategy.exceptions import ResizeError
from transcode_strategy.size import ExactSize, Size

logger = logging.getLogger(__name__)


@runtime_checkable
class Resizer(Protocol):
    """Maps an input size to an output size."""

    def get_output_size(self, input_size: Size) -> Size:
        """Return the output size for the given input.

        Raises:
            ResizeError: If the input cannot be resized under this policy.
        """
        ...


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _round_even(value: float) -> int:
    """Round to the nearest even integer, halves rounding up.

    Values too small to reach 2 fall back to plain rounding with a floor of
    one, so a positive dimension never collapses to zero.
    """
    even = 2 * _round_half_up(value / 2)
    if even == 0:
        return max(1, _round_half_up(value))
    return even


def _require_positive(name: str, value: int | float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def _check_input(resizer: str, input_size: Size) -> None:
    if input_size.minor <= 0:
        raise ResizeError(resizer, f"input size {input_size} has no area")


@dataclass(frozen=True)
class ExactResizer:
    """Always returns the configured size, whatever the input.

    The two dimensions may be given in either order; orientation is restored
    from the input track by the strategy.
    """

    first: int
    second: int

    def __post_init__(self) -> None:
        _require_positive("first", self.first)
        _require_positive("second", self.second)

    def get_output_size(self, input_size: Size) -> Size:
        return ExactSize(self.first, self.second)


@dataclass(frozen=True)
class FractionResizer:
    """Scales both sides down by a fraction in (0, 1].

    Sides are rounded half up. A side that would round to zero makes the
    resize fail rather than produce an empty frame.
    """

    fraction: float

    def __post_init__(self) -> None:
        if not 0 < self.fraction <= 1:
            raise ValueError(f"fraction must be in (0, 1], got {self.fraction}")

    def get_output_size(self, input_size: Size) -> Size:
        name = f"fraction({self.fraction})"
        _check_input(name, input_size)
        major = _round_half_up(input_size.major * self.fraction)
        minor = _round_half_up(input_size.minor * self.fraction)
        if minor <= 0:
            raise ResizeError(name, f"scaling {input_size} leaves a zero side")
        return Size(major=major, minor=minor)


@dataclass(frozen=True)
class AtMostResizer:
    """Clamps the size so that neither side exceeds its cap.

    With a single cap only the minor side is constrained. When the input is
    larger than allowed, a uniform scale factor preserving the aspect ratio
    is applied: the binding side takes its cap exactly and the other side is
    rounded to an even value. Inputs already within the caps pass through
    unchanged; this resizer never upscales.
    """

    at_most_minor: int
    at_most_major: int | None = None

    def __post_init__(self) -> None:
        _require_positive("at_most_minor", self.at_most_minor)
        if self.at_most_major is not None:
            _require_positive("at_most_major", self.at_most_major)

    def __str__(self) -> str:
        if self.at_most_major is None:
            return f"at_most({self.at_most_minor})"
        return f"at_most({self.at_most_minor}, {self.at_most_major})"

    def get_output_size(self, input_size: Size) -> Size:
        _check_input(str(self), input_size)
        minor_scale = self.at_most_minor / input_size.minor
        if self.at_most_major is None:
            major_scale = math.inf
        else:
            major_scale = self.at_most_major / input_size.major

        if min(minor_scale, major_scale) >= 1:
            return input_size

        if minor_scale <= major_scale:
            out_minor = self.at_most_minor
            out_major = _round_even(input_size.major * minor_scale)
            if self.at_most_major is not None:
                out_major = min(out_major, self.at_most_major)
            out_major = max(out_major, out_minor)
        else:
            out_major = self.at_most_major
            out_minor = _round_even(input_size.minor * major_scale)
            out_minor = min(out_minor, self.at_most_minor, out_major)
        return Size(major=out_major, minor=out_minor)


@dataclass(frozen=True)
class PassThroughResizer:
    """Returns the input size unchanged."""

    def get_output_size(self, input_size: Size) -> Size:
        return input_size


@dataclass(frozen=True)
class MultiResizer:
    """Applies resizers in order, feeding each output into the next.

    An empty chain behaves like PassThroughResizer. The first failure aborts
    the chain and propagates unchanged.
    """

    resizers: tuple[Resizer, ...] = ()

    def __len__(self) -> int:
        return len(self.resizers)

    def add(self, resizer: Resizer) -> MultiResizer:
        """Return a new chain with ``resizer`` appended."""
        return MultiResizer(resizers=(*self.resizers, resizer))

    def get_output_size(self, input_size: Size) -> Size:
        size = input_size
        for resizer in self.resizers:
            size = resizer.get_output_size(size)
            logger.debug("Resizer %s produced %s", resizer, size)
        return size
