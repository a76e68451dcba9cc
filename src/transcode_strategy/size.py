"""Orientation-agnostic video extents.

A Size only knows which dimension is larger (major) and which is smaller
(minor). ExactSize additionally remembers the width and height it was built
from so the orientation can be recovered.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Size:
    """Immutable extent expressed as major (larger) and minor (smaller) sides."""

    major: int
    minor: int

    def __post_init__(self) -> None:
        """Validate the major/minor invariant."""
        if self.minor < 0:
            raise ValueError(f"Size dimensions must be >= 0, got minor={self.minor}")
        if self.major < self.minor:
            raise ValueError(
                f"major must be >= minor, got major={self.major}, minor={self.minor}"
            )

    @classmethod
    def of(cls, first: int, second: int) -> Size:
        """Build a Size from two dimensions given in any order."""
        return cls(major=max(first, second), minor=min(first, second))

    def __str__(self) -> str:
        return f"{self.major}x{self.minor}"


@dataclass(frozen=True, init=False)
class ExactSize(Size):
    """A Size that also carries the width and height as supplied."""

    width: int
    height: int

    def __init__(self, width: int, height: int) -> None:
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        super().__init__(major=max(width, height), minor=min(width, height))

    @property
    def is_portrait(self) -> bool:
        """True when height is strictly larger than width."""
        return self.height > self.width

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
