from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np

from config.settings import SUPPORTED_COORDINATE_BITS


class Axis(enum.Enum):
    """Coordinate axis a single clip pass operates on."""

    X = "x"
    Y = "y"

    @property
    def other(self) -> Axis:
        """The off-axis, i.e. the coordinate that gets interpolated."""
        return Axis.Y if self is Axis.X else Axis.X


@dataclass(frozen=True)
class Vertex:
    """An integer 2D coordinate."""

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Return this vertex as an `(x, y)` tuple."""
        return (self.x, self.y)

    def coord(self, axis: Axis) -> int:
        return self.x if axis is Axis.X else self.y

    @classmethod
    def on_axis(cls, axis: Axis, along: int, across: int) -> Vertex:
        """Build a vertex from its coordinate on `axis` and on the other axis."""
        if axis is Axis.X:
            return cls(along, across)
        return cls(across, along)


@dataclass(frozen=True)
class ClipRegion:
    """Axis-aligned clip rectangle.

    Y grows downwards, so `top` is the lower Y bound and `bottom` the upper one.
    """

    left: int
    right: int
    top: int
    bottom: int

    @property
    def is_normalized(self) -> bool:
        return self.left <= self.right and self.top <= self.bottom

    def bounds(self, axis: Axis) -> tuple[int, int]:
        """Return the `(low, high)` bound pair for an axis."""
        if axis is Axis.X:
            return (self.left, self.right)
        return (self.top, self.bottom)


def coordinate_range(bits: int) -> tuple[int, int]:
    """Inclusive `(min, max)` of a signed integer with the given bit width."""
    if bits not in SUPPORTED_COORDINATE_BITS:
        raise ValueError(
            f"Unsupported coordinate width {bits} (expected one of {SUPPORTED_COORDINATE_BITS})."
        )
    half = 1 << (bits - 1)
    return (-half, half - 1)


def coordinate_dtype(bits: int) -> np.dtype:
    """numpy dtype matching a signed coordinate width."""
    coordinate_range(bits)
    return np.dtype(f"int{bits}")
