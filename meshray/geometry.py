"""Three-component vectors and axis-aligned bounding boxes."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


def _fmin(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a <= b else b


def _fmax(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a >= b else b


@dataclass(frozen=True)
class Vector3:
    """An immutable 3-vector of floats."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __getitem__(self, index: int) -> float:
        if index == 0:
            return self.x
        if index == 1:
            return self.y
        if index == 2:
            return self.z
        raise IndexError("Vector3 index must be 0, 1 or 2")

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector3:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vector3(self.x * factor, self.y * factor, self.z * factor)

    def __rmul__(self, factor: float) -> Vector3:
        return self.__mul__(factor)

    def __truediv__(self, factor: float) -> Vector3:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return Vector3(self.x / factor, self.y / factor, self.z / factor)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    @classmethod
    def splat(cls, value: float) -> Vector3:
        """A vector with all three components equal to ``value``."""
        return cls(value, value, value)

    def minimum(self, other: Vector3) -> Vector3:
        """Component-wise minimum; a NaN component yields the other value."""
        return Vector3(_fmin(self.x, other.x), _fmin(self.y, other.y),
                       _fmin(self.z, other.z))

    def maximum(self, other: Vector3) -> Vector3:
        """Component-wise maximum; a NaN component yields the other value."""
        return Vector3(_fmax(self.x, other.x), _fmax(self.y, other.y),
                       _fmax(self.z, other.z))


@dataclass
class BBox:
    """Axis-aligned box; the empty box has ``lower = +inf`` and ``upper = -inf``."""

    lower: Vector3 = field(default_factory=lambda: Vector3.splat(math.inf))
    upper: Vector3 = field(default_factory=lambda: Vector3.splat(-math.inf))

    @classmethod
    def empty(cls) -> BBox:
        return cls()

    @classmethod
    def from_point(cls, point: Vector3) -> BBox:
        """A degenerate box holding a single point."""
        return cls(point, point)

    def extent(self) -> Vector3:
        return self.upper - self.lower

    def centroid(self) -> Vector3:
        return 0.5 * (self.lower + self.upper)

    def area(self) -> float:
        """Surface area of the box."""
        ext = self.extent()
        return 2.0 * (ext.x * ext.y + ext.x * ext.z + ext.y * ext.z)

    def max_dimension(self) -> int:
        """Axis (0, 1 or 2) of largest extent; ties go to the lower axis."""
        ext = self.extent()
        dim = 0
        if ext.y > ext[dim]:
            dim = 1
        if ext.z > ext[dim]:
            dim = 2
        return dim

    def expand(self, other: Union[Vector3, BBox]) -> None:
        """Grow the box in place to include a point or another box."""
        if isinstance(other, BBox):
            self.lower = self.lower.minimum(other.lower)
            self.upper = self.upper.maximum(other.upper)
        elif isinstance(other, Vector3):
            self.lower = self.lower.minimum(other)
            self.upper = self.upper.maximum(other)
        else:
            raise TypeError("can only expand by a Vector3 or a BBox")