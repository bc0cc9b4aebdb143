"""
Point Primitives Module
=======================

Point value type and point-set helpers shared by every fit test.

Design:
- Immutable Point (frozen dataclass, used purely by value)
- Point sets handled as Nx2 float arrays internally
- Accepts Points, (x, y) tuples, Nx2 arrays and OpenCV Nx1x2 contours
- Fail-fast validation on empty or malformed input
"""

import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union

import numpy as np


@dataclass(frozen=True)
class Point:
    """
    Immutable 2-D point in image coordinates.

    Edge points are usually integer pixel positions; derived points
    (circle centers) may be real-valued.

    Attributes:
        x: Horizontal coordinate (pixels)
        y: Vertical coordinate (pixels)

    Example:
        >>> Point(3, 4).distance_to(Point(0, 0))
        5.0
    """

    x: float
    y: float

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __truediv__(self, factor: float) -> "Point":
        return Point(self.x / factor, self.y / factor)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_array(cls, row: Sequence[float]) -> "Point":
        """Build a point from an (x, y) row, keeping integers integral."""
        x, y = row[0], row[1]
        if float(x).is_integer() and float(y).is_integer():
            return cls(int(x), int(y))
        return cls(float(x), float(y))


PointsLike = Union[np.ndarray, Iterable[Point], Iterable[Tuple[float, float]]]


def as_point_array(points: PointsLike) -> np.ndarray:
    """
    Convert any supported point-set representation to an Nx2 float array.

    Args:
        points: Points, (x, y) tuples, Nx2 array or OpenCV contour (Nx1x2)

    Returns:
        Nx2 float64 array (may be empty, shape (0, 2))

    Raises:
        ValueError: If the input cannot be read as 2-D points
    """
    if isinstance(points, np.ndarray):
        array = points
    else:
        try:
            rows = [
                p.to_tuple() if isinstance(p, Point) else tuple(p)
                for p in points
            ]
        except TypeError as e:
            raise ValueError(f"points must be Nx2, got {points!r}") from e
        if not rows:
            return np.empty((0, 2), dtype=np.float64)
        array = np.asarray(rows)

    if array.size == 0:
        return np.empty((0, 2), dtype=np.float64)

    # OpenCV contours come as (N, 1, 2)
    if array.ndim == 3 and array.shape[1:] == (1, 2):
        array = array.reshape(-1, 2)

    if array.ndim != 2 or array.shape[1] != 2:
        raise ValueError(f"points must be Nx2, got shape {array.shape}")

    return array.astype(np.float64)


def require_points(points: PointsLike) -> np.ndarray:
    """
    Like as_point_array() but rejects empty point sets.

    Raises:
        ValueError: If the point set is empty or malformed
    """
    array = as_point_array(points)
    if len(array) == 0:
        raise ValueError("point set must contain at least one point")
    return array


def bounding_rectangle(points: PointsLike) -> Tuple[Point, Point]:
    """
    Axis-aligned bounding rectangle of a point set.

    Returns:
        (min_xy, max_xy) corner points

    Raises:
        ValueError: If the point set is empty
    """
    array = require_points(points)
    return Point.from_array(array.min(axis=0)), Point.from_array(array.max(axis=0))


def to_points(array: np.ndarray) -> Tuple[Point, ...]:
    """Convert an Nx2 array back to a tuple of Points."""
    return tuple(Point.from_array(row) for row in array)
