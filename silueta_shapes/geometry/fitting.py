"""
Shape Fitting Module
====================

Distance-based fit tests - decide whether edge points lie close enough
to a candidate circle or polygon boundary.

Design:
- Pure functions (no state, no side effects)
- Immutable tolerance value passed into every call
- Tolerance scales with the shape's own size:

      max_distance = max(min_acceptable_distortion,
                         relative_distortion_limit * (width + height) / 2)

  where width/height is the bounding rectangle of the edge points
  (circle) or of the corners (polygon)
- Polygon edges are treated as infinite lines, not bounded segments
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from silueta_shapes.geometry.points import (
    Point,
    PointsLike,
    as_point_array,
    require_points,
)


@dataclass(frozen=True)
class ToleranceConfig:
    """
    Immutable distortion tolerance shared by all fit tests.

    Values are clamped into their legal range on construction rather
    than rejected.

    Attributes:
        min_acceptable_distortion: Absolute floor on the allowed mean
            deviation, same units as point coordinates (>= 0)
        relative_distortion_limit: Fraction of the bounding box
            half-perimeter allowed as mean deviation, [0, 1]
    """

    min_acceptable_distortion: float = 0.5
    relative_distortion_limit: float = 0.03

    def __post_init__(self):
        """Clamp values (using object.__setattr__ for frozen dataclass)."""
        object.__setattr__(
            self,
            "min_acceptable_distortion",
            max(0.0, float(self.min_acceptable_distortion)),
        )
        object.__setattr__(
            self,
            "relative_distortion_limit",
            max(0.0, min(1.0, float(self.relative_distortion_limit))),
        )


def max_allowed_distance(tolerance: ToleranceConfig, width: float, height: float) -> float:
    """
    Maximum mean distance accepted for a shape of the given size.

    Args:
        tolerance: Distortion tolerance
        width: Bounding rectangle width
        height: Bounding rectangle height
    """
    return max(
        tolerance.min_acceptable_distortion,
        tolerance.relative_distortion_limit * (width + height) / 2,
    )


@dataclass(frozen=True)
class CircleFit:
    """
    Measurement produced by fit_circle().

    center/radius are derived from the bounding box only; they are
    reported whether or not the fit passed.
    """

    center: Point
    radius: float
    mean_distance: float
    max_distance: float

    @property
    def passed(self) -> bool:
        return self.mean_distance <= self.max_distance

    @property
    def degenerate(self) -> bool:
        """True when all points coincide (zero-size bounding box)."""
        return self.radius == 0


@dataclass(frozen=True)
class PolygonFit:
    """Measurement produced by fit_polygon()."""

    mean_distance: float
    max_distance: float

    @property
    def passed(self) -> bool:
        return self.mean_distance <= self.max_distance


def fit_circle(edge_points: PointsLike, tolerance: ToleranceConfig) -> CircleFit:
    """
    Check how well edge points fit the circle implied by their bounding box.

    The implied circle has its center at the bounding box center and a
    radius equal to the mean of half-width and half-height. No iterative
    refinement.

    Args:
        edge_points: Shape boundary points (non-empty)
        tolerance: Distortion tolerance

    Returns:
        CircleFit measurement

    Raises:
        ValueError: If edge_points is empty

    Note:
        A single point (or all-identical points) yields radius 0 and
        always passes. Kept for compatibility; see CircleFit.degenerate.
    """
    points = require_points(edge_points)

    min_xy = points.min(axis=0)
    cloud_size = points.max(axis=0) - min_xy
    center = min_xy + cloud_size / 2
    radius = float(cloud_size.sum()) / 4

    distances = np.abs(np.hypot(points[:, 0] - center[0], points[:, 1] - center[1]) - radius)
    mean_distance = float(distances.mean())

    return CircleFit(
        center=Point(float(center[0]), float(center[1])),
        radius=radius,
        mean_distance=mean_distance,
        max_distance=max_allowed_distance(tolerance, cloud_size[0], cloud_size[1]),
    )


def _edge_lines(corners: np.ndarray):
    """
    Infinite-line representation of each polygon edge (y = k*x + b).

    Edge i connects corner i to corner (i + 1) mod n.

    Returns:
        Tuple of arrays (is_vertical, vertical_x, k, b, divisor)
    """
    following = np.roll(corners, -1, axis=0)
    dx = following[:, 0] - corners[:, 0]
    dy = following[:, 1] - corners[:, 1]

    is_vertical = dx == 0
    safe_dx = np.where(is_vertical, 1.0, dx)
    k = np.where(is_vertical, 0.0, dy / safe_dx)
    b = corners[:, 1] - k * corners[:, 0]
    divisor = np.sqrt(k * k + 1)

    return is_vertical, corners[:, 0], k, b, divisor


def fit_polygon(
    edge_points: PointsLike,
    corners: Sequence[Point] | np.ndarray,
    tolerance: ToleranceConfig,
) -> PolygonFit:
    """
    Check how well edge points fit the polygon spanned by corners.

    For every edge point, the distance to the nearest polygon edge line
    is taken; the mean of these is compared against a tolerance sized by
    the bounding rectangle of the corners.

    Args:
        edge_points: Shape boundary points (non-empty)
        corners: Polygon vertices, read cyclically
        tolerance: Distortion tolerance

    Returns:
        PolygonFit measurement. An empty corner set never fits
        (mean_distance = inf).

    Raises:
        ValueError: If edge_points is empty
    """
    points = require_points(edge_points)
    corner_array = as_point_array(corners)

    if len(corner_array) == 0:
        return PolygonFit(
            mean_distance=float("inf"),
            max_distance=tolerance.min_acceptable_distortion,
        )

    is_vertical, vertical_x, k, b, divisor = _edge_lines(corner_array)

    xs = points[:, 0:1]
    ys = points[:, 1:2]

    # (points x edges) distance matrix
    sloped = np.abs(k * xs + b - ys) / divisor
    vertical = np.abs(xs - vertical_x)
    distances = np.where(is_vertical, vertical, sloped)

    mean_distance = float(distances.min(axis=1).mean())

    rect_size = corner_array.max(axis=0) - corner_array.min(axis=0)

    return PolygonFit(
        mean_distance=mean_distance,
        max_distance=max_allowed_distance(tolerance, rect_size[0], rect_size[1]),
    )
