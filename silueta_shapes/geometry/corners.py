"""
Corner Finding Module
=====================

Extracts quadrilateral corner candidates from a shape's edge points.

Design:
- CornerFinder protocol: single transformation method, pluggable
- Default heuristic based on furthest points (no iteration, no fitting)
- Returns 2..4 corners in cyclic order
"""

from typing import List, Protocol, Tuple

import numpy as np

from silueta_shapes.geometry.points import Point, PointsLike, require_points, to_points


class CornerFinder(Protocol):
    """Strategy that proposes polygon corners for a set of edge points."""

    def find_corners(self, edge_points: PointsLike) -> List[Point]:
        ...


def furthest_point(points: np.ndarray, reference: np.ndarray) -> np.ndarray:
    """Point of the set with the largest distance to reference."""
    distances = np.hypot(points[:, 0] - reference[0], points[:, 1] - reference[1])
    return points[int(np.argmax(distances))]


def furthest_points_from_line(
    points: np.ndarray,
    line_start: np.ndarray,
    line_end: np.ndarray,
) -> Tuple[np.ndarray, float, np.ndarray, float]:
    """
    Furthest point on each side of the line through two points.

    Returns:
        (point1, distance1, point2, distance2) where side 1 is the
        positive side of the line. A side without points reports
        line_start with distance 0.
    """
    if line_end[0] != line_start[0]:
        k = (line_end[1] - line_start[1]) / (line_end[0] - line_start[0])
        z = line_start[1] - k * line_start[0]
        signed = (k * points[:, 0] + z - points[:, 1]) / np.sqrt(k * k + 1)
    else:
        signed = line_start[0] - points[:, 0]

    positive = int(np.argmax(signed))
    negative = int(np.argmin(signed))

    point1, distance1 = line_start, 0.0
    point2, distance2 = line_start, 0.0
    if signed[positive] > 0:
        point1, distance1 = points[positive], float(signed[positive])
    if signed[negative] < 0:
        point2, distance2 = points[negative], float(-signed[negative])

    return point1, distance1, point2, distance2


def order_corners(corners: np.ndarray) -> np.ndarray:
    """
    Sort corners cyclically by angle around their mean.

    The corner with the lowest x (then lowest y) comes first.
    """
    if len(corners) < 3:
        return corners

    mean = corners.mean(axis=0)
    angles = np.arctan2(corners[:, 1] - mean[1], corners[:, 0] - mean[0])
    ordered = corners[np.argsort(angles, kind="stable")]

    first = int(np.lexsort((ordered[:, 1], ordered[:, 0]))[0])
    return np.roll(ordered, -first, axis=0)


class QuadrilateralCornerFinder:
    """
    Furthest-point heuristic for triangle/quadrilateral corners.

    Design:
    - The two mutually furthest points are taken as a diagonal (or an edge)
    - Points far enough on both sides of that line complete a quadrilateral
    - Otherwise the shape is probed for a triangle plus optional 4th corner
    - "Far enough" scales with the point cloud size

    Attributes:
        relative_distortion_limit: Fraction of the bounding box
            half-perimeter a point must lie off a line to count as a
            corner, clamped to [0, 1] (default 0.1)

    Usage:
        finder = QuadrilateralCornerFinder()
        corners = finder.find_corners(edge_points)  # 2..4 Points
    """

    def __init__(self, relative_distortion_limit: float = 0.1):
        self.relative_distortion_limit = max(0.0, min(1.0, relative_distortion_limit))

    def find_corners(self, edge_points: PointsLike) -> List[Point]:
        """
        Find up to four corners of the shape.

        Args:
            edge_points: Shape boundary points (non-empty)

        Returns:
            Corners in cyclic order

        Raises:
            ValueError: If edge_points is empty
        """
        points = require_points(edge_points)

        min_xy = points.min(axis=0)
        cloud_size = points.max(axis=0) - min_xy
        center = min_xy + cloud_size / 2
        distortion_limit = self.relative_distortion_limit * float(cloud_size.sum()) / 2

        point1 = furthest_point(points, center)
        point2 = furthest_point(points, point1)
        corners = [point1, point2]

        point3, distance3, point4, distance4 = furthest_points_from_line(points, point1, point2)

        if distance3 >= distortion_limit and distance4 >= distortion_limit:
            # point1/point2 span a diagonal
            corners.extend([point3, point4])
        else:
            # point1/point2 span an edge, probe the remaining sides
            apex = point3 if distance3 > distance4 else point4
            fourth = None

            for line_start, opposite in ((point1, point2), (point2, point1)):
                side1, dist1, side2, dist2 = furthest_points_from_line(points, line_start, apex)
                if dist1 >= distortion_limit and dist2 >= distortion_limit:
                    opposite_distance1 = np.hypot(*(side1 - opposite))
                    opposite_distance2 = np.hypot(*(side2 - opposite))
                    fourth = side2 if opposite_distance2 > opposite_distance1 else side1
                    break

            corners.append(apex)
            if fourth is not None:
                corners.append(fourth)

        unique = np.unique(np.asarray(corners), axis=0)
        return list(to_points(order_corners(unique)))
