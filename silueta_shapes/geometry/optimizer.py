"""
Shape Optimizer Module
======================

Reduces over-segmented corner sets by merging near-straight vertices.

Design:
- ShapeOptimizer protocol: single transformation method, pluggable
- FlatAnglesOptimizer drops vertices whose interior angle is close to 180
- Never reduces a shape below 3 vertices
- Input is never mutated
"""

import math
from typing import List, Protocol, Sequence

from silueta_shapes.geometry.points import Point


class ShapeOptimizer(Protocol):
    """Strategy that simplifies a polygon's vertex list."""

    def optimize(self, corners: Sequence[Point]) -> List[Point]:
        ...


def angle_between_vectors(vertex: Point, end1: Point, end2: Point) -> float:
    """
    Angle in degrees at vertex between the vectors to end1 and end2.

    A zero-length vector yields 0.
    """
    x1, y1 = end1.x - vertex.x, end1.y - vertex.y
    x2, y2 = end2.x - vertex.x, end2.y - vertex.y

    norms = math.hypot(x1, y1) * math.hypot(x2, y2)
    if norms == 0:
        return 0.0

    cosine = max(-1.0, min(1.0, (x1 * x2 + y1 * y2) / norms))
    return math.degrees(math.acos(cosine))


class FlatAnglesOptimizer:
    """
    Removes polygon vertices whose interior angle exceeds a threshold.

    Attributes:
        max_angle_to_keep: Vertices with a larger interior angle are
            merged away, degrees, clamped to [140, 180] (default 160)

    Usage:
        optimizer = FlatAnglesOptimizer(160)
        corners = optimizer.optimize(corners)
    """

    def __init__(self, max_angle_to_keep: float = 160):
        self.max_angle_to_keep = max(140.0, min(180.0, float(max_angle_to_keep)))

    def optimize(self, corners: Sequence[Point]) -> List[Point]:
        """
        Merge near-straight runs of vertices.

        Args:
            corners: Polygon vertices, read cyclically

        Returns:
            New vertex list with size <= len(corners)
        """
        shape = list(corners)
        if len(shape) <= 3:
            return shape

        optimized = shape[:2]
        for i in range(2, len(shape)):
            optimized.append(shape[i])

            angle = angle_between_vectors(optimized[-2], optimized[-3], optimized[-1])
            is_last = i == len(shape) - 1
            if angle > self.max_angle_to_keep and (len(optimized) > 3 or not is_last):
                del optimized[-2]

        # wrap-around vertices
        if len(optimized) > 3:
            angle = angle_between_vectors(optimized[-1], optimized[-2], optimized[0])
            if angle > self.max_angle_to_keep:
                del optimized[-1]

        if len(optimized) > 3:
            angle = angle_between_vectors(optimized[0], optimized[-1], optimized[1])
            if angle > self.max_angle_to_keep:
                del optimized[0]

        return optimized
