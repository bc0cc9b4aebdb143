"""
Geometry Layer
==============

Bounded Context: Pure point-set geometry and fit tests.

Responsibilities:
- Point value type and bounding rectangles
- Circle and polygon fit tests
- Corner finding and flat-angle optimization (pluggable strategies)
- NO classification policy, NO drawing, NO I/O

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
- Zero side effects
"""

from silueta_shapes.geometry.points import Point, as_point_array, bounding_rectangle
from silueta_shapes.geometry.fitting import (
    ToleranceConfig,
    CircleFit,
    PolygonFit,
    fit_circle,
    fit_polygon,
    max_allowed_distance,
)
from silueta_shapes.geometry.corners import CornerFinder, QuadrilateralCornerFinder
from silueta_shapes.geometry.optimizer import ShapeOptimizer, FlatAnglesOptimizer

__all__ = [
    "Point",
    "as_point_array",
    "bounding_rectangle",
    "ToleranceConfig",
    "CircleFit",
    "PolygonFit",
    "fit_circle",
    "fit_polygon",
    "max_allowed_distance",
    "CornerFinder",
    "QuadrilateralCornerFinder",
    "ShapeOptimizer",
    "FlatAnglesOptimizer",
]
