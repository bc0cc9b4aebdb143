"""
Silueta Shapes
==============

Bounded Context: Tolerance-based classification of edge point sets as
simple geometric shapes (circle, triangle, quadrilateral).

Design Philosophy:
- Separation of Concerns: Geometry, Classification, Rendering separated
- Pure fit tests: same input + same tolerance = same answer
- Pluggable corner finding and corner optimization

Architecture:

    silueta_shapes/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── points.py      # Point, bounding_rectangle
    │   ├── fitting.py     # ToleranceConfig, fit_circle, fit_polygon
    │   ├── corners.py     # QuadrilateralCornerFinder
    │   └── optimizer.py   # FlatAnglesOptimizer
    │
    ├── checker.py         # ShapeChecker, ShapeType, match results
    ├── rendering/         # Visualization (stateless drawing)
    │   └── visualizer.py  # ShapeVisualizer
    │
    └── logging/           # Structured JSON logging

Usage:

    from silueta_shapes import ShapeChecker, ShapeType

    checker = ShapeChecker()
    checker.relative_distortion_limit = 0.05

    if checker.classify(edge_points) is ShapeType.QUADRILATERAL:
        corners = checker.is_quadrilateral(edge_points).corners

    circle = checker.is_circle(edge_points)
    if circle:
        print(circle.center, circle.radius)
"""

from silueta_shapes.geometry import (
    Point,
    ToleranceConfig,
    QuadrilateralCornerFinder,
    FlatAnglesOptimizer,
    fit_circle,
    fit_polygon,
)
from silueta_shapes.checker import ShapeChecker, ShapeType, CircleMatch, PolygonMatch

__all__ = [
    # Geometry
    "Point",
    "ToleranceConfig",
    "QuadrilateralCornerFinder",
    "FlatAnglesOptimizer",
    "fit_circle",
    "fit_polygon",
    # Classification
    "ShapeChecker",
    "ShapeType",
    "CircleMatch",
    "PolygonMatch",
]

__version__ = "1.0.0"
