"""
Shape Checker Module
====================

Classifies edge points as circle, triangle, quadrilateral or unknown.

Design:
- Tolerance is an immutable value snapshot taken at the start of each call
- Corner finder and optimizer are injected strategies
- Results are match objects on success, None on failure
- Classification cascade: circle -> polygon (3 or 4 corners) -> unknown

Thread Safety:
    Queries are safe to run concurrently. Tolerance setters swap in a new
    immutable value; callers changing tolerance from several threads must
    serialize those writes themselves.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Any, List, Optional, Sequence, Tuple, Union

from silueta_shapes.geometry.corners import CornerFinder, QuadrilateralCornerFinder
from silueta_shapes.geometry.fitting import ToleranceConfig, fit_circle, fit_polygon
from silueta_shapes.geometry.optimizer import FlatAnglesOptimizer, ShapeOptimizer
from silueta_shapes.geometry.points import Point, PointsLike, require_points

logger = logging.getLogger(__name__)

# Interior angle above which neighbouring corners are merged
FLAT_ANGLE_THRESHOLD = 160


class ShapeType(str, Enum):
    """Classification result."""

    CIRCLE = "circle"
    TRIANGLE = "triangle"
    QUADRILATERAL = "quadrilateral"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CircleMatch:
    """Circle recognized from edge points (bounding-box derived)."""

    center: Point
    radius: float

    @property
    def shape_type(self) -> ShapeType:
        return ShapeType.CIRCLE

    def to_dict(self) -> Dict[str, Any]:
        return {"center": list(self.center.to_tuple()), "radius": self.radius}


@dataclass(frozen=True)
class PolygonMatch:
    """Convex polygon recognized from edge points."""

    corners: Tuple[Point, ...]

    @property
    def shape_type(self) -> ShapeType:
        if len(self.corners) == 3:
            return ShapeType.TRIANGLE
        if len(self.corners) == 4:
            return ShapeType.QUADRILATERAL
        return ShapeType.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        return {"corners": [list(c.to_tuple()) for c in self.corners]}


Match = Union[CircleMatch, PolygonMatch]


class ShapeChecker:
    """
    Tolerance-based checker for simple geometric shapes.

    A point set matches a candidate shape when the mean distance between
    the points and the shape's edge does not exceed:

        max(min_acceptable_distortion,
            relative_distortion_limit * (width + height) / 2)

    so bigger shapes are allowed proportionally more distortion.

    Usage:
        checker = ShapeChecker()
        checker.classify(edge_points)          # ShapeType

        match = checker.is_quadrilateral(edge_points)
        if match:
            print(match.corners)

        # Deterministic strategies (e.g. in tests)
        checker = ShapeChecker(corner_finder=MyFinder(), optimizer=MyOptimizer())
    """

    def __init__(
        self,
        tolerance: Optional[ToleranceConfig] = None,
        corner_finder: Optional[CornerFinder] = None,
        optimizer: Optional[ShapeOptimizer] = None,
    ):
        """
        Args:
            tolerance: Distortion tolerance (default: ToleranceConfig())
            corner_finder: Corner extraction strategy
                (default: QuadrilateralCornerFinder)
            optimizer: Corner simplification strategy
                (default: FlatAnglesOptimizer(160))
        """
        self._tolerance = tolerance or ToleranceConfig()
        self.corner_finder = corner_finder or QuadrilateralCornerFinder()
        self.optimizer = optimizer or FlatAnglesOptimizer(FLAT_ANGLE_THRESHOLD)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def tolerance(self) -> ToleranceConfig:
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value: ToleranceConfig) -> None:
        self._tolerance = value

    @property
    def min_acceptable_distortion(self) -> float:
        """Absolute floor on allowed mean deviation (>= 0, default 0.5)."""
        return self._tolerance.min_acceptable_distortion

    @min_acceptable_distortion.setter
    def min_acceptable_distortion(self, value: float) -> None:
        self._tolerance = replace(self._tolerance, min_acceptable_distortion=value)

    @property
    def relative_distortion_limit(self) -> float:
        """Size-relative allowed deviation, [0, 1] (default 0.03)."""
        return self._tolerance.relative_distortion_limit

    @relative_distortion_limit.setter
    def relative_distortion_limit(self, value: float) -> None:
        self._tolerance = replace(self._tolerance, relative_distortion_limit=value)

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, edge_points: PointsLike) -> ShapeType:
        """
        Check type of the shape formed by edge points.

        Args:
            edge_points: Shape boundary points (non-empty)

        Returns:
            Detected ShapeType

        Raises:
            ValueError: If edge_points is empty or malformed
        """
        return self.detect(edge_points)[0]

    def detect(self, edge_points: PointsLike) -> Tuple[ShapeType, Optional[Match]]:
        """
        Classify edge points and return the matched geometry with the type.

        Runs each fit once, so callers needing both the type and the
        circle/corners should use this instead of classify() + is_*().

        Returns:
            (ShapeType, CircleMatch | PolygonMatch), match is None for UNKNOWN

        Raises:
            ValueError: If edge_points is empty or malformed
        """
        points = require_points(edge_points)
        tolerance = self._tolerance

        match: Optional[Match] = self._match_circle(points, tolerance)
        if match is None:
            corners = self.shape_corners(points)
            if len(corners) not in (3, 4):
                logger.debug("Unsupported corner count %d, shape unknown", len(corners))
            elif fit_polygon(points, corners, tolerance).passed:
                match = PolygonMatch(corners=tuple(corners))

        shape_type = match.shape_type if match is not None else ShapeType.UNKNOWN
        logger.debug("Classified %d edge points as %s", len(points), shape_type.value)
        return shape_type, match

    def is_circle(self, edge_points: PointsLike) -> Optional[CircleMatch]:
        """
        Check if edge points form a circle.

        Returns:
            CircleMatch with center and radius, or None
        """
        return self._match_circle(require_points(edge_points), self._tolerance)

    def is_triangle(self, edge_points: PointsLike) -> Optional[PolygonMatch]:
        """Check if edge points form a triangle; corners on success."""
        return self._match_polygon(edge_points, lambda count: count == 3)

    def is_quadrilateral(self, edge_points: PointsLike) -> Optional[PolygonMatch]:
        """Check if edge points form a quadrilateral; corners on success."""
        return self._match_polygon(edge_points, lambda count: count == 4)

    def is_convex_polygon(self, edge_points: PointsLike) -> Optional[PolygonMatch]:
        """
        Check if edge points form a convex polygon.

        Only triangles and quadrilaterals come out of the default corner
        finder; check len(match.corners) to resolve the polygon type.
        """
        return self._match_polygon(edge_points, lambda count: count >= 3)

    def fits_shape(self, edge_points: PointsLike, corners: Sequence[Point]) -> bool:
        """
        Check if edge points fit the convex polygon spanned by corners.

        Args:
            edge_points: Shape boundary points (non-empty)
            corners: Polygon vertices, read cyclically

        Returns:
            True if the mean distance to the polygon edges is within tolerance
        """
        return fit_polygon(edge_points, corners, self._tolerance).passed

    def shape_corners(self, edge_points: PointsLike) -> List[Point]:
        """Corner candidates after flat-angle optimization."""
        return self.optimizer.optimize(self.corner_finder.find_corners(edge_points))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _match_circle(self, points, tolerance: ToleranceConfig) -> Optional[CircleMatch]:
        fit = fit_circle(points, tolerance)
        if not fit.passed:
            return None

        if fit.degenerate:
            # TODO: decide with callers whether a zero-size cloud should stay a circle
            logger.debug("Zero-size point cloud accepted as circle at %s", fit.center)

        return CircleMatch(center=fit.center, radius=fit.radius)

    def _match_polygon(self, edge_points: PointsLike, accepts_count) -> Optional[PolygonMatch]:
        points = require_points(edge_points)
        tolerance = self._tolerance

        corners = self.shape_corners(points)
        if not accepts_count(len(corners)):
            return None

        if not fit_polygon(points, corners, tolerance).passed:
            return None

        return PolygonMatch(corners=tuple(corners))
