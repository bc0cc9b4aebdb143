"""
Shape Processor Service - image shape classification orchestrator.

This module provides the ShapeProcessorService class which runs the
complete image pipeline: contour extraction, shape classification, and
annotation of the results.

Architecture:
- ContourExtractor: image -> edge point sets (OpenCV)
- ShapeChecker: edge point set -> ShapeType + geometry
- ShapeVisualizer: detections -> annotated image (supervision)

Threading Model:
- Fully synchronous; one service instance may be shared by threads
  since it holds no per-call state
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import cv2
import numpy as np

from silueta_shapes.checker import CircleMatch, PolygonMatch, ShapeChecker, ShapeType
from silueta_shapes.geometry.corners import QuadrilateralCornerFinder
from silueta_shapes.geometry.optimizer import FlatAnglesOptimizer
from silueta_shapes.geometry.points import Point, bounding_rectangle
from silueta_shapes.logging import LogEvent, StructuredLogger, create_logger
from silueta_shapes.rendering.visualizer import ShapeVisualizer
from silueta_processor.config import ProcessorConfig
from silueta_processor.extractor import ContourExtractor


@dataclass(frozen=True)
class ShapeDetection:
    """
    Classification result for one contour of an image.

    Attributes:
        index: Contour index in extraction order
        shape_type: Detected shape type
        edge_point_count: Number of contour points
        bounding_box: (x_min, y_min, x_max, y_max)
        center: Circle center (circles only)
        radius: Circle radius (circles only)
        corners: Polygon corners (triangles/quadrilaterals only)
    """

    index: int
    shape_type: ShapeType
    edge_point_count: int
    bounding_box: Tuple[float, float, float, float]
    center: Optional[Tuple[float, float]] = None
    radius: Optional[float] = None
    corners: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        data = {
            "index": self.index,
            "shape_type": self.shape_type.value,
            "edge_point_count": self.edge_point_count,
            "bounding_box": list(self.bounding_box),
        }
        if self.center is not None:
            data["center"] = list(self.center)
            data["radius"] = self.radius
        if self.corners:
            data["corners"] = [list(c) for c in self.corners]
        return data

    def as_match(self):
        """CircleMatch / PolygonMatch for rendering, None for unknown shapes."""
        if self.shape_type is ShapeType.CIRCLE:
            return CircleMatch(center=Point(*self.center), radius=self.radius)
        if self.corners:
            return PolygonMatch(corners=tuple(Point(*c) for c in self.corners))
        return None


def build_checker(config: ProcessorConfig) -> ShapeChecker:
    """ShapeChecker wired with the configured tolerance and strategies."""
    return ShapeChecker(
        tolerance=config.tolerance,
        corner_finder=QuadrilateralCornerFinder(config.corners.relative_distortion_limit),
        optimizer=FlatAnglesOptimizer(config.corners.max_angle_to_keep),
    )


class ShapeProcessorService:
    """
    Classifies every blob of an image.

    Usage:
        config = ProcessorConfig.from_yaml("config.yaml")
        service = ShapeProcessorService(config)

        detections = service.process_file("shapes.png")
        for detection in detections:
            print(detection.to_dict())

        annotated = service.annotate(image, detections)
    """

    def __init__(
        self,
        config: Optional[ProcessorConfig] = None,
        checker: Optional[ShapeChecker] = None,
        visualizer: Optional[ShapeVisualizer] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            config: Processor configuration (default: ProcessorConfig())
            checker: Shape checker (default: built from config)
            visualizer: Renderer used by annotate()
            logger: Structured logger (default: "processor" component)
        """
        self.config = config or ProcessorConfig()
        self.checker = checker or build_checker(self.config)
        self.visualizer = visualizer or ShapeVisualizer()
        self.logger = logger or create_logger("processor")
        self.extractor = ContourExtractor(self.config.extraction, logger=self.logger)

    def classify_points(self, index: int, edge_points) -> ShapeDetection:
        """
        Classify one edge point set and collect its geometry.

        Args:
            index: Identifier reported in the detection
            edge_points: Shape boundary points (non-empty)
        """
        points = np.asarray(edge_points)
        min_xy, max_xy = bounding_rectangle(points)
        shape_type, match = self.checker.detect(points)

        center = radius = None
        corners = ()
        if isinstance(match, CircleMatch):
            center, radius = match.center.to_tuple(), match.radius
        elif isinstance(match, PolygonMatch):
            corners = tuple(c.to_tuple() for c in match.corners)

        detection = ShapeDetection(
            index=index,
            shape_type=shape_type,
            edge_point_count=len(points),
            bounding_box=(min_xy.x, min_xy.y, max_xy.x, max_xy.y),
            center=center,
            radius=radius,
            corners=corners,
        )

        self.logger.debug(
            event=LogEvent.SHAPE_CLASSIFIED,
            message=f"Contour {index} classified as {shape_type.value}",
            metadata=detection.to_dict(),
        )
        return detection

    def process_image(self, image: np.ndarray) -> List[ShapeDetection]:
        """
        Extract and classify every blob of an image.

        Args:
            image: Grayscale or BGR image

        Returns:
            One ShapeDetection per extracted contour
        """
        edge_point_sets = self.extractor.extract(image)
        self.logger.debug(
            event=LogEvent.CONTOURS_EXTRACTED,
            message=f"Extracted {len(edge_point_sets)} contours",
            metadata={"image_shape": list(image.shape)},
        )

        detections = [
            self.classify_points(index, edge_points)
            for index, edge_points in enumerate(edge_point_sets)
        ]

        counts: Dict[str, int] = {}
        for detection in detections:
            counts[detection.shape_type.value] = counts.get(detection.shape_type.value, 0) + 1

        self.logger.info(
            event=LogEvent.IMAGE_PROCESSED,
            message=f"Classified {len(detections)} shapes",
            metadata={"counts": counts},
        )
        return detections

    def load_image(self, image_path: Path) -> np.ndarray:
        """
        Read an image from disk.

        Raises:
            FileNotFoundError: If the image cannot be read
        """
        image = read_image(image_path)
        self.logger.info(
            event=LogEvent.IMAGE_LOADED,
            message=f"Loaded image {image_path}",
            metadata={"width": image.shape[1], "height": image.shape[0]},
        )
        return image

    def process_file(self, image_path: Path) -> List[ShapeDetection]:
        """
        Read an image from disk and classify its blobs.

        Raises:
            FileNotFoundError: If the image cannot be read
        """
        return self.process_image(self.load_image(image_path))

    def annotate(self, image: np.ndarray, detections: List[ShapeDetection]) -> np.ndarray:
        """
        Draw detections on a copy of the image.

        Unknown shapes get a label at their bounding box center.
        """
        frame = image.copy()
        if frame.ndim == 2:
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)

        for detection in detections:
            label = detection.shape_type.value
            match = detection.as_match()
            if match is not None:
                frame = self.visualizer.draw_match(frame, match, label)
            else:
                x_min, y_min, x_max, y_max = detection.bounding_box
                anchor = ((x_min + x_max) / 2, (y_min + y_max) / 2)
                frame = self.visualizer.draw_label(frame, anchor, label, ShapeType.UNKNOWN)

        return frame


def read_image(image_path: Path) -> np.ndarray:
    """
    Read an image with OpenCV.

    Raises:
        FileNotFoundError: If the file is missing or not a readable image
    """
    image = cv2.imread(str(image_path))
    if image is None:
        raise FileNotFoundError(f"Image not found or unreadable: {image_path}")
    return image
