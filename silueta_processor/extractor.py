"""
Contour Extractor Module
========================

Turns an image into per-blob edge point sets using OpenCV.

Design:
- Stateless apart from its (immutable) configuration and optional logger
- Grayscale -> binary threshold -> external contours
- Every contour point kept (CHAIN_APPROX_NONE), the fit tests need the
  full boundary, not a polygon approximation
"""

from typing import List, Optional

import cv2
import numpy as np

from silueta_shapes.logging import LogEvent, StructuredLogger
from silueta_processor.config import ExtractionConfig


class ContourExtractor:
    """
    Extracts edge point sets of the blobs in an image.

    Usage:
        extractor = ContourExtractor(ExtractionConfig(threshold=100))
        for edge_points in extractor.extract(image):
            checker.classify(edge_points)
    """

    def __init__(self, config: ExtractionConfig, logger: Optional[StructuredLogger] = None):
        """
        Args:
            config: Threshold and size filters
            logger: Receives a contour.skipped event per filtered contour
        """
        self.config = config
        self.logger = logger

    def binarize(self, image: np.ndarray) -> np.ndarray:
        """
        Binary mask of the image (shapes = 255).

        Args:
            image: Grayscale (HxW) or BGR (HxWx3) image

        Raises:
            ValueError: If image is not 2-D grayscale or 3-channel
        """
        if image.ndim == 3 and image.shape[2] == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        elif image.ndim == 2:
            gray = image
        else:
            raise ValueError(f"Expected grayscale or BGR image, got shape {image.shape}")

        mode = cv2.THRESH_BINARY_INV if self.config.invert else cv2.THRESH_BINARY
        _, binary = cv2.threshold(gray.astype(np.uint8), self.config.threshold, 255, mode)
        return binary

    def extract(self, image: np.ndarray) -> List[np.ndarray]:
        """
        Edge points of every blob that passes the size filters.

        Returns:
            List of Nx2 int arrays, one per contour, in OpenCV order
        """
        binary = self.binarize(image)
        contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_NONE)

        edge_point_sets = []
        for index, contour in enumerate(contours):
            area = cv2.contourArea(contour)
            if len(contour) < self.config.min_edge_points or area < self.config.min_area:
                self._skipped(index, len(contour), area)
                continue
            edge_point_sets.append(contour.reshape(-1, 2))

        return edge_point_sets

    def _skipped(self, index: int, point_count: int, area: float) -> None:
        if self.logger is None:
            return
        self.logger.debug(
            event=LogEvent.CONTOUR_SKIPPED,
            message=f"Skipping contour {index} below size limits",
            metadata={"index": index, "edge_points": point_count, "area": area},
        )
