"""
silueta_processor - Image Shape Classification Service

This package extracts blob contours from images and classifies each one
as circle, triangle, quadrilateral or unknown.

Architecture:
- ShapeProcessorService: Main orchestrator
- ContourExtractor: OpenCV contour extraction
- ProcessorConfig: Configuration management
"""

from silueta_processor.config import ProcessorConfig
from silueta_processor.extractor import ContourExtractor
from silueta_processor.service import ShapeProcessorService, ShapeDetection, build_checker

__all__ = [
    "ProcessorConfig",
    "ContourExtractor",
    "ShapeProcessorService",
    "ShapeDetection",
    "build_checker",
]
