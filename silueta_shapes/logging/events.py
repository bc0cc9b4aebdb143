"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <component>.<category>.<action>

    component: config, image, contour, shape, error
    category: loaded, processed, classified
    action: success, skipped, failed

Example Log Query (CloudWatch Insights):
    fields @timestamp, event, metadata.shape_type
    | filter event = "shape.classified"
    | stats count() by metadata.shape_type
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - config.*: Configuration loading
    - image.*: Image input/output
    - contour.*: Contour extraction
    - shape.*: Shape classification
    - error.*: Error conditions
    """

    # ========== Config Events ==========
    CONFIG_LOADED = "config.loaded"
    """Processor configuration loaded and validated."""

    # ========== Image Events ==========
    IMAGE_LOADED = "image.loaded"
    """Image read from disk."""

    IMAGE_PROCESSED = "image.processed"
    """All contours of an image classified."""

    IMAGE_ANNOTATED = "image.annotated"
    """Annotated image written to disk."""

    # ========== Contour Events ==========
    CONTOURS_EXTRACTED = "contour.extracted"
    """Contours extracted from a binary image."""

    CONTOUR_SKIPPED = "contour.skipped"
    """Contour dropped by size filters."""

    # ========== Shape Events ==========
    SHAPE_CLASSIFIED = "shape.classified"
    """Edge point set classified."""

    # ========== Error Events ==========
    CONFIG_ERROR = "error.config"
    """Configuration file missing or invalid."""

    IMAGE_READ_ERROR = "error.image_read"
    """Image could not be read."""

    POINTS_ERROR = "error.points"
    """Point set missing or malformed."""

