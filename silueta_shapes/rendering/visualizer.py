"""
Shape Visualizer Module
=======================

Pure visualization layer for recognized shapes.

Design:
- Stateless rendering (pure functions)
- No business logic
- Configurable styles, one color per shape type
- Uses supervision drawing utilities (OpenCV for circles)

Dependencies:
- supervision (draw utilities, Color, Point)
- opencv (circle outline)
- numpy (arrays)
"""

from typing import Dict, Optional, Union

import cv2
import numpy as np
import supervision as sv

from silueta_shapes.checker import CircleMatch, PolygonMatch, ShapeType

DEFAULT_SHAPE_COLORS: Dict[ShapeType, sv.Color] = {
    ShapeType.CIRCLE: sv.Color(r=0, g=200, b=255),
    ShapeType.TRIANGLE: sv.Color(r=255, g=160, b=0),
    ShapeType.QUADRILATERAL: sv.Color(r=0, g=255, b=0),
    ShapeType.UNKNOWN: sv.Color(r=255, g=0, b=0),
}


class ShapeVisualizer:
    """
    Stateless visualizer for recognized shapes.

    Usage:
        visualizer = ShapeVisualizer(thickness=3)

        frame = visualizer.draw_match(frame, checker.is_circle(points), "circle")
        frame = visualizer.draw_label(frame, (x, y), "unknown", ShapeType.UNKNOWN)
    """

    def __init__(
        self,
        shape_colors: Optional[Dict[ShapeType, sv.Color]] = None,
        text_color: sv.Color = sv.Color(r=255, g=255, b=255),
        text_background_color: sv.Color = sv.Color(r=0, g=0, b=0),
        thickness: int = 2,
        text_scale: float = 0.5,
        text_thickness: int = 1,
        text_padding: int = 5,
    ):
        """
        Initialize visualizer with style configuration.

        Args:
            shape_colors: Outline color per shape type
            text_color: Color for text labels
            text_background_color: Background color for text
            thickness: Line thickness for outlines
            text_scale: Scale factor for text
            text_thickness: Thickness for text
            text_padding: Padding for text background
        """
        self.shape_colors = {**DEFAULT_SHAPE_COLORS, **(shape_colors or {})}
        self.text_color = text_color
        self.text_background_color = text_background_color
        self.thickness = thickness
        self.text_scale = text_scale
        self.text_thickness = text_thickness
        self.text_padding = text_padding

    def draw_circle(
        self,
        frame: np.ndarray,
        match: CircleMatch,
        label: Optional[str] = None,
    ) -> np.ndarray:
        """Draw a recognized circle (outline + optional label above it)."""
        color = self.shape_colors[ShapeType.CIRCLE]
        center = (int(round(match.center.x)), int(round(match.center.y)))

        cv2.circle(
            frame,
            center,
            int(round(match.radius)),
            color.as_bgr(),
            self.thickness,
        )

        if label:
            anchor = (center[0], int(match.center.y - match.radius) - 10)
            frame = self.draw_label(frame, anchor, label, ShapeType.CIRCLE)

        return frame

    def draw_polygon(
        self,
        frame: np.ndarray,
        match: PolygonMatch,
        label: Optional[str] = None,
    ) -> np.ndarray:
        """Draw a recognized polygon (outline + optional label above it)."""
        shape_type = match.shape_type
        vertices = np.array([c.to_tuple() for c in match.corners]).round().astype(np.int32)

        frame = sv.draw_polygon(
            scene=frame,
            polygon=vertices,
            color=self.shape_colors[shape_type],
            thickness=self.thickness,
        )

        if label:
            anchor = (int(vertices[:, 0].mean()), int(vertices[:, 1].min()) - 10)
            frame = self.draw_label(frame, anchor, label, shape_type)

        return frame

    def draw_match(
        self,
        frame: np.ndarray,
        match: Union[CircleMatch, PolygonMatch],
        label: Optional[str] = None,
    ) -> np.ndarray:
        """Dispatch to draw_circle() / draw_polygon()."""
        if isinstance(match, CircleMatch):
            return self.draw_circle(frame, match, label)
        return self.draw_polygon(frame, match, label)

    def draw_label(
        self,
        frame: np.ndarray,
        anchor,
        text: str,
        shape_type: ShapeType = ShapeType.UNKNOWN,
    ) -> np.ndarray:
        """
        Draw a text label centered at anchor.

        The anchor is kept inside the frame so labels of shapes touching
        the border stay visible.
        """
        height, width = frame.shape[:2]
        x = min(max(int(anchor[0]), 20), width - 20)
        y = min(max(int(anchor[1]), 20), height - 20)

        return sv.draw_text(
            scene=frame,
            text=text,
            text_anchor=sv.Point(x=x, y=y),
            text_color=self.text_color,
            text_scale=self.text_scale,
            text_thickness=self.text_thickness,
            text_padding=self.text_padding,
            background_color=self.shape_colors.get(shape_type, self.text_background_color),
        )
