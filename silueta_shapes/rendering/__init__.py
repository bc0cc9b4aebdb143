"""
Rendering Layer
===============

Bounded Context: Shape visualization and drawing.

Responsibilities:
- Draw recognized circles and polygons on frames
- Render shape labels
- Pure rendering - no logic, no state

Non-responsibilities:
- Shape recognition (handled by checker)
- Contour extraction (handled by silueta_processor)
"""

from silueta_shapes.rendering.visualizer import ShapeVisualizer, DEFAULT_SHAPE_COLORS

__all__ = [
    "ShapeVisualizer",
    "DEFAULT_SHAPE_COLORS",
]
