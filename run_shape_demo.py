"""
Shape Checker Demo
==================

Demonstrates silueta_shapes + silueta_processor usage.

Example: Draw a circle, a triangle, a rectangle and a star on a blank
canvas, classify every blob and save an annotated copy.

Architecture:
- silueta_shapes: ShapeChecker (classification), ShapeVisualizer (drawing)
- silueta_processor: ContourExtractor + ShapeProcessorService
"""

import os
from datetime import datetime

import cv2
import numpy as np

from silueta_processor import ProcessorConfig, ShapeProcessorService


def get_target_run_folder(application_name: str) -> str:
    """Datetime-named output folder under ./runs/<application_name>."""
    run_folder = f"./runs/{application_name}/{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    os.makedirs(run_folder, exist_ok=True)
    return run_folder


def draw_canvas(width: int = 640, height: int = 400) -> np.ndarray:
    """Blank canvas with four white shapes."""
    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    white = (255, 255, 255)

    cv2.circle(canvas, (110, 130), 70, white, -1)
    cv2.fillPoly(canvas, [np.array([[250, 200], [390, 200], [320, 80]], dtype=np.int32)], white)
    cv2.rectangle(canvas, (450, 60), (590, 190), white, -1)

    star = [
        (150 + (60 if i % 2 == 0 else 25) * np.cos(np.pi / 5 * i - np.pi / 2),
         310 + (60 if i % 2 == 0 else 25) * np.sin(np.pi / 5 * i - np.pi / 2))
        for i in range(10)
    ]
    cv2.fillPoly(canvas, [np.array(star, dtype=np.int32)], white)

    return canvas


def main():
    """Classify synthetic shapes and save the annotated result."""

    # 1. Configuration (defaults: 0.5px floor, 3% relative limit)
    config = ProcessorConfig()

    # 2. Service
    service = ShapeProcessorService(config)

    # 3. Classify
    canvas = draw_canvas()
    detections = service.process_image(canvas)

    # 4. Annotate
    annotated = service.annotate(canvas, detections)
    output_path = os.path.join(get_target_run_folder("shape_demo"), "shapes.png")
    cv2.imwrite(output_path, annotated)

    print("✓ Shape classification completed!")
    print(f"  Output: {output_path}")
    for detection in detections:
        print(f"  #{detection.index}: {detection.shape_type.value} "
              f"({detection.edge_point_count} edge points)")


if __name__ == "__main__":
    main()
