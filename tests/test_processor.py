import json
import logging

import cv2
import numpy as np
import pytest

from conftest import SQUARE, FixedCorners, IdentityOptimizer, sample_polygon
from silueta_processor import ContourExtractor, ProcessorConfig, ShapeProcessorService, build_checker
from silueta_processor.config import CornerConfig, ExtractionConfig
from silueta_processor.service import ShapeDetection, read_image
from silueta_shapes import ShapeChecker, ShapeType, ToleranceConfig
from silueta_shapes.logging import create_logger

WHITE = (255, 255, 255)


def draw_shapes(background=0, color=WHITE):
    """Canvas with a circle, a triangle and a rectangle."""
    canvas = np.full((300, 600, 3), background, dtype=np.uint8)
    cv2.circle(canvas, (100, 150), 60, color, -1)
    cv2.fillPoly(canvas, [np.array([[250, 200], [390, 200], [320, 80]], dtype=np.int32)], color)
    cv2.rectangle(canvas, (450, 60), (560, 220), color, -1)
    return canvas


# ----------------------------------------------------------------------
# Config
# ----------------------------------------------------------------------

def test_default_config():
    config = ProcessorConfig()
    assert config.tolerance == ToleranceConfig()
    assert config.corners == CornerConfig()
    assert config.extraction.threshold == 127


def test_config_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "tolerance:\n"
        "  min_acceptable_distortion: 1.0\n"
        "  relative_distortion_limit: 7\n"
        "corners:\n"
        "  max_angle_to_keep: 150\n"
        "extraction:\n"
        "  invert: true\n"
    )

    config = ProcessorConfig.from_yaml(path)

    assert config.tolerance.min_acceptable_distortion == 1.0
    assert config.tolerance.relative_distortion_limit == 1.0  # clamped
    assert config.corners.max_angle_to_keep == 150
    assert config.corners.relative_distortion_limit == 0.1
    assert config.extraction.invert is True


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert ProcessorConfig.from_yaml(path) == ProcessorConfig()


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ProcessorConfig.from_yaml(tmp_path / "missing.yaml")


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("tolerance: [unclosed\n")
    with pytest.raises(ValueError):
        ProcessorConfig.from_yaml(path)


@pytest.mark.parametrize("data", [
    {"extraction": {"threshold": 300}},
    {"extraction": {"min_edge_points": 0}},
    {"extraction": {"min_area": -1}},
    {"corners": {"max_angle_to_keep": 100}},
    {"corners": {"relative_distortion_limit": 2}},
    {"tolerance": {"unknown_key": 1}},
    {"tolerance": [1, 2]},
    [1, 2],
])
def test_invalid_config_values(data):
    with pytest.raises(ValueError):
        ProcessorConfig.from_dict(data)


def test_build_checker_uses_config():
    config = ProcessorConfig(
        tolerance=ToleranceConfig(1.0, 0.1),
        corners=CornerConfig(relative_distortion_limit=0.2, max_angle_to_keep=150),
    )
    checker = build_checker(config)

    assert checker.tolerance == config.tolerance
    assert checker.corner_finder.relative_distortion_limit == 0.2
    assert checker.optimizer.max_angle_to_keep == 150


# ----------------------------------------------------------------------
# Extraction
# ----------------------------------------------------------------------

def test_extracts_one_contour_per_blob():
    edge_point_sets = ContourExtractor(ExtractionConfig()).extract(draw_shapes())

    assert len(edge_point_sets) == 3
    assert all(points.ndim == 2 and points.shape[1] == 2 for points in edge_point_sets)


def test_small_blobs_are_skipped():
    canvas = draw_shapes()
    cv2.rectangle(canvas, (10, 10), (12, 12), WHITE, -1)

    assert len(ContourExtractor(ExtractionConfig()).extract(canvas)) == 3
    assert len(ContourExtractor(ExtractionConfig(min_edge_points=1, min_area=0)).extract(canvas)) == 4


def test_skipped_contours_are_logged(caplog):
    canvas = draw_shapes()
    cv2.rectangle(canvas, (10, 10), (12, 12), WHITE, -1)
    extractor = ContourExtractor(
        ExtractionConfig(), logger=create_logger("extraction", level=logging.DEBUG)
    )

    with caplog.at_level(logging.DEBUG, logger="silueta.extraction"):
        assert len(extractor.extract(canvas)) == 3

    entries = [json.loads(record.getMessage()) for record in caplog.records]
    skipped = [entry for entry in entries if entry["event"] == "contour.skipped"]
    assert len(skipped) == 1
    assert set(skipped[0]["metadata"]) == {"index", "edge_points", "area"}


def test_invert_handles_dark_shapes():
    canvas = draw_shapes(background=255, color=(0, 0, 0))

    assert len(ContourExtractor(ExtractionConfig(invert=True)).extract(canvas)) == 3


def test_grayscale_input():
    gray = cv2.cvtColor(draw_shapes(), cv2.COLOR_BGR2GRAY)
    assert len(ContourExtractor(ExtractionConfig()).extract(gray)) == 3


def test_rejects_unsupported_image_shape():
    with pytest.raises(ValueError):
        ContourExtractor(ExtractionConfig()).binarize(np.zeros((10, 10, 4), dtype=np.uint8))


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------

def test_process_image_classifies_shapes():
    detections = ShapeProcessorService().process_image(draw_shapes())
    by_type = {d.shape_type: d for d in detections}

    assert set(by_type) == {ShapeType.CIRCLE, ShapeType.TRIANGLE, ShapeType.QUADRILATERAL}

    circle = by_type[ShapeType.CIRCLE]
    assert circle.center == pytest.approx((100, 150), abs=1)
    assert circle.radius == pytest.approx(60, abs=1)

    assert len(by_type[ShapeType.TRIANGLE].corners) == 3
    assert set(by_type[ShapeType.QUADRILATERAL].corners) == {
        (450, 60), (560, 60), (560, 220), (450, 220)
    }


def test_classify_points_finds_corners_once():
    finder = FixedCorners(SQUARE)
    service = ShapeProcessorService(
        checker=ShapeChecker(corner_finder=finder, optimizer=IdentityOptimizer())
    )

    detection = service.classify_points(0, sample_polygon(SQUARE))

    assert detection.shape_type is ShapeType.QUADRILATERAL
    assert detection.corners == tuple(SQUARE)
    assert finder.calls == 1


def test_detection_to_dict():
    detection = ShapeDetection(
        index=2,
        shape_type=ShapeType.QUADRILATERAL,
        edge_point_count=40,
        bounding_box=(0, 0, 10, 10),
        corners=((0, 0), (10, 0), (10, 10), (0, 10)),
    )

    assert detection.to_dict() == {
        "index": 2,
        "shape_type": "quadrilateral",
        "edge_point_count": 40,
        "bounding_box": [0, 0, 10, 10],
        "corners": [[0, 0], [10, 0], [10, 10], [0, 10]],
    }
    assert len(detection.as_match().corners) == 4


def test_unknown_detection_has_no_geometry():
    detection = ShapeDetection(
        index=0, shape_type=ShapeType.UNKNOWN, edge_point_count=5, bounding_box=(0, 0, 1, 1)
    )
    assert detection.as_match() is None
    assert "corners" not in detection.to_dict()
    assert "center" not in detection.to_dict()


def test_process_file(tmp_path):
    path = tmp_path / "shapes.png"
    cv2.imwrite(str(path), draw_shapes())

    detections = ShapeProcessorService().process_file(path)
    assert len(detections) == 3


def test_load_image(tmp_path):
    path = tmp_path / "shapes.png"
    cv2.imwrite(str(path), draw_shapes())

    image = ShapeProcessorService().load_image(path)
    assert image.shape == (300, 600, 3)


def test_missing_image(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_image(tmp_path / "missing.png")


def test_annotate_draws_on_a_copy():
    canvas = draw_shapes()
    service = ShapeProcessorService()
    detections = service.process_image(canvas)
    detections.append(ShapeDetection(
        index=99, shape_type=ShapeType.UNKNOWN, edge_point_count=10, bounding_box=(20, 20, 40, 40)
    ))

    original = canvas.copy()
    annotated = service.annotate(canvas, detections)

    assert np.array_equal(canvas, original)
    assert annotated.shape == canvas.shape
    assert not np.array_equal(annotated, canvas)


def test_annotate_grayscale_returns_color():
    gray = cv2.cvtColor(draw_shapes(), cv2.COLOR_BGR2GRAY)
    service = ShapeProcessorService()

    annotated = service.annotate(gray, service.process_image(gray))
    assert annotated.shape == gray.shape + (3,)
