"""
Silueta CLI - Main entry point.

Command-line interface for classifying shapes in images or in point
files. Results are printed as JSON on stdout; logs go to stderr.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import cv2
import yaml

from silueta_processor import ProcessorConfig, ShapeProcessorService
from silueta_shapes.geometry.points import as_point_array
from silueta_shapes.logging import LogEvent, create_logger


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> None:
    """
    Configure root logging for the CLI.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional path to an additional log file
    """
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
            *([logging.FileHandler(log_file)] if log_file else []),
        ],
    )


def load_config(config_path: Optional[str]) -> ProcessorConfig:
    """Processor configuration from YAML, defaults when no path given."""
    if config_path is None:
        return ProcessorConfig()
    return ProcessorConfig.from_yaml(Path(config_path))


def load_point_sets(points_path: str) -> Dict[str, List[Any]]:
    """
    Load named point sets from a YAML or JSON file.

    Accepted layouts:
        square: [[0, 0], [0, 10], ...]       # mapping name -> points
        [[0, 0], [0, 10], ...]               # single unnamed set ("points")

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid YAML/JSON or has no points
    """
    path = Path(points_path)

    if not path.exists():
        raise FileNotFoundError(f"Points file not found: {points_path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML/JSON in {points_path}: {e}")

    if isinstance(data, list):
        data = {"points": data}
    if not isinstance(data, dict) or not data:
        raise ValueError(f"No point sets found in {points_path}")

    return data


def classify_image(
    service: ShapeProcessorService,
    image_path: str,
    output_path: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Classify the blobs of an image, optionally writing an annotated copy.

    Returns:
        JSON-compatible detections
    """
    image = service.load_image(Path(image_path))
    detections = service.process_image(image)

    if output_path:
        annotated = service.annotate(image, detections)
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        cv2.imwrite(output_path, annotated)
        service.logger.info(
            event=LogEvent.IMAGE_ANNOTATED,
            message=f"Annotated image written to {output_path}",
        )

    return [detection.to_dict() for detection in detections]


def classify_points(service: ShapeProcessorService, points_path: str) -> Dict[str, Dict[str, Any]]:
    """
    Classify every point set of a points file.

    Returns:
        {name: detection dict}
    """
    results = {}
    for index, (name, points) in enumerate(load_point_sets(points_path).items()):
        edge_points = as_point_array(points)
        if len(edge_points) == 0:
            raise ValueError(f"Point set '{name}' is empty")
        results[str(name)] = service.classify_points(index, edge_points).to_dict()
    return results


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Silueta CLI - Classify edge points as circle, triangle or quadrilateral",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify every blob of an image
  silueta-cli classify-image shapes.png

  # ... and save an annotated copy
  silueta-cli classify-image shapes.png --output runs/shapes_annotated.png

  # Classify point sets from a YAML/JSON file
  silueta-cli classify-points points.yaml

  # Custom tolerances
  silueta-cli --config config/silueta_processor/processor_config.yaml classify-image shapes.png
"""
    )

    # Global arguments
    parser.add_argument(
        "--config",
        default=None,
        help="Processor config YAML (default: built-in defaults)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file"
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    image_cmd = subparsers.add_parser('classify-image', help='Classify blobs of an image')
    image_cmd.add_argument('image', help='Path to image file')
    image_cmd.add_argument('--output', default=None, help='Write annotated image here')

    points_cmd = subparsers.add_parser('classify-points', help='Classify point sets from YAML/JSON')
    points_cmd.add_argument('points', help='Path to points file')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.log_level, args.log_file)
    logger = create_logger("cli", level=getattr(logging, args.log_level))

    try:
        config = load_config(args.config)
        logger.info(event=LogEvent.CONFIG_LOADED, message="Configuration loaded",
                    metadata={"config": args.config})
    except (FileNotFoundError, ValueError) as e:
        logger.error(event=LogEvent.CONFIG_ERROR, message="Invalid configuration", exc_info=e)
        sys.exit(1)

    service = ShapeProcessorService(config, logger=logger)

    try:
        if args.command == 'classify-image':
            result = classify_image(service, args.image, args.output)
        else:
            result = classify_points(service, args.points)
    except FileNotFoundError as e:
        event = LogEvent.IMAGE_READ_ERROR if args.command == 'classify-image' else LogEvent.POINTS_ERROR
        logger.error(event=event, message=str(e), exc_info=e)
        sys.exit(1)
    except ValueError as e:
        logger.error(event=LogEvent.POINTS_ERROR, message=str(e), exc_info=e)
        sys.exit(1)

    print(json.dumps(result, indent=2))


if __name__ == '__main__':
    main()
