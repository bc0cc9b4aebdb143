"""
Configuration schema for the shape processor.

This module defines the configuration structure for image shape
classification: distortion tolerances, corner finding, and contour
extraction settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

from silueta_shapes.geometry.fitting import ToleranceConfig


@dataclass(frozen=True)
class CornerConfig:
    """Corner finding and flat-angle optimization settings."""

    relative_distortion_limit: float = 0.1
    max_angle_to_keep: float = 160

    def __post_init__(self):
        """Validate corner configuration."""
        if not 0.0 <= self.relative_distortion_limit <= 1.0:
            raise ValueError(
                f"corners.relative_distortion_limit must be in [0.0, 1.0], "
                f"got {self.relative_distortion_limit}"
            )

        if not 140 <= self.max_angle_to_keep <= 180:
            raise ValueError(
                f"corners.max_angle_to_keep must be in [140, 180], "
                f"got {self.max_angle_to_keep}"
            )


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Contour extraction settings.

    Shapes are expected bright on a dark background; set invert for
    dark shapes on a bright background.
    """

    threshold: int = 127
    invert: bool = False
    min_edge_points: int = 10
    min_area: float = 25.0

    def __post_init__(self):
        """Validate extraction configuration."""
        if not 0 <= self.threshold <= 255:
            raise ValueError(
                f"extraction.threshold must be in [0, 255], got {self.threshold}"
            )

        if self.min_edge_points < 1:
            raise ValueError(
                f"extraction.min_edge_points must be >= 1, got {self.min_edge_points}"
            )

        if self.min_area < 0:
            raise ValueError(
                f"extraction.min_area must be >= 0, got {self.min_area}"
            )


@dataclass(frozen=True)
class ProcessorConfig:
    """
    Main configuration for ShapeProcessorService.

    Loaded from YAML and validated at startup.
    Immutable after construction (frozen dataclass).
    """

    tolerance: ToleranceConfig = field(default_factory=ToleranceConfig)
    corners: CornerConfig = field(default_factory=CornerConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProcessorConfig":
        """
        Build configuration from a parsed mapping.

        Raises:
            ValueError: If a section is not a mapping or has unknown keys
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        sections = {}
        for name, section_cls in (
            ("tolerance", ToleranceConfig),
            ("corners", CornerConfig),
            ("extraction", ExtractionConfig),
        ):
            section = data.get(name) or {}
            if not isinstance(section, dict):
                raise ValueError(f"Section '{name}' must be a mapping")
            try:
                sections[name] = section_cls(**section)
            except TypeError as e:
                raise ValueError(f"Invalid keys in section '{name}': {e}") from e

        return cls(**sections)

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ProcessorConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            tolerance:
              min_acceptable_distortion: 0.5
              relative_distortion_limit: 0.03

            corners:
              relative_distortion_limit: 0.1
              max_angle_to_keep: 160

            extraction:
              threshold: 127
              invert: false
              min_edge_points: 10
              min_area: 25.0

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If YAML or values are invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {yaml_path}: {e}") from e

        return cls.from_dict(data)
