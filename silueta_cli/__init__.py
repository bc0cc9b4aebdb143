"""
Silueta CLI - Command-line interface for shape classification.

Usage:
    silueta-cli classify-image shapes.png --output annotated.png
    silueta-cli classify-points points.yaml
"""

__version__ = "1.0.0"
