"""Shared fixtures: sampled shape boundaries and deterministic strategies."""

import math

import numpy as np
import pytest

from silueta_shapes import Point


def sample_polygon(vertices, scale=1):
    """Integer points along every edge of a closed polygon, ~1px apart."""
    points = []
    scaled = [(x * scale, y * scale) for x, y in vertices]
    for (x0, y0), (x1, y1) in zip(scaled, scaled[1:] + scaled[:1]):
        steps = int(max(abs(x1 - x0), abs(y1 - y0)))
        for i in range(steps):
            t = i / steps
            points.append((round(x0 + (x1 - x0) * t), round(y0 + (y1 - y0) * t)))
    return np.array(points)


def sample_circle(cx=50, cy=50, radius=50):
    """360 integer-rounded points, one per degree."""
    return np.array([
        (round(cx + radius * math.cos(math.radians(a))),
         round(cy + radius * math.sin(math.radians(a))))
        for a in range(360)
    ])


SQUARE = [(0, 0), (0, 100), (100, 100), (100, 0)]
TRIANGLE = [(0, 0), (100, 0), (50, 87)]


class FixedCorners:
    """Corner finder returning a fixed corner list."""

    def __init__(self, corners):
        self.corners = [Point(*c) for c in corners]
        self.calls = 0

    def find_corners(self, edge_points):
        self.calls += 1
        return list(self.corners)


class IdentityOptimizer:
    """Optimizer that keeps every corner."""

    def optimize(self, corners):
        return list(corners)


@pytest.fixture
def square_points():
    return sample_polygon(SQUARE)


@pytest.fixture
def triangle_points():
    return sample_polygon(TRIANGLE)


@pytest.fixture
def circle_points():
    return sample_circle()


@pytest.fixture
def random_points():
    rng = np.random.default_rng(42)
    return rng.integers(0, 101, size=(500, 2))
