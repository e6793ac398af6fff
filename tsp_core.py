"""
TSP Solver - Core Module
Contains the fundamental data structures and the distance function.
"""

import numpy as np
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class Point:
    """An identified location with integer x, y coordinates."""

    identifier: int
    x: int
    y: int

    def distance_to(self, other: 'Point') -> int:
        """Rounded Euclidean distance to another point."""
        return distance(self, other)

    def __repr__(self):
        return f"Point({self.identifier}: {self.x}, {self.y})"


def _round_half_up(value):
    # distances are never negative, so floor(d + 0.5) rounds half away from zero
    return np.floor(value + 0.5)


def distance(a: Point, b: Point) -> int:
    """Euclidean distance between two points, rounded to the nearest integer."""
    dx = a.x - b.x
    dy = a.y - b.y
    return int(_round_half_up(np.sqrt(float(dx * dx + dy * dy))))


def distances_from(point: Point, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """
    Vectorized `distance` from one point to arrays of coordinates.

    Args:
        point: Origin point
        xs: float64 array of x coordinates
        ys: float64 array of y coordinates

    Returns:
        float64 array of rounded distances (whole numbers)
    """
    dx = xs - point.x
    dy = ys - point.y
    return _round_half_up(np.sqrt(dx * dx + dy * dy))


def coordinate_arrays(points: Sequence[Point]) -> Tuple[np.ndarray, np.ndarray]:
    """Split points into float64 x and y arrays, in input order."""
    xs = np.array([p.x for p in points], dtype=np.float64)
    ys = np.array([p.y for p in points], dtype=np.float64)
    return xs, ys


def tour_length(order: Sequence[Point]) -> int:
    """Length of a closed tour: consecutive legs plus the return leg."""
    if len(order) == 0:
        return 0

    total = 0
    for i in range(len(order) - 1):
        total += distance(order[i], order[i + 1])
    return total + distance(order[-1], order[0])


@dataclass(frozen=True)
class Tour:
    """Represents a tour as an ordered sequence of points plus its length."""

    order: Tuple[Point, ...] = ()
    length: int = 0

    @classmethod
    def from_order(cls, order: Sequence[Point]) -> 'Tour':
        """Build a tour, computing its closed length."""
        order = tuple(order)
        return cls(order, tour_length(order))

    def identifiers(self):
        return [p.identifier for p in self.order]

    def __len__(self):
        return len(self.order)

    def __getitem__(self, index):
        return self.order[index]

    def __repr__(self):
        return f"Tour(points={len(self.order)}, length={self.length})"
