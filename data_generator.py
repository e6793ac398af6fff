import sys
import random
from typing import List, Optional

import numpy as np

from tsp_core import Point, Tour


TOUR_SUFFIX = ".tour"


class MalformedLineError(ValueError):
    """A point line that does not hold exactly three integers."""

    def __init__(self, path, line_number, line):
        self.path = path
        self.line_number = line_number
        self.line = line
        super().__init__(
            f"{path}:{line_number}: expected 'identifier x y', got {line!r}"
        )


def parse_point_line(line: str) -> Optional[Point]:
    """
    Parse one 'identifier x y' line.
    Returns None for blank lines, raises ValueError for anything else
    that is not exactly three integers.
    """
    parts = line.split()
    if not parts:
        return None
    if len(parts) != 3:
        raise ValueError(f"expected 3 integers, found {len(parts)} fields")

    identifier, x, y = (int(p) for p in parts)
    return Point(identifier, x, y)


def load_points_file(path) -> List[Point]:
    """
    Point file loader.
    Each line holds three whitespace-separated integers: identifier, x, y.
    Points keep file order. Blank lines are skipped.

    Raises:
        OSError: the file cannot be opened (missing, a directory, unreadable)
        MalformedLineError: first line that is not exactly three integers,
            including lines that are not ASCII text
    """
    points = []
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, 1):
            try:
                # UnicodeDecodeError is a ValueError
                point = parse_point_line(raw.decode("ascii"))
            except ValueError:
                text = raw.decode("ascii", errors="replace").rstrip("\r\n")
                raise MalformedLineError(path, line_number, text) from None

            if point is not None:
                points.append(point)

    return points


def write_points_file(points: List[Point], path):
    """Write points in the loader's 'identifier x y' format."""
    with open(path, "w") as f:
        for p in points:
            f.write(f"{p.identifier} {p.x} {p.y}\n")


def format_tour(tour: Tour) -> str:
    lines = [str(tour.length)] + [str(i) for i in tour.identifiers()]
    return "\n".join(lines) + "\n"


def save_tour_file(tour: Tour, input_path, suffix: str = TOUR_SUFFIX) -> Optional[str]:
    """
    Write the tour next to its input: first line the length, then one
    identifier per line. Returns the written path, or None if writing failed.
    """
    out_path = f"{input_path}{suffix}"
    try:
        with open(out_path, "w") as f:
            f.write(format_tour(tour))
    except OSError as e:
        print(f"[IO] Error opening file {out_path}: {e}", file=sys.stderr)
        return None

    return out_path


def display_tour(tour: Tour):
    """Print the tour in the same format as the tour file."""
    print(format_tour(tour), end="")


# -------------------------
# RANDOM INSTANCES
# -------------------------
def generate_random_points(n_points: int, width: int = 1000, height: int = 1000,
                           seed: Optional[int] = None) -> List[Point]:
    """Uniform random integer points, identifiers 0..n-1."""
    rng = random.Random(seed)
    return [
        Point(i, rng.randint(0, width), rng.randint(0, height))
        for i in range(n_points)
    ]


def generate_circle_points(n_points: int, radius: int = 500) -> List[Point]:
    """Points evenly spaced on a circle centred on (radius, radius)."""
    angles = np.linspace(0, 2 * np.pi, n_points, endpoint=False)
    return [
        Point(i, int(round(radius + radius * np.cos(a))), int(round(radius + radius * np.sin(a))))
        for i, a in enumerate(angles)
    ]
