import matplotlib

matplotlib.use("Agg")

import pytest

from tsp_core import Point


@pytest.fixture
def unit_square():
    return [Point(1, 0, 0), Point(2, 0, 1), Point(3, 1, 1), Point(4, 1, 0)]


@pytest.fixture
def point_file(tmp_path):
    """Write 'identifier x y' lines to a file and return its path."""
    def _write(lines, name="points.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write
