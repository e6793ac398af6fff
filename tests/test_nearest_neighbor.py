"""
Tests for the bounded multi-start Nearest Neighbor search.
"""

import math
import random

import pytest

from tsp_core import Point, Tour, coordinate_arrays
from nearest_neighbor import (
    DEFAULT_MAX_STARTS,
    MultiStartNNSolver,
    nearest_neighbor_tour,
    search,
)


def rounded(a, b):
    return int(math.floor(math.hypot(a.x - b.x, a.y - b.y) + 0.5))


def closed_length(order):
    return sum(rounded(a, b) for a, b in zip(order, order[1:] + order[:1]))


def reference_round(points, start_index):
    """Plain-list greedy round: strict '<' scan over unvisited points in input order."""
    unvisited = [p for i, p in enumerate(points) if i != start_index]
    cur = points[start_index]
    order = [cur]
    length = 0
    while unvisited:
        best_i, best_d = 0, math.inf
        for i, p in enumerate(unvisited):
            d = rounded(cur, p)
            if d < best_d:
                best_i, best_d = i, d
        cur = unvisited.pop(best_i)
        order.append(cur)
        length += best_d
    return [p.identifier for p in order], length + rounded(order[0], order[-1])


def random_points(n, seed, span=1000):
    rng = random.Random(seed)
    return [Point(100 + i, rng.randint(0, span), rng.randint(0, span)) for i in range(n)]


class TestScenarios:
    def test_unit_square(self, unit_square):
        tour = search(unit_square)
        assert tour.length == 4
        # start is the last point; ties resolve to the earliest input point
        assert tour.identifiers() == [4, 1, 2, 3]

    def test_two_points(self):
        tour = search([Point(1, 0, 0), Point(2, 3, 4)])
        assert tour.length == 10
        assert tour.identifiers() == [2, 1]

    def test_single_point(self):
        tour = search([Point(1, 5, 5)])
        assert tour.identifiers() == [1]
        assert tour.length == 0

    def test_empty_input(self):
        tour = search([])
        assert tour == Tour()
        assert tour.order == ()
        assert tour.length == 0

    def test_coincident_points(self):
        points = [Point(1, 0, 0), Point(2, 5, 5), Point(3, 0, 0), Point(4, 5, 5)]
        tour = search(points, max_starts=1)
        assert tour.identifiers() == [4, 2, 1, 3]
        assert tour.length == 14


class TestTourProperties:
    @pytest.mark.parametrize("n,seed", [(2, 0), (7, 1), (60, 2), (120, 3)])
    def test_permutation(self, n, seed):
        points = random_points(n, seed)
        tour = search(points)
        assert len(tour) == n
        assert sorted(tour.identifiers()) == sorted(p.identifier for p in points)

    @pytest.mark.parametrize("seed", [4, 5, 6])
    def test_length_consistency(self, seed):
        points = random_points(80, seed)
        tour = search(points)
        assert tour.length == closed_length(list(tour.order))

    def test_duplicates_still_permutation(self):
        points = [Point(i, i % 3, 0) for i in range(12)]
        tour = search(points)
        assert sorted(tour.identifiers()) == list(range(12))
        assert tour.length == closed_length(list(tour.order))


class TestGreedyRound:
    def test_matches_list_scan(self):
        # small coordinate span forces many distance ties
        points = random_points(40, seed=9, span=12)
        xs, ys = coordinate_arrays(points)
        for start in range(len(points)):
            tour = nearest_neighbor_tour(points, xs, ys, start)
            assert (tour.identifiers(), tour.length) == reference_round(points, start)

    def test_starts_at_given_index(self):
        points = random_points(10, seed=1)
        xs, ys = coordinate_arrays(points)
        assert nearest_neighbor_tour(points, xs, ys, 3).order[0] == points[3]


class TestMultiStart:
    def test_default_cap(self):
        assert DEFAULT_MAX_STARTS == 200

    def test_bounded_rounds(self):
        points = random_points(230, seed=12)
        solver = MultiStartNNSolver(points)
        solver.solve()

        assert solver.n_rounds() == 200
        assert len(solver.starts_tried) == 200
        assert len(set(solver.starts_tried)) == 200
        # starts are taken from the back of the input list
        assert solver.starts_tried == [p.identifier for p in reversed(points)][:200]

    def test_every_point_tried_below_cap(self):
        points = random_points(15, seed=13)
        solver = MultiStartNNSolver(points)
        solver.solve()
        assert sorted(solver.starts_tried) == sorted(p.identifier for p in points)

    def test_configurable_cap(self):
        points = random_points(30, seed=14)
        solver = MultiStartNNSolver(points, max_starts=3)
        solver.solve()
        assert solver.starts_tried == [129, 128, 127]

    def test_best_of_rounds(self):
        points = random_points(50, seed=15)
        seen = []
        solver = MultiStartNNSolver(points)
        best = solver.solve(callback=lambda j, tour: seen.append(tour))

        lengths = [t.length for t in seen]
        assert len(seen) == 50
        assert best.length == min(lengths)
        # earliest round wins ties
        assert best is seen[lengths.index(min(lengths))]

    def test_history_non_increasing(self):
        points = random_points(70, seed=16)
        solver = MultiStartNNSolver(points)
        best = solver.solve()

        history = solver.best_length_history
        assert len(history) == 70
        assert all(b <= a for a, b in zip(history, history[1:]))
        assert history[-1] == best.length

    def test_more_starts_never_worse(self):
        points = random_points(60, seed=17)
        lengths = [search(points, max_starts=k).length for k in (1, 5, 20, 60)]
        assert lengths == sorted(lengths, reverse=True)

    def test_rerun_resets_state(self):
        solver = MultiStartNNSolver(random_points(12, seed=18), max_starts=4)
        first = solver.solve()
        second = solver.solve()
        assert first == second
        assert len(solver.starts_tried) == 4

    def test_parallel_matches_sequential(self):
        points = random_points(45, seed=19, span=40)
        sequential = MultiStartNNSolver(points).solve()
        solver = MultiStartNNSolver(points, workers=2)
        parallel = solver.solve()

        assert parallel == sequential
        assert len(solver.best_length_history) == 45

    def test_parallel_callback_in_round_order(self):
        points = random_points(20, seed=21)
        rounds = []
        MultiStartNNSolver(points, workers=2).solve(
            callback=lambda j, tour: rounds.append((j, tour.order[0].identifier))
        )
        assert rounds == [(j, 119 - j) for j in range(20)]

    @pytest.mark.parametrize("kwargs", [{"max_starts": 0}, {"max_starts": -5}, {"workers": 0}])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(ValueError):
            MultiStartNNSolver(random_points(5, seed=0), **kwargs)

    def test_verbose_summary(self, capsys):
        search(random_points(8, seed=20), verbose=True)
        out = capsys.readouterr().out
        assert "[NN] 8 starts over 8 points" in out
