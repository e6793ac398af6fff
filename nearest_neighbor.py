"""
Multi-start Nearest Neighbor Solver
Builds one greedy tour per starting point and keeps the shortest.
"""

import multiprocessing as mp
import time
from typing import Callable, List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from tsp_core import Point, Tour, coordinate_arrays, distance, distances_from


# ================================
# CONFIGURATION
# ================================
DEFAULT_MAX_STARTS = 200
DEFAULT_WORKERS = 1


def nearest_neighbor_tour(points: Sequence[Point], xs: np.ndarray,
                          ys: np.ndarray, start_index: int) -> Tour:
    """
    Greedy tour from points[start_index], always moving to the closest
    unvisited point. Ties go to the point seen first in input order.
    """
    n = len(points)
    unvisited = np.ones(n, dtype=bool)
    unvisited[start_index] = False

    cur = points[start_index]
    order = [cur]
    length = 0

    for _ in range(n - 1):
        dists = distances_from(cur, xs, ys)
        dists[~unvisited] = np.inf
        # argmin returns the first minimum, same as a strict '<' scan
        nxt = int(np.argmin(dists))
        length += int(dists[nxt])
        unvisited[nxt] = False
        cur = points[nxt]
        order.append(cur)

    # close the loop back to the start
    length += distance(order[0], order[-1])
    return Tour(tuple(order), length)


# --------------------------------------------------------
# WORKER PROCESS STATE (parallel rounds)
# --------------------------------------------------------
_WORKER_POINTS = None
_WORKER_XS = None
_WORKER_YS = None


def _init_worker(points):
    global _WORKER_POINTS, _WORKER_XS, _WORKER_YS
    _WORKER_POINTS = points
    _WORKER_XS, _WORKER_YS = coordinate_arrays(points)


def _worker_round(start_index):
    return nearest_neighbor_tour(_WORKER_POINTS, _WORKER_XS, _WORKER_YS, start_index)


class MultiStartNNSolver:
    """
    Bounded multi-start Nearest Neighbor:
    - tries up to max_starts distinct starting points
    - starting points are taken from the back of the input list
    - keeps the strictly shortest tour (earliest round wins ties)
    """

    def __init__(
        self,
        points: Sequence[Point],
        max_starts: int = DEFAULT_MAX_STARTS,
        workers: int = DEFAULT_WORKERS
    ):
        if max_starts < 1:
            raise ValueError(f"max_starts must be positive, got {max_starts}")
        if workers < 1:
            raise ValueError(f"workers must be positive, got {workers}")

        self.points = list(points)
        self.n_points = len(self.points)
        self.max_starts = max_starts
        self.workers = workers

        self.best_tour: Optional[Tour] = None
        self.best_length = float("inf")
        self.starts_tried: List[int] = []
        self.best_length_history: List[int] = []

    def n_rounds(self) -> int:
        return min(self.n_points, self.max_starts)

    def start_indices(self) -> List[int]:
        """Input positions tried as starts, in round order (last point first)."""
        return [self.n_points - 1 - j for j in range(self.n_rounds())]

    # --------------------------------------------------------
    def _sequential_rounds(self, starts):
        xs, ys = coordinate_arrays(self.points)
        for s in starts:
            yield nearest_neighbor_tour(self.points, xs, ys, s)

    def _parallel_rounds(self, pool, starts):
        chunksize = max(1, len(starts) // (self.workers * 4))
        return pool.imap(_worker_round, starts, chunksize=chunksize)

    def _reduce(self, starts, tours, callback, verbose):
        if verbose:
            tours = tqdm(tours, total=len(starts), desc="[NN] rounds")

        for j, (s, tour) in enumerate(zip(starts, tours)):
            self.starts_tried.append(self.points[s].identifier)

            if tour.length < self.best_length:
                self.best_tour = tour
                self.best_length = tour.length

            self.best_length_history.append(self.best_length)

            if callback:
                callback(j, tour)

    # --------------------------------------------------------
    # MAIN SOLVER
    # --------------------------------------------------------
    def solve(self, callback: Optional[Callable[[int, Tour], None]] = None,
              verbose: bool = False) -> Tour:
        """
        Run all rounds and return the best tour.

        Args:
            callback: Called as callback(round_index, tour) after every round
            verbose: Show a progress bar and a summary line

        Returns:
            The shortest tour found; an empty tour for empty input
        """
        t0 = time.time()

        self.best_tour = None
        self.best_length = float("inf")
        self.starts_tried = []
        self.best_length_history = []

        starts = self.start_indices()

        if self.workers > 1 and len(starts) > 1:
            with mp.Pool(self.workers, initializer=_init_worker,
                         initargs=(self.points,)) as pool:
                self._reduce(starts, self._parallel_rounds(pool, starts),
                             callback, verbose)
        else:
            self._reduce(starts, self._sequential_rounds(starts), callback, verbose)

        if self.best_tour is None:
            # no rounds ran
            self.best_tour = Tour()
            self.best_length = 0

        if verbose:
            print(f"[NN] {len(starts)} starts over {self.n_points} points, "
                  f"best length {self.best_length} ({time.time() - t0:.3f}s)")

        return self.best_tour


def search(points: Sequence[Point], max_starts: int = DEFAULT_MAX_STARTS,
           workers: int = DEFAULT_WORKERS, verbose: bool = False) -> Tour:
    """Shortest multi-start Nearest Neighbor tour over `points`."""
    solver = MultiStartNNSolver(points, max_starts=max_starts, workers=workers)
    return solver.solve(verbose=verbose)
