"""
TSP Solver - Main Application
Reads a point file, runs the multi-start Nearest Neighbor search and
writes '<input>.tour'.
"""

import argparse
import sys
import time

from data_generator import (
    MalformedLineError,
    display_tour,
    load_points_file,
    save_tour_file,
)
from nearest_neighbor import DEFAULT_MAX_STARTS, DEFAULT_WORKERS, MultiStartNNSolver


def build_parser():
    parser = argparse.ArgumentParser(
        description="TSP Solver - multi-start Nearest Neighbor over 'identifier x y' point files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve and write tsp_example_1.txt.tour
  python main.py tsp_example_1.txt

  # Try only 50 starting points, on 4 worker processes
  python main.py tsp_example_3.txt --max-starts 50 --workers 4
        """
    )

    parser.add_argument(
        'input',
        help='Point file: one "identifier x y" line per point'
    )

    parser.add_argument(
        '--max-starts',
        type=int,
        default=DEFAULT_MAX_STARTS,
        help=f'Maximum number of starting points to try (default: {DEFAULT_MAX_STARTS})'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=DEFAULT_WORKERS,
        help=f'Worker processes for the search rounds (default: {DEFAULT_WORKERS})'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show search progress'
    )

    parser.add_argument(
        '--plot',
        nargs='?',
        const='',
        default=None,
        metavar='PNG',
        help='Plot the tour; save to PNG if given, otherwise open a window'
    )

    parser.add_argument(
        '--plot-history',
        nargs='?',
        const='',
        default=None,
        metavar='PNG',
        help='Plot the best length after each starting round'
    )

    return parser


def main(argv=None):
    """Main entry point for the TSP solver application."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_starts < 1:
        parser.error("--max-starts must be positive")
    if args.workers < 1:
        parser.error("--workers must be positive")

    start = time.perf_counter()

    try:
        points = load_points_file(args.input)
    except OSError as e:
        print(f"Error opening file {args.input}: {e}", file=sys.stderr)
        return 1
    except MalformedLineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    solver = MultiStartNNSolver(points, max_starts=args.max_starts, workers=args.workers)
    tour = solver.solve(verbose=args.verbose)

    elapsed_ms = (time.perf_counter() - start) * 1000
    print(f"Full TSP run time for {args.input} is {elapsed_ms:.3f}ms")

    # if saving fails, the result still reaches the console
    if save_tour_file(tour, args.input) is None:
        display_tour(tour)

    if args.plot is not None or args.plot_history is not None:
        from visualization import TSPVisualizer

        visualizer = TSPVisualizer()

        if args.plot is not None:
            visualizer.plot_tour(
                tour,
                title=f"Nearest Neighbor Tour ({args.input})",
                save_path=args.plot or None,
                show=not args.plot
            )

        if args.plot_history is not None:
            visualizer.plot_convergence(
                solver.best_length_history,
                save_path=args.plot_history or None,
                show=not args.plot_history
            )

    return 0


if __name__ == "__main__":
    sys.exit(main())
