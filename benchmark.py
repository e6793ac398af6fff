import argparse
import os
import time
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from tqdm import tqdm

from data_generator import (
    generate_circle_points,
    generate_random_points,
    load_points_file,
    write_points_file,
)
from nearest_neighbor import DEFAULT_MAX_STARTS, MultiStartNNSolver


# ================================
# CONFIGURATION
# ================================
DATASET_DIR = "tsp_data"
OUTPUT_DIR = "benchmarks"
RUNS_PER_DATASET = 3
MAX_STARTS_VALUES = (1, 10, 50, DEFAULT_MAX_STARTS)

# Best known tour lengths for the course example instances
KNOWN_OPTIMA = {
    "tsp_example_1.txt": 108159,
    "tsp_example_2.txt": 2579,
    "tsp_example_3.txt": 1573084,
}


def ratio_to_optimum(length: int, dataset: str) -> Optional[float]:
    """length / best known length, or None for an unknown dataset."""
    optimum = KNOWN_OPTIMA.get(os.path.basename(dataset))
    if optimum is None:
        return None
    return length / optimum


# =============================================================
# GENERATED DATASETS
# =============================================================
def generate_datasets(dataset_dir: str, sizes: Sequence[int], seed: int = 0) -> List[str]:
    """Write random_<n>.txt and circle_<n>.txt point files for each size."""
    os.makedirs(dataset_dir, exist_ok=True)
    paths = []

    for n in sizes:
        instances = {
            f"random_{n}.txt": generate_random_points(n, seed=seed + n),
            f"circle_{n}.txt": generate_circle_points(n),
        }
        for fname, points in instances.items():
            path = os.path.join(dataset_dir, fname)
            write_points_file(points, path)
            paths.append(path)

    print(f"[BENCH] Generated {len(paths)} point files in {dataset_dir}")
    return paths


# =============================================================
# SINGLE DATASET
# =============================================================
def benchmark_file(path, max_starts_values: Sequence[int] = MAX_STARTS_VALUES,
                   runs: int = RUNS_PER_DATASET, workers: int = 1) -> List[dict]:
    """
    Solve one point file for every start cap and time it.
    The search is deterministic, so repeated runs only refine the timing.
    """
    if runs < 1:
        raise ValueError(f"runs must be positive, got {runs}")

    points = load_points_file(path)
    dataset = os.path.basename(path)
    rows = []

    for max_starts in max_starts_values:
        times = []
        length = None

        for _ in range(runs):
            solver = MultiStartNNSolver(points, max_starts=max_starts, workers=workers)
            start = time.perf_counter()
            tour = solver.solve()
            times.append(time.perf_counter() - start)
            length = tour.length

        ratio = ratio_to_optimum(length, dataset)
        rows.append({
            "dataset": dataset,
            "n_points": len(points),
            "max_starts": max_starts,
            "starts_tried": solver.n_rounds(),
            "length": length,
            "ratio": float("nan") if ratio is None else ratio,
            "avg_time": float(np.mean(times)),
            "std_time": float(np.std(times)),
        })

    return rows


# =============================================================
# MAIN
# =============================================================
def run_benchmark_all(dataset_dir: str = DATASET_DIR, output_dir: str = OUTPUT_DIR,
                      max_starts_values: Sequence[int] = MAX_STARTS_VALUES,
                      runs: int = RUNS_PER_DATASET, workers: int = 1) -> pd.DataFrame:
    files = sorted(f for f in os.listdir(dataset_dir) if f.endswith(".txt"))

    if not files:
        print(f"[BENCH] No .txt point files in {dataset_dir}")

    all_rows = []
    for fname in tqdm(files, desc="[BENCH] datasets"):
        path = os.path.join(dataset_dir, fname)
        all_rows.extend(benchmark_file(path, max_starts_values, runs, workers))

    df = pd.DataFrame(all_rows, columns=[
        "dataset", "n_points", "max_starts", "starts_tried",
        "length", "ratio", "avg_time", "std_time",
    ])

    os.makedirs(output_dir, exist_ok=True)
    out_path = os.path.join(output_dir, "nn_benchmarks.csv")
    df.to_csv(out_path, index=False)

    if not df.empty:
        print("\n=== Multi-start Nearest Neighbor ===")
        print(df.to_string(index=False))
    print(f"\n[BENCH] Saved: {out_path}")

    return df


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark the multi-start Nearest Neighbor solver")
    parser.add_argument('--dataset-dir', default=DATASET_DIR)
    parser.add_argument('--output-dir', default=OUTPUT_DIR)
    parser.add_argument('--runs', type=int, default=RUNS_PER_DATASET)
    parser.add_argument('--workers', type=int, default=1)
    parser.add_argument('--max-starts', type=int, nargs='+', default=list(MAX_STARTS_VALUES))
    parser.add_argument('--generate', type=int, nargs='+', metavar='N',
                        help='First write random and circle instances of these sizes')
    args = parser.parse_args(argv)

    if args.generate:
        generate_datasets(args.dataset_dir, args.generate)

    run_benchmark_all(args.dataset_dir, args.output_dir, args.max_starts, args.runs, args.workers)
    return 0


if __name__ == "__main__":
    main()
