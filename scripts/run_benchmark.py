#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import numpy as np

from tsp_arena import (
    BruteForceSolver,
    Evaluator,
    EvaluationReport,
    NearestNeighborSolver,
    default_heuristics,
    make_rng,
    new_instance,
)


def run_one_instance(
    evaluator: Evaluator,
    rng: np.random.Generator,
    pool_size: int,
    select: int,
    min_distance: int,
    max_distance: int,
) -> tuple[str, EvaluationReport]:
    """
    Generate one instance, pick `select` random stops and submit the
    nearest-neighbor tour as the player's route.
    Returns (home, report).
    """
    model, home = new_instance(pool_size, min_distance, max_distance, rng=rng)
    others = [c for c in model.cities if c != home]
    picks = rng.choice(len(others), size=min(select, len(others)), replace=False)
    selected = [others[int(i)] for i in sorted(picks)]
    guess, _ = NearestNeighborSolver().solve(model, home, selected)
    return home, evaluator.evaluate_route(model, home, guess)


def summarize(reports: list[EvaluationReport]) -> dict[str, dict[str, float]]:
    """Mean gap to optimal (percent), hit rate and mean time per algorithm."""
    names = list(reports[0].algorithms) if reports else []
    out: dict[str, dict[str, float]] = {}
    for name in names:
        gaps = []
        times = []
        hits = 0
        for rep in reports:
            res = rep.algorithms[name]
            opt = rep.optimal.distance
            gaps.append(100.0 * (res.distance - opt) / opt if opt else 0.0)
            times.append(res.elapsed_ms)
            hits += int(res.distance == opt)
        out[name] = {
            "mean_gap_pct": float(np.mean(gaps)),
            "max_gap_pct": float(np.max(gaps)),
            "optimal_rate": hits / len(reports),
            "mean_time_ms": float(np.mean(times)),
        }
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare heuristics against brute force on random instances.")
    parser.add_argument("--instances", type=int, default=20, help="Number of random instances")
    parser.add_argument("--select", type=int, default=6, help="Cities visited per instance (max 8)")
    parser.add_argument("--pool-size", type=int, default=10, help="Cities per generated instance")
    parser.add_argument("--min-distance", type=int, default=50)
    parser.add_argument("--max-distance", type=int, default=100)
    parser.add_argument("--budget", type=int, default=1000, help="Random search samples")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument("--out", default=None, help="Optional JSON file for the summary")
    args = parser.parse_args(argv)

    if args.instances < 1:
        print("--instances must be at least 1", file=sys.stderr)
        return 1
    if not 1 <= args.select <= 8:
        print("--select must be in [1, 8]", file=sys.stderr)
        return 1

    rng = make_rng(args.seed)
    evaluator = Evaluator(default_heuristics(budget=args.budget, seed=args.seed), exact=BruteForceSolver())
    reports = []
    for k in range(args.instances):
        home, report = run_one_instance(
            evaluator, rng, args.pool_size, args.select, args.min_distance, args.max_distance
        )
        reports.append(report)
        line = " ".join(f"{name}={res.distance}" for name, res in report.algorithms.items())
        print(f"[run {k + 1}] home={home} {line}", file=sys.stderr)

    summary = summarize(reports)
    for name, stats in summary.items():
        print(
            f"{name}: gap={stats['mean_gap_pct']:.2f}% max_gap={stats['max_gap_pct']:.2f}% "
            f"optimal={stats['optimal_rate']:.0%} time_ms={stats['mean_time_ms']:.3f}"
        )
    if args.out:
        data = {
            "instances": args.instances,
            "select": args.select,
            "seed": args.seed,
            "algorithms": summary,
        }
        Path(args.out).write_text(json.dumps(data, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
