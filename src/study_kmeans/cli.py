"""Command-line entrypoint for running a clustering to completion."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from .config import EngineConfig
from .constants import (
    CONVERGENCE_THRESHOLD,
    DEFAULT_K,
    MAX_ITERATIONS,
    SLEEP_HOURS_COLUMN,
    STUDY_HOURS_COLUMN,
)
from .engine import ClusteringEngine
from .errors import ClusteringError
from .loader import load_dataset
from .reports import summarize_snapshot


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


def cmd_run(args: argparse.Namespace) -> Dict[str, Any]:
    points = load_dataset(
        args.data, study_column=args.study_column, sleep_column=args.sleep_column
    )
    config = EngineConfig(
        k=args.k,
        max_iterations=args.max_iter,
        convergence_threshold=args.threshold,
        seed=args.seed,
    )
    engine = ClusteringEngine(points, config=config)
    snapshot = engine.start()
    print(f"Loaded {len(points)} points, K={engine.k}")

    progress = tqdm(total=config.max_iterations, desc="K-Means", disable=args.quiet)
    while snapshot.is_running:
        previous = snapshot.iteration
        snapshot = engine.step()
        progress.update(snapshot.iteration - previous)
        progress.set_postfix(shift=f"{snapshot.displacement:.5f}")
    progress.close()

    summary = summarize_snapshot(snapshot)
    print(
        f"Finished with status {summary['status']} "
        f"after {summary['iteration']} iterations"
    )
    if args.output:
        _write_json(Path(args.output), summary)
    else:
        print(json.dumps(summary, indent=2))
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Study/sleep K-Means clustering")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Cluster a CSV dataset")
    run.add_argument("--data", required=True, help="Path to the CSV dataset")
    run.add_argument("--k", type=int, default=DEFAULT_K, help="Number of clusters")
    run.add_argument("--seed", type=int, default=None, help="Random seed")
    run.add_argument("--max-iter", type=int, default=MAX_ITERATIONS)
    run.add_argument("--threshold", type=float, default=CONVERGENCE_THRESHOLD)
    run.add_argument("--study-column", default=STUDY_HOURS_COLUMN)
    run.add_argument("--sleep-column", default=SLEEP_HOURS_COLUMN)
    run.add_argument("--output", help="Write the summary JSON here")
    run.add_argument("--quiet", action="store_true", help="Hide the progress bar")
    run.set_defaults(func=cmd_run)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except ClusteringError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
