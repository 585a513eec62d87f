"""Run an N x N matchup matrix over built-in archetype templates.

Usage:
    python scripts/run_matrix.py [--archetypes id1 id2 ...] [--budget 50]
        [--preset standard] [--fast] [--parallel] [--seed 42] [--store data/]
"""

from __future__ import annotations

import argparse
import logging
import time

from duel_balance.archetypes.builder import build_roster
from duel_balance.archetypes.catalog import DEFAULT_TEMPLATES, get_template
from duel_balance.balance.matrix import MatrixOptions, run_matrix
from duel_balance.balance.models import TuningConfig
from duel_balance.balance.presets import resolve_preset
from duel_balance.balance.report import generate_matrix_report
from duel_balance.storage.repository import BalanceRepository
from duel_balance.storage.store import JsonDirectoryStore


def main() -> None:
    parser = argparse.ArgumentParser(description="Run an archetype matchup matrix")
    parser.add_argument("--archetypes", nargs="*", help="Template ids (default: all)")
    parser.add_argument("--budget", type=float, default=50, help="Point budget per archetype")
    parser.add_argument("--preset", type=str, default="standard", help="Balance preset id")
    parser.add_argument("--fast", action="store_true", help="Use the fast simulation count")
    parser.add_argument("--parallel", action="store_true", help="Run cells in a process pool")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--store", type=str, default=None, help="Directory to save the run in")
    parser.add_argument("--from-store", action="store_true", help="Load archetypes from --store")
    parser.add_argument("--top", type=int, default=5, help="Imbalanced matchups to list")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    repository = BalanceRepository(JsonDirectoryStore(args.store)) if args.store else None
    preset = resolve_preset(repository, args.preset)

    if args.from_store and repository is not None:
        roster = repository.load_all_archetypes()
        if args.archetypes:
            roster = [a for a in roster if a.id in set(args.archetypes)]
    else:
        templates = [get_template(t) for t in args.archetypes] if args.archetypes else DEFAULT_TEMPLATES
        roster = build_roster(templates, args.budget, preset.weights or None)

    if not roster:
        print("No archetypes to run.")
        return

    ids = [a.id for a in roster]
    total = len(ids) ** 2
    print(f"Running {len(ids)}x{len(ids)} matrix ({total} cells, preset={preset.id})...")

    def on_progress(done: int, total: int, label: str) -> None:
        print(f"  [{done}/{total}] {label}")

    t0 = time.perf_counter()
    run = run_matrix(
        ids,
        roster,
        MatrixOptions(
            fast=args.fast,
            seed=args.seed,
            preset=preset,
            on_progress=on_progress,
            parallel=args.parallel,
        ),
    )
    print(f"Done in {time.perf_counter() - t0:.1f}s")

    if repository is not None:
        for archetype in roster:
            repository.save_archetype(archetype)
        if repository.save_run(run):
            print(f"Saved run {run.run_meta.run_id} to {args.store}")

    print()
    print(generate_matrix_report(run, TuningConfig(top_n_imbalanced=args.top)))


if __name__ == "__main__":
    main()
