"""Run the TTK batch over templates x budgets x trial counts.

Usage:
    python scripts/run_ttk_batch.py [--budgets 20 50 100] [--trials 100 1000]
        [--output data/ttk/] [--seed 42]
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from duel_balance.archetypes.batch import run_ttk_batch, validate_all
from duel_balance.archetypes.catalog import DEFAULT_TEMPLATES, DEFAULT_TTK_TARGETS, get_template
from duel_balance.archetypes.report import generate_csv, generate_narrative
from duel_balance.balance.presets import resolve_preset


def main() -> None:
    parser = argparse.ArgumentParser(description="Run TTK batch tests")
    parser.add_argument("--archetypes", nargs="*", help="Template ids (default: all)")
    parser.add_argument("--budgets", type=float, nargs="+", default=[50], help="Budgets to test")
    parser.add_argument("--trials", type=int, nargs="+", default=[1000], help="Duels per pairing")
    parser.add_argument("--preset", type=str, default="standard", help="Balance preset id")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--output", type=str, default="data/ttk/", help="Output directory")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    preset = resolve_preset(None, args.preset)
    templates = [get_template(t) for t in args.archetypes] if args.archetypes else DEFAULT_TEMPLATES

    n_pairs = len(templates) ** 2 * len(args.budgets) * len(args.trials)
    print(f"Running up to {n_pairs} TTK pairings...")
    t0 = time.perf_counter()
    results = run_ttk_batch(
        templates,
        args.budgets,
        args.trials,
        seed=args.seed,
        config=preset.config,
        weights=preset.weights or None,
    )
    print(f"Done in {time.perf_counter() - t0:.1f}s ({len(results)} results)")

    validations = validate_all(results, DEFAULT_TTK_TARGETS)

    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = out_dir / "ttk_results.csv"
    csv_path.write_text(generate_csv(results))
    print(f"Saved CSV to {csv_path}")

    report = generate_narrative(results, validations)
    report_path = out_dir / "ttk_report.md"
    report_path.write_text(report)
    print(f"Saved report to {report_path}")

    print()
    print(report)


if __name__ == "__main__":
    main()
