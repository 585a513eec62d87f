"""Iteratively tune archetype stats toward an even win-rate matrix.

Usage:
    python scripts/auto_balance.py [--archetypes id1 id2 ...] [--budget 50]
        [--iterations 5] [--aggressive] [--seed 42] [--store data/]
"""

from __future__ import annotations

import argparse
import logging
import time

from duel_balance.archetypes.builder import build_roster
from duel_balance.archetypes.catalog import DEFAULT_TEMPLATES, get_template
from duel_balance.balance.models import Aggressiveness, TuningConfig
from duel_balance.balance.presets import resolve_preset
from duel_balance.balance.report import generate_session_report
from duel_balance.balance.session import run_auto_balance
from duel_balance.storage.repository import BalanceRepository
from duel_balance.storage.store import JsonDirectoryStore


def main() -> None:
    parser = argparse.ArgumentParser(description="Auto-balance archetype stats")
    parser.add_argument("--archetypes", nargs="*", help="Template ids (default: all)")
    parser.add_argument("--budget", type=float, default=50, help="Point budget per archetype")
    parser.add_argument("--preset", type=str, default="standard", help="Balance preset id")
    parser.add_argument("--iterations", type=int, default=5, help="Max tuning passes")
    parser.add_argument("--aggressive", action="store_true", help="Adjust up to 3 stats per archetype")
    parser.add_argument("--min-wr", type=float, default=0.45, help="Target band lower bound")
    parser.add_argument("--max-wr", type=float, default=0.55, help="Target band upper bound")
    parser.add_argument(
        "--max-adjust", type=float, default=None,
        help="Max fraction per adjustment (default: the preset's max_iteration_adjustment)",
    )
    parser.add_argument("--full", action="store_true", help="Use the full simulation count")
    parser.add_argument("--parallel", action="store_true", help="Run matrix cells in a process pool")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--store", type=str, default=None, help="Directory to save tuned archetypes in")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    repository = BalanceRepository(JsonDirectoryStore(args.store)) if args.store else None
    preset = resolve_preset(repository, args.preset)

    templates = [get_template(t) for t in args.archetypes] if args.archetypes else DEFAULT_TEMPLATES
    roster = build_roster(templates, args.budget, preset.weights or None)

    tuning = TuningConfig(
        win_rate_target_min=args.min_wr,
        win_rate_target_max=args.max_wr,
        max_adjustment_per_iteration=(
            args.max_adjust if args.max_adjust is not None
            else preset.config.max_iteration_adjustment
        ),
        aggressiveness=Aggressiveness.AGGRESSIVE if args.aggressive else Aggressiveness.CONSERVATIVE,
    )

    print(f"Auto-balancing {len(roster)} archetypes (up to {args.iterations} iterations)...")
    t0 = time.perf_counter()
    tuned, session = run_auto_balance(
        roster,
        tuning=tuning,
        config=preset.config,
        max_iterations=args.iterations,
        seed=args.seed,
        fast=not args.full,
        parallel=args.parallel,
    )
    print(f"Done in {time.perf_counter() - t0:.1f}s")

    if repository is not None:
        saved = sum(1 for a in tuned if repository.save_archetype(a))
        print(f"Saved {saved} archetypes to {args.store}")

    print()
    print(generate_session_report(session))


if __name__ == "__main__":
    main()
