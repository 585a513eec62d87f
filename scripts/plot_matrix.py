"""Plot a saved matrix run as a win-rate heatmap.

Usage:
    python scripts/plot_matrix.py --store data/ [--run RUN_ID] [--output matrix.png]
"""

from __future__ import annotations

import argparse

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from duel_balance.balance.matrix import calculate_balance_score, get_cell
from duel_balance.balance.models import MatrixRunResult
from duel_balance.storage.repository import BalanceRepository
from duel_balance.storage.store import JsonDirectoryStore


def win_rate_grid(run: MatrixRunResult) -> np.ndarray:
    """K x K array of row win rates (NaN for missing cells)."""
    k = len(run.archetypes)
    grid = np.full((k, k), np.nan)
    for i, row in enumerate(run.archetypes):
        for j, col in enumerate(run.archetypes):
            cell = get_cell(run, row, col)
            if cell is not None:
                grid[i, j] = cell.win_rate_row
    return grid


def plot_heatmap(run: MatrixRunResult, out_path: str) -> None:
    grid = win_rate_grid(run)
    k = len(run.archetypes)

    fig, ax = plt.subplots(figsize=(max(6, k * 0.8), max(5, k * 0.7)))
    im = ax.imshow(grid, cmap="RdYlGn", vmin=0.0, vmax=1.0)
    fig.colorbar(im, ax=ax, label="Row win rate")

    ax.set_xticks(range(k))
    ax.set_yticks(range(k))
    ax.set_xticklabels(run.archetypes, rotation=45, ha="right")
    ax.set_yticklabels(run.archetypes)
    ax.set_xlabel("Column archetype")
    ax.set_ylabel("Row archetype")
    ax.set_title(
        f"{run.run_meta.run_id} (n={run.run_meta.n_sim:,}, "
        f"balance={calculate_balance_score(run):.3f})"
    )

    for i in range(k):
        for j in range(k):
            if not np.isnan(grid[i, j]):
                ax.text(j, i, f"{grid[i, j]:.2f}", ha="center", va="center", fontsize=8)

    plt.tight_layout()
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)


def main() -> None:
    parser = argparse.ArgumentParser(description="Plot a matrix run heatmap")
    parser.add_argument("--store", type=str, required=True, help="Directory runs are saved in")
    parser.add_argument("--run", type=str, default=None, help="Run id (default: last listed)")
    parser.add_argument("--output", type=str, default="matrix.png", help="Image path")
    args = parser.parse_args()

    repository = BalanceRepository(JsonDirectoryStore(args.store))
    run_ids = repository.list_runs()
    run_id = args.run or (run_ids[-1] if run_ids else None)
    if run_id is None:
        print(f"No runs found in {args.store}")
        return

    run = repository.load_run(run_id)
    if run is None:
        print(f"Run {run_id} not found")
        return

    plot_heatmap(run, args.output)
    print(f"Heatmap saved to {args.output}")


if __name__ == "__main__":
    main()
