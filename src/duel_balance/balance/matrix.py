"""N x N matchup matrix orchestration.

For every ordered pair of archetypes (self-pairs included) the matrix
runs the stochastic sampler and the attacker-perspective sensitivity
analysis, and merges both into one ``MatchupResult``.  Each cell is
seeded from ``(base_seed, flat_index)`` only, so a matrix is
reproducible as a unit whether its cells run sequentially or in a
process pool.
"""

from __future__ import annotations

import hashlib
import json
import logging
import multiprocessing
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping

from duel_balance.balance.models import (
    BalancePreset,
    MatchupResult,
    MatrixRunResult,
    RunMeta,
)
from duel_balance.balance.sampler import run_monte_carlo
from duel_balance.balance.sensitivity import compute_all_swi
from duel_balance.core.archetype import Archetype
from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig
from duel_balance.core.rng import derive_seed

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]
"""``(completed_cells, total_cells, "row vs col")``"""


@dataclass
class MatrixOptions:
    fast: bool = False
    """Use ``n_sim_fast`` trials per cell instead of ``n_sim_full``."""
    seed: int | None = None
    """Base seed.  ``None`` draws one from the clock."""
    on_progress: ProgressCallback | None = None
    config: BalancerConfig | None = None
    preset: BalancePreset | None = None
    """Recorded in the run metadata; supplies the config if none is given."""
    run_id: str | None = None
    parallel: bool = False
    processes: int | None = None


def cell_seed(base_seed: int, index: int) -> int:
    """Seed of the cell at row-major *index*."""
    return derive_seed(base_seed, f"cell:{index}")


def default_run_id(
    seed: int,
    n_sim: int,
    archetypes: list[Archetype],
    config: BalancerConfig,
) -> str:
    """Stable id over everything that shapes a run's numbers.

    Rosters that share ids but differ in stats, or runs under a different
    config, get different ids so a stored run is never overwritten by an
    unrelated one.
    """
    payload = json.dumps(
        {
            "seed": seed,
            "n_sim": n_sim,
            "roster": [[a.id, a.stats.model_dump(mode="json")] for a in archetypes],
            "config": config.model_dump(mode="json"),
        },
        sort_keys=True,
    )
    return "run-" + hashlib.sha256(payload.encode()).hexdigest()[:16]


def compute_cell(
    row: Archetype,
    col: Archetype,
    n_sim: int,
    seed: int,
    config: BalancerConfig,
) -> MatchupResult:
    """Sample and analyse one ordered pairing."""
    start = time.perf_counter()

    sample = run_monte_carlo(row.stats, col.stats, n_sim, seed, config)
    swi = {
        result.stat: result.value
        for result in compute_all_swi(row.stats, col.stats, config=config)
    }

    runtime_ms = (time.perf_counter() - start) * 1000
    return MatchupResult(
        **dict(sample),
        row=row.id,
        col=col.id,
        swi=swi,
        runtime_ms=runtime_ms,
        seed=seed,
    )


def _worker_compute_cell(
    args: tuple[Archetype, Archetype, int, int, BalancerConfig],
) -> MatchupResult:
    """Pool entry point; must stay at module level to be picklable."""
    return compute_cell(*args)


def _as_roster(archetypes: Mapping[str, Archetype] | Iterable[Archetype]) -> dict[str, Archetype]:
    if isinstance(archetypes, Mapping):
        return dict(archetypes)
    return {a.id: a for a in archetypes}


def run_matrix(
    archetype_ids: list[str],
    roster: Mapping[str, Archetype] | Iterable[Archetype],
    options: MatrixOptions | None = None,
) -> MatrixRunResult:
    """Run the full K x K matrix for *archetype_ids*.

    Raises ``KeyError`` if an id is missing from *roster*.
    """
    options = options or MatrixOptions()
    by_id = _as_roster(roster)

    missing = [a for a in archetype_ids if a not in by_id]
    if missing:
        raise KeyError(f"Archetype not found: {', '.join(missing)}")

    preset = options.preset
    config = options.config or (preset.config if preset is not None else DEFAULT_CONFIG)
    if preset is None:
        preset = BalancePreset(id="default", name="Default", config=config)

    seed = options.seed if options.seed is not None else int(time.time() * 1000) % 2**32
    n_sim = config.n_sim(options.fast)

    work = []
    for i, row_id in enumerate(archetype_ids):
        for j, col_id in enumerate(archetype_ids):
            index = i * len(archetype_ids) + j
            work.append((by_id[row_id], by_id[col_id], n_sim, cell_seed(seed, index), config))

    total = len(work)
    start = time.perf_counter()
    logger.info(
        "Running %dx%d matrix (%d sims/cell, seed=%d, parallel=%s)",
        len(archetype_ids), len(archetype_ids), n_sim, seed, options.parallel,
    )

    if options.parallel and total > 1:
        cells = _run_parallel(work, options)
    else:
        cells = _run_sequential(work, options)

    logger.info("Matrix complete: %d cells in %.0fms", total, (time.perf_counter() - start) * 1000)

    run_meta = RunMeta(
        run_id=options.run_id or default_run_id(
            seed, n_sim, [by_id[a] for a in archetype_ids], config
        ),
        preset_name=preset.name,
        n_sim=n_sim,
        seed=seed,
        balancer_snapshot=preset.model_copy(update={"config": config}),
    )
    return MatrixRunResult(run_meta=run_meta, archetypes=list(archetype_ids), matrix=cells)


def _run_sequential(
    work: list[tuple[Archetype, Archetype, int, int, BalancerConfig]],
    options: MatrixOptions,
) -> list[MatchupResult]:
    cells = []
    for args in work:
        cell = compute_cell(*args)
        cells.append(cell)
        _report(cell, len(cells), len(work), options)
    return cells


def _run_parallel(
    work: list[tuple[Archetype, Archetype, int, int, BalancerConfig]],
    options: MatrixOptions,
) -> list[MatchupResult]:
    n_workers = options.processes or min(len(work), multiprocessing.cpu_count() or 1)

    cells = []
    with multiprocessing.Pool(processes=n_workers) as pool:
        # imap preserves row-major order
        for cell in pool.imap(_worker_compute_cell, work):
            cells.append(cell)
            _report(cell, len(cells), len(work), options)
    return cells


def _report(cell: MatchupResult, done: int, total: int, options: MatrixOptions) -> None:
    logger.debug(
        "Cell %d/%d %s vs %s: win_rate_row=%.3f (%.0fms)",
        done, total, cell.row, cell.col, cell.win_rate_row, cell.runtime_ms,
    )
    if options.on_progress is not None:
        options.on_progress(done, total, f"{cell.row} vs {cell.col}")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def get_cell(matrix: MatrixRunResult, row_id: str, col_id: str) -> MatchupResult | None:
    for cell in matrix.matrix:
        if cell.row == row_id and cell.col == col_id:
            return cell
    return None


def calculate_balance_score(matrix: MatrixRunResult) -> float:
    """Mean absolute deviation of non-mirror win rates from 0.5.

    0 is perfect balance; 0 is also returned when there are no
    non-mirror cells.
    """
    deviations = [cell.deviation for cell in matrix.matrix if not cell.is_mirror]
    if not deviations:
        return 0.0
    return sum(deviations) / len(deviations)


def find_most_imbalanced(matrix: MatrixRunResult, top_n: int = 5) -> list[MatchupResult]:
    """Non-mirror cells ordered by descending deviation from 0.5."""
    non_mirror = [cell for cell in matrix.matrix if not cell.is_mirror]
    non_mirror.sort(key=lambda c: c.deviation, reverse=True)
    return non_mirror[:top_n]
