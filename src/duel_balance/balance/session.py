"""Auto-balance sessions: matrix -> propose -> apply, recorded per iteration.

Session and iteration records are frozen; every update returns a new
record so earlier iterations are never rewritten.
"""

from __future__ import annotations

import logging
import re

from duel_balance.balance.matrix import (
    MatrixOptions,
    calculate_balance_score,
    default_run_id,
    find_most_imbalanced,
    run_matrix,
)
from duel_balance.balance.models import (
    AutoBalanceSession,
    BalanceIteration,
    MatrixRunResult,
    StatAdjustment,
    TuningConfig,
    utc_now,
)
from duel_balance.balance.proposer import (
    DEFAULT_TUNING,
    apply_adjustments,
    is_target_achieved,
    propose_adjustments,
)
from duel_balance.core.archetype import Archetype
from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig

logger = logging.getLogger(__name__)


def start_session(initial_score: float) -> AutoBalanceSession:
    now = utc_now()
    return AutoBalanceSession(
        session_id="session-" + re.sub(r"[:.+]", "-", now),
        start_time=now,
        initial_balance_score=initial_score,
    )


def create_iteration(
    iteration_number: int,
    previous_run_id: str,
    balance_score: float,
    adjustments: list[StatAdjustment],
) -> BalanceIteration:
    modified = list(dict.fromkeys(adj.archetype_id for adj in adjustments))
    return BalanceIteration(
        iteration=iteration_number,
        previous_run_id=previous_run_id,
        balance_score_before=balance_score,
        adjustments=list(adjustments),
        archetypes_modified=modified,
    )


def record_iteration(
    session: AutoBalanceSession,
    iteration: BalanceIteration,
    score_after: float,
) -> AutoBalanceSession:
    """Append *iteration* (with its after-score) to a copy of *session*."""
    done = iteration.model_copy(update={"balance_score_after": score_after})
    return session.model_copy(update={"iterations": [*session.iterations, done]})


def finish_session(
    session: AutoBalanceSession,
    final_score: float,
    tuning: TuningConfig | None = None,
) -> AutoBalanceSession:
    return session.model_copy(
        update={
            "end_time": utc_now(),
            "final_balance_score": final_score,
            "target_achieved": is_target_achieved(final_score, tuning),
        }
    )


def default_tuning(config: BalancerConfig) -> TuningConfig:
    """Default tuning with the per-iteration cap taken from *config*."""
    return DEFAULT_TUNING.model_copy(
        update={"max_adjustment_per_iteration": config.max_iteration_adjustment}
    )


def _log_worst(matrix: MatrixRunResult, tuning: TuningConfig) -> None:
    for cell in find_most_imbalanced(matrix, tuning.top_n_imbalanced):
        logger.info("  imbalanced: %s vs %s %.1f%%", cell.row, cell.col, cell.win_rate_row * 100)


def run_auto_balance(
    archetypes: list[Archetype],
    tuning: TuningConfig | None = None,
    config: BalancerConfig | None = None,
    max_iterations: int = 5,
    seed: int = 42,
    fast: bool = True,
    parallel: bool = False,
) -> tuple[list[Archetype], AutoBalanceSession]:
    """Iterate until the target is reached, nothing is proposed, or the
    iteration budget runs out.

    Every iteration's matrix uses the same base seed so score changes
    reflect the adjustments rather than sampling noise.
    """
    config = config or DEFAULT_CONFIG
    tuning = tuning or default_tuning(config)
    ids = [a.id for a in archetypes]
    base_run_id = default_run_id(seed, config.n_sim(fast), archetypes, config)
    roster = list(archetypes)

    def _matrix(label: str):
        return run_matrix(
            ids,
            roster,
            MatrixOptions(
                fast=fast,
                seed=seed,
                config=config,
                run_id=f"{base_run_id}-{label}",
                parallel=parallel,
            ),
        )

    matrix = _matrix("baseline")
    score = calculate_balance_score(matrix)
    session = start_session(score)
    logger.info("Auto-balance start: score=%.4f", score)
    _log_worst(matrix, tuning)

    for n in range(1, max_iterations + 1):
        if is_target_achieved(score, tuning):
            logger.info("Target reached before iteration %d", n)
            break

        adjustments = propose_adjustments(matrix, roster, tuning)
        if not adjustments:
            logger.info("No adjustments proposed at iteration %d, stopping", n)
            break

        iteration = create_iteration(n, matrix.run_meta.run_id, score, adjustments)
        roster = apply_adjustments(roster, adjustments)

        matrix = _matrix(f"iter{n}")
        score_after = calculate_balance_score(matrix)
        session = record_iteration(session, iteration, score_after)
        logger.info(
            "Iteration %d: %d adjustments, score %.4f -> %.4f",
            n, len(adjustments), score, score_after,
        )
        _log_worst(matrix, tuning)
        score = score_after

    session = finish_session(session, score, tuning)
    return roster, session
