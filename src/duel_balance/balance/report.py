"""Plain-text reports for matrix runs and auto-balance sessions."""

from __future__ import annotations

from duel_balance.balance.matrix import (
    calculate_balance_score,
    find_most_imbalanced,
    get_cell,
)
from duel_balance.balance.models import AutoBalanceSession, MatrixRunResult, TuningConfig
from duel_balance.balance.proposer import DEFAULT_TUNING, average_win_rates


def generate_matrix_report(run: MatrixRunResult, tuning: TuningConfig | None = None) -> str:
    """Win-rate grid, per-archetype averages and the worst matchups.

    The number of worst matchups listed is ``tuning.top_n_imbalanced``.
    """
    tuning = tuning or DEFAULT_TUNING
    meta = run.run_meta
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Matrix Report: {meta.run_id}")
    lines.append(
        f"Preset: {meta.preset_name} | Sims/cell: {meta.n_sim:,} | "
        f"Seed: {meta.seed} | Created: {meta.created_at}"
    )
    lines.append("=" * 60)

    lines.append("")
    lines.append(f"Balance score: {calculate_balance_score(run):.4f} (0 = perfect)")

    # Row win-rate grid
    width = max([len(a) for a in run.archetypes] + [8])
    lines.append("")
    lines.append("## Row Win Rates")
    lines.append(" " * width + "  " + "  ".join(f"{a[:8]:>8s}" for a in run.archetypes))
    for row in run.archetypes:
        cells = []
        for col in run.archetypes:
            cell = get_cell(run, row, col)
            cells.append(f"{cell.win_rate_row:8.1%}" if cell is not None else f"{'-':>8s}")
        lines.append(f"{row:{width}s}  " + "  ".join(cells))

    averages = average_win_rates(run)
    if averages:
        lines.append("")
        lines.append("## Average Win Rate (non-mirror)")
        for aid, wr in sorted(averages.items(), key=lambda kv: kv[1], reverse=True):
            lines.append(f"  {aid:30s}  {wr:.1%}")

    worst = find_most_imbalanced(run, tuning.top_n_imbalanced)
    if worst:
        lines.append("")
        lines.append(f"## Top {len(worst)} Most Imbalanced Matchups")
        for cell in worst:
            top_stats = sorted(cell.swi.items(), key=lambda kv: abs(kv[1]), reverse=True)[:3]
            swi_text = ", ".join(f"{stat.value}={value:+.2f}" for stat, value in top_stats)
            lines.append(
                f"  {cell.row} vs {cell.col}: {cell.win_rate_row:.1%}"
                f"  ttk={cell.median_ttk:.1f}"
                + (f"  swi[{swi_text}]" if swi_text else "")
            )

    lines.append("")
    return "\n".join(lines)


def generate_session_report(session: AutoBalanceSession) -> str:
    lines: list[str] = []

    lines.append("=" * 60)
    lines.append(f"Auto-Balance Session: {session.session_id}")
    lines.append(f"Started: {session.start_time} | Ended: {session.end_time or '-'}")
    lines.append("=" * 60)

    final = session.final_balance_score
    lines.append("")
    lines.append(f"Initial score:   {session.initial_balance_score:.4f}")
    lines.append(f"Final score:     {final:.4f}" if final is not None else "Final score:     -")
    lines.append(f"Iterations:      {len(session.iterations)}")
    lines.append(f"Target achieved: {'yes' if session.target_achieved else 'no'}")

    for it in session.iterations:
        after = f"{it.balance_score_after:.4f}" if it.balance_score_after is not None else "-"
        lines.append("")
        lines.append(f"## Iteration {it.iteration}: {it.balance_score_before:.4f} -> {after}")
        for adj in it.adjustments:
            lines.append(
                f"  {adj.archetype_id:24s} {adj.stat.value:16s}"
                f" {adj.current_value:8.2f} -> {adj.proposed_value:8.2f}"
                f" ({adj.change_percent:+.1f}%)"
            )
            lines.append(f"    {adj.reason}")

    lines.append("")
    return "\n".join(lines)
