"""Balance analysis: formulas, resolvers, sensitivity, matrix and proposer."""

from duel_balance.balance.formulas import (
    effective_damage_per_turn,
    effective_hp_reference,
    estimate_ttk,
    expected_damage_per_hit,
    expected_hits_per_turn,
)
from duel_balance.balance.matrix import (
    MatrixOptions,
    calculate_balance_score,
    cell_seed,
    compute_cell,
    find_most_imbalanced,
    get_cell,
    run_matrix,
)
from duel_balance.balance.models import (
    Aggressiveness,
    AutoBalanceSession,
    BalanceIteration,
    BalancePreset,
    BidirectionalSensitivity,
    DeterministicOutcome,
    FinalHP,
    MatchupResult,
    MatrixRunResult,
    OutcomeKind,
    Perspective,
    RunMeta,
    SamplerResult,
    SensitivityResult,
    StatAdjustment,
    TimeSeriesPoint,
    TuningConfig,
)
from duel_balance.balance.presets import DEFAULT_PRESETS, resolve_config, resolve_preset
from duel_balance.balance.proposer import (
    apply_adjustments,
    average_win_rates,
    is_target_achieved,
    propose_adjustments,
)
from duel_balance.balance.report import generate_matrix_report, generate_session_report
from duel_balance.balance.resolver import predict_win_probability, simulate_expected_ttk
from duel_balance.balance.sampler import aggregate, run_monte_carlo, run_trials
from duel_balance.balance.sensitivity import (
    compute_all_swi,
    compute_bidirectional_swi,
    compute_swi,
    format_swi,
)
from duel_balance.balance.session import (
    create_iteration,
    default_tuning,
    finish_session,
    record_iteration,
    run_auto_balance,
    start_session,
)

__all__ = [
    # models
    "Aggressiveness",
    "AutoBalanceSession",
    "BalanceIteration",
    "BalancePreset",
    "BidirectionalSensitivity",
    "DeterministicOutcome",
    "FinalHP",
    "MatchupResult",
    "MatrixRunResult",
    "OutcomeKind",
    "Perspective",
    "RunMeta",
    "SamplerResult",
    "SensitivityResult",
    "StatAdjustment",
    "TimeSeriesPoint",
    "TuningConfig",
    # formulas
    "effective_damage_per_turn",
    "effective_hp_reference",
    "estimate_ttk",
    "expected_damage_per_hit",
    "expected_hits_per_turn",
    # resolver
    "predict_win_probability",
    "simulate_expected_ttk",
    # sensitivity
    "compute_all_swi",
    "compute_bidirectional_swi",
    "compute_swi",
    "format_swi",
    # sampler
    "aggregate",
    "run_monte_carlo",
    "run_trials",
    # matrix
    "MatrixOptions",
    "calculate_balance_score",
    "cell_seed",
    "compute_cell",
    "find_most_imbalanced",
    "get_cell",
    "run_matrix",
    # proposer
    "apply_adjustments",
    "average_win_rates",
    "is_target_achieved",
    "propose_adjustments",
    # session
    "create_iteration",
    "default_tuning",
    "finish_session",
    "record_iteration",
    "run_auto_balance",
    "start_session",
    # presets
    "DEFAULT_PRESETS",
    "resolve_config",
    "resolve_preset",
    # report
    "generate_matrix_report",
    "generate_session_report",
]
