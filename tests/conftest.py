"""Shared fixtures for duel-balance tests."""

from __future__ import annotations

from typing import Callable

import pytest

from duel_balance.balance.models import (
    BalancePreset,
    MatchupResult,
    MatrixRunResult,
    RunMeta,
)
from duel_balance.core.archetype import Archetype
from duel_balance.core.config import BalancerConfig
from duel_balance.core.stats import StatKey, StatProfile


@pytest.fixture(scope="module")
def fast_config() -> BalancerConfig:
    """Small trial counts so matrix tests stay quick."""
    return BalancerConfig(n_sim_fast=40, n_sim_full=80)


@pytest.fixture(scope="module")
def trio() -> list[Archetype]:
    """Three clearly different archetypes."""
    return [
        Archetype(id="bruiser", name="Bruiser", role="Bruiser"),
        Archetype(
            id="tank",
            name="Tank",
            role="Tank",
            stats=StatProfile(hp=300, damage=15, armor=20),
        ),
        Archetype(
            id="glass",
            name="Glass",
            role="DPS",
            stats=StatProfile(hp=90, damage=40, txc=35),
        ),
    ]


@pytest.fixture
def make_cell() -> Callable[..., MatchupResult]:
    def _make_cell(
        row: str,
        col: str,
        win_rate: float,
        swi: dict[StatKey, float] | None = None,
        total: int = 100,
    ) -> MatchupResult:
        wins_row = round(win_rate * total)
        return MatchupResult(
            row=row,
            col=col,
            total=total,
            wins_row=wins_row,
            wins_col=total - wins_row,
            draws=0,
            win_rate_row=win_rate,
            avg_ttk_row_win=5.0,
            avg_ttk_col_win=6.0,
            median_ttk=5.0,
            std_ttk=1.0,
            avg_hp_remaining_row_wins=40.0,
            avg_hp_remaining_col_wins=30.0,
            avg_overkill=3.0,
            swi=swi or {},
            seed=1,
        )

    return _make_cell


@pytest.fixture
def make_run(make_cell) -> Callable[..., MatrixRunResult]:
    """Build a run from ``{(row, col): win_rate}``; missing cells are 0.5."""

    def _make_run(
        ids: list[str],
        win_rates: dict[tuple[str, str], float] | None = None,
        swi: dict[tuple[str, str], dict[StatKey, float]] | None = None,
    ) -> MatrixRunResult:
        win_rates = win_rates or {}
        swi = swi or {}
        cells = [
            make_cell(r, c, win_rates.get((r, c), 0.5), swi.get((r, c)))
            for r in ids
            for c in ids
        ]
        return MatrixRunResult(
            run_meta=RunMeta(
                run_id="run-test",
                preset_name="Default",
                n_sim=100,
                seed=1,
                balancer_snapshot=BalancePreset(id="default", name="Default"),
            ),
            archetypes=ids,
            matrix=cells,
        )

    return _make_run
