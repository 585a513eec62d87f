"""Headless turn-resolution engine used by the stochastic sampler."""

from duel_balance.sim.engine import DuelEngine
from duel_balance.sim.entities import Combatant
from duel_balance.sim.telemetry import DRAW, SIDE_A, SIDE_B, DuelTelemetry

__all__ = [
    "Combatant",
    "DuelEngine",
    "DuelTelemetry",
    "SIDE_A",
    "SIDE_B",
    "DRAW",
]
