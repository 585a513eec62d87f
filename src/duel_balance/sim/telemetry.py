"""Per-duel telemetry.

``DuelTelemetry`` is a plain ``dataclass`` rather than a Pydantic model to
keep collection cheap: the stochastic sampler produces one per trial.
"""

from __future__ import annotations

from dataclasses import dataclass

SIDE_A = "a"
SIDE_B = "b"
DRAW = "draw"


@dataclass
class DuelTelemetry:
    """Outcome of a single duel.

    Attributes
    ----------
    winner:
        ``"a"``, ``"b"`` or ``"draw"``.
    turns:
        Number of turns resolved.
    damage_dealt_a / damage_dealt_b:
        Total HP damage each side inflicted on the other.
    hp_remaining_a / hp_remaining_b:
        HP left at the end of the duel (0 for the dead).
    overkill_a / overkill_b:
        Damage each side's killing blow carried beyond the victim's HP.
    timed_out:
        ``True`` if the turn limit ended the duel.
    """

    winner: str
    turns: int
    damage_dealt_a: float = 0.0
    damage_dealt_b: float = 0.0
    hp_remaining_a: float = 0.0
    hp_remaining_b: float = 0.0
    overkill_a: float = 0.0
    overkill_b: float = 0.0
    timed_out: bool = False
