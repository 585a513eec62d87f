"""Turn-by-turn duel resolution.

Provides **DuelEngine**, which plays one duel between two ``Combatant``s
to completion and returns a ``DuelTelemetry``.  All randomness comes from
the injected ``rng`` callable (uniform floats in ``[0, 1)``) so the
stochastic sampler can drive every trial from its own seeded stream.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from duel_balance.core.config import LifestealMode
from duel_balance.core.stats import StatProfile
from duel_balance.mechanics.critical import multiplied_damage
from duel_balance.mechanics.hitchance import hit_chance
from duel_balance.mechanics.mitigation import mitigate
from duel_balance.sim.entities import Combatant
from duel_balance.sim.telemetry import DRAW, SIDE_A, SIDE_B, DuelTelemetry

logger = logging.getLogger(__name__)

_DEFAULT_MAX_TURNS = 50


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


class DuelEngine:
    """Resolves a single duel to completion.

    Parameters
    ----------
    rng:
        Zero-argument callable returning uniform floats in ``[0, 1)``.
    max_turns:
        Hard turn limit.  An undecided duel is settled by remaining HP,
        then by damage dealt, else declared a draw.
    armor_k:
        Armor scaling constant for mitigation.
    lifesteal_mode:
        ``ON_HIT`` heals from the damage of the landed hit,
        ``ON_DAMAGE`` from the HP the target actually lost.
    """

    def __init__(
        self,
        rng: Callable[[], float],
        max_turns: int = _DEFAULT_MAX_TURNS,
        armor_k: float = 10.0,
        lifesteal_mode: LifestealMode = LifestealMode.ON_HIT,
    ) -> None:
        self.rng = rng
        self.max_turns = max(1, int(max_turns))
        self.armor_k = armor_k
        self.lifesteal_mode = lifesteal_mode

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self, a: StatProfile, b: StatProfile) -> DuelTelemetry:
        """Play a duel between profiles *a* and *b*."""
        side_a = Combatant.from_profile(SIDE_A, a)
        side_b = Combatant.from_profile(SIDE_B, b)
        return self.run_duel(side_a, side_b)

    def run_duel(self, a: Combatant, b: Combatant) -> DuelTelemetry:
        """Play a duel between two prepared combatants (mutated in place)."""
        damage_dealt = {SIDE_A: 0.0, SIDE_B: 0.0}
        overkill = {SIDE_A: 0.0, SIDE_B: 0.0}
        sides = {SIDE_A: a, SIDE_B: b}

        turn = 0
        while turn < self.max_turns:
            turn += 1

            for actor_key, target_key in self._initiative(a, b):
                actor = sides[actor_key]
                target = sides[target_key]
                if actor.is_dead or target.is_dead:
                    continue
                dealt, excess = self._attack(actor, target)
                damage_dealt[actor_key] += dealt
                overkill[actor_key] += excess

            # End-of-turn regeneration
            for combatant in (a, b):
                combatant.heal(combatant.stats.regen)

            if a.is_dead or b.is_dead:
                break

        if a.is_dead and b.is_dead:
            winner = DRAW
        elif b.is_dead:
            winner = SIDE_A
        elif a.is_dead:
            winner = SIDE_B
        else:
            winner = self._settle_timeout(a, b, damage_dealt)

        timed_out = not (a.is_dead or b.is_dead)
        if timed_out:
            logger.debug("Duel hit turn limit %d, settled as %s", self.max_turns, winner)

        return DuelTelemetry(
            winner=winner,
            turns=turn,
            damage_dealt_a=damage_dealt[SIDE_A],
            damage_dealt_b=damage_dealt[SIDE_B],
            hp_remaining_a=max(0.0, a.current_hp),
            hp_remaining_b=max(0.0, b.current_hp),
            overkill_a=overkill[SIDE_A],
            overkill_b=overkill[SIDE_B],
            timed_out=timed_out,
        )

    # ------------------------------------------------------------------
    # Turn steps
    # ------------------------------------------------------------------

    def _initiative(self, a: Combatant, b: Combatant) -> list[tuple[str, str]]:
        """Attack order for this turn: faster side first, rng breaks ties."""
        speed_a = a.stats.movement_speed
        speed_b = b.stats.movement_speed
        if speed_a > speed_b:
            a_first = True
        elif speed_b > speed_a:
            a_first = False
        else:
            a_first = self.rng() < 0.5

        if a_first:
            return [(SIDE_A, SIDE_B), (SIDE_B, SIDE_A)]
        return [(SIDE_B, SIDE_A), (SIDE_A, SIDE_B)]

    def _attack(self, actor: Combatant, target: Combatant) -> tuple[float, float]:
        """Resolve one swing.  Returns ``(hp_damage_dealt, overkill)``."""
        att = actor.stats
        dfn = target.stats

        # Outcome roll: crit / fumble / normal
        roll = self.rng() * 100
        if roll < att.crit_chance:
            multiplier = att.crit_mult
            modifier = att.crit_txc_bonus
        elif roll < att.crit_chance + att.fail_chance:
            multiplier = att.fail_mult
            modifier = -att.fail_txc_malus
        else:
            multiplier = 1.0
            modifier = 0.0

        chance = hit_chance(att.txc, dfn.evasion, modifier)
        if self.rng() * 100 >= chance:
            return 0.0, 0.0

        if dfn.block > 0 and self.rng() * 100 < dfn.block:
            return 0.0, 0.0

        damage = self._hit_damage(att, dfn, multiplier)
        if damage <= 0:
            return 0.0, 0.0

        shield_before = target.shield
        hp_before = target.current_hp
        hp_lost = target.take_damage(damage)

        excess = 0.0
        if target.is_dead:
            through_shield = damage - (shield_before - target.shield)
            excess = max(0.0, through_shield - hp_before)

        if att.lifesteal > 0:
            basis = damage if self.lifesteal_mode == LifestealMode.ON_HIT else hp_lost
            actor.heal(basis * att.lifesteal / 100)

        if dfn.thorns > 0 and not target.is_dead:
            actor.take_damage(dfn.thorns)

        return hp_lost, excess

    def _hit_damage(self, att: StatProfile, dfn: StatProfile, multiplier: float) -> float:
        """Damage of a landed hit after multipliers and mitigation."""

        def _mitigate(raw: float) -> float:
            return mitigate(
                raw,
                armor=dfn.armor,
                resistance=dfn.resistance,
                armor_pen=att.armor_pen,
                pen_percent=att.pen_percent,
                flat_first=dfn.config_flat_first,
                k=self.armor_k,
            )

        if att.config_apply_before_crit:
            damage = _mitigate(att.damage)
            if multiplier != 1.0:
                damage = multiplied_damage(damage, multiplier)
        else:
            raw = att.damage
            if multiplier != 1.0:
                raw = multiplied_damage(raw, multiplier)
            damage = _mitigate(raw)

        return _round_half_up(damage)

    @staticmethod
    def _settle_timeout(a: Combatant, b: Combatant, damage_dealt: dict[str, float]) -> str:
        if a.current_hp > b.current_hp:
            return SIDE_A
        if b.current_hp > a.current_hp:
            return SIDE_B
        if damage_dealt[SIDE_A] > damage_dealt[SIDE_B]:
            return SIDE_A
        if damage_dealt[SIDE_B] > damage_dealt[SIDE_A]:
            return SIDE_B
        return DRAW
