"""Seeded random number generator for reproducible duel sampling.

A multiplicative linear congruential generator (Numerical Recipes
constants) is used instead of the Mersenne Twister so that the exact
sequence is fixed by the algorithm below and not by the interpreter.
Independent sub-streams are obtained with :meth:`SeededRNG.fork`.
"""

from __future__ import annotations

import hashlib

_LCG_A = 1664525
_LCG_C = 1013904223
_LCG_M = 2**32


class SeededRNG:
    """Deterministic RNG that can be forked into independent sub-streams.

    Parameters
    ----------
    seed:
        Integer seed.  Reduced modulo 2**32.
    """

    def __init__(self, seed: int) -> None:
        self._seed = int(seed)
        self._state = self._seed % _LCG_M

    # -- public properties ---------------------------------------------------

    @property
    def seed(self) -> int:
        """Return the seed this RNG was initialised with."""
        return self._seed

    # -- core random methods -------------------------------------------------

    def random_float(self) -> float:
        """Return a random float in the half-open interval ``[0.0, 1.0)``."""
        self._state = (_LCG_A * self._state + _LCG_C) % _LCG_M
        return self._state / _LCG_M

    def __call__(self) -> float:
        return self.random_float()

    # -- forking -------------------------------------------------------------

    def fork(self, name: str) -> SeededRNG:
        """Create a child RNG whose seed is derived from this RNG's seed and
        *name*.

        The derivation depends only on ``(seed, name)``, never on how many
        values have been drawn, so the same fork is obtained no matter when
        it is requested.
        """
        return SeededRNG(derive_seed(self._seed, name))

    # -- dunder helpers ------------------------------------------------------

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self._seed})"


def derive_seed(base_seed: int, name: str) -> int:
    """Derive a stable 32-bit seed from *base_seed* and *name*."""
    digest = hashlib.sha256(f"{base_seed}:{name}".encode()).digest()
    return int.from_bytes(digest[:4], "big")
