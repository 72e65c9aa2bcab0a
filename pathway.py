# pathway.py
"""
Sand pathways: randomized wave functions that displace sand off a curve.

A SandPathway holds 12 coefficients in 4 groups of 3. Each group feeds one
term of the wave, and the wave value at t is the average of the 4 terms.
Two terms are plain sines, the other two are 1 / exp(sine), which can spike
when the sine nears -1. The spikes are part of the look.
"""
import logging
import math
from typing import Optional, Sequence

import numpy as np
from numba import jit

from constants import (
    PATHWAY_FACTOR_COUNT, PATHWAY_COEFFICIENT_MIN, PATHWAY_COEFFICIENT_MAX,
    PATH_STEPS
)
from curve import Curve

# --- Data Contracts ---
#
# randomized_factors(rng: Optional[np.random.Generator]) -> np.ndarray:
#   - Outputs: float64 array of shape (12,). Indices 0,1,3,4,6,7,9,10 are in
#     [2.0, 5.0); indices 2,5,8,11 are in [-pi, pi).
#
# class SandPathway:
#   - __init__(self, factors: Sequence[float])
#     - Raises ValueError unless exactly 12 factors are given.
#   - value(t) -> float: pure function of t and the factors.
#   - resolve(curve, amplitude, t) -> np.ndarray (2,):
#       curve.value(t) + curve.normal(t) * amplitude * value(t)
#   - to_path(curve, amplitude, steps=1000) -> np.ndarray (steps + 1, 2):
#       resolve sampled at steps + 1 evenly spaced t in [0, 1].
#
# pathway_values(factors: (N, 12), ts: (N,)) -> (N,):
#   - Row i is evaluated with the coefficients in factors[i].


@jit(nopython=True)
def pathway_values(factors, ts):
    """
    Numba-jitted wave evaluation for a batch of pathways.

    Each row of `factors` is a separate pathway evaluated at the matching
    entry of `ts`, so a whole particle population can be resolved in one
    call per frame.
    """
    count = ts.shape[0]
    values = np.empty(count, dtype=np.float64)
    for i in range(count):
        f = factors[i]
        t = ts[i]
        first = np.sin(f[0] * (f[1] * np.pi * t) + f[2])
        second = 1.0 / np.exp(np.sin(f[3] * (f[4] * np.pi * t) + f[5]))
        third = np.sin(f[6] * (f[7] * np.pi * t) + f[8])
        fourth = 1.0 / np.exp(np.sin(f[9] * (f[10] * np.pi * t) + f[11]))
        values[i] = (first + second + third + fourth) / 4.0
    return values


def randomized_factors(rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Samples a fresh set of 12 pathway coefficients."""
    if rng is None:
        rng = np.random.default_rng()
    low = [PATHWAY_COEFFICIENT_MIN, PATHWAY_COEFFICIENT_MIN, -np.pi] * 4
    high = [PATHWAY_COEFFICIENT_MAX, PATHWAY_COEFFICIENT_MAX, np.pi] * 4
    return rng.uniform(low=low, high=high)


class SandPathway:
    """
    An immutable wave function of t, used to push sand off a base curve.
    """
    def __init__(self, factors: Sequence[float]):
        factors = np.array(factors, dtype=np.float64)
        if factors.shape != (PATHWAY_FACTOR_COUNT,):
            msg = (
                f"A sand pathway needs exactly {PATHWAY_FACTOR_COUNT} factors, "
                f"got an array of shape {factors.shape}."
            )
            logging.critical(msg)
            raise ValueError(msg)
        factors.flags.writeable = False
        self._factors = factors

    @classmethod
    def randomized(cls, rng: Optional[np.random.Generator] = None) -> "SandPathway":
        return cls(randomized_factors(rng))

    @property
    def factors(self) -> np.ndarray:
        return self._factors

    def __repr__(self) -> str:
        return f"SandPathway(factors={np.round(self._factors, 3).tolist()})"

    def value(self, t: float) -> float:
        f = self._factors
        terms = (
            math.sin(f[0] * (f[1] * math.pi * t) + f[2]),
            1.0 / math.exp(math.sin(f[3] * (f[4] * math.pi * t) + f[5])),
            math.sin(f[6] * (f[7] * math.pi * t) + f[8]),
            1.0 / math.exp(math.sin(f[9] * (f[10] * math.pi * t) + f[11])),
        )
        return sum(terms) / len(terms)

    def values(self, ts: np.ndarray) -> np.ndarray:
        """Vectorized `value` over an array of t."""
        f = self._factors
        ts = np.asarray(ts, dtype=np.float64)
        first = np.sin(f[0] * (f[1] * np.pi * ts) + f[2])
        second = 1.0 / np.exp(np.sin(f[3] * (f[4] * np.pi * ts) + f[5]))
        third = np.sin(f[6] * (f[7] * np.pi * ts) + f[8])
        fourth = 1.0 / np.exp(np.sin(f[9] * (f[10] * np.pi * ts) + f[11]))
        return (first + second + third + fourth) / 4.0

    def resolve(self, curve: Curve, amplitude: float, t: float) -> np.ndarray:
        """Displaces the curve point at t along its normal by the scaled wave value."""
        return curve.value(t) + curve.normal(t) * amplitude * self.value(t)

    def to_path(self, curve: Curve, amplitude: float, steps: int = PATH_STEPS) -> np.ndarray:
        """
        Samples the displaced curve as a polyline for stroke rendering.

        Returns:
            np.ndarray: (steps + 1, 2) points, from t = 0 to t = 1 inclusive.
        """
        ts = np.linspace(0.0, 1.0, steps + 1)
        offsets = (amplitude * self.values(ts))[:, np.newaxis]
        return curve.values(ts) + curve.normals(ts) * offsets
