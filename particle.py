# particle.py
"""
Manages the fixed population of sand particles on the pathway sample screen.

This module defines the SandParticle record and the SandParticleSystem
class, which creates the population once and keeps a packed NumPy copy of
it so positions can be resolved for every particle in one pass per frame.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np

from constants import (
    SAND_COLORS, DEFAULT_PARTICLE_COUNT, PARTICLE_VELOCITY_MIN,
    PARTICLE_VELOCITY_MAX, PATHWAY_FACTOR_COUNT
)
from curve import Curve
from pathway import SandPathway, pathway_values

# --- Data Contracts ---
#
# class SandParticleSystem:
#   - __init__(self, params: Dict[str, Any], rng: np.random.Generator):
#     - Inputs:
#       - params: the "pathway_sample" section of config.json.
#         - "particle_count": int (default 1500)
#       - rng: generator all particle attributes are drawn from.
#     - Side Effects: Creates every particle and its own SandPathway.
#     - Invariants:
#       - self.particles is never mutated after construction.
#       - self.ts and self.velocities have shape (N,), dtype float64.
#       - self.factors has shape (N, 12), row i is particles[i]'s pathway.
#       - self.colors has shape (N, 3), dtype uint8.
#
#   - positions(self, curve, amplitude, period) -> np.ndarray (N, 2):
#     - Particle i is at resolve(curve, amplitude, (t_i + v_i * period) mod 1).


@dataclass(frozen=True)
class SandParticle:
    t: float
    velocity: float
    pathway: SandPathway
    color: Tuple[int, int, int]


def sand_color(rng: np.random.Generator) -> Tuple[int, int, int]:
    """Picks one of the sand tones uniformly."""
    return SAND_COLORS[int(rng.integers(len(SAND_COLORS)))]


class SandParticleSystem:
    """
    A container for the particle population, packed into NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any], rng: np.random.Generator):
        """
        Initializes the particle population.

        Args:
            params (Dict[str, Any]): Pathway sample parameters from config.
            rng (np.random.Generator): Source of all particle randomness.
        """
        self.particle_count = params.get('particle_count', DEFAULT_PARTICLE_COUNT)

        self.particles: List[SandParticle] = [
            SandParticle(
                t=float(rng.uniform(0.0, 1.0)),
                velocity=float(rng.uniform(PARTICLE_VELOCITY_MIN, PARTICLE_VELOCITY_MAX)),
                pathway=SandPathway.randomized(rng),
                color=sand_color(rng),
            )
            for _ in range(self.particle_count)
        ]

        self.ts = np.array([p.t for p in self.particles], dtype=np.float64)
        self.velocities = np.array([p.velocity for p in self.particles], dtype=np.float64)
        self.factors = np.array(
            [p.pathway.factors for p in self.particles], dtype=np.float64
        ).reshape(-1, PATHWAY_FACTOR_COUNT)
        self.colors = np.array(
            [p.color for p in self.particles], dtype=np.uint8
        ).reshape(-1, 3)

        logging.info(f"SandParticleSystem initialized with {self.particle_count} particles.")
        logging.debug(
            f"Particle data arrays created. "
            f"Factors shape: {self.factors.shape}, "
            f"Colors shape: {self.colors.shape}"
        )

    def positions(self, curve: Curve, amplitude: float, period: float) -> np.ndarray:
        """Resolves every particle's pathway along `curve` at the given period."""
        ts = np.mod(self.ts + self.velocities * period, 1.0)
        offsets = amplitude * pathway_values(self.factors, ts)
        return curve.values(ts) + curve.normals(ts) * offsets[:, np.newaxis]
