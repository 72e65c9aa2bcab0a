# sand.py
"""
Per-frame sand scene logic, independent of the rendering toolkit.

This module holds the math behind both screens:
- `sand_on_line` lays jittered grains along a curve for the title screen.
- `PathwaySample` owns the pathway sample screen's state: the background
  pathways, the particle population, and the normalized period.
- `sample_rows` computes the pathway sample screen's row layout.
"""
import logging
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

import numpy as np

from constants import (
    SAND_DENSITY, GRAINS_PER_POSITION, SAND_NORMAL_JITTER, SAND_SINE_AMPLITUDE,
    SAND_SINE_FREQUENCY, SAND_SINE_WRAP, SAND_GRAIN_RADIUS_MIN,
    SAND_GRAIN_RADIUS_MAX, DEFAULT_PATHWAY_COUNT, PERIOD_SPEED, ROW_PADDING,
    GRAPH_ROW_HEIGHT, FLOW_ROW_HEIGHT, PARTICLE_ROW_HEIGHT
)
from curve import Curve, Line
from particle import SandParticleSystem
from pathway import SandPathway

# --- Data Contracts ---
#
# sand_on_line(seed: int, curve: Curve, time: float, frame: Optional[int]) -> SandGrains:
#   - Inputs:
#     - seed: the session seed, fixed for the lifetime of the screen.
#     - curve: the curve the grains are laid along.
#     - time: elapsed seconds.
#     - frame: when given, mixed into the seed so jitter differs per frame.
#   - Outputs: SandGrains with positions (M, 2) and radii (M,), where
#     M = floor(curve.length * 0.1) * 4.
#   - Invariants: a fresh generator is built on every call; identical
#     arguments give identical grains.
#
# class PathwaySample:
#   - __init__(self, params: Dict[str, Any], rng: np.random.Generator)
#   - update(self, elapsed: float) -> None: period = (0.03 * elapsed) mod 1.
#   - regenerate_pathways(self) -> None: replaces every background pathway;
#     the particle population is untouched.

Rect = Tuple[float, float, float, float]


class SandGrains(NamedTuple):
    positions: np.ndarray
    radii: np.ndarray


def sand_on_line(seed: int, curve: Curve, time: float, frame: Optional[int] = None) -> SandGrains:
    """
    Lays sand grains along `curve` for one frame.

    Grid positions t = i / N are fixed. Each position spawns 4 grains with
    random normal offset, directional jitter and radius, plus a sine term in
    the normal offset that moves with `time`.
    """
    rng = np.random.default_rng(seed if frame is None else [seed, frame])

    position_count = int(curve.length * SAND_DENSITY)
    if position_count <= 0:
        return SandGrains(np.empty((0, 2), dtype=np.float64), np.empty(0, dtype=np.float64))

    directional_variance = (1.0 / position_count) / 2.0
    ts = np.arange(position_count, dtype=np.float64) / position_count

    # One draw per grain for each of: normal shift, directional jitter, radius.
    draws = rng.random((position_count, GRAINS_PER_POSITION, 3))
    normal_jitter = -SAND_NORMAL_JITTER + draws[:, :, 0] * (2.0 * SAND_NORMAL_JITTER)
    directional = -directional_variance + draws[:, :, 1] * (2.0 * directional_variance)
    radii = SAND_GRAIN_RADIUS_MIN + draws[:, :, 2] * (SAND_GRAIN_RADIUS_MAX - SAND_GRAIN_RADIUS_MIN)

    sinus = SAND_SINE_AMPLITUDE * np.sin(np.mod(SAND_SINE_FREQUENCY * ts + time, SAND_SINE_WRAP))
    normal_shift = (normal_jitter + sinus[:, np.newaxis]).ravel()

    grain_ts = (ts[:, np.newaxis] + directional).ravel()
    positions = curve.values(grain_ts) + curve.normals(grain_ts) * normal_shift[:, np.newaxis]
    return SandGrains(positions, radii.ravel())


def row_curve(rect: Rect) -> Line:
    """The horizontal centre line of a row, used as the base curve for pathways."""
    x, y, width, height = rect
    center_y = y + height * 0.5
    return Line((x, center_y), (x + width, center_y))


def sample_rows(width: float, pathway_count: int = DEFAULT_PATHWAY_COUNT) -> List[Tuple[str, Rect]]:
    """
    Lays out the pathway sample screen as a padded column of rows.

    Returns (kind, rect) pairs top to bottom: one "graph" row per pathway,
    then a "flow" row and a "particles" row.
    """
    heights = (
        [("graph", GRAPH_ROW_HEIGHT)] * pathway_count
        + [("flow", FLOW_ROW_HEIGHT), ("particles", PARTICLE_ROW_HEIGHT)]
    )
    rows = []
    y = 0.0
    for kind, height in heights:
        rect = (float(ROW_PADDING), y + ROW_PADDING, width - 2.0 * ROW_PADDING, float(height))
        rows.append((kind, rect))
        y += height + 2 * ROW_PADDING
    return rows


class PathwaySample:
    """
    State of the pathway sample screen.
    """
    def __init__(self, params: Dict[str, Any], rng: np.random.Generator):
        """
        Creates the background pathways and the particle population.

        Args:
            params (Dict[str, Any]): The "pathway_sample" config section.
            rng (np.random.Generator): Generator for pathways and particles.
        """
        self.rng = rng
        self.pathway_count = params.get('pathway_count', DEFAULT_PATHWAY_COUNT)
        self.pathways: List[SandPathway] = self._new_pathways()
        self.particles = SandParticleSystem(params, rng)
        self.period = 0.0
        self.regenerations = 0
        logging.info(
            f"Pathway sample ready with {self.pathway_count} pathways and "
            f"{self.particles.particle_count} particles."
        )

    def _new_pathways(self) -> List[SandPathway]:
        return [SandPathway.randomized(self.rng) for _ in range(self.pathway_count)]

    def update(self, elapsed: float) -> None:
        self.period = (PERIOD_SPEED * elapsed) % 1.0

    def regenerate_pathways(self) -> None:
        """Discards the background pathways and samples a new set."""
        self.pathways = self._new_pathways()
        self.regenerations += 1
        logging.info(f"Background pathways regenerated (#{self.regenerations}).")
        logging.debug(f"New pathways: {self.pathways}")
