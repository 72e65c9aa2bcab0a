# curve.py
"""
Parametric curves that sand is laid along.

A curve maps a parameter t (meant to lie in [0, 1]) to a point, a unit
tangent direction and a unit normal. Renderers only use this contract, so
new curve variants can be added without touching them.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

# --- Data Contracts ---
#
# class Curve (abstract):
#   - length -> float
#   - value(t: float) -> np.ndarray, shape (2,), float64
#   - direction(t: float) -> np.ndarray, shape (2,), unit length
#   - normal(t: float) -> np.ndarray, shape (2,), unit length,
#     perpendicular to direction(t)
#   - values(ts) / normals(ts) -> np.ndarray, shape (N, 2)
#
# class Line(Curve):
#   - __init__(self, start, end)
#     - Invariants: the normal is the direction rotated by +90 degrees,
#       (-dy, dx). A degenerate line (start == end) has zero length and
#       zero direction and normal.


class Curve(ABC):
    """Abstract parametric curve."""

    @property
    @abstractmethod
    def length(self) -> float:
        ...

    @abstractmethod
    def value(self, t: float) -> np.ndarray:
        ...

    @abstractmethod
    def direction(self, t: float) -> np.ndarray:
        ...

    @abstractmethod
    def normal(self, t: float) -> np.ndarray:
        ...

    def values(self, ts: np.ndarray) -> np.ndarray:
        """Evaluates `value` at every t in `ts`. Returns an (N, 2) array."""
        return np.array([self.value(t) for t in ts], dtype=np.float64).reshape(-1, 2)

    def normals(self, ts: np.ndarray) -> np.ndarray:
        """Evaluates `normal` at every t in `ts`. Returns an (N, 2) array."""
        return np.array([self.normal(t) for t in ts], dtype=np.float64).reshape(-1, 2)


class Line(Curve):
    """
    A straight segment from `start` to `end`.
    """
    def __init__(self, start: Sequence[float], end: Sequence[float]):
        self.start = np.asarray(start, dtype=np.float64)
        self.end = np.asarray(end, dtype=np.float64)

        delta = self.end - self.start
        self._length = float(np.hypot(delta[0], delta[1]))
        if self._length > 0.0:
            self._direction = delta / self._length
        else:
            self._direction = np.zeros(2, dtype=np.float64)
        self._normal = np.array([-self._direction[1], self._direction[0]], dtype=np.float64)

    def __repr__(self) -> str:
        return f"Line(start={self.start.tolist()}, end={self.end.tolist()})"

    @property
    def length(self) -> float:
        return self._length

    def value(self, t: float) -> np.ndarray:
        return self.start + self._direction * t * self._length

    def direction(self, t: float) -> np.ndarray:
        return self._direction.copy()

    def normal(self, t: float) -> np.ndarray:
        return self._normal.copy()

    def values(self, ts: np.ndarray) -> np.ndarray:
        ts = np.asarray(ts, dtype=np.float64)
        return self.start + np.outer(ts * self._length, self._direction)

    def normals(self, ts: np.ndarray) -> np.ndarray:
        ts = np.asarray(ts, dtype=np.float64)
        return np.tile(self._normal, (ts.shape[0], 1))
