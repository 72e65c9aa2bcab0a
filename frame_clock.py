# frame_clock.py
"""
Turns the host's per-frame timestamps into elapsed seconds.

The first frame only establishes the epoch. Every later frame calls the
callback with the seconds elapsed since that first frame. Stopping the
clock (when the screen that owns it is torn down) silences the callback.
"""
import logging
from typing import Callable, Optional

# --- Data Contracts ---
#
# class FrameClock:
#   - __init__(self, on_frame: Callable[[float], None])
#   - frame(self, timestamp_ns: int) -> Optional[float]:
#     - Inputs: a monotonic timestamp in nanoseconds.
#     - Outputs: the elapsed seconds passed to on_frame, or None when no
#       callback fired (first frame, or stopped clock).
#     - Invariants: on_frame is never called for the epoch frame.

NANOSECONDS_PER_SECOND = 1_000_000_000


class FrameClock:
    """
    A two-state adapter: uninitialized until the first frame, then running.
    """
    def __init__(self, on_frame: Callable[[float], None]):
        self.on_frame = on_frame
        self.epoch_ns: Optional[int] = None
        self.active = True
        self.frame_count = 0

    @property
    def running(self) -> bool:
        return self.active and self.epoch_ns is not None

    def frame(self, timestamp_ns: int) -> Optional[float]:
        if not self.active:
            return None

        if self.epoch_ns is None:
            self.epoch_ns = timestamp_ns
            logging.debug(f"Frame clock epoch set at {timestamp_ns} ns.")
            return None

        elapsed = (timestamp_ns - self.epoch_ns) / NANOSECONDS_PER_SECOND
        self.frame_count += 1
        self.on_frame(elapsed)
        return elapsed

    def stop(self) -> None:
        """Stops delivering frames. Used when the owning screen is closed."""
        if self.active:
            logging.debug(f"Frame clock stopped after {self.frame_count} frames.")
        self.active = False

    def reset(self) -> None:
        """Forgets the epoch so the next frame starts a new timeline."""
        self.epoch_ns = None
        self.frame_count = 0
        self.active = True
