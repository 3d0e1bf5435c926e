from __future__ import annotations
from dataclasses import dataclass

@dataclass
class Ticker:
    """Fixed-interval timer fed by frame deltas.

    Fires at most once per ``advance`` call. The overshoot past the interval
    carries into the next tick, so frame deltas that are not a multiple of the
    interval keep the average rate. A frame long enough to owe a further tick
    restarts the timer from zero instead of producing a catch-up burst.
    """

    interval: float
    elapsed: float = 0.0

    def advance(self, dt: float) -> bool:
        self.elapsed += dt
        if self.elapsed < self.interval:
            return False
        self.elapsed -= self.interval
        if self.elapsed >= self.interval:
            self.elapsed = 0.0
        return True
