"""
Rolling window of sampled photosynthesis rates.

Feeds the rate-over-time chart: one sample every `interval` ticks,
keeping the most recent `length` samples. The window starts full of
zeros so a chart has a fixed number of points from the first frame.
"""

from collections import deque


class RateHistory:
    """Fixed-length, oldest-first record of sampled rates."""

    def __init__(self, length: int = 20, interval: int = 60) -> None:
        if length <= 0 or interval <= 0:
            raise ValueError("length and interval must be positive")
        self.length = length
        self.interval = interval
        self._samples: deque[float] = deque([0.0] * length, maxlen=length)

    def observe(self, tick: int, rate: float) -> bool:
        """
        Record `rate` if `tick` falls on the sampling interval.

        Args:
            tick: Tick counter (1 for the first tick)
            rate: Photosynthesis rate at that tick

        Returns:
            True if a sample was recorded
        """
        if tick % self.interval != 0:
            return False
        self._samples.append(float(rate))
        return True

    def samples(self) -> list[float]:
        return list(self._samples)

    @property
    def latest(self) -> float:
        return self._samples[-1]

    @property
    def mean(self) -> float:
        return sum(self._samples) / self.length

    def clear(self) -> None:
        self._samples = deque([0.0] * self.length, maxlen=self.length)

    def __len__(self) -> int:
        return len(self._samples)
