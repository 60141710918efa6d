"""Accumulators that rebuild distributions from flat sample rows."""
import math
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

UINT64_MAX = (1 << 64) - 1


def truncate_count(value: float) -> int:
    """Truncate a float sample value to a uint64 count.

    NaN and negative values become 0, values beyond the uint64 range clamp to
    its maximum, everything else truncates toward zero.
    """
    if math.isnan(value) or value <= 0:
        return 0
    if value >= UINT64_MAX:
        return UINT64_MAX
    return int(value)


class ParticleAccumulator(ABC):
    """Collects the count, sum and particles of one label set."""

    def __init__(self):
        self.sample_count: Optional[int] = None
        self.sample_sum: Optional[float] = None
        self.particles: List[Tuple[float, float]] = []

    def consume_sample_count(self, value: int):
        self.sample_count = value

    def consume_sample_sum(self, value: float):
        self.sample_sum = value

    def consume_particle(self, boundary: float, value: float):
        self.particles.append((boundary, value))

    @abstractmethod
    def build(self, metric):
        """Attach the finished payload to a ``metrics_pb.Metric``."""
        pass

    def _fill(self, payload):
        if self.sample_count is not None:
            payload.sample_count = self.sample_count
        if self.sample_sum is not None:
            payload.sample_sum = self.sample_sum


class SummaryAccumulator(ParticleAccumulator):
    """Particles are ``(quantile, value)`` pairs, kept in arrival order."""

    particle_label = "quantile"

    def build(self, metric):
        summary = metric.summary
        summary.SetInParent()
        self._fill(summary)
        for quantile, value in self.particles:
            summary.quantile.add(quantile=quantile, value=value)


class HistogramAccumulator(ParticleAccumulator):
    """Particles are buckets: the label is the upper bound, the value the cumulative count."""

    particle_label = "le"

    def build(self, metric):
        histogram = metric.histogram
        histogram.SetInParent()
        self._fill(histogram)
        for upper_bound, cumulative_count in self.particles:
            histogram.bucket.add(
                cumulative_count=truncate_count(cumulative_count),
                upper_bound=upper_bound,
            )
