"""Data structures for flat metric families and their samples."""
from dataclasses import dataclass, field
from typing import List

COUNTER = "counter"
GAUGE = "gauge"
SUMMARY = "summary"
HISTOGRAM = "histogram"


@dataclass
class Sample:
    """A single flat sample with positionally paired labels."""
    name: str
    label_names: List[str]
    label_values: List[str]
    value: float

    def __post_init__(self):
        if len(self.label_names) != len(self.label_values):
            raise ValueError(
                f"Sample {self.name} has {len(self.label_names)} label names "
                f"but {len(self.label_values)} label values"
            )

    def labels(self) -> List[tuple]:
        """Label pairs in their original order."""
        return list(zip(self.label_names, self.label_values))


@dataclass
class MetricFamily:
    """A named group of samples sharing one type and help text.

    ``type`` uses the prometheus_client vocabulary. Only counter, gauge,
    summary and histogram families produce records; anything else is skipped.
    """
    name: str
    help: str
    type: str
    samples: List[Sample] = field(default_factory=list)
