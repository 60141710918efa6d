"""Protobuf formatter: dispatches metric families to their reconstruction path."""
import logging
from functools import partial
from typing import BinaryIO, Callable, Dict, Iterable, Iterator, NamedTuple, Optional

from promproto import metrics_pb
from promproto.accumulators import HistogramAccumulator, SummaryAccumulator
from promproto.emitter import FRAMING_FAMILY, Record, RecordEmitter
from promproto.grouping import group_samples
from promproto.samples import COUNTER, GAUGE, HISTOGRAM, SUMMARY, MetricFamily

logger = logging.getLogger(__name__)

CONTENT_TYPE = (
    "application/vnd.google.protobuf; "
    "proto=io.prometheus.client.MetricFamily; encoding=delimited"
)


def _set_counter(value: float, metric):
    metric.counter.value = value


def _set_gauge(value: float, metric):
    metric.gauge.value = value


def _simple_records(setter: Callable) -> Callable[[MetricFamily], Iterator[Record]]:
    def records(family: MetricFamily) -> Iterator[Record]:
        for sample in family.samples:
            yield sample.label_names, sample.label_values, partial(setter, sample.value)
    return records


def _grouped_records(accumulator_class) -> Callable[[MetricFamily], Iterator[Record]]:
    def records(family: MetricFamily) -> Iterator[Record]:
        groups = group_samples(family.samples, accumulator_class.particle_label, accumulator_class)
        for group in groups.values():
            yield group.label_names, group.label_values, group.accumulator.build
    return records


class Strategy(NamedTuple):
    """How one family type maps to records."""
    metric_type: int
    records: Callable[[MetricFamily], Iterator[Record]]


STRATEGIES: Dict[str, Strategy] = {
    COUNTER: Strategy(metrics_pb.METRIC_TYPE["COUNTER"], _simple_records(_set_counter)),
    GAUGE: Strategy(metrics_pb.METRIC_TYPE["GAUGE"], _simple_records(_set_gauge)),
    SUMMARY: Strategy(metrics_pb.METRIC_TYPE["SUMMARY"], _grouped_records(SummaryAccumulator)),
    HISTOGRAM: Strategy(metrics_pb.METRIC_TYPE["HISTOGRAM"], _grouped_records(HistogramAccumulator)),
}


class ProtobufFormatter:
    """Writes metric families as length-delimited protobuf messages."""

    def __init__(
        self,
        families: Iterable[MetricFamily],
        framing: str = FRAMING_FAMILY,
        const_labels: Optional[Dict[str, str]] = None,
    ):
        self.families = families
        self.framing = framing
        self.const_labels = const_labels

    def write(self, stream: BinaryIO) -> int:
        """Write every family to ``stream``. Returns the number of records written."""
        emitter = RecordEmitter(stream, self.framing, self.const_labels)
        written = 0
        for family in self.families:
            written += self.write_family(emitter, family)
        return written

    @staticmethod
    def write_family(emitter: RecordEmitter, family: MetricFamily) -> int:
        strategy = STRATEGIES.get(family.type)
        if strategy is None:
            logger.debug(f"Skipping family {family.name} of unsupported type {family.type}")
            return 0
        return emitter.write_family(
            family.name, family.help, strategy.metric_type, strategy.records(family)
        )
