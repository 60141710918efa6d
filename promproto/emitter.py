"""Builds metric records on a reusable label buffer and writes them delimited."""
import logging
from contextlib import contextmanager
from typing import BinaryIO, Callable, Dict, Iterable, List, Optional, Tuple

from promproto import metrics_pb
from promproto.framing import write_delimited

logger = logging.getLogger(__name__)

FRAMING_FAMILY = "family"
FRAMING_METRIC = "metric"

PAYLOAD_FIELDS = ("counter", "gauge", "summary", "histogram", "untyped")

# (label names, label values, payload filler)
Record = Tuple[List[str], List[str], Callable]


class RecordEmitter:
    """
    Writes records for one family at a time to an append-only stream.

    A single scratch ``Metric`` holds the label buffer. Constant labels sit at
    the bottom of the buffer; each record pushes its own pairs on top and the
    buffer is truncated back once the record is serialized, on error exits too.
    """

    def __init__(
        self,
        stream: BinaryIO,
        framing: str = FRAMING_FAMILY,
        const_labels: Optional[Dict[str, str]] = None,
    ):
        if framing not in (FRAMING_FAMILY, FRAMING_METRIC):
            raise ValueError(f"Unknown framing: {framing}")
        self.stream = stream
        self.framing = framing
        self._scratch = metrics_pb.Metric()
        for name, value in (const_labels or {}).items():
            self._scratch.label.add(name=name, value=value)

    @property
    def buffer_size(self) -> int:
        """Number of label pairs currently on the buffer."""
        return len(self._scratch.label)

    @contextmanager
    def pushed(self, label_names: List[str], label_values: List[str]):
        """Push label pairs for the duration of one record."""
        mark = len(self._scratch.label)
        try:
            for name, value in zip(label_names, label_values):
                self._scratch.label.add(name=name, value=value)
            yield self._scratch
        finally:
            del self._scratch.label[mark:]
            for field in PAYLOAD_FIELDS:
                self._scratch.ClearField(field)

    def write_family(self, name: str, help: str, metric_type: int, records: Iterable[Record]) -> int:
        """Emit every record of one family. Returns the number of records written."""
        family = metrics_pb.MetricFamily(name=name, help=help, type=metric_type)
        written = 0

        for label_names, label_values, fill in records:
            with self.pushed(label_names, label_values) as metric:
                fill(metric)
                if self.framing == FRAMING_METRIC:
                    write_delimited(self.stream, metric)
                else:
                    family.metric.add().CopyFrom(metric)
            written += 1

        if self.framing == FRAMING_FAMILY and written:
            write_delimited(self.stream, family)

        logger.debug(f"Family {name}: {written} records")
        return written
