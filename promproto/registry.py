"""Adapter from prometheus_client collectors to flat metric families."""
import io
import logging
from typing import Iterable, Iterator, List, Optional

from prometheus_client import REGISTRY, CollectorRegistry

from promproto.formatter import ProtobufFormatter
from promproto.samples import COUNTER, GAUGE, MetricFamily, Sample

logger = logging.getLogger(__name__)


def _family_name_and_type(metric) -> tuple:
    """Family name and type as the text exposition reports them."""
    if metric.type == "counter":
        return f"{metric.name}_total", COUNTER
    if metric.type == "info":
        return f"{metric.name}_info", GAUGE
    if metric.type == "stateset":
        return metric.name, GAUGE
    return metric.name, metric.type


def to_family(metric) -> MetricFamily:
    """Convert one ``prometheus_client.Metric`` into a ``MetricFamily``.

    ``_created`` samples are dropped; label dicts keep their insertion order.
    """
    name, metric_type = _family_name_and_type(metric)
    samples: List[Sample] = []
    for sample in metric.samples:
        if sample.name.endswith("_created"):
            continue
        samples.append(
            Sample(
                name=sample.name,
                label_names=list(sample.labels.keys()),
                label_values=list(sample.labels.values()),
                value=sample.value,
            )
        )
    return MetricFamily(name=name, help=metric.documentation, type=metric_type, samples=samples)


def collect_families(
    registry: CollectorRegistry = REGISTRY,
    names: Optional[Iterable[str]] = None,
) -> Iterator[MetricFamily]:
    """Collect the registry, optionally restricted to the given sample names."""
    if names:
        names = list(names)
        logger.debug(f"Restricting collection to {names}")
        registry = registry.restricted_registry(names)
    for metric in registry.collect():
        yield to_family(metric)


def generate_latest(
    registry: CollectorRegistry = REGISTRY,
    names: Optional[Iterable[str]] = None,
    framing: str = "family",
    const_labels=None,
) -> bytes:
    """Return the registry's metrics in the delimited protobuf format."""
    output = io.BytesIO()
    ProtobufFormatter(collect_families(registry, names), framing, const_labels).write(output)
    return output.getvalue()
