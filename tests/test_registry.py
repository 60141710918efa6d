"""End-to-end tests against real prometheus_client collectors."""
import math

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, Summary

from promproto import generate_latest, metrics_pb
from promproto.framing import read_delimited
from promproto.registry import collect_families


def decode(payload):
    return {f.name: f for f in read_delimited(payload, metrics_pb.MetricFamily)}


def test_counter_and_gauge():
    registry = CollectorRegistry()
    requests = Counter("requests", "Requests served", ["method"], registry=registry)
    requests.labels(method="get").inc(3)
    in_flight = Gauge("in_flight", "Requests in flight", registry=registry)
    in_flight.set(7)

    families = decode(generate_latest(registry))

    counter = families["requests_total"]
    assert counter.type == metrics_pb.METRIC_TYPE["COUNTER"]
    assert counter.help == "Requests served"
    assert len(counter.metric) == 1
    assert counter.metric[0].counter.value == 3.0
    assert [(p.name, p.value) for p in counter.metric[0].label] == [("method", "get")]

    gauge = families["in_flight"]
    assert gauge.metric[0].gauge.value == 7.0


def test_histogram_round_trip():
    registry = CollectorRegistry()
    latency = Histogram(
        "latency_seconds", "Latency", ["region"], buckets=[0.5, 1.0], registry=registry
    )
    latency.labels(region="us").observe(0.3)
    latency.labels(region="us").observe(0.7)

    family = decode(generate_latest(registry))["latency_seconds"]

    assert family.type == metrics_pb.METRIC_TYPE["HISTOGRAM"]
    assert len(family.metric) == 1
    metric = family.metric[0]
    assert [(p.name, p.value) for p in metric.label] == [("region", "us")]
    assert metric.histogram.sample_count == 2
    assert math.isclose(metric.histogram.sample_sum, 1.0)
    buckets = [(b.upper_bound, b.cumulative_count) for b in metric.histogram.bucket]
    assert buckets == [(0.5, 1), (1.0, 2), (math.inf, 2)]


def test_summary_without_quantiles():
    registry = CollectorRegistry()
    size = Summary("payload_bytes", "Payload size", registry=registry)
    size.observe(100)
    size.observe(300)

    family = decode(generate_latest(registry))["payload_bytes"]

    assert family.type == metrics_pb.METRIC_TYPE["SUMMARY"]
    summary = family.metric[0].summary
    assert summary.sample_count == 2
    assert summary.sample_sum == 400.0
    assert len(summary.quantile) == 0


def test_created_samples_are_dropped():
    registry = CollectorRegistry()
    Counter("jobs", "Jobs", registry=registry).inc()

    families = list(collect_families(registry))

    assert [s.name for s in families[0].samples] == ["jobs_total"]


def test_name_filter():
    registry = CollectorRegistry()
    Counter("jobs", "Jobs", registry=registry).inc()
    Gauge("queue_depth", "Queue depth", registry=registry).set(2)

    families = decode(generate_latest(registry, names=["queue_depth"]))

    assert list(families) == ["queue_depth"]


def test_const_labels():
    registry = CollectorRegistry()
    Gauge("up", "Up", registry=registry).set(1)

    family = decode(generate_latest(registry, const_labels={"job": "api"}))["up"]

    assert [(p.name, p.value) for p in family.metric[0].label] == [("job", "api")]
