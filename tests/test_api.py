"""Tests for the HTTP exposition endpoint."""
from fastapi.testclient import TestClient
from prometheus_client import CollectorRegistry, Counter, Gauge
from prometheus_client.core import HistogramMetricFamily

from promproto import CONTENT_TYPE, metrics_pb
from promproto.api import ExpositionAPI
from promproto.config import Config
from promproto.framing import read_delimited


def make_client(registry, **overrides):
    config = Config(**overrides)
    api = ExpositionAPI(config, registry=registry)
    return api, TestClient(api.app)


def family_names(response):
    return [f.name for f in read_delimited(response.content, metrics_pb.MetricFamily)]


def sample_registry():
    registry = CollectorRegistry()
    Counter("jobs", "Jobs", registry=registry).inc(2)
    Gauge("queue_depth", "Queue depth", registry=registry).set(5)
    return registry


def test_healthz():
    _, client = make_client(CollectorRegistry())
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_metrics_get():
    _, client = make_client(sample_registry(), self_metrics={"enabled": False})

    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"] == CONTENT_TYPE
    assert sorted(family_names(response)) == ["jobs_total", "queue_depth"]


def test_metrics_post():
    _, client = make_client(sample_registry(), self_metrics={"enabled": False})
    response = client.post("/metrics")
    assert response.status_code == 200
    assert len(family_names(response)) == 2


def test_name_filter():
    _, client = make_client(sample_registry(), self_metrics={"enabled": False})

    response = client.get("/metrics", params={"name[]": ["jobs_total"]})

    assert family_names(response) == ["jobs_total"]


def test_custom_path():
    _, client = make_client(
        sample_registry(), server={"path": "/proto"}, self_metrics={"enabled": False}
    )
    assert client.get("/proto").status_code == 200
    assert client.get("/metrics").status_code == 404


def test_self_metrics_exposed_and_counted():
    api, client = make_client(sample_registry())

    client.get("/metrics")
    response = client.get("/metrics")

    assert "promproto_exposition_scrapes_total" in family_names(response)
    assert api.self_metrics.scrapes_total._value.get() == 2


def test_format_error_returns_500():
    class BrokenCollector:
        def collect(self):
            family = HistogramMetricFamily("broken", "Broken histogram")
            family.add_metric([], buckets=[("0.5", 1), ("not-a-number", 2)], sum_value=1)
            yield family

    registry = CollectorRegistry()
    registry.register(BrokenCollector())
    api, client = make_client(registry)

    response = client.get("/metrics")

    assert response.status_code == 500
    assert api.self_metrics.format_errors_total._value.get() == 1
