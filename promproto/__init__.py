"""Protobuf exposition for Prometheus metric families."""
from promproto.formatter import CONTENT_TYPE, ProtobufFormatter
from promproto.registry import generate_latest
from promproto.samples import MetricFamily, Sample

__all__ = [
    "CONTENT_TYPE",
    "ProtobufFormatter",
    "generate_latest",
    "MetricFamily",
    "Sample",
]
