"""Message classes for the ``io.prometheus.client`` metrics schema.

The schema is the classic ``metrics.proto`` of the Prometheus client model
(proto2). Descriptors are assembled with ``descriptor_pb2`` and loaded into a
private pool so that another copy of the same schema in the default pool
cannot clash with this one.
"""
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "io.prometheus.client"

_F = descriptor_pb2.FieldDescriptorProto

# message name -> [(field name, number, type, label, type name)]
_MESSAGES = {
    "LabelPair": [
        ("name", 1, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("value", 2, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
    ],
    "Gauge": [
        ("value", 1, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
    ],
    "Counter": [
        ("value", 1, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
    ],
    "Quantile": [
        ("quantile", 1, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
        ("value", 2, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
    ],
    "Summary": [
        ("sample_count", 1, _F.TYPE_UINT64, _F.LABEL_OPTIONAL, None),
        ("sample_sum", 2, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
        ("quantile", 3, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "Quantile"),
    ],
    "Untyped": [
        ("value", 1, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
    ],
    "Histogram": [
        ("sample_count", 1, _F.TYPE_UINT64, _F.LABEL_OPTIONAL, None),
        ("sample_sum", 2, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
        ("bucket", 3, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "Bucket"),
    ],
    "Bucket": [
        ("cumulative_count", 1, _F.TYPE_UINT64, _F.LABEL_OPTIONAL, None),
        ("upper_bound", 2, _F.TYPE_DOUBLE, _F.LABEL_OPTIONAL, None),
    ],
    "Metric": [
        ("label", 1, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "LabelPair"),
        ("gauge", 2, _F.TYPE_MESSAGE, _F.LABEL_OPTIONAL, "Gauge"),
        ("counter", 3, _F.TYPE_MESSAGE, _F.LABEL_OPTIONAL, "Counter"),
        ("summary", 4, _F.TYPE_MESSAGE, _F.LABEL_OPTIONAL, "Summary"),
        ("untyped", 5, _F.TYPE_MESSAGE, _F.LABEL_OPTIONAL, "Untyped"),
        ("timestamp_ms", 6, _F.TYPE_INT64, _F.LABEL_OPTIONAL, None),
        ("histogram", 7, _F.TYPE_MESSAGE, _F.LABEL_OPTIONAL, "Histogram"),
    ],
    "MetricFamily": [
        ("name", 1, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("help", 2, _F.TYPE_STRING, _F.LABEL_OPTIONAL, None),
        ("type", 3, _F.TYPE_ENUM, _F.LABEL_OPTIONAL, "MetricType"),
        ("metric", 4, _F.TYPE_MESSAGE, _F.LABEL_REPEATED, "Metric"),
    ],
}

_METRIC_TYPES = [
    ("COUNTER", 0),
    ("GAUGE", 1),
    ("SUMMARY", 2),
    ("UNTYPED", 3),
    ("HISTOGRAM", 4),
]


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="io/prometheus/client/metrics.proto",
        package=PACKAGE,
        syntax="proto2",
    )

    enum_proto = file_proto.enum_type.add(name="MetricType")
    for name, number in _METRIC_TYPES:
        enum_proto.value.add(name=name, number=number)

    for message_name, fields in _MESSAGES.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for name, number, field_type, label, type_name in fields:
            field_proto = message_proto.field.add(
                name=name, number=number, type=field_type, label=label
            )
            if type_name:
                field_proto.type_name = f".{PACKAGE}.{type_name}"

    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


LabelPair = _message_class("LabelPair")
Gauge = _message_class("Gauge")
Counter = _message_class("Counter")
Quantile = _message_class("Quantile")
Summary = _message_class("Summary")
Untyped = _message_class("Untyped")
Histogram = _message_class("Histogram")
Bucket = _message_class("Bucket")
Metric = _message_class("Metric")
MetricFamily = _message_class("MetricFamily")

METRIC_TYPE = {name: number for name, number in _METRIC_TYPES}
