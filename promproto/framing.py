"""Varint length-prefixed framing, the ``encoding=delimited`` of the content type."""
from typing import BinaryIO, Iterator

from google.protobuf.internal.decoder import _DecodeVarint32
from google.protobuf.internal.encoder import _VarintBytes


def write_delimited(stream: BinaryIO, message) -> int:
    """Write ``message`` prefixed by its byte length. Returns bytes written."""
    payload = message.SerializeToString()
    header = _VarintBytes(len(payload))
    stream.write(header)
    stream.write(payload)
    return len(header) + len(payload)


def read_delimited(data: bytes, message_class) -> Iterator:
    """Parse consecutive length-prefixed messages from ``data``."""
    pos = 0
    while pos < len(data):
        size, pos = _DecodeVarint32(data, pos)
        end = pos + size
        if end > len(data):
            raise ValueError(f"Truncated message: need {size} bytes at offset {pos}")
        message = message_class()
        message.ParseFromString(data[pos:end])
        yield message
        pos = end
