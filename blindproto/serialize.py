from typing import Iterable, List

from typing_extensions import assert_never

from .const import WireType
from .message import Blob, Field, Nested, Text, Value
from .readings import Readings
from .wire import encode_tag, encode_varint


def _serialize_value(wire_type: WireType, value: Value) -> bytes:
    if isinstance(value, Readings):
        if wire_type == WireType.VARINT:
            return encode_varint(value.raw)
        elif wire_type == WireType.FIXED32:
            return value.raw.to_bytes(4, byteorder="little")
        elif wire_type == WireType.FIXED64:
            return value.raw.to_bytes(8, byteorder="little")
        raise ValueError(f"Readings cannot be sent as wire type {wire_type!r}")

    if wire_type != WireType.BYTES:
        raise ValueError(f"{type(value).__name__} must be sent as Bytes")

    if isinstance(value, Text):
        payload = value.text.encode("utf-8")
    elif isinstance(value, Blob):
        payload = value.data
    elif isinstance(value, Nested):
        payload = serialize_fields(value.fields)
    else:
        assert_never(value)
    return encode_varint(len(payload)) + payload


def serialize_fields(fields: Iterable[Field]) -> bytes:
    """
    Encode decoded fields back into wire bytes, in order, using minimal varint
    encodings.
    """
    output: List[bytes] = []
    for field in fields:
        output.append(encode_tag(field.number, field.wire_type))
        output.append(_serialize_value(field.wire_type, field.value))
    return b"".join(output)
