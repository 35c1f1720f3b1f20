from typing import Tuple, Union

from ._version import __version__
from .const import (
    DEFAULT_MAX_DEPTH,
    TYPE_BOOL,
    TYPE_DOUBLE,
    TYPE_ENUM,
    TYPE_FIXED32,
    TYPE_FIXED64,
    TYPE_FLOAT,
    TYPE_INT32,
    TYPE_INT64,
    TYPE_SFIXED32,
    TYPE_SFIXED64,
    TYPE_SINT32,
    TYPE_SINT64,
    TYPE_UINT32,
    TYPE_UINT64,
    WIRE_TYPE_NAMES,
    WireType,
)
from .errors import (
    DecodeError,
    InputDecodeError,
    MalformedTag,
    NestingTooDeep,
    TruncatedBytes,
    TruncatedFixed,
    TruncatedVarint,
    UnsupportedWireType,
)
from .message import Blob, Field, Nested, Text, Value, parse_message
from .readings import Reading, Readings, zigzag_decode32, zigzag_decode64
from .render import Casing, format_fields, to_dict, to_json
from .serialize import serialize_fields
from .source import InputEncoding, decode_input, strip_grpc_web
from .wire import ByteCursor, decode_varint, encode_varint


def decode(
    data: Union[str, bytes, bytearray, memoryview],
    *,
    encoding: InputEncoding = InputEncoding.AUTO,
    grpc_web: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Tuple[Field, ...]:
    """
    Decode a protobuf message without a schema.

    `data` is either the raw wire bytes or base64/hex text. When `grpc_web` is
    set, a gRPC-Web frame around the message is detected and removed first.
    """
    if isinstance(data, str):
        data = decode_input(data, encoding)
    else:
        data = bytes(data)
    if grpc_web:
        data, _ = strip_grpc_web(data)
    return parse_message(data, max_depth=max_depth)
