import enum
from typing import Dict


# Proto 3 scalar type names, used as the labels of candidate readings
TYPE_ENUM = "enum"
TYPE_BOOL = "bool"
TYPE_INT32 = "int32"
TYPE_INT64 = "int64"
TYPE_UINT32 = "uint32"
TYPE_UINT64 = "uint64"
TYPE_SINT32 = "sint32"
TYPE_SINT64 = "sint64"
TYPE_FLOAT = "float"
TYPE_DOUBLE = "double"
TYPE_FIXED32 = "fixed32"
TYPE_SFIXED32 = "sfixed32"
TYPE_FIXED64 = "fixed64"
TYPE_SFIXED64 = "sfixed64"


# Readings that hold 64-bit integers (emitted as strings in JSON)
INT_64_TYPES = [TYPE_INT64, TYPE_UINT64, TYPE_SINT64, TYPE_FIXED64, TYPE_SFIXED64]

# Readings that hold floating point numbers
FLOAT_TYPES = [TYPE_FLOAT, TYPE_DOUBLE]

# JSON spellings of non-finite floats
INFINITY = "Infinity"
NEG_INFINITY = "-Infinity"
NAN = "NaN"


class WireType(enum.IntEnum):
    """Wire types.

    https://developers.google.com/protocol-buffers/docs/encoding#structure
    """

    VARINT = 0
    FIXED64 = 1
    BYTES = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5

    @property
    def display_name(self) -> str:
        return WIRE_TYPE_NAMES[self]


WIRE_TYPE_NAMES: Dict[WireType, str] = {
    WireType.VARINT: "Varint",
    WireType.FIXED32: "Fixed32",
    WireType.FIXED64: "Fixed64",
    WireType.BYTES: "Bytes",
    WireType.START_GROUP: "StartGroup",
    WireType.END_GROUP: "EndGroup",
}

# Wire types the parser knows how to decode
SUPPORTED_WIRE_TYPES = frozenset(
    (WireType.VARINT, WireType.FIXED64, WireType.BYTES, WireType.FIXED32)
)

# Field numbers are 29 bits wide
MIN_FIELD_NUMBER = 1
MAX_FIELD_NUMBER = (1 << 29) - 1

# A 64-bit varint never needs more than 10 bytes
MAX_VARINT_BYTES = 10

UINT32_MASK = (1 << 32) - 1
UINT64_MASK = (1 << 64) - 1

# Same default as the recursion limit of the protobuf runtimes
DEFAULT_MAX_DEPTH = 100

# gRPC-Web frame prefix: 1 byte compression flag + 4 byte big-endian length
GRPC_WEB_HEADER_SIZE = 5
