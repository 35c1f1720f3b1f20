from typing import Iterable, List, Optional, Tuple

from blindproto import Field, Nested
from blindproto.wire import encode_tag, encode_varint


Shape = List[Tuple[int, int, Optional["Shape"]]]


def shape(fields: Iterable[Field]) -> Shape:
    """The number/wire type tree of `fields`, without the values."""
    return [
        (
            field.number,
            int(field.wire_type),
            shape(field.value.fields) if isinstance(field.value, Nested) else None,
        )
        for field in fields
    ]


def length_delimited(number: int, payload: bytes) -> bytes:
    return encode_tag(number, 2) + encode_varint(len(payload)) + payload
