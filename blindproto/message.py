"""
Schema-less decoding of protobuf messages.

:func:`parse_message` walks a buffer field by field. Scalar values get every
reading the wire format allows. Length-delimited payloads are speculatively
parsed as nested messages and fall back to text or raw bytes when that fails.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Tuple, Union

from .const import DEFAULT_MAX_DEPTH, SUPPORTED_WIRE_TYPES, WireType
from .errors import DecodeError, NestingTooDeep, UnsupportedWireType
from .readings import (
    Readings,
    fixed32_readings,
    fixed64_readings,
    varint_readings,
)
from .wire import ByteCursor


log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Text:
    text: str


@dataclasses.dataclass(frozen=True)
class Blob:
    data: bytes


@dataclasses.dataclass(frozen=True)
class Nested:
    fields: Tuple["Field", ...]


# Every decoded value is exactly one of these
Value = Union[Readings, Text, Blob, Nested]


@dataclasses.dataclass(frozen=True)
class Field:
    """A single decoded tag/value pair."""

    # Protobuf field number
    number: int
    wire_type: WireType
    value: Value
    # Offset of the tag in the buffer this field was parsed from
    offset: int = 0

    def __bytes__(self) -> bytes:
        from .serialize import serialize_fields

        return serialize_fields((self,))


def _classify_payload(
    payload: bytes, depth: int, max_depth: int, offset: int
) -> Value:
    fields = _probe_message(payload, depth, max_depth, offset)
    if fields is not None:
        log.debug("payload at offset %d is a nested message", offset)
        return Nested(fields)
    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError:
        log.debug("payload at offset %d is raw bytes", offset)
        return Blob(payload)
    log.debug("payload at offset %d is a string", offset)
    return Text(text)


def _probe_message(
    payload: bytes, depth: int, max_depth: int, offset: int
) -> Optional[Tuple[Field, ...]]:
    """
    Returns the fields of `payload` if it parses as a complete message, or
    `None` when it does not.
    """
    if depth > max_depth:
        raise NestingTooDeep(max_depth, offset)
    try:
        return _parse(payload, depth, max_depth)
    except NestingTooDeep:
        raise
    except DecodeError as e:
        log.debug("payload at offset %d is not a message: %s", offset, e)
        return None


def _parse(data: bytes, depth: int, max_depth: int) -> Tuple[Field, ...]:
    cursor = ByteCursor(data)
    fields: List[Field] = []

    while not cursor.at_end:
        start = cursor.position
        number, wire_type = cursor.consume_tag()
        if wire_type not in SUPPORTED_WIRE_TYPES:
            raise UnsupportedWireType(wire_type, start)

        value: Value
        if wire_type == WireType.VARINT:
            value = varint_readings(cursor.consume_varint())
        elif wire_type == WireType.FIXED32:
            value = fixed32_readings(cursor.consume_fixed32())
        elif wire_type == WireType.FIXED64:
            value = fixed64_readings(cursor.consume_fixed64())
        else:
            value_offset = cursor.position
            payload = cursor.consume_bytes()
            value = _classify_payload(payload, depth + 1, max_depth, value_offset)

        fields.append(
            Field(
                number=number,
                wire_type=WireType(wire_type),
                value=value,
                offset=start,
            )
        )

    return tuple(fields)


def parse_message(
    data: Union[bytes, bytearray, memoryview], *, max_depth: int = DEFAULT_MAX_DEPTH
) -> Tuple[Field, ...]:
    """
    Decode a complete buffer into its fields, in the order they appear.

    Parameters
    ----------
    data
        The raw wire bytes.
    max_depth
        How many levels of nested messages to follow before giving up with
        :class:`~blindproto.errors.NestingTooDeep`.

    Raises
    ------
    :class:`~blindproto.errors.DecodeError`
        If the buffer is not a well-formed message. Nothing is returned for a
        partially decoded buffer.
    """
    if max_depth < 0:
        raise ValueError("max_depth must not be negative")
    return _parse(bytes(data), 0, max_depth)
