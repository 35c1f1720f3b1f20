"""
Bounds-checked readers for the atoms of the protobuf wire format.

A :class:`ByteCursor` only ever moves forward. A read that would run past the
end of the buffer raises a :class:`~blindproto.errors.DecodeError` subclass and
leaves the position untouched.
"""
from __future__ import annotations

from typing import List, Tuple, Union

from .const import (
    MAX_FIELD_NUMBER,
    MAX_VARINT_BYTES,
    MIN_FIELD_NUMBER,
)
from .errors import (
    MalformedTag,
    TruncatedBytes,
    TruncatedFixed,
    TruncatedVarint,
)


class ByteCursor:
    __slots__ = ("_buffer", "_pos")

    def __init__(self, buffer: Union[bytes, bytearray, memoryview], pos: int = 0):
        self._buffer = bytes(buffer)
        if not 0 <= pos <= len(self._buffer):
            raise IndexError(f"position {pos} is outside the buffer")
        self._pos = pos

    def __repr__(self) -> str:
        return f"ByteCursor(position={self._pos}, length={len(self._buffer)})"

    @property
    def position(self) -> int:
        return self._pos

    @property
    def remaining(self) -> int:
        return len(self._buffer) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos == len(self._buffer)

    def _read_varint(self) -> Tuple[int, int]:
        # Returns the value and the position after it without committing.
        buffer = self._buffer
        pos = self._pos
        result = 0
        for shift in range(0, 7 * MAX_VARINT_BYTES, 7):
            if pos >= len(buffer):
                raise TruncatedVarint(self._pos)
            b = buffer[pos]
            if shift == 63 and b > 1:
                # the 10th byte may only carry the top bit of a 64-bit value
                raise TruncatedVarint(self._pos)
            result |= (b & 0x7F) << shift
            pos += 1
            if not (b & 0x80):
                return result, pos
        raise TruncatedVarint(self._pos)

    def consume_varint(self) -> int:
        """Consume a base-128 varint of at most 10 bytes."""
        value, self._pos = self._read_varint()
        return value

    def consume_tag(self) -> Tuple[int, int]:
        """
        Consume a tag and return the field number and the raw wire type.

        The wire type is not checked here; deciding which wire types can be
        decoded is up to the caller.
        """
        start = self._pos
        if self.at_end:
            raise MalformedTag(start, "empty tag")
        try:
            value, pos = self._read_varint()
        except TruncatedVarint:
            raise MalformedTag(start) from None

        number = value >> 3
        if not MIN_FIELD_NUMBER <= number <= MAX_FIELD_NUMBER:
            raise MalformedTag(start, f"invalid field number {number}")
        self._pos = pos
        return number, value & 0x7

    def _consume_fixed(self, size: int) -> int:
        if self.remaining < size:
            raise TruncatedFixed(self._pos, size)
        end = self._pos + size
        value = int.from_bytes(self._buffer[self._pos : end], byteorder="little")
        self._pos = end
        return value

    def consume_fixed32(self) -> int:
        return self._consume_fixed(4)

    def consume_fixed64(self) -> int:
        return self._consume_fixed(8)

    def consume_bytes(self) -> bytes:
        """Consume a varint length followed by that many raw bytes."""
        start = self._pos
        try:
            length, pos = self._read_varint()
        except TruncatedVarint:
            raise TruncatedBytes(start) from None
        if length > len(self._buffer) - pos:
            raise TruncatedBytes(start)
        self._pos = pos + length
        return self._buffer[pos : self._pos]


def decode_varint(buffer: bytes, pos: int) -> Tuple[int, int]:
    """
    Decode a single varint value from a byte buffer. Returns the value and the
    new position in the buffer.
    """
    cursor = ByteCursor(buffer, pos)
    value = cursor.consume_varint()
    return value, cursor.position


def encode_varint(value: int) -> bytes:
    """Encodes a single varint value for serialization."""
    b: List[int] = []

    if value < 0:
        value += 1 << 64

    bits = value & 0x7F
    value >>= 7
    while value:
        b.append(0x80 | bits)
        bits = value & 0x7F
        value >>= 7
    return bytes(b + [bits])


def encode_tag(number: int, wire_type: int) -> bytes:
    return encode_varint((number << 3) | wire_type)
