"""
Candidate readings for scalar wire values.

The wire format cannot tell ``int32`` from ``uint64``, ``sint64``, ``bool`` or an
enum: they all travel as a varint. The same holds for the fixed-width types.
Instead of guessing, every plausible reading is offered, always in the same
order.
"""
from __future__ import annotations

import dataclasses
import math
import struct
from typing import List, Tuple, Union

from .const import (
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
    UINT32_MASK,
    UINT64_MASK,
)


@dataclasses.dataclass(frozen=True)
class Reading:
    # Proto scalar type name, e.g. "sint32"
    kind: str
    value: Union[int, float, bool]


@dataclasses.dataclass(frozen=True)
class Readings:
    """The raw unsigned wire value and every reading offered for it."""

    raw: int
    candidates: Tuple[Reading, ...]

    def get(self, kind: str) -> Union[int, float, bool, None]:
        """Returns the value of the reading named `kind`, if it was offered."""
        for reading in self.candidates:
            if reading.kind == kind:
                return reading.value
        return None

    @property
    def kinds(self) -> Tuple[str, ...]:
        return tuple(reading.kind for reading in self.candidates)


def _signed(value: int, bits: int) -> int:
    if value >= 1 << (bits - 1):
        return value - (1 << bits)
    return value


def zigzag_decode64(n: int) -> int:
    n &= UINT64_MASK
    return (n >> 1) ^ -(n & 1)


def zigzag_decode32(n: int) -> int:
    n &= UINT32_MASK
    return (n >> 1) ^ -(n & 1)


def varint_readings(value: int) -> Readings:
    value &= UINT64_MASK
    low = value & UINT32_MASK
    candidates: List[Reading] = [
        Reading(TYPE_UINT64, value),
        Reading(TYPE_UINT32, low),
        Reading(TYPE_INT64, _signed(value, 64)),
        Reading(TYPE_INT32, _signed(low, 32)),
        Reading(TYPE_SINT64, zigzag_decode64(value)),
        Reading(TYPE_SINT32, zigzag_decode32(low)),
    ]
    if value in (0, 1):
        candidates.append(Reading(TYPE_BOOL, bool(value)))
    candidates.append(Reading(TYPE_ENUM, value))
    return Readings(value, tuple(candidates))


def fixed32_readings(value: int) -> Readings:
    value &= UINT32_MASK
    (as_float,) = struct.unpack("<f", struct.pack("<I", value))
    return Readings(
        value,
        (
            Reading(TYPE_FIXED32, value),
            Reading(TYPE_FLOAT, as_float),
            Reading(TYPE_SFIXED32, _signed(value, 32)),
        ),
    )


def fixed64_readings(value: int) -> Readings:
    value &= UINT64_MASK
    (as_double,) = struct.unpack("<d", struct.pack("<Q", value))
    return Readings(
        value,
        (
            Reading(TYPE_FIXED64, value),
            Reading(TYPE_DOUBLE, as_double),
            Reading(TYPE_SFIXED64, _signed(value, 64)),
        ),
    )


def format_float(value: float, kind: str = TYPE_DOUBLE) -> str:
    """
    Returns the shortest text that reads back as the same float of the given
    width, so a ``float`` reading of 0.1 prints as ``0.1`` rather than the
    double expansion of the nearest single-precision value.
    """
    if math.isnan(value) or math.isinf(value):
        return repr(value)
    if kind != TYPE_FLOAT:
        return repr(value)
    packed = struct.pack("<f", value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        try:
            if struct.pack("<f", float(text)) == packed:
                return repr(float(text))
        except OverflowError:
            # rounded past the largest finite float32
            continue
    return repr(value)
