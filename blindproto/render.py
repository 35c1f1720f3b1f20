"""Text and JSON renderings of a decoded field tree."""
from __future__ import annotations

import enum
import json
import math
from base64 import b64encode
from typing import Any, Dict, Iterable, List, Union

import stringcase
from typing_extensions import assert_never

from .const import FLOAT_TYPES, INFINITY, INT_64_TYPES, NAN, NEG_INFINITY
from .message import Blob, Field, Nested, Text
from .readings import Reading, Readings, format_float


class Casing(enum.Enum):
    """Casing constants for serialization."""

    CAMEL = stringcase.camelcase
    SNAKE = stringcase.snakecase


def _format_reading(reading: Reading) -> str:
    value = reading.value
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif reading.kind in FLOAT_TYPES:
        text = format_float(value, reading.kind)
    else:
        text = str(value)
    return f"[{reading.kind}]: {text}"


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def format_fields(fields: Iterable[Field], indent: str = "") -> str:
    """Returns the human readable tree for `fields`, one field per line."""
    lines: List[str] = []
    for field in fields:
        head = f"{indent}Tag {field.number} ({field.wire_type.display_name}): "
        value = field.value
        if isinstance(value, Readings):
            readings = ", ".join(_format_reading(r) for r in value.candidates)
            lines.append(head + "{")
            lines.append(f"{indent}  {readings}")
            lines.append(indent + "}")
        elif isinstance(value, Text):
            lines.append(f"{head}string: {_quote(value.text)}")
        elif isinstance(value, Blob):
            lines.append(f"{head}bytes: {value.data.hex()} (raw bytes)")
        elif isinstance(value, Nested):
            lines.append(head + "Message {")
            if value.fields:
                lines.append(format_fields(value.fields, indent + "  ").rstrip("\n"))
            lines.append(indent + "}")
        else:
            assert_never(value)
    return "".join(f"{line}\n" for line in lines)


def _json_reading(reading: Reading) -> Union[str, int, float, bool]:
    value = reading.value
    if reading.kind in INT_64_TYPES:
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return NAN
        if math.isinf(value):
            return INFINITY if value > 0 else NEG_INFINITY
        return float(format_float(value, reading.kind))
    return value


def to_dict(
    fields: Iterable[Field], casing: Casing = Casing.CAMEL
) -> List[Dict[str, Any]]:
    """
    Returns a list of dicts describing `fields`, which can be used to serialize
    to e.g. JSON. 64-bit integers are given as strings and raw bytes as base64,
    as in the protobuf JSON mapping.
    """
    output: List[Dict[str, Any]] = []
    wire_type_key = casing("wire_type")  # type: ignore
    for field in fields:
        entry: Dict[str, Any] = {
            "number": field.number,
            wire_type_key: field.wire_type.display_name,
            "offset": field.offset,
        }
        value = field.value
        if isinstance(value, Readings):
            entry["raw"] = str(value.raw)
            entry["readings"] = {r.kind: _json_reading(r) for r in value.candidates}
        elif isinstance(value, Text):
            entry["string"] = value.text
        elif isinstance(value, Blob):
            entry["bytes"] = b64encode(value.data).decode("utf8")
        elif isinstance(value, Nested):
            entry["message"] = to_dict(value.fields, casing)
        else:
            assert_never(value)
        output.append(entry)
    return output


def to_json(
    fields: Iterable[Field],
    indent: Union[None, int, str] = None,
    casing: Casing = Casing.CAMEL,
) -> str:
    return json.dumps(to_dict(fields, casing), indent=indent, ensure_ascii=False)
