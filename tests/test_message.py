import pytest

import blindproto
from blindproto import (
    Blob,
    MalformedTag,
    Nested,
    NestingTooDeep,
    Readings,
    Text,
    TruncatedBytes,
    TruncatedFixed,
    TruncatedVarint,
    UnsupportedWireType,
    WireType,
    parse_message,
)
from blindproto.wire import encode_varint

from tests.util import length_delimited, shape


def test_empty_buffer():
    assert parse_message(b"") == ()


def test_varint_field():
    (field,) = parse_message(b"\x08\x96\x01")
    assert field.number == 1
    assert field.wire_type == WireType.VARINT
    assert field.offset == 0
    assert isinstance(field.value, Readings)
    assert field.value.raw == 150
    assert field.value.get(blindproto.TYPE_SINT64) == 75


def test_fixed_fields():
    fixed32, fixed64 = parse_message(
        b"\x0d\x00\x00\x80\x3f" b"\x11\x00\x00\x00\x00\x00\x00\xf8\x3f"
    )
    assert fixed32.wire_type == WireType.FIXED32
    assert fixed32.value.get(blindproto.TYPE_FLOAT) == 1.0
    assert fixed64.number == 2
    assert fixed64.wire_type == WireType.FIXED64
    assert fixed64.value.get(blindproto.TYPE_DOUBLE) == 1.5
    assert fixed64.offset == 5


def test_bytes_that_parse_are_a_nested_message():
    # 08 01 is valid UTF-8 as well, the nested message reading wins
    (field,) = parse_message(length_delimited(2, b"\x08\x01"))
    assert field.wire_type == WireType.BYTES
    assert isinstance(field.value, Nested)
    (child,) = field.value.fields
    assert child.number == 1
    assert child.wire_type == WireType.VARINT
    assert child.value.raw == 1


def test_bytes_that_are_text():
    (field,) = parse_message(length_delimited(2, b"hello"))
    assert field.value == Text("hello")


def test_bytes_that_are_utf8_text():
    (field,) = parse_message(length_delimited(1, "héllo wörld".encode("utf-8")))
    assert field.value == Text("héllo wörld")


def test_bytes_that_are_a_blob():
    (field,) = parse_message(length_delimited(3, b"\xff"))
    assert field.value == Blob(b"\xff")


def test_empty_bytes_are_an_empty_message():
    (field,) = parse_message(b"\x12\x00")
    assert field.value == Nested(())


def test_partial_nested_message_is_not_a_message():
    # A lone tag is not a complete message
    (field,) = parse_message(length_delimited(1, b"\x08"))
    assert field.value == Text("\x08")


def test_field_order_is_preserved():
    fields = parse_message(b"\x08\x01\x10\x02\x08\x03")
    assert [f.number for f in fields] == [1, 2, 1]
    assert [f.value.raw for f in fields] == [1, 2, 3]
    assert [f.offset for f in fields] == [0, 2, 4]


def test_deeply_nested():
    data = b"\x08\x2a"
    for number in range(2, 6):
        data = length_delimited(number, data)

    assert shape(parse_message(data)) == [
        (5, 2, [(4, 2, [(3, 2, [(2, 2, [(1, 0, None)])])])])
    ]


def _chain(levels: int) -> bytes:
    data = b""
    for _ in range(levels):
        data = length_delimited(1, data)
    return data


def test_nesting_limit():
    data = _chain(5)
    assert parse_message(data, max_depth=5)

    with pytest.raises(NestingTooDeep) as exc_info:
        parse_message(data, max_depth=4)
    assert exc_info.value.depth == 4


def test_default_nesting_limit():
    assert parse_message(_chain(blindproto.DEFAULT_MAX_DEPTH))
    with pytest.raises(NestingTooDeep):
        parse_message(_chain(blindproto.DEFAULT_MAX_DEPTH + 1))


def test_negative_max_depth():
    with pytest.raises(ValueError):
        parse_message(b"", max_depth=-1)


def test_truncated_bytes():
    with pytest.raises(TruncatedBytes) as exc_info:
        parse_message(b"\x08\x01\x12\x05ab")
    assert exc_info.value.offset == 3


def test_truncated_varint():
    with pytest.raises(TruncatedVarint) as exc_info:
        parse_message(b"\x08\x96")
    assert exc_info.value.offset == 1


OVERFLOWING_VARINT = b"\xff" * 9 + b"\x7f"


def test_overflowing_varint():
    with pytest.raises(TruncatedVarint) as exc_info:
        parse_message(b"\x08" + OVERFLOWING_VARINT)
    assert exc_info.value.offset == 1


def test_overflowing_varint_payload_is_not_a_message():
    (field,) = parse_message(length_delimited(2, b"\x08" + OVERFLOWING_VARINT))
    assert field.value == Blob(b"\x08" + OVERFLOWING_VARINT)

    # Nine continuation bytes that are also valid UTF-8, then 0x7f
    payload = b"\x08" + b"\xc2\x80" * 3 + b"\xe0\xa0\x80" + b"\x7f"
    (field,) = parse_message(length_delimited(2, payload))
    assert field.value == Text(payload.decode("utf-8"))


def test_truncated_fixed():
    with pytest.raises(TruncatedFixed) as exc_info:
        parse_message(b"\x08\x01\x0d\x00\x00")
    assert exc_info.value.offset == 3

    with pytest.raises(TruncatedFixed):
        parse_message(b"\x09\x00\x00\x00\x00")


def test_invalid_tag():
    with pytest.raises(MalformedTag) as exc_info:
        parse_message(b"\x08\x01\x00")
    assert exc_info.value.offset == 2

    with pytest.raises(MalformedTag):
        parse_message(b"\x08\x01\x88")


@pytest.mark.parametrize("wire_type", [3, 4, 6, 7])
def test_unsupported_wire_type(wire_type):
    data = b"\x08\x01" + encode_varint((1 << 3) | wire_type)
    with pytest.raises(UnsupportedWireType) as exc_info:
        parse_message(data)
    assert exc_info.value.wire_type == wire_type
    assert exc_info.value.offset == 2


def test_errors_in_nested_payload_are_not_raised():
    # 0b is a group start, which is fine inside a payload that becomes text
    (field,) = parse_message(length_delimited(1, b"\x0b"))
    assert field.value == Text("\x0b")


def test_accepts_bytes_like():
    assert parse_message(bytearray(b"\x08\x01"))[0].value.raw == 1
    assert parse_message(memoryview(b"\x08\x01"))[0].value.raw == 1


def test_fields_are_immutable():
    (field,) = parse_message(b"\x08\x01")
    with pytest.raises(AttributeError):
        field.number = 2


def test_decode_text_input():
    (field,) = blindproto.decode("CJYB")
    assert field.value.raw == 150

    (field,) = blindproto.decode("089601", encoding=blindproto.InputEncoding.HEX)
    assert field.value.raw == 150


def test_decode_grpc_web():
    framed = b"\x00\x00\x00\x00\x03\x08\x96\x01"
    (field,) = blindproto.decode(framed)
    assert field.value.raw == 150

    with pytest.raises(MalformedTag):
        blindproto.decode(framed, grpc_web=False)
