"""Turning user input into the raw bytes handed to the parser."""
from __future__ import annotations

import binascii
import enum
import logging
from base64 import b64decode
from typing import Tuple

from .const import GRPC_WEB_HEADER_SIZE
from .errors import InputDecodeError


log = logging.getLogger(__name__)


class InputEncoding(str, enum.Enum):
    """How the input text encodes the message bytes."""

    AUTO = "auto"
    BASE64 = "base64"
    HEX = "hex"


def _from_base64(text: str) -> bytes:
    return b64decode(text, validate=True)


def _from_hex(text: str) -> bytes:
    return bytes.fromhex(text)


def decode_input(text: str, encoding: InputEncoding = InputEncoding.AUTO) -> bytes:
    """
    Decode base64 or hexadecimal text into bytes.

    With :attr:`InputEncoding.AUTO` base64 is tried first and hex second, so a
    string that is valid in both alphabets (``"0801"``) is read as base64.
    Force :attr:`InputEncoding.HEX` for those.
    """
    text = "".join(text.split())

    if encoding == InputEncoding.BASE64:
        decoders = [_from_base64]
    elif encoding == InputEncoding.HEX:
        decoders = [_from_hex]
    else:
        decoders = [_from_base64, _from_hex]

    for decoder in decoders:
        try:
            return decoder(text)
        except (binascii.Error, ValueError):
            continue

    names = " or ".join(d.__name__[len("_from_") :] for d in decoders)
    raise InputDecodeError(f"failed to decode input as {names}")


def strip_grpc_web(data: bytes) -> Tuple[bytes, bool]:
    """
    Return the message inside a gRPC-Web frame, if `data` looks like one.

    A frame is a compression flag byte, a big-endian 4 byte length and the
    message. Anything after the message, such as a trailer frame, is dropped.
    Compressed frames, short buffers and lengths running past the end are not
    frames, and the input is returned untouched with ``False``.
    """
    if len(data) < GRPC_WEB_HEADER_SIZE:
        return data, False

    if data[0] != 0:
        return data, False

    length = int.from_bytes(data[1:GRPC_WEB_HEADER_SIZE], byteorder="big")
    end = GRPC_WEB_HEADER_SIZE + length
    if end > len(data):
        return data, False

    log.info("The input will be parsed as gRPC-Web message")
    return data[GRPC_WEB_HEADER_SIZE:end], True
