class DecodeError(ValueError):
    """The base class for all errors raised while decoding a buffer.

    Attributes
    ----------
    offset: :class:`int`
        The byte offset, relative to the slice being parsed, where the problem
        was detected.
    """

    def __init__(self, msg: str, offset: int):
        super().__init__(f"{msg} at offset {offset}")
        self.offset = offset


class MalformedTag(DecodeError):
    def __init__(self, offset: int, reason: str = "invalid tag"):
        super().__init__(reason, offset)


class TruncatedVarint(DecodeError):
    def __init__(self, offset: int):
        super().__init__("invalid varint", offset)


class TruncatedFixed(DecodeError):
    """Fewer bytes are left than a fixed-width read needs.

    Attributes
    ----------
    size: :class:`int`
        The width of the read, 4 or 8.
    """

    def __init__(self, offset: int, size: int):
        super().__init__(f"invalid fixed{size * 8}", offset)
        self.size = size


class TruncatedBytes(DecodeError):
    def __init__(self, offset: int):
        super().__init__("invalid bytes", offset)


class UnsupportedWireType(DecodeError):
    """A group or unknown wire type was found.

    Attributes
    ----------
    wire_type: :class:`int`
        The raw 3-bit wire type from the tag.
    """

    def __init__(self, wire_type: int, offset: int):
        super().__init__(f"unsupported wire type {wire_type}", offset)
        self.wire_type = wire_type


class NestingTooDeep(DecodeError):
    """A length-delimited payload would nest deeper than the configured limit.

    Unlike the other errors this is never treated as "not a nested message"
    and always aborts the decode.

    Attributes
    ----------
    depth: :class:`int`
        The limit that was exceeded.
    """

    def __init__(self, depth: int, offset: int):
        super().__init__(f"message nesting exceeds depth {depth}", offset)
        self.depth = depth


class InputDecodeError(ValueError):
    """The input text could not be turned into bytes."""
