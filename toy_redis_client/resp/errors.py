from __future__ import annotations

from toy_redis_client.data_types import ReplyKind


class RESPError(Exception):
    """Base class for every failure raised while decoding a reply."""


class ProtocolError(RESPError, ValueError):
    """The reply frame does not follow the wire format."""


class IncompleteFrameError(ProtocolError):
    def __init__(self, msg: str = "Reply frame ended before the field was complete") -> None:
        super().__init__(msg)


class FormatError(ProtocolError):
    def __init__(
        self, content: str, reason: str = "Content of the response is not an integer"
    ) -> None:
        super().__init__(f"{reason}, got {content!r}")
        self.content = content


class SizeReadError(ProtocolError):
    def __init__(self, msg: str = "Cannot read size of the bulk element") -> None:
        super().__init__(msg)


class UnknownTypeError(ProtocolError):
    def __init__(self, tag: bytes) -> None:
        super().__init__(f"Unknown type detected, got {tag!r}")
        self.tag = tag


class UnsupportedElementTypeError(ProtocolError):
    def __init__(self, kind: ReplyKind) -> None:
        super().__init__(
            f"Only integer, simple string and bulk string array elements are supported, got {kind}"
        )
        self.kind = kind


class TypeMismatchError(ProtocolError):
    def __init__(self, expected: ReplyKind, actual: ReplyKind) -> None:
        super().__init__(f"Expected {expected} type, got type {actual}")
        self.expected = expected
        self.actual = actual


class ServerError(RESPError):
    """An error reply sent by the server.

    ``prefix`` is the first word of the message (``ERR``, ``WRONGTYPE``...),
    which Redis uses as the error code.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.prefix = message.split(" ", 1)[0] if message else ""
