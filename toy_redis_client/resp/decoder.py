from __future__ import annotations

import io
import logging
import re
from typing import BinaryIO

from toy_redis_client.data_types import (
    INT64_MAX,
    INT64_MIN,
    Array,
    BulkString,
    Integer,
    ReplyKind,
    SimpleString,
    TaggedValue,
)
from toy_redis_client.resp.errors import (
    FormatError,
    IncompleteFrameError,
    ServerError,
    SizeReadError,
    TypeMismatchError,
    UnknownTypeError,
    UnsupportedElementTypeError,
)
from toy_redis_client.resp.helpers import read_bytes, read_line, skip

Frame = bytes | bytearray | memoryview | str

INTEGER_PATTERN = re.compile(rb"-?[0-9]+")


class RESPDecoder:
    @staticmethod
    def decode_integer(frame: Frame) -> int:
        with RESPDecoder._open(frame) as file:
            RESPDecoder._expect(file, ReplyKind.INTEGER)
            return RESPDecoder.read_integer(file)

    @staticmethod
    def decode_simple_string(frame: Frame, encoding: str | None = "utf-8") -> str:
        with RESPDecoder._open(frame) as file:
            RESPDecoder._expect(file, ReplyKind.SIMPLE_STRING)
            return RESPDecoder.read_simple_string(file, encoding)

    @staticmethod
    def decode_bulk_string(
        frame: Frame, encoding: str | None = "utf-8"
    ) -> str | bytes | None:
        with RESPDecoder._open(frame) as file:
            RESPDecoder._expect(file, ReplyKind.BULK_STRING)
            return RESPDecoder.read_bulk_string(file, encoding)

    @staticmethod
    def decode_array(
        frame: Frame, encoding: str | None = "utf-8"
    ) -> list[TaggedValue] | None:
        with RESPDecoder._open(frame) as file:
            RESPDecoder._expect(file, ReplyKind.ARRAY)
            return RESPDecoder.read_array(file, encoding)

    @staticmethod
    def decode(frame: Frame, encoding: str | None = "utf-8") -> TaggedValue | None:
        """Decode a reply of any supported kind into a tagged value.

        Error replies raise ServerError. A null array decodes to None, a null
        bulk string to ``BulkString(None)``.
        """
        with RESPDecoder._open(frame) as file:
            match RESPDecoder.read_type(file):
                case ReplyKind.INTEGER:
                    return Integer(RESPDecoder.read_integer(file))
                case ReplyKind.SIMPLE_STRING:
                    return SimpleString(RESPDecoder.read_simple_string(file, encoding))
                case ReplyKind.BULK_STRING:
                    return BulkString(RESPDecoder.read_bulk_string(file, encoding))
                case ReplyKind.ARRAY:
                    elements = RESPDecoder.read_array(file, encoding)
                    return None if elements is None else Array(tuple(elements))
                case _:
                    raise ServerError(RESPDecoder.read_error(file))

    @staticmethod
    def read_type(file: BinaryIO) -> ReplyKind:
        tag = file.read(1)
        if not tag:
            raise IncompleteFrameError("Reply frame is empty")

        kind = ReplyKind.from_tag(tag)
        if kind == ReplyKind.UNKNOWN:
            raise UnknownTypeError(tag)

        return kind

    @staticmethod
    def read_integer(file: BinaryIO) -> int:
        content = read_line(file)
        if not INTEGER_PATTERN.fullmatch(content):
            raise FormatError(content.decode("utf-8", errors="replace"))

        value = int(content)
        if value < INT64_MIN or value > INT64_MAX:
            raise FormatError(
                content.decode(), "Integer is outside the signed 64-bit range"
            )

        return value

    @staticmethod
    def read_simple_string(file: BinaryIO, encoding: str | None = "utf-8") -> str:
        return _decode_text(read_line(file), encoding or "utf-8")

    @staticmethod
    def read_bulk_string(
        file: BinaryIO, encoding: str | None = "utf-8"
    ) -> str | bytes | None:
        try:
            length = RESPDecoder.read_integer(file)
        except (IncompleteFrameError, FormatError) as e:
            raise SizeReadError() from e

        if length == -1:
            return None
        if length < -1:
            raise SizeReadError(f"Invalid bulk string length {length}")

        skip(file)
        content = read_bytes(file, length)

        return _decode_text(content, encoding) if encoding else content

    @staticmethod
    def read_error(file: BinaryIO) -> str:
        try:
            message = read_line(file)
        except IncompleteFrameError as e:
            raise IncompleteFrameError(
                "Cannot read error message from the response"
            ) from e

        return message.decode("utf-8", errors="replace")

    @staticmethod
    def read_array(
        file: BinaryIO, encoding: str | None = "utf-8"
    ) -> list[TaggedValue] | None:
        count = RESPDecoder.read_integer(file)
        if count == -1:
            return None
        if count < -1:
            raise SizeReadError(f"Invalid array length {count}")

        skip(file)
        elements: list[TaggedValue] = []

        for _ in range(count):
            tag = file.read(1)
            if not tag:
                logging.debug(
                    f"Frame exhausted after {len(elements)} of {count} array elements"
                )
                break

            element: TaggedValue
            match ReplyKind.from_tag(tag):
                case ReplyKind.INTEGER:
                    element = Integer(RESPDecoder.read_integer(file))
                    skip(file)
                case ReplyKind.SIMPLE_STRING:
                    element = SimpleString(RESPDecoder.read_simple_string(file, encoding))
                    skip(file)
                case ReplyKind.BULK_STRING:
                    value = RESPDecoder.read_bulk_string(file, encoding)
                    element = BulkString(value)
                    # Content is followed by a full CRLF, a null by the length line's LF.
                    skip(file, 1 if value is None else 2)
                case kind:
                    raise UnsupportedElementTypeError(kind)

            elements.append(element)

        return elements

    @staticmethod
    def _expect(file: BinaryIO, expected: ReplyKind) -> None:
        kind = RESPDecoder.read_type(file)
        if kind == expected:
            return

        if kind == ReplyKind.ERROR:
            raise ServerError(RESPDecoder.read_error(file))

        raise TypeMismatchError(expected, kind)

    @staticmethod
    def _open(frame: Frame) -> io.BytesIO:
        if isinstance(frame, str):
            frame = frame.encode("utf-8")
        return io.BytesIO(bytes(frame))


def _decode_text(content: bytes, encoding: str) -> str:
    try:
        return content.decode(encoding)
    except UnicodeDecodeError as e:
        raise FormatError(
            content.decode(encoding, errors="replace"), f"Content is not valid {encoding}"
        ) from e
