from typing import BinaryIO

from toy_redis_client.resp.errors import IncompleteFrameError


def read_bytes(file: BinaryIO, length: int) -> bytes:
    data = file.read(length)
    if len(data) < length:
        raise IncompleteFrameError(
            f"Expected {length} bytes of content, got {len(data)}"
        )
    return data


def read_line(file: BinaryIO) -> bytes:
    """Read up to the next CR and return the bytes before it.

    The CR is consumed, the LF after it is left for the caller.
    """
    content = bytearray()

    while (byte := file.read(1)) != b"\r":
        if not byte:
            raise IncompleteFrameError("Line terminator not found before end of frame")
        content += byte

    return bytes(content)


def skip(file: BinaryIO, length: int = 1) -> None:
    file.read(length)
