from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any

from toy_redis_client.commands import (
    Command,
    DelCommand,
    EchoCommand,
    GetCommand,
    IncrCommand,
    KeysCommand,
    PingCommand,
    SetCommand,
)
from toy_redis_client.config import ClientConfig
from toy_redis_client.data_types import ReplyKind
from toy_redis_client.resp.errors import (
    IncompleteFrameError,
    SizeReadError,
    UnknownTypeError,
)


class ConnectionNotInitializedError(Exception):
    def __init__(self) -> None:
        super().__init__(
            "Redis connection is not initialized, please call connect() first"
        )


async def read_frame(reader: asyncio.StreamReader) -> bytes:
    """Read exactly one complete reply from the stream and return its bytes."""
    line = await reader.readline()
    if not line.endswith(b"\r\n"):
        raise IncompleteFrameError("Connection closed before the reply was complete")

    tag = line[0:1]

    match ReplyKind.from_tag(tag):
        case ReplyKind.BULK_STRING:
            length = _parse_length(line)
            if length >= 0:
                line += await _read_exactly(reader, length + 2)

        case ReplyKind.ARRAY:
            count = _parse_length(line)
            for _ in range(count):
                line += await read_frame(reader)

        case ReplyKind.UNKNOWN:
            raise UnknownTypeError(tag)

    return line


def _parse_length(line: bytes) -> int:
    try:
        return int(line[1:-2])
    except ValueError as e:
        raise SizeReadError(f"Cannot read length from {line!r}") from e


async def _read_exactly(reader: asyncio.StreamReader, length: int) -> bytes:
    try:
        return await reader.readexactly(length)
    except asyncio.IncompleteReadError as e:
        raise IncompleteFrameError(
            f"Connection closed after {len(e.partial)} of {length} bytes"
        ) from e


class RedisClient:
    def __init__(self, config: ClientConfig | None = None) -> None:
        self.config = config or ClientConfig()

        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None

    async def connect(self) -> None:
        self.reader, self.writer = await asyncio.wait_for(
            asyncio.open_connection(self.config.host, self.config.port),
            timeout=self.config.timeout,
        )
        logging.info(f"Connected to {self.config.host}:{self.config.port}")

    async def send_command(
        self, command: Command, timeout: float | None = None
    ) -> bytes:
        if self.reader is None or self.writer is None:
            raise ConnectionNotInitializedError()

        data = command.encode()
        logging.debug(f"Sending {data!r}")

        try:
            self.writer.write(data)
            await self.writer.drain()

            return await asyncio.wait_for(
                read_frame(self.reader),
                timeout=timeout if timeout is not None else self.config.timeout,
            )
        except BaseException:
            # The stream may still hold this command's reply.
            logging.warning(
                f"Dropping connection to {self.config.host}:{self.config.port} "
                "after a failed command"
            )
            self.writer.close()
            self.reader = None
            self.writer = None
            raise

    async def execute(self, command: Command, timeout: float | None = None) -> Any:
        frame = await self.send_command(command, timeout)
        return command.decode_reply(frame, self.config.encoding)

    async def ping(self) -> str:
        return await self.execute(PingCommand())

    async def echo(self, message: str) -> str | bytes | None:
        return await self.execute(EchoCommand(message))

    async def get(self, key: str) -> str | bytes | None:
        return await self.execute(GetCommand(key))

    async def set(
        self, key: str, value: str | bytes | int, expiry_ms: int | None = None
    ) -> str:
        return await self.execute(SetCommand(key, value, expiry_ms))

    async def delete(self, *keys: str) -> int:
        return await self.execute(DelCommand(list(keys)))

    async def incr(self, key: str) -> int:
        return await self.execute(IncrCommand(key))

    async def keys(self, pattern: str = "*") -> list[Any]:
        return await self.execute(KeysCommand(pattern))

    async def close(self) -> None:
        if self.writer is None:
            return

        self.writer.close()
        await self.writer.wait_closed()
        logging.info(f"Disconnected from {self.config.host}:{self.config.port}")

        self.reader = None
        self.writer = None

    async def __aenter__(self) -> RedisClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
