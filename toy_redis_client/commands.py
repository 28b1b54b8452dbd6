from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from toy_redis_client.data_types import TaggedValue
from toy_redis_client.resp.decoder import RESPDecoder
from toy_redis_client.resp.encoder import RESPEncoder

CommandArg = str | bytes | int


@dataclass
class Command(ABC):
    @abstractmethod
    def args(self) -> list[CommandArg]:
        pass

    @abstractmethod
    def decode_reply(self, frame: bytes, encoding: str | None = "utf-8") -> Any:
        pass

    def encode(self) -> bytes:
        return RESPEncoder.encode_command(*self.args())


@dataclass
class PingCommand(Command):
    def args(self) -> list[CommandArg]:
        return ["PING"]

    def decode_reply(self, frame: bytes, encoding: str | None = "utf-8") -> str:
        return RESPDecoder.decode_simple_string(frame, encoding)


@dataclass
class EchoCommand(Command):
    message: str

    def args(self) -> list[CommandArg]:
        return ["ECHO", self.message]

    def decode_reply(
        self, frame: bytes, encoding: str | None = "utf-8"
    ) -> str | bytes | None:
        return RESPDecoder.decode_bulk_string(frame, encoding)


@dataclass
class GetCommand(Command):
    key: str

    def args(self) -> list[CommandArg]:
        return ["GET", self.key]

    def decode_reply(
        self, frame: bytes, encoding: str | None = "utf-8"
    ) -> str | bytes | None:
        return RESPDecoder.decode_bulk_string(frame, encoding)


@dataclass
class SetCommand(Command):
    key: str
    value: str | bytes | int
    expiry_ms: int | None = None

    def args(self) -> list[CommandArg]:
        args: list[CommandArg] = ["SET", self.key, self.value]
        if self.expiry_ms is not None:
            args += ["PX", self.expiry_ms]
        return args

    def decode_reply(self, frame: bytes, encoding: str | None = "utf-8") -> str:
        return RESPDecoder.decode_simple_string(frame, encoding)


@dataclass
class DelCommand(Command):
    keys: list[str]

    def args(self) -> list[CommandArg]:
        return ["DEL", *self.keys]

    def decode_reply(self, frame: bytes, encoding: str | None = "utf-8") -> int:
        return RESPDecoder.decode_integer(frame)


@dataclass
class IncrCommand(Command):
    key: str

    def args(self) -> list[CommandArg]:
        return ["INCR", self.key]

    def decode_reply(self, frame: bytes, encoding: str | None = "utf-8") -> int:
        return RESPDecoder.decode_integer(frame)


@dataclass
class KeysCommand(Command):
    pattern: str = "*"

    def args(self) -> list[CommandArg]:
        return ["KEYS", self.pattern]

    def decode_reply(
        self, frame: bytes, encoding: str | None = "utf-8"
    ) -> list[Any]:
        elements = RESPDecoder.decode_array(frame, encoding)
        return [element.value for element in elements or []]


@dataclass
class RawCommand(Command):
    """Any command given as plain arguments, decoded without an expected type."""

    command: list[str]

    def args(self) -> list[CommandArg]:
        return list(self.command)

    def decode_reply(
        self, frame: bytes, encoding: str | None = "utf-8"
    ) -> TaggedValue | None:
        return RESPDecoder.decode(frame, encoding)
