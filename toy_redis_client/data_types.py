from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ReplyKind(Enum):
    SIMPLE_STRING = auto()
    ERROR = auto()
    INTEGER = auto()
    BULK_STRING = auto()
    ARRAY = auto()
    UNKNOWN = auto()

    @classmethod
    def from_tag(cls, tag: bytes | int) -> ReplyKind:
        if isinstance(tag, int):
            tag = bytes([tag])
        return TAGS.get(tag, cls.UNKNOWN)

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


TAGS: dict[bytes, ReplyKind] = {
    b"+": ReplyKind.SIMPLE_STRING,
    b"-": ReplyKind.ERROR,
    b":": ReplyKind.INTEGER,
    b"$": ReplyKind.BULK_STRING,
    b"*": ReplyKind.ARRAY,
}


@dataclass(frozen=True)
class Integer:
    kind: ClassVar[ReplyKind] = ReplyKind.INTEGER
    value: int


@dataclass(frozen=True)
class SimpleString:
    kind: ClassVar[ReplyKind] = ReplyKind.SIMPLE_STRING
    value: str


@dataclass(frozen=True)
class BulkString:
    kind: ClassVar[ReplyKind] = ReplyKind.BULK_STRING
    value: str | bytes | None

    @property
    def is_null(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class Array:
    kind: ClassVar[ReplyKind] = ReplyKind.ARRAY
    value: tuple[TaggedValue, ...]

    def __len__(self) -> int:
        return len(self.value)

    def __getitem__(self, index: int) -> TaggedValue:
        return self.value[index]


TaggedValue = Integer | SimpleString | BulkString | Array
