from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar

T = TypeVar("T")

TEXT_ENCODING = "latin-1"  # one character per byte, both ways


class Message(bytearray):
    """A single application payload: raw bytes with no length prefix or delimiter."""

    @property
    def text(self) -> str:
        return self.decode(TEXT_ENCODING)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Message({bytes(self)!r})"


class Codec(Protocol[T]):
    def encode(self, value: T) -> bytes: ...

    def decode(self, raw: bytes) -> T: ...


@dataclass(frozen=True, slots=True)
class BytesCodec:
    def encode(self, value: bytes | bytearray | memoryview) -> bytes:
        return bytes(value)

    def decode(self, raw: bytes) -> Message:
        return Message(raw)


@dataclass(frozen=True, slots=True)
class TextCodec:
    encoding: str = TEXT_ENCODING

    def encode(self, value: str) -> bytes:
        return value.encode(self.encoding)

    def decode(self, raw: bytes) -> str:
        return raw.decode(self.encoding)
