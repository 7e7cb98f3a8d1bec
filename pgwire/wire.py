"""Encoding and decoding of the primitive values of the frontend/backend protocol."""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

_INT_FORMATS = {1: ">b", 2: ">h", 4: ">i", 8: ">q"}


@dataclass(frozen=True)
class Header:
    """A message header: the type code and the length of the body that follows."""

    code: str
    length: int


@dataclass(frozen=True)
class Notification:
    """An asynchronous notification sent by a backend."""

    pid: int
    channel: str
    payload: str


class Reader:
    """Reads protocol values from a buffer of bytes."""

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        self._data = bytes(data)
        self._pos = 0

    def read(self, n: int) -> bytes:
        """Return the next ``n`` bytes, raising EOFError if fewer remain."""
        if n < 0:
            raise ValueError(f"cannot read a negative number of bytes: {n}")
        end = self._pos + n
        if end > len(self._data):
            raise EOFError(
                f"expected {n} bytes; only {self.remaining()} remain"
            )
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def remaining(self) -> int:
        """Number of bytes not yet read."""
        return len(self._data) - self._pos

    def read_byte(self) -> str:
        return self.read(1).decode("latin-1")

    def _read_int(self, size: int) -> int:
        (value,) = struct.unpack(_INT_FORMATS[size], self.read(size))
        return value

    def read_int8(self) -> int:
        return self._read_int(1)

    def read_int16(self) -> int:
        return self._read_int(2)

    def read_int32(self) -> int:
        return self._read_int(4)

    def read_int64(self) -> int:
        return self._read_int(8)

    def read_string(self) -> str:
        """Read a null-terminated string."""
        end = self._data.find(b"\0", self._pos)
        if end == -1:
            raise EOFError("string is missing its null terminator")
        raw = self._data[self._pos:end]
        self._pos = end + 1
        return raw.decode("utf-8")

    def read_header(self) -> Header:
        """Read a message header; the length excludes the length field itself."""
        code = self.read_byte()
        length = self.read_int32()
        return Header(code, length - 4)

    def read_notification(self) -> Notification:
        pid = self.read_int32()
        channel = self.read_string()
        payload = self.read_string()
        return Notification(pid, channel, payload)

    def read_list(self, decode: Callable[["Reader"], T]) -> list[T]:
        """Read an int16 count followed by that many values read by ``decode``."""
        count = self.read_int16()
        return [decode(self) for _ in range(count)]


class Writer:
    """Accumulates protocol values into a buffer of bytes."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, data: bytes | bytearray | memoryview) -> None:
        self._buffer += data

    def write_byte(self, code: str) -> None:
        if len(code) != 1:
            raise ValueError(f"expected a single character, got {code!r}")
        self._buffer += code.encode("latin-1")

    def _write_int(self, value: int, size: int) -> None:
        try:
            self._buffer += struct.pack(_INT_FORMATS[size], value)
        except struct.error as exc:
            raise OverflowError(
                f"{value} does not fit in a {size * 8}-bit integer"
            ) from exc

    def write_int8(self, value: int) -> None:
        self._write_int(value, 1)

    def write_int16(self, value: int) -> None:
        self._write_int(value, 2)

    def write_int32(self, value: int) -> None:
        self._write_int(value, 4)

    def write_int64(self, value: int) -> None:
        self._write_int(value, 8)

    def write_string(self, value: str) -> None:
        """Write a string followed by a null terminator."""
        self._buffer += value.encode("utf-8")
        self._buffer += b"\0"

    def write_parameters(self, parameters: Mapping[str, str]) -> None:
        """Write each key and value as a pair of null-terminated strings."""
        for key, value in parameters.items():
            self.write_string(key)
            self.write_string(value)

    def write_int32_array(self, values: Iterable[int]) -> None:
        """Write an int16 count followed by the values as int32."""
        items = list(values)
        self.write_int16(len(items))
        for value in items:
            self.write_int32(value)

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write an int32 length followed by the raw bytes."""
        raw = bytes(data)
        self.write_int32(len(raw))
        self._buffer += raw

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


def string_size(value: str) -> int:
    """Encoded size of a string, including its null terminator."""
    return len(value.encode("utf-8")) + 1


def parameters_size(parameters: Mapping[str, str]) -> int:
    """Encoded size of a parameter list written by Writer.write_parameters."""
    return sum(string_size(k) + string_size(v) for k, v in parameters.items())