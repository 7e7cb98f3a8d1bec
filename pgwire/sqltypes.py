"""Binary encoding of SQL values sent as parameters and read back as results."""

from __future__ import annotations

import dataclasses
import json
import struct
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any

from pgwire.errors import BadConversion
from pgwire.wire import Reader, Writer

JSONB_VERSION = 1
UUID_SIZE = 16

_INT_FORMATS = {2: ">h", 4: ">i", 8: ">q"}


def _int_format(size: int) -> str:
    try:
        return _INT_FORMATS[size]
    except KeyError:
        raise ValueError(f"unsupported integer size: {size} bytes") from None


def encode_bool(value: bool) -> bytes:
    """Encode a boolean as a single byte."""
    return struct.pack(">?", bool(value))


def decode_bool(data: bytes) -> bool:
    """Decode a single-byte boolean."""
    if len(data) != 1:
        raise BadConversion(
            f"unexpected data for bool: expected 1 byte; received {len(data)}"
        )
    return data != b"\x00"


def encode_int(value: int, size: int) -> bytes:
    """Encode a signed big-endian integer of ``size`` bytes."""
    fmt = _int_format(size)
    try:
        return struct.pack(fmt, value)
    except struct.error as exc:
        raise BadConversion(
            f"{value} does not fit in int{size * 8}"
        ) from exc


def decode_int(data: bytes, size: int) -> int:
    """Decode a signed big-endian integer that must be exactly ``size`` bytes."""
    fmt = _int_format(size)
    if len(data) != size:
        raise BadConversion(
            f"unexpected data for int{size * 8}: "
            f"expected {size} bytes; received {len(data)}"
        )
    (value,) = struct.unpack(fmt, data)
    return value


def encode_text(value: str) -> bytes:
    return value.encode("utf-8")


def decode_text(data: bytes) -> str:
    return bytes(data).decode("utf-8")


def encode_bytea(value: bytes | bytearray | memoryview) -> bytes:
    return bytes(value)


def decode_bytea(data: bytes) -> bytes:
    return bytes(data)


def encode_json(value: Any) -> bytes:
    """Encode a value as binary jsonb: a version byte followed by compact JSON."""
    text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return bytes([JSONB_VERSION]) + text.encode("utf-8")


def decode_json(data: bytes) -> Any:
    """Decode binary jsonb, checking its version byte."""
    if not data:
        raise BadConversion("missing jsonb version number")
    version = struct.unpack(">b", data[:1])[0]
    if version != JSONB_VERSION:
        raise BadConversion(f"unsupported jsonb version number {version}")
    try:
        return json.loads(data[1:].decode("utf-8"))
    except ValueError as exc:
        raise BadConversion(f"invalid jsonb data: {exc}") from exc


def encode_uuid(value: uuid.UUID | str) -> bytes:
    if isinstance(value, str):
        value = uuid.UUID(value)
    return value.bytes


def decode_uuid(data: bytes) -> uuid.UUID:
    if len(data) != UUID_SIZE:
        raise BadConversion(
            f"insufficent data for uuid: expected {UUID_SIZE} bytes; "
            f"received {len(data)}"
        )
    return uuid.UUID(bytes=bytes(data))


@dataclass(frozen=True)
class SqlType:
    """A SQL type: its name, OID and binary conversions.

    An OID of -1 means the OID is not known ahead of time and must be
    looked up by name.
    """

    name: str
    oid: int
    encoder: Callable[[Any], bytes]
    decoder: Callable[[bytes], Any]
    nullable: bool = False

    def encode(self, value: Any) -> bytes:
        return self.encoder(value)

    def decode(self, data: bytes) -> Any:
        return self.decoder(data)

    def optional(self) -> "SqlType":
        """The same type, accepting and producing None for NULL."""
        return dataclasses.replace(self, nullable=True)


BOOL = SqlType("bool", 16, encode_bool, decode_bool)
BYTEA = SqlType("bytea", 17, encode_bytea, decode_bytea)
INT8 = SqlType("int8", 20, partial(encode_int, size=8), partial(decode_int, size=8))
INT2 = SqlType("int2", 21, partial(encode_int, size=2), partial(decode_int, size=2))
INT4 = SqlType("int4", 23, partial(encode_int, size=4), partial(decode_int, size=4))
TEXT = SqlType("text", 25, encode_text, decode_text)
UUID = SqlType("uuid", 2950, encode_uuid, decode_uuid)
JSONB = SqlType("jsonb", 3802, encode_json, decode_json)


def encode_parameter(value: Any, sql_type: SqlType) -> bytes:
    """Encode a parameter value with its int32 length prefix; NULL is length -1."""
    writer = Writer()
    if value is None:
        if not sql_type.nullable:
            raise BadConversion(f"type {sql_type.name} does not support NULL")
        writer.write_int32(-1)
    else:
        writer.write_bytes(sql_type.encode(value))
    return writer.getvalue()


def read_value(reader: Reader, sql_type: SqlType) -> Any:
    """Read a length-prefixed value and decode it as ``sql_type``."""
    size = reader.read_int32()
    if size == -1:
        if sql_type.nullable:
            return None
        raise BadConversion(
            f"received NULL when value of type {sql_type.name} was expected"
        )
    return sql_type.decode(reader.read(size))