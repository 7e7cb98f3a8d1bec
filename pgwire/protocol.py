"""Frontend messages of the extended query protocol and related helpers."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from typing import Any

from pgwire.sqltypes import SqlType, encode_parameter
from pgwire.wire import Writer

STATEMENT_OID_QUERY = "SELECT oid FROM pg_type WHERE typname = $1"

QUALIFIED_OID_QUERY = (
    "SELECT oid "
    "FROM pg_type "
    "WHERE "
    "typname = $1 AND "
    "typnamespace = ("
    "SELECT oid "
    "FROM pg_namespace "
    "WHERE nspname = $2"
    ")"
)


class Format(enum.IntEnum):
    """Format code of parameter and result values."""

    TEXT = 0
    BINARY = 1


class TransactionStatus(enum.Enum):
    """Backend transaction status reported by ReadyForQuery."""

    FAILURE = "E"
    IDLE = "I"
    TRANSACTION = "T"


def _write_arg(writer: Writer, arg: Any) -> None:
    if isinstance(arg, Format):
        writer.write_int16(int(arg))
    elif isinstance(arg, bool):
        raise TypeError("booleans cannot be written as message arguments")
    elif isinstance(arg, int):
        writer.write_int32(arg)
    elif isinstance(arg, str):
        writer.write_string(arg)
    elif isinstance(arg, (bytes, bytearray, memoryview)):
        writer.write(arg)
    elif isinstance(arg, Mapping):
        writer.write_parameters(arg)
    else:
        raise TypeError(
            f"cannot write a value of type {type(arg).__name__} in a message"
        )


def message(code: str, *args: Any) -> bytes:
    """Build a message: a type code, an int32 length, then the encoded arguments.

    Strings are written null-terminated, ints as int32, Format values as
    int16, mappings as parameter lists and bytes as they are.
    """
    body = Writer()
    for arg in args:
        _write_arg(body, arg)
    payload = body.getvalue()

    out = Writer()
    out.write_byte(code)
    out.write_int32(len(payload) + 4)
    out.write(payload)
    return out.getvalue()


def bind_message(
    portal: str,
    statement: str,
    output: Format,
    parameters: Iterable[tuple[Any, SqlType]],
) -> bytes:
    """Build a Bind message with binary parameters and one result format code."""
    encoded = [encode_parameter(value, sql_type) for value, sql_type in parameters]

    body = Writer()
    body.write_string(portal)
    body.write_string(statement)
    body.write_int16(1)
    body.write_int16(int(Format.BINARY))
    body.write_int16(len(encoded))
    for parameter in encoded:
        body.write(parameter)
    body.write_int16(1)
    body.write_int16(int(Format(output)))

    return message("B", body.getvalue())


def execute_message(portal: str, max_rows: int = 0) -> bytes:
    """Build an Execute message; a row limit of 0 fetches every row."""
    return message("E", portal, max_rows)


def function_query(name: str, arg_count: int) -> str:
    """A query selecting everything returned by a function of ``arg_count`` arguments."""
    if arg_count < 0:
        raise ValueError(f"negative argument count: {arg_count}")
    placeholders = ", ".join(f"${i}" for i in range(1, arg_count + 1))
    return f"SELECT * FROM {name}({placeholders})"


def oid_query(type_name: str) -> tuple[str, tuple[str, ...]]:
    """The query and parameters that look up the OID of a type by name.

    A name of the form ``schema.type`` is looked up in that schema.
    """
    schema, dot, name = type_name.partition(".")
    if not dot:
        return STATEMENT_OID_QUERY, (type_name,)
    return QUALIFIED_OID_QUERY, (name, schema)


def connection_label(pid: int) -> str:
    """How a connection is shown in logs: with its backend PID once known."""
    return "postgres" if pid == 0 else f"postgres[{pid}]"