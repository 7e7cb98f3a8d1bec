"""Exceptions raised by the client and decoding of backend error responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pgwire.wire import Reader


class PgError(Exception):
    """Base class of every error raised by the client."""


class BrokenConnection(PgError):
    """The connection to the backend was lost or could not be made."""

    def __init__(self, message: str = "lost or failed backend connection") -> None:
        super().__init__(message)


class UnexpectedData(PgError):
    """The backend returned data of a shape the caller did not expect."""


class BadConversion(PgError):
    """A value could not be converted to or from its SQL representation."""


class UnexpectedMessage(PgError):
    """The backend sent a message that is not valid at this point."""

    def __init__(self, code: str) -> None:
        self.code = code
        super().__init__(f"received unexpected message byte {ord(code):x}")


@dataclass
class ErrorFields:
    """The fields of an ErrorResponse or NoticeResponse message."""

    severity: str = ""
    sqlstate: Optional[str] = None
    message: str = ""
    detail: str = ""
    hint: str = ""
    original_position: int = 0
    internal_position: int = 0
    internal_query: str = ""
    where: str = ""
    schema: str = ""
    table: str = ""
    column: str = ""
    data_type: str = ""
    constraint: str = ""
    file: str = ""
    line: int = 0
    routine: str = ""


def format_error(fields: ErrorFields) -> str:
    """Render error fields the way the backend's own client tools show them."""
    lines = [f"{fields.severity}:  {fields.message}"]
    extras = (
        ("QUERY", fields.internal_query),
        ("CONTEXT", fields.where),
        ("DETAIL", fields.detail),
        ("HINT", fields.hint),
    )
    lines.extend(f"{label}:  {value}" for label, value in extras if value)
    return "\n".join(lines)


class SqlError(PgError):
    """An error reported by the backend."""

    def __init__(self, fields: ErrorFields) -> None:
        self.fields = fields
        super().__init__(format_error(fields))

    def sqlstate(self, state: str) -> bool:
        """Whether the error carries the given SQLSTATE code."""
        return self.fields.sqlstate is not None and self.fields.sqlstate == state


_STRING_FIELDS = {
    "V": "severity",
    "M": "message",
    "D": "detail",
    "H": "hint",
    "q": "internal_query",
    "W": "where",
    "S": "schema",
    "t": "table",
    "c": "column",
    "d": "data_type",
    "n": "constraint",
    "F": "file",
    "R": "routine",
}

_INT_FIELDS = {
    "P": "original_position",
    "p": "internal_position",
    "L": "line",
}


def decode_error_fields(reader: Reader) -> ErrorFields:
    """Read code/value pairs up to the terminating null byte."""
    fields = ErrorFields()
    while (code := reader.read_byte()) != "\0":
        value = reader.read_string()
        if code in _STRING_FIELDS:
            setattr(fields, _STRING_FIELDS[code], value)
        elif code in _INT_FIELDS:
            setattr(fields, _INT_FIELDS[code], int(value))
        elif code == "C":
            fields.sqlstate = value
    return fields