"""Row descriptions, fields, rows and query results."""

from __future__ import annotations

import enum
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Optional, Union, overload

from pgwire.errors import PgError
from pgwire.wire import Reader


class FormatCode(enum.IntEnum):
    TEXT = 0
    BINARY = 1


@dataclass(frozen=True)
class Column:
    """One column of a RowDescription message."""

    name: str
    table: int
    column: int
    type: int
    size: int
    modifier: int
    format: FormatCode


def decode_column(reader: Reader) -> Column:
    """Read one column description."""
    name = reader.read_string()
    table = reader.read_int32()
    column = reader.read_int16()
    type_oid = reader.read_int32()
    size = reader.read_int16()
    modifier = reader.read_int32()
    format_code = FormatCode(reader.read_int16())
    return Column(name, table, column, type_oid, size, modifier, format_code)


def decode_field_data(reader: Reader) -> Optional[bytes]:
    """Read a length-prefixed field value; a length of -1 means NULL."""
    size = reader.read_int32()
    if size == -1:
        return None
    return reader.read(size)


class Field:
    """A single value of a row together with its column description."""

    def __init__(self, column: Column, data: Optional[bytes]) -> None:
        self.column = column
        self.data = data

    @property
    def name(self) -> str:
        return self.column.name

    @property
    def type(self) -> int:
        return self.column.type

    @property
    def bytes(self) -> bytes:
        """Raw field data; empty for NULL."""
        return self.data if self.data is not None else b""

    def is_null(self) -> bool:
        return self.data is None

    def text(self) -> Optional[str]:
        """The field as text, or None if it is NULL."""
        if self.data is None:
            return None
        return self.data.decode("utf-8")

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, data={self.data!r})"


class Row:
    """A row of fields, addressable by position or by column name."""

    def __init__(self, columns: Sequence[Column], fields: Sequence[Field]) -> None:
        self.columns = list(columns)
        self.fields = list(fields)

    def __getitem__(self, key: Union[int, str]) -> Field:
        if isinstance(key, str):
            for column, field in zip(self.columns, self.fields):
                if column.name == key:
                    return field
            raise PgError(f'column "{key}" does not exist')
        return self.fields[key]

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)


class Result:
    """The rows returned by a query, with its command tag."""

    def __init__(
        self, tag: str, columns: Sequence[Column], rows: Sequence[Row]
    ) -> None:
        self.tag = tag
        self.columns = list(columns)
        self.rows = list(rows)

    @property
    def command_tag(self) -> str:
        return self.tag

    @overload
    def __getitem__(self, index: int) -> Row: ...

    @overload
    def __getitem__(self, index: slice) -> list[Row]: ...

    def __getitem__(self, index):
        return self.rows[index]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def empty(self) -> bool:
        return not self.rows