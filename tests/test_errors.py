import pytest

from pgwire.errors import (
    BadConversion,
    BrokenConnection,
    ErrorFields,
    PgError,
    SqlError,
    UnexpectedData,
    UnexpectedMessage,
    decode_error_fields,
    format_error,
)
from pgwire.wire import Reader, Writer


def _encode(pairs):
    writer = Writer()
    for code, value in pairs:
        writer.write_byte(code)
        writer.write_string(value)
    writer.write_byte("\0")
    return writer.getvalue()


def test_format_error_minimal():
    fields = ErrorFields(severity="ERROR", message="boom")
    assert format_error(fields) == "ERROR:  boom"


def test_format_error_with_all_extras_in_order():
    fields = ErrorFields(
        severity="ERROR",
        message="m",
        internal_query="q",
        where="w",
        detail="d",
        hint="h",
    )
    assert format_error(fields).split("\n") == [
        "ERROR:  m",
        "QUERY:  q",
        "CONTEXT:  w",
        "DETAIL:  d",
        "HINT:  h",
    ]


def test_format_error_skips_empty_extras():
    fields = ErrorFields(severity="FATAL", message="x", hint="try again")
    assert format_error(fields) == "FATAL:  x\nHINT:  try again"


def test_decode_error_fields():
    data = _encode(
        [
            ("V", "ERROR"),
            ("C", "42P01"),
            ("M", "relation missing"),
            ("P", "15"),
            ("L", "1234"),
            ("t", "users"),
            ("R", "parserOpenTable"),
        ]
    )
    reader = Reader(data)
    fields = decode_error_fields(reader)
    assert fields.severity == "ERROR"
    assert fields.sqlstate == "42P01"
    assert fields.message == "relation missing"
    assert fields.original_position == 15
    assert fields.line == 1234
    assert fields.table == "users"
    assert fields.routine == "parserOpenTable"
    assert reader.remaining() == 0


def test_decode_skips_unknown_fields():
    data = _encode([("V", "NOTICE"), ("X", "ignored"), ("M", "hello")])
    fields = decode_error_fields(Reader(data))
    assert fields.severity == "NOTICE"
    assert fields.message == "hello"


def test_decode_empty_response():
    fields = decode_error_fields(Reader(b"\0"))
    assert fields == ErrorFields()


def test_decode_truncated_raises():
    with pytest.raises(EOFError):
        decode_error_fields(Reader(b"VERROR"))


def test_sql_error_message_and_sqlstate():
    fields = ErrorFields(severity="ERROR", sqlstate="42P01", message="gone")
    err = SqlError(fields)
    assert str(err) == format_error(fields)
    assert err.fields is fields
    assert err.sqlstate("42P01") is True
    assert err.sqlstate("23505") is False


def test_sql_error_without_sqlstate():
    err = SqlError(ErrorFields(severity="ERROR", message="x"))
    assert err.sqlstate("42P01") is False


def test_broken_connection_message():
    assert str(BrokenConnection()) == "lost or failed backend connection"


def test_unexpected_message():
    err = UnexpectedMessage("Z")
    assert err.code == "Z"
    assert str(err) == "received unexpected message byte 5a"


@pytest.mark.parametrize(
    "make_error, expected",
    [
        (lambda: BrokenConnection(), "lost or failed backend connection"),
        (lambda: UnexpectedData("too many rows returned"), "too many rows returned"),
        (lambda: BadConversion("type does not support NULL"), "type does not support NULL"),
        (lambda: SqlError(ErrorFields(severity="ERROR", message="m")), "ERROR:  m"),
        (lambda: UnexpectedMessage("Z"), "received unexpected message byte 5a"),
    ],
)
def test_errors_are_caught_as_pg_error(make_error, expected):
    error = make_error()
    with pytest.raises(PgError) as info:
        raise error
    assert info.value is error
    assert str(info.value) == expected