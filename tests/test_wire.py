import pytest

from pgwire.wire import (
    Header,
    Notification,
    Reader,
    Writer,
    parameters_size,
    string_size,
)


@pytest.mark.parametrize(
    "write, read, value",
    [
        ("write_int8", "read_int8", -128),
        ("write_int8", "read_int8", 127),
        ("write_int16", "read_int16", 100),
        ("write_int16", "read_int16", -32768),
        ("write_int32", "read_int32", 100),
        ("write_int32", "read_int32", -1),
        ("write_int64", "read_int64", 100),
        ("write_int64", "read_int64", 2**63 - 1),
    ],
)
def test_int_round_trip(write, read, value):
    writer = Writer()
    getattr(writer, write)(value)
    reader = Reader(writer.getvalue())
    assert getattr(reader, read)() == value
    assert reader.remaining() == 0


def test_int16_is_big_endian():
    writer = Writer()
    writer.write_int16(1)
    assert writer.getvalue() == b"\x00\x01"


def test_int_overflow():
    writer = Writer()
    with pytest.raises(OverflowError):
        writer.write_int16(2**15)


def test_string_round_trip():
    writer = Writer()
    writer.write_string("héllo")
    writer.write_string("world")
    data = writer.getvalue()
    assert len(data) == string_size("héllo") + string_size("world")
    reader = Reader(data)
    assert reader.read_string() == "héllo"
    assert reader.read_string() == "world"
    assert reader.remaining() == 0


def test_empty_string_is_terminator_only():
    writer = Writer()
    writer.write_string("")
    assert writer.getvalue() == b"\x00"


def test_string_without_terminator():
    with pytest.raises(EOFError):
        Reader(b"abc").read_string()


def test_byte_round_trip():
    writer = Writer()
    writer.write_byte("Z")
    writer.write_byte("\0")
    reader = Reader(writer.getvalue())
    assert reader.read_byte() == "Z"
    assert reader.read_byte() == "\0"


def test_write_byte_rejects_long_string():
    with pytest.raises(ValueError):
        Writer().write_byte("ab")


def test_read_header_excludes_length_field():
    reader = Reader(b"Z\x00\x00\x00\x05I")
    assert reader.read_header() == Header("Z", 1)
    assert reader.read_byte() == "I"


def test_notification_round_trip():
    writer = Writer()
    writer.write_int32(4242)
    writer.write_string("events")
    writer.write_string("payload")
    reader = Reader(writer.getvalue())
    assert reader.read_notification() == Notification(4242, "events", "payload")


def test_parameters_round_trip():
    params = {"user": "user", "database": "demo"}
    writer = Writer()
    writer.write_parameters(params)
    data = writer.getvalue()
    assert len(data) == parameters_size(params)
    reader = Reader(data)
    decoded = {}
    while reader.remaining():
        key = reader.read_string()
        decoded[key] = reader.read_string()
    assert decoded == params


def test_int32_array_round_trip():
    writer = Writer()
    writer.write_int32_array([23, 25, -1])
    reader = Reader(writer.getvalue())
    assert reader.read_list(Reader.read_int32) == [23, 25, -1]
    assert reader.remaining() == 0


def test_empty_int32_array():
    writer = Writer()
    writer.write_int32_array([])
    assert Reader(writer.getvalue()).read_list(Reader.read_int32) == []


def test_write_bytes_prefixes_length():
    writer = Writer()
    writer.write_bytes(b"hello")
    reader = Reader(writer.getvalue())
    assert reader.read_int32() == len(b"hello")
    assert reader.read(5) == b"hello"


def test_read_past_end():
    reader = Reader(b"\x01\x02")
    assert reader.read(1) == b"\x01"
    assert reader.remaining() == 1
    with pytest.raises(EOFError):
        reader.read_int32()


def test_read_negative_count():
    with pytest.raises(ValueError):
        Reader(b"abc").read(-1)


def test_raw_write_appends():
    writer = Writer()
    writer.write(b"ab")
    writer.write(bytearray(b"cd"))
    assert writer.getvalue() == b"abcd"