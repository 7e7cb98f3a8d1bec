# pgwire

Pure-Python building blocks for the PostgreSQL frontend/backend wire protocol.
It has no runtime dependencies.

## What it provides

- `pgwire.wire`: a `Reader` over a buffer of bytes and a `Writer` that
  accumulates bytes, for the protocol's primitives: big-endian integers
  (8, 16, 32 and 64 bits), single type-code bytes, null-terminated strings,
  message headers (`Header`), notifications (`Notification`), parameter lists,
  int16-counted lists and int32 length-prefixed byte strings. `Reader` raises
  `EOFError` when the buffer runs out. `string_size` and `parameters_size`
  give encoded sizes.
- `pgwire.errors`: the exception hierarchy (`PgError`, `BrokenConnection`,
  `UnexpectedData`, `BadConversion`, `UnexpectedMessage`, `SqlError`).
  `decode_error_fields` reads an ErrorResponse or NoticeResponse body into
  `ErrorFields`; `format_error` renders it as a severity and message line
  followed by any `QUERY`, `CONTEXT`, `DETAIL` and `HINT` lines.
  `SqlError.sqlstate(code)` tells whether the error carries a SQLSTATE.
- `pgwire.result`: `Column`, `Field`, `Row` and `Result` for query results,
  and `decode_column` and `decode_field_data` for RowDescription and DataRow
  payloads. A `Row` can be indexed by position or by column name; an unknown
  name raises `PgError`.
- `pgwire.channel`: `Channel`, an asyncio notification channel for
  LISTEN/NOTIFY. Tasks `await channel.listen()` for the next payload,
  `notify` delivers one unless the sender's PID is ignored, and `close`
  cancels every waiting task.
- `pgwire.sqltypes`: binary encoders and decoders for `bool`, `int2`, `int4`,
  `int8`, `text`, `bytea`, `jsonb` and `uuid`, the `SqlType` descriptions
  `BOOL`, `INT2`, `INT4`, `INT8`, `TEXT`, `BYTEA`, `JSONB` and `UUID`
  (`SqlType.optional()` gives a variant that accepts NULL), and
  `encode_parameter` and `read_value` for length-prefixed values with NULL
  handling.
- `pgwire.protocol`: message framing through `message`, `bind_message` and
  `execute_message`; helpers for the queries a client issues itself
  (`function_query`, `oid_query`); `connection_label`; and the `Format` and
  `TransactionStatus` enumerations.

## Installation

```
pip install .
```

## Example

```python
from pgwire.protocol import Format, bind_message, execute_message
from pgwire.sqltypes import INT4, TEXT, decode_int, encode_int
from pgwire.wire import Reader, Writer

# Build Bind and Execute messages for the unnamed portal and statement.
bind = bind_message("", "", Format.BINARY, [(42, INT4), ("hello", TEXT)])
execute = execute_message("", 0)

# Read primitives back.
writer = Writer()
writer.write_int32(7)
writer.write_string("hello")
reader = Reader(writer.getvalue())
assert reader.read_int32() == 7
assert reader.read_string() == "hello"

assert decode_int(encode_int(100, 2), 2) == 100
```

## What it does not do

The package builds and parses protocol data held in memory. It does not open
network connections, perform startup or authentication, run queries or
manage transactions, and it has no command-line tool. Those are left to the
code that uses it.

## Running the tests

```
pip install ".[test]"
pytest
```