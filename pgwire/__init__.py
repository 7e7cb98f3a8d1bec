"""Codecs, SQL types, result objects and notification channels for the PostgreSQL wire protocol."""

__version__ = "0.1.0"

__all__ = ["wire", "errors", "result", "channel", "sqltypes", "protocol"]