"""Channels that deliver LISTEN/NOTIFY payloads to waiting tasks."""

from __future__ import annotations

import asyncio
import weakref
from typing import Any, Optional


class Channel:
    """A notification channel: tasks wait on it for the next payload."""

    def __init__(self, name: str, connection: Any = None) -> None:
        self.name = name
        self._connection: Optional[weakref.ref] = (
            weakref.ref(connection) if connection is not None else None
        )
        self._ignored: set[int] = set()
        self._waiters: list[asyncio.Future[str]] = []

    def close(self) -> None:
        """Cancel every task waiting on the channel."""
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.cancel()

    def ignore(self, pid: int) -> None:
        """Drop notifications sent by the backend with this process ID."""
        self._ignored.add(pid)

    def unignore(self, pid: int) -> None:
        self._ignored.discard(pid)

    async def listen(self) -> str:
        """Wait for the next notification and return its payload."""
        waiter: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            return await waiter
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)

    def notify(self, payload: str, pid: int) -> None:
        """Deliver a payload to every waiting task unless the sender is ignored."""
        if pid in self._ignored:
            return
        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(payload)

    def detach(self) -> None:
        """Stop listening on the connection, if it is still alive."""
        if self._connection is None:
            return
        connection = self._connection()
        self._connection = None
        if connection is not None:
            connection.unlisten(self.name)

    def __repr__(self) -> str:
        return f"Channel({self.name!r})"