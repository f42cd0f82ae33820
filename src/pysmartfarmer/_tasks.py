"""Bookkeeping for outstanding device requests.

Each request runs as its own task, registered under the identity of the
request so it can be cancelled on its own or together with all others.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any, TypeVar

from pysmartfarmer.state.events import RequestChannel

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RequestKey:
    """Identity of one outstanding request."""

    channel: RequestChannel
    sequence: int

    def __str__(self) -> str:
        return f"{self.channel}#{self.sequence}"


class RequestTracker:
    """Registry of in-flight request tasks keyed by :class:`RequestKey`."""

    def __init__(self) -> None:
        self._tasks: dict[RequestKey, asyncio.Task[Any]] = {}

    def spawn(self, key: RequestKey, coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
        """Run *coro* as an independent task registered under *key*."""
        task = asyncio.get_running_loop().create_task(coro, name=f"pysmartfarmer-{key}")
        self._tasks[key] = task
        task.add_done_callback(lambda t: self._on_done(key, t))
        return task

    def _on_done(self, key: RequestKey, task: asyncio.Task[Any]) -> None:
        if self._tasks.get(key) is task:
            del self._tasks[key]
        if task.cancelled():
            _logger.debug("Request %s cancelled", key)
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Request %s failed unexpectedly", key, exc_info=exc)

    def pending(self) -> list[RequestKey]:
        return list(self._tasks)

    def cancel(self, key: RequestKey) -> bool:
        """Cancel one request; returns ``False`` if it is no longer outstanding."""
        task = self._tasks.get(key)
        if task is None or task.done():
            return False
        return task.cancel()

    def cancel_all(self) -> None:
        for task in list(self._tasks.values()):
            if not task.done():
                task.cancel()

    async def drain(self) -> None:
        """Wait until every currently outstanding request has finished."""
        tasks = list(self._tasks.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def __len__(self) -> int:
        return len(self._tasks)
