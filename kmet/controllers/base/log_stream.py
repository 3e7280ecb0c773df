"""Pull-based, cancellable log stream handles."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from kmet.controllers.base.errors import StreamReadError
from kmet.models.core.logs import LogLine

logger = logging.getLogger(__name__)

Emit = Callable[[LogLine], Awaitable[None]]
Producer = Callable[[Emit], Awaitable[None]]

_EOF = object()


class LogStream(ABC):
    """Handle for one log subscription.

    Consumers pull one line at a time with ``read_line``; ``None`` marks the
    end of the stream. ``cancel`` stops the producer and is idempotent.
    """

    @abstractmethod
    async def read_line(self) -> LogLine | None:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...

    @property
    @abstractmethod
    def closed(self) -> bool:
        ...


class QueueLogStream(LogStream):
    """LogStream fed by a producer coroutine through a bounded queue.

    The producer receives an ``emit`` coroutine and runs as its own task;
    when the queue is full it blocks, so a slow reader throttles the
    producer. When the producer returns, the stream ends. When it raises,
    buffered lines are still delivered and then ``read_line`` raises
    ``StreamReadError``.
    """

    MAX_PENDING_LINES = 512

    def __init__(
        self,
        producer: Producer,
        *,
        name: str = "log-stream",
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=self.MAX_PENDING_LINES)
        self._cancelled = False
        self._finished = False
        self._error: BaseException | None = None
        self._name = name
        self._on_cancel = on_cancel
        self._task = asyncio.create_task(self._run(producer), name=name)

    async def _run(self, producer: Producer) -> None:
        try:
            await producer(self._queue.put)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.debug("Log producer %s failed: %s", self._name, e)
            self._error = e
        if not self._cancelled:
            await self._queue.put(_EOF)

    async def read_line(self) -> LogLine | None:
        if self._cancelled or self._finished:
            return None
        item = await self._queue.get()
        if item is _EOF:
            self._finished = True
            if self._error is not None and not self._cancelled:
                raise StreamReadError(str(self._error)) from self._error
            return None
        return item  # type: ignore[return-value]

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if not self._task.done():
            self._task.cancel()
        if self._on_cancel is not None:
            self._on_cancel()
        while not self._queue.empty():
            self._queue.get_nowait()
        # Wake a reader blocked in read_line().
        self._queue.put_nowait(_EOF)
        logger.debug("Log stream %s cancelled", self._name)

    @property
    def closed(self) -> bool:
        return self._cancelled or self._finished

    @property
    def cancelled(self) -> bool:
        return self._cancelled


__all__ = [
    "Emit",
    "LogStream",
    "Producer",
    "QueueLogStream",
]
