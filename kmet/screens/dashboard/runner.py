"""Effect runner - performs the presenter's asynchronous work.

Every effect becomes an asyncio task. Outcomes are reported back through
``post`` as dashboard events; the runner never touches dashboard state.
Each log subscription gets its own channel so lines from a cancelled
subscription can never be posted under a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from kmet.constants.enums import ViewMode
from kmet.controllers.base import (
    LogSource,
    LogStream,
    MetricsSource,
    ProviderError,
    StreamReadError,
)
from kmet.screens.dashboard.events import (
    CancelLogStream,
    DashboardEvent,
    Effect,
    FetchNamespaces,
    LogLineReceived,
    LogStreamEnded,
    LogStreamFailed,
    NamespacesFailed,
    NamespacesLoaded,
    Poll,
    PollFailed,
    PollSucceeded,
    Quit,
    ReadNextLogLine,
    ScheduleTick,
    StartLogStream,
    Tick,
)

logger = logging.getLogger(__name__)

Post = Callable[[DashboardEvent], None]


@dataclass
class _LogChannel:
    sub_id: int
    stream: LogStream | None = None
    reader: asyncio.Task[None] | None = None
    cancelled: bool = False


class EffectRunner:
    """Runs presenter effects against a metrics and a log provider."""

    def __init__(
        self,
        metrics: MetricsSource,
        logs: LogSource,
        post: Post,
        *,
        on_quit: Callable[[], None] | None = None,
    ) -> None:
        self._metrics = metrics
        self._logs = logs
        self._post = post
        self._on_quit = on_quit
        self._tasks: set[asyncio.Task[Any]] = set()
        self._channels: dict[int, _LogChannel] = {}
        self._closed = False

    def run(self, effects: list[Effect]) -> None:
        """Start every effect in order."""
        for effect in effects:
            self.run_one(effect)

    def run_one(self, effect: Effect) -> None:
        if self._closed:
            return
        if isinstance(effect, Poll):
            self._spawn(self._poll(effect), f"poll-{effect.seq}")
        elif isinstance(effect, FetchNamespaces):
            self._spawn(self._fetch_namespaces(), "namespaces")
        elif isinstance(effect, ScheduleTick):
            self._spawn(self._tick_after(effect.delay), "tick")
        elif isinstance(effect, StartLogStream):
            channel = _LogChannel(effect.sub_id)
            self._channels[effect.sub_id] = channel
            self._spawn(self._start_stream(channel, effect), f"logs-{effect.sub_id}")
        elif isinstance(effect, ReadNextLogLine):
            channel = self._channels.get(effect.sub_id)
            if channel is not None and not channel.cancelled:
                channel.reader = self._spawn(self._read_one(channel), f"logs-{effect.sub_id}")
        elif isinstance(effect, CancelLogStream):
            self._cancel_channel(effect.sub_id)
        elif isinstance(effect, Quit):
            self.shutdown()
            if self._on_quit is not None:
                self._on_quit()
        else:
            logger.debug("Ignoring unknown effect %r", effect)

    def shutdown(self) -> None:
        """Cancel every stream and pending task."""
        self._closed = True
        for sub_id in list(self._channels):
            self._cancel_channel(sub_id)
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    @property
    def active_channels(self) -> list[int]:
        return sorted(self._channels)

    # ------------------------------------------------------------------
    # Task plumbing
    # ------------------------------------------------------------------

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task[None]:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _emit(self, event: DashboardEvent) -> None:
        if not self._closed:
            self._post(event)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    async def _poll(self, effect: Poll) -> None:
        namespace = effect.scope.provider_value
        try:
            if effect.view is ViewMode.PODS:
                rows: tuple = tuple(
                    await self._metrics.list_pods(namespace, effect.label_selector)
                )
            else:
                rows = tuple(await self._metrics.list_nodes())
        except ProviderError as e:
            logger.warning("Poll #%d (%s) failed: %s", effect.seq, effect.view.value, e)
            self._emit(PollFailed(effect.seq, effect.view, effect.scope, str(e)))
            return
        except Exception as e:
            logger.exception("Unexpected error in poll #%d", effect.seq)
            self._emit(PollFailed(effect.seq, effect.view, effect.scope, f"internal error: {e}"))
            return
        logger.debug("Poll #%d (%s) returned %d rows", effect.seq, effect.view.value, len(rows))
        self._emit(PollSucceeded(effect.seq, effect.view, effect.scope, rows))

    async def _fetch_namespaces(self) -> None:
        try:
            names = await self._metrics.list_namespaces()
        except ProviderError as e:
            logger.warning("Namespace listing failed: %s", e)
            self._emit(NamespacesFailed(str(e)))
            return
        except Exception as e:
            logger.exception("Unexpected error listing namespaces")
            self._emit(NamespacesFailed(f"internal error: {e}"))
            return
        self._emit(NamespacesLoaded(tuple(names)))

    async def _tick_after(self, delay: float) -> None:
        await asyncio.sleep(max(0.0, delay))
        self._emit(Tick())

    # ------------------------------------------------------------------
    # Log streams
    # ------------------------------------------------------------------

    async def _start_stream(self, channel: _LogChannel, effect: StartLogStream) -> None:
        try:
            stream = await self._logs.stream_logs(effect.target)
        except Exception as e:
            if isinstance(e, ProviderError):
                logger.warning("Could not open logs for %s: %s", effect.target.label, e)
            else:
                logger.exception("Unexpected error opening logs for %s", effect.target.label)
            if not channel.cancelled:
                self._channels.pop(channel.sub_id, None)
                self._emit(LogStreamFailed(channel.sub_id, str(e)))
            return

        if channel.cancelled:
            # Cancelled while opening.
            stream.cancel()
            return
        channel.stream = stream
        logger.info("Streaming logs for %s (sub %d)", effect.target.label, channel.sub_id)
        await self._read_one(channel)

    async def _read_one(self, channel: _LogChannel) -> None:
        stream = channel.stream
        if stream is None or channel.cancelled:
            return
        try:
            line = await stream.read_line()
        except StreamReadError as e:
            logger.warning("Log stream %d read failed: %s", channel.sub_id, e)
            line = None
        except Exception:
            logger.exception("Unexpected error reading log stream %d", channel.sub_id)
            line = None
        if channel.cancelled:
            return
        if line is None:
            self._emit(LogStreamEnded(channel.sub_id))
            return
        self._emit(LogLineReceived(channel.sub_id, line))

    def _cancel_channel(self, sub_id: int) -> None:
        channel = self._channels.pop(sub_id, None)
        if channel is None or channel.cancelled:
            return
        channel.cancelled = True
        if channel.reader is not None and not channel.reader.done():
            channel.reader.cancel()
        if channel.stream is not None:
            channel.stream.cancel()
        logger.debug("Log channel %d cancelled", sub_id)


__all__ = [
    "EffectRunner",
    "Post",
]
