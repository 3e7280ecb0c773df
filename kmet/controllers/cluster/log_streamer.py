"""Follow-mode kubectl processes exposed as LogStream handles."""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Callable
from contextlib import suppress
from datetime import datetime

from kmet.constants.enums import LogLevel
from kmet.constants.timeouts import LOG_PROCESS_TERMINATE_TIMEOUT
from kmet.controllers.base.errors import StreamStartError
from kmet.controllers.base.log_stream import Emit, LogStream, QueueLogStream
from kmet.models.core.logs import LogLine

logger = logging.getLogger(__name__)

LineParser = Callable[[str], LogLine | None]

# "[pod/api-7cf/api] message" as printed by kubectl logs --prefix
_PREFIX_RE = re.compile(r"^\[(?:pod/)?(?P<source>[^\]]+)\]\s?(?P<text>.*)$")


def plain_line_parser(source: str) -> LineParser:
    """Parser for single-container output: level guessed from the text."""

    def parse(raw: str) -> LogLine | None:
        text = raw.rstrip("\r\n")
        if not text:
            return None
        return LogLine(
            timestamp=datetime.now(),
            level=LogLevel.from_text(text),
            text=text,
            source=source,
        )

    return parse


def prefixed_line_parser(fallback_source: str) -> LineParser:
    """Parser for ``--prefix`` output; the prefix becomes the line source."""

    def parse(raw: str) -> LogLine | None:
        text = raw.rstrip("\r\n")
        if not text:
            return None
        source = fallback_source
        match = _PREFIX_RE.match(text)
        if match:
            source, text = match.group("source"), match.group("text")
        return LogLine(
            timestamp=datetime.now(),
            level=LogLevel.from_text(text),
            text=text,
            source=source,
        )

    return parse


async def terminate_process(process: asyncio.subprocess.Process) -> None:
    """Stop a kubectl process, escalating to kill after a grace period."""
    if process.returncode is not None:
        return
    with suppress(ProcessLookupError):
        process.terminate()
    try:
        await asyncio.wait_for(process.wait(), timeout=LOG_PROCESS_TERMINATE_TIMEOUT)
    except asyncio.TimeoutError:
        with suppress(ProcessLookupError):
            process.kill()
        await process.wait()


async def open_process_stream(
    cmd: list[str], parse: LineParser, *, name: str
) -> LogStream:
    """Spawn ``cmd`` and stream its stdout lines through ``parse``.

    A nonzero exit status is surfaced as a final ERROR line carrying
    kubectl's stderr before the stream ends.

    Raises:
        StreamStartError: the process could not be spawned.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise StreamStartError(f"cannot start {cmd[0]}: {e}") from e

    logger.debug("Started log process %s (pid %s)", name, process.pid)

    async def produce(emit: Emit) -> None:
        try:
            if process.stdout is not None:
                while True:
                    raw = await process.stdout.readline()
                    if not raw:
                        break
                    line = parse(raw.decode("utf-8", errors="replace"))
                    if line is not None:
                        await emit(line)
            stderr = await process.stderr.read() if process.stderr is not None else b""
            returncode = await process.wait()
            if returncode != 0:
                message = stderr.decode("utf-8", errors="replace").strip()
                await emit(
                    LogLine(
                        timestamp=datetime.now(),
                        level=LogLevel.ERROR,
                        text=message or f"kubectl exited with status {returncode}",
                        source="kubectl",
                    )
                )
        finally:
            await terminate_process(process)
            logger.debug("Log process %s finished", name)

    def kill_if_running() -> None:
        # The producer may never have started, so the process is stopped here too.
        if process.returncode is None:
            with suppress(ProcessLookupError):
                process.kill()

    return QueueLogStream(produce, name=name, on_cancel=kill_if_running)


__all__ = [
    "LineParser",
    "open_process_stream",
    "plain_line_parser",
    "prefixed_line_parser",
    "terminate_process",
]
