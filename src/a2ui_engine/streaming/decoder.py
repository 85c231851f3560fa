"""
Streaming Line Decoder
Turns an incremental text/byte stream into newline-delimited candidate lines.
"""

import asyncio
import codecs
import time
from collections.abc import AsyncIterator, Iterable
from typing import AsyncGenerator, Callable, Generator, Union

from ..core.errors import IdleTimeout
from ..core.logging_config import get_logger

logger = get_logger(__name__)

Fragment = Union[str, bytes]

FENCE_MARKER = "```"


def is_fence(line: str) -> bool:
    """Markdown code fences (```json, ```) are formatting noise, not messages."""
    return line.startswith(FENCE_MARKER)


class LineDecoder:
    """Buffers fragments and splits complete lines off the front."""

    def __init__(self) -> None:
        self.buffer = ""
        self.lines_decoded = 0
        self.fences_dropped = 0
        self.blanks_dropped = 0
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def feed(self, fragment: Fragment) -> list[str]:
        """
        Add a fragment, return every line it completed.

        Args:
            fragment: Text or UTF-8 bytes; multi-byte sequences may be split
                across fragments

        Returns:
            Complete candidate lines, trimmed, in arrival order
        """
        if isinstance(fragment, bytes):
            fragment = self._utf8.decode(fragment)
        self.buffer += fragment
        parts = self.buffer.split("\n")
        self.buffer = parts.pop()
        return self._keep(parts)

    def finish(self) -> list[str]:
        """Flush the partial final line at natural stream end."""
        self.buffer += self._utf8.decode(b"", final=True)
        remaining, self.buffer = self.buffer, ""
        return self._keep([remaining]) if remaining.strip() else []

    def _keep(self, parts: list[str]) -> list[str]:
        lines = []
        for part in parts:
            line = part.strip()
            if not line:
                self.blanks_dropped += 1
                continue
            if is_fence(line):
                self.fences_dropped += 1
                logger.debug("fence_dropped", marker=line[:16])
                continue
            self.lines_decoded += 1
            lines.append(line)
        return lines


class StreamDecoder:
    """
    Async line decoder with an idle timer.

    The timer is armed before the first fragment and rearmed after every
    fragment. When it elapses the source is closed and ``IdleTimeout`` is
    raised; nothing buffered is emitted afterwards.
    """

    def __init__(self, idle_timeout: float = 30.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.idle_timeout = idle_timeout
        self.clock = clock
        self.lines = LineDecoder()
        self.fragments = 0
        self.time_to_first_line: float | None = None
        self.timed_out = False

    @property
    def lines_decoded(self) -> int:
        return self.lines.lines_decoded

    async def decode(self, source: AsyncIterator[Fragment]) -> AsyncGenerator[str, None]:
        """
        Yield candidate lines from an async fragment source.

        Args:
            source: Async iterator of text or byte fragments

        Yields:
            Complete, non-blank, non-fence lines

        Raises:
            IdleTimeout: If no fragment arrives within ``idle_timeout`` seconds
        """
        started = self.clock()
        iterator = source.__aiter__()
        logger.info("stream_started", idle_timeout=self.idle_timeout)

        while True:
            try:
                fragment = await asyncio.wait_for(iterator.__anext__(), timeout=self.idle_timeout)
            except StopAsyncIteration:
                break
            except asyncio.TimeoutError:
                self.timed_out = True
                await _close(iterator)
                logger.error(
                    "stream_idle_timeout",
                    timeout=self.idle_timeout,
                    fragments=self.fragments,
                    lines=self.lines_decoded,
                )
                raise IdleTimeout(self.idle_timeout, lines_decoded=self.lines_decoded) from None

            self.fragments += 1
            for line in self.lines.feed(fragment):
                self._mark_first(started)
                yield line

        for line in self.lines.finish():
            self._mark_first(started)
            yield line

        self._complete(started)

    def _mark_first(self, started: float) -> None:
        if self.time_to_first_line is None:
            self.time_to_first_line = self.clock() - started
            logger.info("first_line", elapsed=round(self.time_to_first_line, 3))

    def _complete(self, started: float) -> None:
        if self.lines_decoded == 0:
            logger.warning(
                "stream_no_candidates",
                fragments=self.fragments,
                fences=self.lines.fences_dropped,
                blanks=self.lines.blanks_dropped,
            )
        logger.info(
            "stream_complete",
            lines=self.lines_decoded,
            fragments=self.fragments,
            duration=round(self.clock() - started, 3),
        )


async def _close(iterator: AsyncIterator[Fragment]) -> None:
    aclose = getattr(iterator, "aclose", None)
    if aclose is not None:
        await aclose()


async def decode_lines(
    source: AsyncIterator[Fragment],
    idle_timeout: float = 30.0,
) -> AsyncGenerator[str, None]:
    """
    Decode candidate lines from an async stream.

    Args:
        source: Async fragment stream
        idle_timeout: Seconds to wait for each fragment

    Yields:
        Candidate lines
    """
    decoder = StreamDecoder(idle_timeout)
    async for line in decoder.decode(source):
        yield line


def decode_lines_sync(source: Iterable[Fragment]) -> Generator[str, None, None]:
    """
    Decode candidate lines from a sync stream (no idle timer).

    Args:
        source: Fragment iterable, e.g. an open file

    Yields:
        Candidate lines
    """
    decoder = LineDecoder()
    for fragment in source:
        yield from decoder.feed(fragment)
    yield from decoder.finish()


__all__ = ["LineDecoder", "StreamDecoder", "decode_lines", "decode_lines_sync", "is_fence"]
