"""In-process output sink between a relay task and the HTTP response body."""

import asyncio
from typing import AsyncIterator

from ..logging_config import get_logger

logger = get_logger(__name__)

_END_OF_STREAM = object()


class SinkClosedError(Exception):
    """Raised when writing to or closing a sink that can no longer accept data."""


class StreamSink:
    """Ordered queue of encoded chunks consumed by a streaming response.

    The writer side (the relay) calls :meth:`write` and finally :meth:`close`.
    The reader side iterates the sink; when the reader stops early, e.g. the
    client disconnected, the sink is detached and later writes fail.
    """

    def __init__(self) -> None:
        self._queue: "asyncio.Queue[object]" = asyncio.Queue()
        self._closed = False
        self._detached = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def detached(self) -> bool:
        return self._detached

    async def write(self, chunk: str) -> None:
        if self._detached:
            raise SinkClosedError("Client disconnected")
        if self._closed:
            raise SinkClosedError("Stream already closed")
        await self._queue.put(chunk)

    async def close(self) -> None:
        if self._closed:
            raise SinkClosedError("Stream already closed")
        self._closed = True
        if self._detached:
            raise SinkClosedError("Client disconnected before stream was closed")
        await self._queue.put(_END_OF_STREAM)

    def detach(self) -> None:
        """Mark the reader as gone."""
        if not self._detached:
            logger.debug("Stream reader detached")
        self._detached = True

    async def __aiter__(self) -> AsyncIterator[str]:
        try:
            while True:
                chunk = await self._queue.get()
                if chunk is _END_OF_STREAM:
                    return
                yield chunk
        finally:
            if not self._closed:
                self.detach()
