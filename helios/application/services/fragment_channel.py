"""
Fragment channel.

Single-slot hand-off between an exchange task (producer) and the HTTP
response body (consumer). Once the consumer detaches, sends become no-ops so
the producer can keep draining the provider without blocking.

Dependencies: asyncio, helios.core.exceptions
System role: Caller-facing response channel for streamed model output
"""

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass

from helios.core.exceptions import StreamInterruptedError

_END = object()


@dataclass(frozen=True)
class _Failure:
    error: BaseException


class FragmentChannel:
    """
    Bounded queue of text fragments with a detach switch.

    At most one fragment is buffered between producer and consumer.
    """

    def __init__(self) -> None:
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=1)
        self._detached = False
        self._closed = False
        self.fragments_sent = 0

    @property
    def detached(self) -> bool:
        """True once the consumer has gone away."""
        return self._detached

    @property
    def closed(self) -> bool:
        """True once the producer has signalled the end of the stream."""
        return self._closed

    async def send(self, fragment: str) -> None:
        """Queue a fragment for the consumer; discarded if detached or closed."""
        if self._detached or self._closed:
            return
        await self._queue.put(fragment)
        self.fragments_sent += 1

    async def close(self, error: BaseException | None = None) -> None:
        """
        Signal end of stream.

        Args:
            error: When set, the consumer aborts the response instead of
                ending it cleanly
        """
        if self._closed:
            return
        self._closed = True
        if self._detached:
            return
        await self._queue.put(_Failure(error) if error is not None else _END)

    def abort(self, error: BaseException) -> None:
        """
        End the stream with an error without waiting for the consumer.

        Used when the producer is torn down; any buffered fragment is dropped
        so the failure marker always fits the slot.
        """
        self._closed = True
        if self._detached:
            return
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_Failure(error))

    def detach(self) -> None:
        """Mark the consumer as gone and release a producer blocked on put."""
        self._detached = True
        while not self._queue.empty():
            self._queue.get_nowait()

    async def stream(self) -> AsyncIterator[str]:
        """
        Consume fragments until the producer closes the channel.

        Yields:
            str: Fragments in the order they were sent

        Raises:
            StreamInterruptedError: If the producer closed with an error
        """
        try:
            while True:
                item = await self._queue.get()
                if item is _END:
                    return
                if isinstance(item, _Failure):
                    raise StreamInterruptedError(
                        "Model response stream was interrupted"
                    ) from item.error
                yield item
        finally:
            self.detach()
