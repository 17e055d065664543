"""
Test suite for FragmentChannel.

System role: Verification of the producer/consumer hand-off for streamed output
"""

import asyncio

import pytest

from helios.application.services.fragment_channel import FragmentChannel
from helios.core.exceptions import StreamInterruptedError


async def _collect(channel: FragmentChannel) -> list[str]:
    return [fragment async for fragment in channel.stream()]


class TestFragmentChannel:
    """Test suite for FragmentChannel."""

    async def test_stream_should_yield_fragments_in_send_order(self) -> None:
        """Test fragments arrive in order and the stream ends on close."""
        # Arrange
        channel = FragmentChannel()

        async def produce() -> None:
            for fragment in ["a", "b", "c"]:
                await channel.send(fragment)
            await channel.close()

        # Act
        producer = asyncio.create_task(produce())
        received = await _collect(channel)
        await producer

        # Assert
        assert received == ["a", "b", "c"]
        assert channel.fragments_sent == 3

    async def test_close_with_error_should_interrupt_stream(self) -> None:
        """Test a failed producer aborts the consumer after delivered fragments."""
        # Arrange
        channel = FragmentChannel()
        received: list[str] = []
        cause = RuntimeError("provider dropped")

        async def produce() -> None:
            await channel.send("partial")
            await channel.close(error=cause)

        producer = asyncio.create_task(produce())

        # Act
        with pytest.raises(StreamInterruptedError) as exc_info:
            async for fragment in channel.stream():
                received.append(fragment)
        await producer

        # Assert
        assert received == ["partial"]
        assert exc_info.value.__cause__ is cause

    async def test_send_after_detach_should_not_block(self) -> None:
        """Test a detached channel discards fragments without waiting."""
        # Arrange
        channel = FragmentChannel()
        channel.detach()

        # Act
        for i in range(10):
            await asyncio.wait_for(channel.send(str(i)), timeout=1)
        await asyncio.wait_for(channel.close(), timeout=1)

        # Assert
        assert channel.detached
        assert channel.fragments_sent == 0

    async def test_detach_should_release_blocked_producer(self) -> None:
        """Test detaching frees a producer waiting on a full slot."""
        # Arrange
        channel = FragmentChannel()
        await channel.send("fills the slot")
        blocked = asyncio.create_task(channel.send("waiting"))
        await asyncio.sleep(0)
        assert not blocked.done()

        # Act
        channel.detach()
        await asyncio.wait_for(blocked, timeout=1)

        # Assert
        assert blocked.done()

    async def test_consumer_stopping_early_should_detach(self) -> None:
        """Test closing the response body detaches the channel."""
        # Arrange
        channel = FragmentChannel()
        await channel.send("first")
        stream = channel.stream()

        # Act
        first = await stream.__anext__()
        await stream.aclose()

        # Assert
        assert first == "first"
        assert channel.detached

    async def test_abort_should_replace_buffered_fragment_with_failure(self) -> None:
        """Test a torn-down producer interrupts a consumer without blocking."""
        # Arrange
        channel = FragmentChannel()
        await channel.send("buffered")
        cause = asyncio.CancelledError()

        # Act
        channel.abort(cause)

        # Assert
        assert channel.closed
        with pytest.raises(StreamInterruptedError) as exc_info:
            await asyncio.wait_for(_collect(channel), timeout=1)
        assert exc_info.value.__cause__ is cause

    async def test_abort_after_detach_should_be_silent(self) -> None:
        """Test aborting a channel nobody reads does nothing further."""
        channel = FragmentChannel()
        channel.detach()

        channel.abort(RuntimeError("shutdown"))

        assert channel.closed
        assert channel.detached
