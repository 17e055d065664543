"""
Chat service: the streaming orchestrator.

Drives one provider call per submitted message. Opening an exchange validates
the submission, loads the session once, assembles the provider request and
pulls the first fragment, so every failure up to that point is reported
before any byte reaches the caller. Running the exchange relays fragments in
emission order, accumulates the full answer, and commits the user and model
turns with a single store write after the stream ends.

Caller disconnects do not stop an exchange: the channel discards further
fragments while the provider stream is drained and the exchange committed.

Dependencies: sqlalchemy, helios.boundary, helios.core
System role: Streaming Orchestrator
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from helios.application.services.fragment_channel import FragmentChannel
from helios.application.services.title_service import TitleSynthesizer
from helios.boundary.db.CRUD.chat_session_crud import chat_session_crud
from helios.boundary.genai import ProviderClient
from helios.configs.gemini import GeminiSettings
from helios.core.conversation import (
    AttachmentMeta,
    Role,
    SubmittedAttachment,
    Turn,
    assemble_contents,
    validate_submission,
)
from helios.core.exceptions import PersistenceError, ProviderError, SessionNotFoundError
from helios.core.session_locks import SessionLockRegistry

logger = logging.getLogger(__name__)

# Strong references to in-flight exchange tasks
_running_exchanges: set[asyncio.Task] = set()


class ExchangeState(str, Enum):
    """Lifecycle of a single exchange."""

    IDLE = "idle"
    REQUESTING = "requesting"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ChatExchange:
    """
    State carried from opening an exchange to its commit.

    Attributes:
        session_id: Target session
        owner_id: Owner of the session
        model: Model identifier the stream was opened with
        title: Session title as loaded
        prior_turns: Turns present when the session was loaded
        prompt: Submitted prompt text
        attachments: Metadata of submitted files (payloads are not kept)
        fragments: Open provider stream
        first_fragment: First non-empty fragment, None if the stream ended empty
        state: Current lifecycle state
        text: Full accumulated answer once streaming has finished
        error: Failure that moved the exchange to FAILED, if any
    """

    session_id: UUID
    owner_id: str
    model: str
    title: str
    prior_turns: list[Turn]
    prompt: str
    attachments: tuple[AttachmentMeta, ...]
    fragments: AsyncIterator[str] | None = None
    first_fragment: str | None = None
    state: ExchangeState = ExchangeState.IDLE
    text: str = ""
    error: BaseException | None = field(default=None, repr=False)


class ChatService:
    """
    Streaming orchestrator for chat exchanges.

    Coordinates session loading, turn assembly, provider streaming, title
    synthesis and the final session commit.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        provider: ProviderClient,
        title_synthesizer: TitleSynthesizer,
        config: GeminiSettings,
        session_locks: SessionLockRegistry,
    ) -> None:
        """
        Initialize chat service.

        Args:
            session_factory: Factory for the load and commit database sessions
            provider: Generative provider client
            title_synthesizer: Title generator for first exchanges
            config: Provider settings (system instruction)
            session_locks: Per-session serialization registry
        """
        self.session_factory = session_factory
        self.provider = provider
        self.title_synthesizer = title_synthesizer
        self.config = config
        self.session_locks = session_locks

    async def open_exchange(
        self,
        session_id: UUID,
        owner_id: str,
        prompt: str,
        attachments: Sequence[SubmittedAttachment] = (),
    ) -> ChatExchange:
        """
        Validate, load, assemble and start the provider stream.

        Holds the session's lock on success; it is released when the exchange
        is run to completion or failure.

        Args:
            session_id: Target session UUID
            owner_id: Authenticated owner identifier
            prompt: Submitted prompt text
            attachments: Submitted files with payloads

        Returns:
            ChatExchange: Exchange in STREAMING state with its first fragment pulled

        Raises:
            ValidationError: If neither a prompt nor an attachment was submitted
            SessionNotFoundError: If the session does not exist for this owner
            PersistenceError: If the session could not be loaded
            ProviderError: If the provider failed before producing output
        """
        validate_submission(prompt, attachments)

        await self.session_locks.acquire(session_id)
        try:
            try:
                async with self.session_factory() as db:
                    record = await chat_session_crud.get_for_owner(db, session_id, owner_id)
            except SQLAlchemyError as e:
                logger.error(
                    f"{__name__}:open_exchange - Session load failed: {type(e).__name__}: {e}"
                )
                raise PersistenceError("Failed to load session", session_id=str(session_id)) from e

            if record is None:
                raise SessionNotFoundError(str(session_id))

            prior_turns = record.load_turns()
            contents = assemble_contents(prior_turns, prompt, attachments)
            exchange = ChatExchange(
                session_id=session_id,
                owner_id=owner_id,
                model=record.model,
                title=record.title,
                prior_turns=prior_turns,
                prompt=prompt,
                attachments=tuple(a.meta for a in attachments),
                state=ExchangeState.REQUESTING,
            )
            logger.info(
                f"{__name__}:open_exchange - Requesting model={exchange.model} "
                f"history_turns={len(prior_turns)} blocks={len(contents)} "
                f"attachments={len(attachments)}"
            )

            exchange.fragments = self.provider.stream_content(
                contents,
                model=exchange.model,
                system_instruction=self.config.system_instruction,
            )
            exchange.first_fragment = await self._pull_first_fragment(exchange)
            exchange.state = ExchangeState.STREAMING
            return exchange
        except BaseException:
            self.session_locks.release(session_id)
            raise

    async def run_exchange(self, exchange: ChatExchange, channel: FragmentChannel) -> ChatExchange:
        """
        Relay the stream to the channel, then persist the exchange.

        Never raises for provider or store failures; the outcome is recorded
        on ``exchange.state`` and the channel is closed accordingly.

        Args:
            exchange: Exchange returned by open_exchange
            channel: Caller-facing fragment channel

        Returns:
            ChatExchange: The same exchange in COMPLETED or FAILED state

        Raises:
            CancelledError: Re-raised after the channel is aborted, so an
                attached caller sees an interrupted stream
        """
        try:
            try:
                exchange.text = await self._relay(exchange, channel)
            except Exception as e:
                exchange.state = ExchangeState.FAILED
                exchange.error = e
                logger.error(
                    f"{__name__}:run_exchange - Stream failed after first byte, nothing persisted: "
                    f"{type(e).__name__}: {e}",
                    extra={"session_id": str(exchange.session_id)},
                )
                await channel.close(error=e)
                return exchange

            try:
                await self._commit(exchange)
            except Exception as e:
                exchange.state = ExchangeState.FAILED
                exchange.error = e
                logger.error(
                    f"{__name__}:run_exchange - Commit failed after full stream; "
                    f"exchange delivered but not recorded: {type(e).__name__}: {e}",
                    extra={
                        "session_id": str(exchange.session_id),
                        "answer_len": len(exchange.text),
                    },
                )
                await channel.close()
                return exchange

            exchange.state = ExchangeState.COMPLETED
            logger.info(
                f"{__name__}:run_exchange - Exchange committed answer_len={len(exchange.text)} "
                f"caller_detached={channel.detached}",
                extra={"session_id": str(exchange.session_id)},
            )
            await channel.close()
            return exchange
        except asyncio.CancelledError as e:
            if exchange.state is not ExchangeState.COMPLETED:
                exchange.state = ExchangeState.FAILED
                exchange.error = e
            logger.warning(
                f"{__name__}:run_exchange - Exchange cancelled in state={exchange.state.value}",
                extra={"session_id": str(exchange.session_id)},
            )
            channel.abort(e)
            raise
        finally:
            self.session_locks.release(exchange.session_id)

    def start_exchange(self, exchange: ChatExchange) -> FragmentChannel:
        """
        Run an opened exchange in its own task.

        The task is independent of the HTTP response so a caller disconnect
        cannot cancel the drain and commit.

        Returns:
            FragmentChannel: Channel the response body reads from
        """
        channel = FragmentChannel()
        task = asyncio.create_task(self.run_exchange(exchange, channel))
        _running_exchanges.add(task)
        task.add_done_callback(_running_exchanges.discard)
        return channel

    async def _pull_first_fragment(self, exchange: ChatExchange) -> str | None:
        try:
            async for fragment in exchange.fragments:
                if fragment:
                    return fragment
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(
                f"Provider call failed: {e}", model=exchange.model
            ) from e
        return None

    async def _relay(self, exchange: ChatExchange, channel: FragmentChannel) -> str:
        if exchange.first_fragment is None:
            return ""

        accumulated = [exchange.first_fragment]
        await channel.send(exchange.first_fragment)
        async for fragment in exchange.fragments:
            if not fragment:
                continue
            accumulated.append(fragment)
            await channel.send(fragment)
        return "".join(accumulated)

    async def _commit(self, exchange: ChatExchange) -> None:
        turns = list(exchange.prior_turns)
        turns.append(
            Turn(role=Role.USER, content=exchange.prompt, attachments=exchange.attachments)
        )

        title = exchange.title
        if not exchange.prior_turns:
            title = await self.title_synthesizer.synthesize(exchange.prompt)

        turns.append(Turn(role=Role.MODEL, content=exchange.text))

        try:
            async with self.session_factory() as db:
                updated = await chat_session_crud.replace_turns(
                    db,
                    exchange.session_id,
                    exchange.owner_id,
                    turns,
                    title,
                )
                if updated is None:
                    raise SessionNotFoundError(str(exchange.session_id))
                await db.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(
                "Failed to commit exchange", session_id=str(exchange.session_id)
            ) from e


async def drain_running_exchanges(timeout: float) -> None:
    """
    Wait for in-flight exchanges to finish their drain and commit.

    Exchanges still running after ``timeout`` seconds are cancelled; their
    callers see an interrupted stream and nothing is persisted for them.

    Args:
        timeout: Seconds to wait before cancelling
    """
    tasks = list(_running_exchanges)
    if not tasks:
        return

    logger.info(f"{__name__}:drain_running_exchanges - Waiting for {len(tasks)} exchange(s)")
    _, pending = await asyncio.wait(tasks, timeout=timeout)
    if not pending:
        return

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)
    logger.warning(
        f"{__name__}:drain_running_exchanges - Cancelled {len(pending)} exchange(s) "
        f"still running after {timeout}s"
    )
