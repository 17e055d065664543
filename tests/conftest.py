"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database, session factory, provider fakes, settings
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from collections.abc import AsyncIterator, Callable, Sequence

import pytest

from helios.configs.gemini import GeminiSettings


class ScriptedProvider:
    """
    Provider fake that replays a fixed fragment script.

    ``fragments`` may contain Exception instances; each one is raised at the
    point it appears in the script. ``open_error`` is raised on the first pull,
    before any fragment.
    """

    def __init__(
        self,
        fragments: Sequence[object] = (),
        open_error: Exception | None = None,
        title: str | Exception = "Greeting Exchange",
    ) -> None:
        self.fragments = list(fragments)
        self.open_error = open_error
        self.title = title
        self.stream_calls: list[dict] = []
        self.title_calls: list[dict] = []
        self.fragments_pulled = 0

    async def stream_content(self, contents, model: str, system_instruction: str) -> AsyncIterator[str]:
        self.stream_calls.append(
            {"contents": list(contents), "model": model, "system_instruction": system_instruction}
        )
        if self.open_error is not None:
            raise self.open_error
        for item in self.fragments:
            if isinstance(item, Exception):
                raise item
            self.fragments_pulled += 1
            yield item

    async def generate_text(self, prompt: str, model: str) -> str:
        self.title_calls.append({"prompt": prompt, "model": model})
        if isinstance(self.title, Exception):
            raise self.title
        return self.title


@pytest.fixture
def gemini_settings() -> GeminiSettings:
    """Provide provider settings with test values."""
    return GeminiSettings(
        api_key="test-key",
        default_model="gemini-2.5-flash",
        allowed_models=["gemini-2.5-flash", "gemini-2.5-pro"],
        title_model="gemini-2.5-flash",
        system_instruction="You are a test assistant.",
        default_title="New Chat",
        fallback_title="Untitled Chat",
    )


@pytest.fixture
def make_provider() -> Callable[..., ScriptedProvider]:
    """Provide a factory for scripted provider fakes."""
    return ScriptedProvider


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine shared by every session opened in the test
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    from helios.boundary.db.base import Base

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Provide a session factory bound to the in-memory engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create in-memory SQLite async database session for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()
