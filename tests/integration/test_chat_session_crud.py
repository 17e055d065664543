"""
Test suite for ChatSessionCRUD against an in-memory SQLite database.

Covers owner scoping, listing order, turn document round trips, rename and
delete.

System role: Verification of session persistence layer
"""

import uuid

import pytest

from helios.boundary.db.CRUD.chat_session_crud import ChatSessionCRUD, chat_session_crud
from helios.boundary.db.models.chat_session_model import ChatSessionModel
from helios.core.conversation import AttachmentMeta, Role, Turn

OWNER = "owner-a"
OTHER = "owner-b"


class TestChatSessionCRUDInit:
    """Test suite for ChatSessionCRUD initialization."""

    def test_init_should_set_model_to_chat_session_model(self) -> None:
        """Test ChatSessionCRUD operates on ChatSessionModel."""
        assert ChatSessionCRUD().model is ChatSessionModel


class TestCreateAndGet:
    """Test suite for create and owner-scoped get."""

    async def test_create_should_start_empty(self, test_async_db) -> None:
        """Test new sessions have no turns and generated fields."""
        # Act
        record = await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="New Chat", model="gemini-2.5-flash"
        )

        # Assert
        assert isinstance(record.id, uuid.UUID)
        assert record.turns == []
        assert record.title == "New Chat"
        assert record.created_at is not None

    async def test_get_should_be_scoped_to_owner(self, test_async_db) -> None:
        """Test another owner cannot see the session."""
        # Arrange
        record = await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="New Chat", model="gemini-2.5-flash"
        )

        # Act
        own = await chat_session_crud.get_for_owner(test_async_db, record.id, OWNER)
        foreign = await chat_session_crud.get_for_owner(test_async_db, record.id, OTHER)

        # Assert
        assert own is not None and own.id == record.id
        assert foreign is None


class TestReplaceTurns:
    """Test suite for the single-write exchange commit."""

    async def test_replace_turns_should_store_documents_and_title(self, test_async_db) -> None:
        """Test turns round-trip through the JSON column."""
        # Arrange
        record = await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="New Chat", model="gemini-2.5-pro"
        )
        turns = [
            Turn(
                role=Role.USER,
                content="Hello",
                attachments=(AttachmentMeta(file_name="a.png", mime_type="image/png"),),
            ),
            Turn(role=Role.MODEL, content="Hi there!"),
        ]

        # Act
        updated = await chat_session_crud.replace_turns(
            test_async_db, record.id, OWNER, turns, "Greeting"
        )

        # Assert
        assert updated is not None
        assert updated.title == "Greeting"
        assert updated.turns[0]["attachments"] == [{"fileName": "a.png", "mimeType": "image/png"}]
        loaded = updated.load_turns()
        assert [(t.role, t.content) for t in loaded] == [
            (Role.USER, "Hello"),
            (Role.MODEL, "Hi there!"),
        ]
        assert loaded[0].attachments[0].file_name == "a.png"

    async def test_replace_turns_for_other_owner_should_return_none(self, test_async_db) -> None:
        """Test writes are owner-scoped."""
        # Arrange
        record = await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="New Chat", model="gemini-2.5-flash"
        )

        # Act
        result = await chat_session_crud.replace_turns(
            test_async_db, record.id, OTHER, [Turn(role=Role.USER, content="x")], "Hijack"
        )

        # Assert
        assert result is None


class TestListRenameDelete:
    """Test suite for listing, renaming and deleting sessions."""

    async def test_list_should_return_only_owner_sessions(self, test_async_db) -> None:
        """Test listing filters by owner."""
        # Arrange
        for _ in range(2):
            await chat_session_crud.create_for_owner(
                test_async_db, owner=OWNER, title="New Chat", model="gemini-2.5-flash"
            )
        await chat_session_crud.create_for_owner(
            test_async_db, owner=OTHER, title="New Chat", model="gemini-2.5-flash"
        )

        # Act
        sessions = await chat_session_crud.list_for_owner(test_async_db, OWNER)

        # Assert
        assert len(sessions) == 2
        assert all(s.owner == OWNER for s in sessions)

    async def test_list_should_order_by_most_recent_update(self, test_async_db) -> None:
        """Test the most recently touched session comes first."""
        # Arrange
        older = await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="Older", model="gemini-2.5-flash"
        )
        await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="Newer", model="gemini-2.5-flash"
        )
        await chat_session_crud.rename_for_owner(test_async_db, older.id, OWNER, "Touched")

        # Act
        sessions = await chat_session_crud.list_for_owner(test_async_db, OWNER)

        # Assert
        assert sessions[0].id == older.id

    async def test_rename_should_update_title(self, test_async_db) -> None:
        """Test rename sets the title."""
        # Arrange
        record = await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="New Chat", model="gemini-2.5-flash"
        )

        # Act
        renamed = await chat_session_crud.rename_for_owner(test_async_db, record.id, OWNER, "Plans")

        # Assert
        assert renamed.title == "Plans"

    @pytest.mark.parametrize("owner,expected", [(OWNER, True), (OTHER, False)])
    async def test_delete_should_respect_owner(self, test_async_db, owner, expected) -> None:
        """Test only the owner can delete."""
        # Arrange
        record = await chat_session_crud.create_for_owner(
            test_async_db, owner=OWNER, title="New Chat", model="gemini-2.5-flash"
        )

        # Act
        deleted = await chat_session_crud.delete_for_owner(test_async_db, record.id, owner)

        # Assert
        assert deleted is expected
        remaining = await chat_session_crud.get_for_owner(test_async_db, record.id, OWNER)
        assert (remaining is None) is expected
