from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from src.app.domain.errors import MessageNotFoundError, StoreError
from src.app.domain.models import GeneratedArtifact, MessageKind, NewChatMessage, VoteType
from src.app.infra.db.supabase_store import SupabaseArtifactStore


def _result(data) -> MagicMock:
    return MagicMock(data=data)


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


class TestSupabaseArtifactStore:
    def test_append_message(self, client: MagicMock) -> None:
        client.table.return_value.insert.return_value.execute.return_value = _result([{"id": "m-1"}])
        store = SupabaseArtifactStore(client)

        message_id = store.append_message(
            NewChatMessage(username="[AI_BARISTA]", content="> Recipe", kind=MessageKind.BOT, recipe_id="r-1")
        )

        assert message_id == "m-1"
        client.table.assert_called_with("chat_messages")
        row = client.table.return_value.insert.call_args.args[0]
        assert row["kind"] == "bot"
        assert row["recipe_id"] == "r-1"
        assert row["votes"] == 0

    def test_add_recipe(self, client: MagicMock) -> None:
        client.table.return_value.insert.return_value.execute.return_value = _result([{"id": "r-9"}])
        artifact = GeneratedArtifact("Name", ("A", "B"), ("E",), "Do it.")

        recipe_id = SupabaseArtifactStore(client).add_recipe(artifact, "BREW_BOT")

        assert recipe_id == "r-9"
        row = client.table.return_value.insert.call_args.args[0]
        assert row["ingredients"] == ["A", "B"]
        assert row["created_by"] == "BREW_BOT"

    def test_insert_without_rows(self, client: MagicMock) -> None:
        client.table.return_value.insert.return_value.execute.return_value = _result([])
        with pytest.raises(StoreError):
            SupabaseArtifactStore(client).append_message(NewChatMessage(username="neo", content="hi"))

    def test_recent_returns_oldest_first(self, client: MagicMock) -> None:
        query = client.table.return_value.select.return_value.order.return_value.limit.return_value
        query.execute.return_value = _result([
            {"id": "2", "username": "neo", "content": "second", "kind": "user", "created_at": "2024-01-15T10:01:00Z", "votes": 3},
            {"id": "1", "username": "neo", "content": "first", "kind": "system", "created_at": "2024-01-15T10:00:00Z"},
        ])

        messages = SupabaseArtifactStore(client).recent(2)

        assert [m.id for m in messages] == ["1", "2"]
        assert messages[0].kind is MessageKind.SYSTEM
        assert messages[1].votes == 3
        client.table.return_value.select.return_value.order.assert_called_with("created_at", desc=True)

    def test_vote_uses_transactional_function(self, client: MagicMock) -> None:
        client.rpc.return_value.execute.return_value = _result(2)

        votes = SupabaseArtifactStore(client).vote("m-1", "neo", VoteType.UP)

        assert votes == 2
        client.rpc.assert_called_with(
            "cast_message_vote",
            {"p_message_id": "m-1", "p_username": "neo", "p_vote_type": "up"},
        )

    def test_vote_unknown_message(self, client: MagicMock) -> None:
        client.rpc.return_value.execute.side_effect = Exception("P0001: MESSAGE_NOT_FOUND: m-404")
        with pytest.raises(MessageNotFoundError):
            SupabaseArtifactStore(client).vote("m-404", "neo", VoteType.DOWN)

    def test_has_history(self, client: MagicMock) -> None:
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = _result([{"id": "m-1"}])
        assert SupabaseArtifactStore(client).has_history("neo") is True
        client.table.return_value.select.return_value.eq.assert_called_with("username", "neo")

    def test_link_recipe_message(self, client: MagicMock) -> None:
        query = client.table.return_value.update.return_value.eq.return_value
        query.execute.return_value = _result([{"id": "r-1"}])

        SupabaseArtifactStore(client).link_recipe_message("r-1", "m-1")

        client.table.return_value.update.assert_called_with({"message_id": "m-1"})
        client.table.return_value.update.return_value.eq.assert_called_with("id", "r-1")

    def test_link_unknown_recipe(self, client: MagicMock) -> None:
        query = client.table.return_value.update.return_value.eq.return_value
        query.execute.return_value = _result([])
        with pytest.raises(StoreError):
            SupabaseArtifactStore(client).link_recipe_message("r-404", "m-1")

    def test_get_recipe(self, client: MagicMock) -> None:
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = _result([{
            "id": "r-1",
            "name": "Deadlock Doppio",
            "ingredients": ["Espresso"],
            "effects": ["Focus"],
            "instructions": "Pull two shots.",
            "created_by": "BREW_BOT",
            "message_id": "m-1",
            "votes": 0,
            "created_at": "2024-01-15T10:00:00Z",
        }])

        recipe = SupabaseArtifactStore(client).get_recipe("r-1")

        assert recipe is not None
        assert recipe.artifact.ingredients == ("Espresso",)
        assert recipe.message_id == "m-1"
        assert recipe.created_by == "BREW_BOT"

    def test_get_missing_recipe(self, client: MagicMock) -> None:
        query = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = _result([])
        assert SupabaseArtifactStore(client).get_recipe("r-404") is None
