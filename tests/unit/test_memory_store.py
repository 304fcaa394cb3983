from __future__ import annotations

import threading

import pytest

from src.app.domain.errors import MessageNotFoundError, StoreError
from src.app.domain.models import GeneratedArtifact, MessageKind, NewChatMessage, VoteType
from src.app.infra.db.memory_store import InMemoryArtifactStore

ARTIFACT = GeneratedArtifact(
    name="Firewall Flat White",
    ingredients=("Ristretto", "Whole milk"),
    effects=("Calm focus",),
    instructions="Pull two ristrettos and add microfoam.",
)


@pytest.fixture
def store() -> InMemoryArtifactStore:
    return InMemoryArtifactStore()


def _post(store: InMemoryArtifactStore, username: str = "neo", content: str = "hello") -> str:
    return store.append_message(NewChatMessage(username=username, content=content))


class TestMessages:
    def test_append_assigns_identity_and_defaults(self, store: InMemoryArtifactStore) -> None:
        message_id = _post(store)
        [message] = store.recent()
        assert message.id == message_id
        assert message.votes == 0
        assert message.kind is MessageKind.USER
        assert message.timestamp is not None

    def test_recent_is_oldest_first_and_limited(self, store: InMemoryArtifactStore) -> None:
        for index in range(5):
            _post(store, content=f"msg {index}")
        assert [m.content for m in store.recent(3)] == ["msg 2", "msg 3", "msg 4"]
        assert [m.content for m in store.recent()] == [f"msg {i}" for i in range(5)]

    def test_recent_returns_copies(self, store: InMemoryArtifactStore) -> None:
        _post(store)
        store.recent()[0].votes = 99
        assert store.recent()[0].votes == 0

    def test_has_history(self, store: InMemoryArtifactStore) -> None:
        assert store.has_history("trinity") is False
        _post(store, username="trinity")
        assert store.has_history("trinity") is True
        assert store.has_history("morpheus") is False


class TestRecipes:
    def test_add_recipe(self, store: InMemoryArtifactStore) -> None:
        recipe_id = store.add_recipe(ARTIFACT, "AI_BARISTA")
        recipe = store.get_recipe(recipe_id)
        assert recipe is not None
        assert recipe.artifact == ARTIFACT
        assert recipe.created_by == "AI_BARISTA"
        assert recipe.votes == 0
        assert recipe.message_id is None

    def test_link_recipe_message(self, store: InMemoryArtifactStore) -> None:
        recipe_id = store.add_recipe(ARTIFACT, "AI_BARISTA")
        store.link_recipe_message(recipe_id, "m-7")
        assert store.get_recipe(recipe_id).message_id == "m-7"

    def test_link_unknown_recipe(self, store: InMemoryArtifactStore) -> None:
        with pytest.raises(StoreError):
            store.link_recipe_message("missing", "m-7")

    def test_clear(self, store: InMemoryArtifactStore) -> None:
        message_id = _post(store)
        recipe_id = store.add_recipe(ARTIFACT, "BREW_BOT")
        store.vote(message_id, "neo", VoteType.UP)
        store.clear()
        assert store.recent() == []
        assert store.get_recipe(recipe_id) is None
        assert store.has_history("neo") is False


class TestVoting:
    def test_new_vote(self, store: InMemoryArtifactStore) -> None:
        message_id = _post(store)
        assert store.vote(message_id, "neo", VoteType.UP) == 1
        assert store.vote(message_id, "trinity", VoteType.DOWN) == 0

    def test_same_vote_twice_retracts(self, store: InMemoryArtifactStore) -> None:
        message_id = _post(store)
        store.vote(message_id, "neo", VoteType.UP)
        assert store.vote(message_id, "neo", VoteType.UP) == 0
        assert store.vote(message_id, "neo", VoteType.UP) == 1

    def test_switching_moves_by_two(self, store: InMemoryArtifactStore) -> None:
        message_id = _post(store)
        up = store.vote(message_id, "neo", VoteType.UP)
        down = store.vote(message_id, "neo", VoteType.DOWN)
        assert up - down == 2
        assert store.recent()[0].votes == -1

    def test_unknown_message(self, store: InMemoryArtifactStore) -> None:
        with pytest.raises(MessageNotFoundError):
            store.vote("missing", "neo", VoteType.UP)

    def test_concurrent_votes_are_not_lost(self, store: InMemoryArtifactStore) -> None:
        message_id = _post(store)
        users = [f"user-{i}" for i in range(50)]
        threads = [
            threading.Thread(target=store.vote, args=(message_id, user, VoteType.UP))
            for user in users
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert store.recent()[0].votes == 50
