from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from src.app.domain.errors import MessageNotFoundError, StoreError
from src.app.domain.models import (
    ChatMessage,
    GeneratedArtifact,
    NewChatMessage,
    Recipe,
    VoteRecord,
    VoteType,
)
from src.app.infra.db.base import ArtifactStore

logger = logging.getLogger(__name__)


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryArtifactStore(ArtifactStore):
    """Process-local store used when the durable backend is unavailable."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._messages: dict[str, ChatMessage] = {}
        self._recipes: dict[str, Recipe] = {}
        self._votes: dict[tuple[str, str], VoteRecord] = {}

    def append_message(self, message: NewChatMessage) -> str:
        record = ChatMessage(
            id=uuid4().hex,
            username=message.username,
            content=message.content,
            kind=message.kind,
            timestamp=_now_utc(),
            is_command=message.is_command,
            recipe_id=message.recipe_id,
        )
        with self._lock:
            self._messages[record.id] = record
        return record.id

    def add_recipe(self, artifact: GeneratedArtifact, created_by: str) -> str:
        recipe = Recipe(
            id=uuid4().hex,
            artifact=artifact,
            created_by=created_by,
            timestamp=_now_utc(),
        )
        with self._lock:
            self._recipes[recipe.id] = recipe
        return recipe.id

    def link_recipe_message(self, recipe_id: str, message_id: str) -> None:
        with self._lock:
            recipe = self._recipes.get(recipe_id)
            if recipe is None:
                raise StoreError("link_recipe_message", f"unknown recipe {recipe_id}")
            recipe.message_id = message_id

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        with self._lock:
            recipe = self._recipes.get(recipe_id)
            return replace(recipe) if recipe is not None else None

    def recent(self, limit: int = 100) -> list[ChatMessage]:
        with self._lock:
            # dict preserves insertion order, which is timestamp order here
            messages = list(self._messages.values())
        selected = messages[-limit:] if limit > 0 else []
        return [replace(message) for message in selected]

    def vote(self, message_id: str, username: str, vote_type: VoteType) -> int:
        key = (message_id, username)
        with self._lock:
            message = self._messages.get(message_id)
            if message is None:
                raise MessageNotFoundError(message_id)

            existing = self._votes.get(key)
            if existing is None:
                self._votes[key] = VoteRecord(message_id, username, vote_type)
                delta = vote_type.weight
            elif existing.vote_type is vote_type:
                del self._votes[key]
                delta = -vote_type.weight
            else:
                self._votes[key] = VoteRecord(message_id, username, vote_type)
                delta = 2 * vote_type.weight

            message.votes += delta
            logger.debug("Vote %s by %s on %s: delta=%d", vote_type.value, username, message_id, delta)
            return message.votes

    def clear(self) -> None:
        with self._lock:
            self._messages.clear()
            self._recipes.clear()
            self._votes.clear()

    def has_history(self, username: str) -> bool:
        with self._lock:
            return any(message.username == username for message in self._messages.values())
