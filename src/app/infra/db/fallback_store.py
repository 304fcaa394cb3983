from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from src.app.domain.errors import MessageNotFoundError, StoreUnavailableError
from src.app.domain.models import ChatMessage, GeneratedArtifact, NewChatMessage, Recipe, VoteType
from src.app.infra.db.base import ArtifactStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FallbackArtifactStore(ArtifactStore):
    """
    Tries the durable backend first and retries once on the ephemeral one.

    The choice is made per call; a failure does not pin later calls to the
    ephemeral backend.
    """

    def __init__(self, primary: Optional[ArtifactStore], secondary: ArtifactStore):
        self._primary = primary
        self._secondary = secondary

    def _run(self, operation: str, call: Callable[[ArtifactStore], T]) -> T:
        if self._primary is not None:
            try:
                return call(self._primary)
            except Exception as primary_error:
                logger.warning("Durable store failed during %s, using memory store: %s", operation, primary_error)

        try:
            return call(self._secondary)
        except MessageNotFoundError:
            raise
        except Exception as secondary_error:
            logger.exception("Memory store failed during %s", operation)
            raise StoreUnavailableError(operation, str(secondary_error)) from secondary_error

    def append_message(self, message: NewChatMessage) -> str:
        return self._run("append_message", lambda store: store.append_message(message))

    def add_recipe(self, artifact: GeneratedArtifact, created_by: str) -> str:
        return self._run("add_recipe", lambda store: store.add_recipe(artifact, created_by))

    def link_recipe_message(self, recipe_id: str, message_id: str) -> None:
        self._run("link_recipe_message", lambda store: store.link_recipe_message(recipe_id, message_id))

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        recipe = self._run("get_recipe", lambda store: store.get_recipe(recipe_id))
        if recipe is None and self._primary is not None:
            # A receita pode ter sido gravada só em memória durante uma queda
            recipe = self._secondary.get_recipe(recipe_id)
        return recipe

    def recent(self, limit: int = 100) -> list[ChatMessage]:
        return self._run("recent", lambda store: store.recent(limit))

    def vote(self, message_id: str, username: str, vote_type: VoteType) -> int:
        return self._run("vote", lambda store: store.vote(message_id, username, vote_type))

    def clear(self) -> None:
        self._run("clear", lambda store: store.clear())

    def has_history(self, username: str) -> bool:
        return self._run("has_history", lambda store: store.has_history(username))
