# src/app/infra/db/base.py
"""
Abstract interface for the chat/recipe store.
Callers depend only on this contract, so durable and ephemeral backends
are interchangeable.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from src.app.domain.models import ChatMessage, GeneratedArtifact, NewChatMessage, Recipe, VoteType


class ArtifactStore(ABC):
    """
    Implementations:
    - SupabaseArtifactStore: durable, Postgres tables behind Supabase
    - InMemoryArtifactStore: ephemeral, process-local
    - FallbackArtifactStore: durable first, ephemeral on failure
    """

    @abstractmethod
    def append_message(self, message: NewChatMessage) -> str:
        """
        Persist a chat message.

        Returns:
            The store-assigned message id
        """
        pass

    @abstractmethod
    def add_recipe(self, artifact: GeneratedArtifact, created_by: str) -> str:
        """
        Persist a generated artifact as a recipe with zero votes.

        Returns:
            The store-assigned recipe id
        """
        pass

    @abstractmethod
    def link_recipe_message(self, recipe_id: str, message_id: str) -> None:
        """Record which chat message presents ``recipe_id``."""
        pass

    @abstractmethod
    def get_recipe(self, recipe_id: str) -> Recipe | None:
        pass

    @abstractmethod
    def recent(self, limit: int = 100) -> list[ChatMessage]:
        """Return the latest ``limit`` messages, oldest first."""
        pass

    @abstractmethod
    def vote(self, message_id: str, username: str, vote_type: VoteType) -> int:
        """
        Apply a vote atomically.

        A new vote moves the counter by one, repeating the same vote retracts
        it and switching direction moves it by two.

        Returns:
            The message's updated vote count

        Raises:
            MessageNotFoundError: If ``message_id`` is unknown
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every message, recipe and vote."""
        pass

    @abstractmethod
    def has_history(self, username: str) -> bool:
        """Check whether ``username`` has posted any message before."""
        pass
