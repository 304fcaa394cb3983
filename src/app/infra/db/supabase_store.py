from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from supabase import Client

from src.app.domain.errors import MessageNotFoundError, StoreError
from src.app.domain.models import (
    ChatMessage,
    GeneratedArtifact,
    MessageKind,
    NewChatMessage,
    Recipe,
    VoteType,
)
from src.app.infra.db.base import ArtifactStore

logger = logging.getLogger(__name__)

MESSAGE_NOT_FOUND_CODE = "MESSAGE_NOT_FOUND"
# delete() exige um filtro; nenhum id real é igual a este
_MATCH_ALL_ID = "00000000-0000-0000-0000-000000000000"


def _parse_datetime(value: str | datetime | None) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            normalized = value.replace("Z", "+00:00") if value.endswith("Z") else value
            return datetime.fromisoformat(normalized)
        except ValueError:
            pass
    return datetime.now(timezone.utc)


def _row_to_message(row: dict[str, Any]) -> ChatMessage:
    return ChatMessage(
        id=str(row["id"]),
        username=str(row.get("username") or ""),
        content=str(row.get("content") or ""),
        kind=MessageKind(str(row.get("kind") or MessageKind.USER.value)),
        timestamp=_parse_datetime(row.get("created_at")),
        votes=int(row.get("votes") or 0),
        is_command=bool(row.get("is_command")),
        recipe_id=str(row["recipe_id"]) if row.get("recipe_id") else None,
    )


class SupabaseArtifactStore(ArtifactStore):
    MESSAGES_TABLE = "chat_messages"
    RECIPES_TABLE = "recipes"
    VOTES_TABLE = "message_votes"
    VOTE_FUNCTION = "cast_message_vote"

    def __init__(self, client: Client):
        self._client = client
        logger.info("SupabaseArtifactStore initialized")

    def _first_id(self, operation: str, data: Any) -> str:
        if not data:
            raise StoreError(operation, "insert returned no rows")
        return str(data[0]["id"])

    def append_message(self, message: NewChatMessage) -> str:
        row: dict[str, Any] = {
            "username": message.username,
            "content": message.content,
            "kind": message.kind.value,
            "is_command": message.is_command,
            "votes": 0,
        }
        if message.recipe_id:
            row["recipe_id"] = message.recipe_id

        result = self._client.table(self.MESSAGES_TABLE).insert(row).execute()
        return self._first_id("append_message", result.data)

    def add_recipe(self, artifact: GeneratedArtifact, created_by: str) -> str:
        row: dict[str, Any] = {
            **artifact.to_dict(),
            "created_by": created_by,
            "votes": 0,
        }
        result = self._client.table(self.RECIPES_TABLE).insert(row).execute()
        recipe_id = self._first_id("add_recipe", result.data)
        logger.info("Saved recipe: id=%s, created_by=%s", recipe_id, created_by)
        return recipe_id

    def link_recipe_message(self, recipe_id: str, message_id: str) -> None:
        result = (
            self._client.table(self.RECIPES_TABLE)
            .update({"message_id": message_id})
            .eq("id", recipe_id)
            .execute()
        )
        if not result.data:
            raise StoreError("link_recipe_message", f"unknown recipe {recipe_id}")

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        result = (
            self._client.table(self.RECIPES_TABLE)
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        row = result.data[0]
        return Recipe(
            id=str(row["id"]),
            artifact=GeneratedArtifact(
                name=str(row.get("name") or ""),
                ingredients=tuple(row.get("ingredients") or ()),
                effects=tuple(row.get("effects") or ()),
                instructions=str(row.get("instructions") or ""),
            ),
            created_by=str(row.get("created_by") or ""),
            timestamp=_parse_datetime(row.get("created_at")),
            votes=int(row.get("votes") or 0),
            message_id=str(row["message_id"]) if row.get("message_id") else None,
        )

    def recent(self, limit: int = 100) -> list[ChatMessage]:
        result = (
            self._client.table(self.MESSAGES_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        rows: list[dict[str, Any]] = result.data or []
        rows.reverse()
        return [_row_to_message(row) for row in rows]

    def vote(self, message_id: str, username: str, vote_type: VoteType) -> int:
        try:
            result = self._client.rpc(
                self.VOTE_FUNCTION,
                {"p_message_id": message_id, "p_username": username, "p_vote_type": vote_type.value},
            ).execute()
        except Exception as error:
            if MESSAGE_NOT_FOUND_CODE in str(error):
                raise MessageNotFoundError(message_id) from error
            raise

        if result.data is None:
            raise MessageNotFoundError(message_id)
        return int(result.data)

    def clear(self) -> None:
        for table in (self.VOTES_TABLE, self.MESSAGES_TABLE, self.RECIPES_TABLE):
            self._client.table(table).delete().neq("id", _MATCH_ALL_ID).execute()
        logger.info("Cleared chat messages, recipes and votes")

    def has_history(self, username: str) -> bool:
        result = (
            self._client.table(self.MESSAGES_TABLE)
            .select("id")
            .eq("username", username)
            .limit(1)
            .execute()
        )
        return bool(result.data)
