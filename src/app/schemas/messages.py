from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import AliasChoices, BaseModel, Field, StringConstraints

from src.app.domain.models import ChatMessage as ChatMessageRecord

# Espaços nas pontas são removidos antes de checar o tamanho
Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ChatMessage(BaseModel):
    id: str
    username: str
    content: str
    kind: Literal["user", "bot", "system"]
    timestamp: datetime
    votes: int = 0
    recipeId: Optional[str] = None
    isCommand: bool = False

    @classmethod
    def from_record(cls, record: ChatMessageRecord) -> "ChatMessage":
        return cls(
            id=record.id,
            username=record.username,
            content=record.content,
            kind=record.kind.value,
            timestamp=record.timestamp,
            votes=record.votes,
            recipeId=record.recipe_id,
            isCommand=record.is_command,
        )


class MessageRequest(BaseModel):
    username: Username
    content: str = Field(..., min_length=1)
    kind: Optional[Literal["user", "bot", "system"]] = Field(
        default=None,
        validation_alias=AliasChoices("kind", "type"),
    )
    isCommand: Optional[bool] = None


class VoteRequest(BaseModel):
    # Validado na rota para responder 400 com mensagem própria
    username: Optional[str] = None
    voteType: Optional[str] = None


class VoteResponse(BaseModel):
    success: bool = True
    votes: int


class WelcomeRequest(BaseModel):
    username: Username


class WelcomeResponse(BaseModel):
    welcomed: bool = True
    returning: bool


class ClearResponse(BaseModel):
    cleared: bool = True
