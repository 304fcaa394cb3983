# src/app/domain/models.py
"""
Domain models for the Neural Brew chat and recipe pipeline.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


MAX_INGREDIENT_TOKENS = 8


class GenerationMode(str, Enum):
    """Recipe domain that drives prompt phrasing and fallback content."""
    BEVERAGE = "beverage"
    INFUSION = "infusion"
    SNACK = "snack"


class MessageKind(str, Enum):
    USER = "user"
    BOT = "bot"
    SYSTEM = "system"


class VoteType(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def weight(self) -> int:
        return 1 if self is VoteType.UP else -1


@dataclass(frozen=True)
class GeneratedArtifact:
    """
    Structured result of recipe generation.
    Ingredient order is priority order: user supplied entries come first.
    """
    name: str
    ingredients: tuple[str, ...]
    effects: tuple[str, ...]
    instructions: str

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "ingredients": list(self.ingredients),
            "effects": list(self.effects),
            "instructions": self.instructions,
        }


@dataclass
class Recipe:
    """A GeneratedArtifact once written to the store."""
    id: str
    artifact: GeneratedArtifact
    created_by: str
    timestamp: datetime
    votes: int = 0
    message_id: Optional[str] = None


@dataclass
class NewChatMessage:
    """Message payload before the store assigns identity and timestamp."""
    username: str
    content: str
    kind: MessageKind = MessageKind.USER
    is_command: bool = False
    recipe_id: Optional[str] = None


@dataclass
class ChatMessage:
    id: str
    username: str
    content: str
    kind: MessageKind
    timestamp: datetime
    votes: int = 0
    is_command: bool = False
    recipe_id: Optional[str] = None


@dataclass
class VoteRecord:
    message_id: str
    username: str
    vote_type: VoteType
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
