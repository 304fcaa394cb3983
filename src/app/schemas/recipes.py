from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.domain.models import GeneratedArtifact


class RecipePayload(BaseModel):
    name: str
    ingredients: list[str]
    effects: list[str]
    instructions: str

    @classmethod
    def from_artifact(cls, artifact: GeneratedArtifact) -> "RecipePayload":
        return cls(**artifact.to_dict())


class GenerateRecipeRequest(BaseModel):
    ingredients: Optional[str] = None
    username: Optional[str] = None


class GeneratedRecipeResponse(RecipePayload):
    id: str
    messageId: str
    createdBy: str
    timestamp: datetime
    votes: int = 0


class RecipeCommandResponse(BaseModel):
    commandMessageId: str
    recipeMessageId: str
    recipeId: str
    recipe: RecipePayload
