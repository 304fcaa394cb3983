from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.app.deps import get_brew_service, get_store
from src.app.domain.errors import BrewError
from src.app.infra.db.base import ArtifactStore
from src.app.schemas.recipes import GenerateRecipeRequest, GeneratedRecipeResponse
from src.services import chat_store
from src.services.brew_service import BrewService

router = APIRouter(prefix="/recipes", tags=["recipes"])


def _to_response(published: chat_store.PublishedRecipe) -> GeneratedRecipeResponse:
    return GeneratedRecipeResponse(
        **published.artifact.to_dict(),
        id=published.recipe_id,
        messageId=published.message_id,
        createdBy=published.created_by,
        timestamp=published.timestamp,
        votes=0,
    )


@router.post("/generate", response_model=GeneratedRecipeResponse)
async def generate_recipe(
    payload: GenerateRecipeRequest,
    store: ArtifactStore = Depends(get_store),
    brew: BrewService = Depends(get_brew_service),
) -> GeneratedRecipeResponse:
    try:
        published = await chat_store.generate_and_publish(
            store, brew, payload.ingredients, chat_store.AI_BARISTA
        )
    except BrewError as exc:
        raise HTTPException(status_code=500, detail="Failed to generate recipe") from exc
    return _to_response(published)


@router.post("/auto-generate", response_model=GeneratedRecipeResponse)
async def auto_generate_recipe(
    store: ArtifactStore = Depends(get_store),
    brew: BrewService = Depends(get_brew_service),
) -> GeneratedRecipeResponse:
    try:
        published = await chat_store.auto_generate_and_publish(store, brew)
    except BrewError as exc:
        raise HTTPException(status_code=500, detail="Failed to auto-generate recipe") from exc
    return _to_response(published)
