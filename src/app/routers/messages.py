from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, HTTPException

from src.app.config import settings
from src.app.deps import get_brew_service, get_store
from src.app.domain.errors import BrewError, MessageNotFoundError, StoreError
from src.app.domain.models import MessageKind, VoteType
from src.app.infra.db.base import ArtifactStore
from src.app.schemas.messages import (
    ChatMessage,
    ClearResponse,
    MessageRequest,
    VoteRequest,
    VoteResponse,
)
from src.app.schemas.recipes import RecipeCommandResponse, RecipePayload
from src.services import chat_store
from src.services.brew_service import BrewService

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=list[ChatMessage])
async def get_messages(store: ArtifactStore = Depends(get_store)) -> list[ChatMessage]:
    try:
        records = chat_store.list_messages(store, limit=settings.MESSAGE_HISTORY_LIMIT)
    except StoreError as exc:
        raise HTTPException(status_code=500, detail="Failed to fetch messages") from exc
    return [ChatMessage.from_record(record) for record in records]


@router.post("/clear", response_model=ClearResponse)
async def clear_messages(store: ArtifactStore = Depends(get_store)) -> ClearResponse:
    try:
        store.clear()
    except StoreError as exc:
        raise HTTPException(status_code=500, detail="Failed to clear messages") from exc
    return ClearResponse()


@router.post("", response_model=None)
async def post_message(
    payload: MessageRequest,
    store: ArtifactStore = Depends(get_store),
    brew: BrewService = Depends(get_brew_service),
) -> Union[ClearResponse, RecipeCommandResponse, dict[str, str]]:
    if chat_store.is_clear_command(payload.content):
        try:
            store.clear()
        except StoreError as exc:
            raise HTTPException(status_code=500, detail="Failed to clear messages") from exc
        return ClearResponse()

    raw_ingredients = chat_store.parse_recipe_command(payload.content)
    if raw_ingredients is not None:
        try:
            command_message_id, published = await chat_store.run_recipe_command(
                store, brew, payload.username, payload.content, raw_ingredients
            )
        except BrewError as exc:
            raise HTTPException(status_code=500, detail="Recipe generation failed") from exc
        return RecipeCommandResponse(
            commandMessageId=command_message_id,
            recipeMessageId=published.message_id,
            recipeId=published.recipe_id,
            recipe=RecipePayload.from_artifact(published.artifact),
        )

    try:
        message_id = chat_store.post_message(
            store,
            payload.username,
            payload.content,
            kind=MessageKind(payload.kind or MessageKind.USER.value),
            is_command=bool(payload.isCommand),
        )
    except StoreError as exc:
        raise HTTPException(status_code=500, detail="Failed to save message") from exc
    return {"messageId": message_id}


@router.post("/{message_id}/vote", response_model=VoteResponse)
async def vote_on_message(
    message_id: str,
    payload: VoteRequest,
    store: ArtifactStore = Depends(get_store),
) -> VoteResponse:
    valid_types = {vote.value for vote in VoteType}
    if not payload.username or payload.voteType not in valid_types:
        raise HTTPException(status_code=400, detail="Invalid vote data")

    try:
        votes = store.vote(message_id, payload.username, VoteType(payload.voteType))
    except MessageNotFoundError as exc:
        raise HTTPException(status_code=500, detail="Message not found") from exc
    except StoreError as exc:
        raise HTTPException(status_code=500, detail="Failed to vote") from exc
    return VoteResponse(votes=votes)
