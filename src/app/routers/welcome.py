from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.app.deps import get_store
from src.app.domain.errors import StoreError
from src.app.infra.db.base import ArtifactStore
from src.app.schemas.messages import WelcomeRequest, WelcomeResponse
from src.services import chat_store

router = APIRouter(tags=["welcome"])


@router.post("/welcome", response_model=WelcomeResponse)
async def welcome(
    payload: WelcomeRequest,
    store: ArtifactStore = Depends(get_store),
) -> WelcomeResponse:
    try:
        returning = chat_store.welcome_user(store, payload.username)
    except StoreError as exc:
        raise HTTPException(status_code=500, detail="Failed to welcome user") from exc
    return WelcomeResponse(returning=returning)
