# src/app/deps.py (singletons, expostos como dependências do FastAPI)

from __future__ import annotations

import logging

from supabase import Client, create_client

from src.app.config import settings
from src.app.infra.db.base import ArtifactStore
from src.app.infra.db.fallback_store import FallbackArtifactStore
from src.app.infra.db.memory_store import InMemoryArtifactStore
from src.app.infra.db.supabase_store import SupabaseArtifactStore
from src.services.brew_service import BrewService
from src.services.gemini_client import GeminiClient

logger = logging.getLogger(__name__)

_client: Client | None = None
_store: ArtifactStore | None = None
_brew_service: BrewService | None = None


def get_supabase() -> Client | None:
    global _client
    if _client is None and settings.supabase_configured:
        try:
            _client = create_client(str(settings.SUPABASE_URL),
                                    settings.SUPABASE_SERVICE_ROLE_KEY)
        except Exception:
            logger.exception("Supabase client init failed; using memory store only")
            return None
    return _client


def get_store() -> ArtifactStore:
    global _store
    if _store is None:
        supa = get_supabase()
        primary = SupabaseArtifactStore(supa) if supa is not None else None
        _store = FallbackArtifactStore(primary=primary, secondary=InMemoryArtifactStore())
    return _store


def get_brew_service() -> BrewService:
    global _brew_service
    if _brew_service is None:
        client = None
        if settings.gemini_api_key:
            client = GeminiClient(
                api_key=settings.gemini_api_key,
                model_name=settings.GEMINI_MODEL,
                timeout_seconds=settings.GENERATION_TIMEOUT_SECONDS,
            )
        else:
            logger.warning("GEMINI_API_KEY not set; recipe generation is disabled")
        _brew_service = BrewService(client, timeout_seconds=settings.GENERATION_TIMEOUT_SECONDS)
    return _brew_service
