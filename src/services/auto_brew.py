from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from src.app.infra.db.base import ArtifactStore
from src.services import chat_store
from src.services.brew_service import BrewService

log = logging.getLogger("auto_brew")


class AutoBrewWorker:
    """Posts a BREW_BOT recipe to the chat every ``interval_seconds``."""

    def __init__(
        self,
        store_factory: Callable[[], ArtifactStore],
        brew_factory: Callable[[], BrewService],
        interval_seconds: float,
    ) -> None:
        self._store_factory = store_factory
        self._brew_factory = brew_factory
        self.interval_seconds = interval_seconds
        self._worker: Optional[asyncio.Task[None]] = None
        self._stopping = asyncio.Event()
        self._lock = asyncio.Lock()

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    async def start(self) -> None:
        async with self._lock:
            if self.running:
                return
            self._stopping.clear()
            self._worker = asyncio.create_task(self._run(), name="auto-brew-worker")

    async def stop(self) -> None:
        async with self._lock:
            if not self._worker:
                return
            self._stopping.set()
            try:
                await self._worker
            finally:
                self._worker = None

    async def brew_once(self) -> Optional[chat_store.PublishedRecipe]:
        try:
            published = await chat_store.auto_generate_and_publish(
                self._store_factory(), self._brew_factory()
            )
        except Exception:
            log.exception("auto_brew.failed")
            return None
        log.info("auto_brew.published recipe=%s message=%s", published.recipe_id, published.message_id)
        return published

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                await self.brew_once()
