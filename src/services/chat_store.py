from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from src.app.domain.errors import StoreError
from src.app.domain.models import ChatMessage, GeneratedArtifact, MessageKind, NewChatMessage
from src.app.infra.db.base import ArtifactStore
from src.services.brew_service import BrewService, format_recipe_message

logger = logging.getLogger(__name__)

AI_BARISTA = "AI_BARISTA"
BREW_BOT = "BREW_BOT"
SYSTEM_USERNAME = "[SYSTEM]"

CLEAR_COMMAND = "/clear"
RECIPE_COMMAND = "/recipe"
RECIPE_FAILURE_MESSAGE = "Error: Recipe generation failed. Please try again."
AUTO_RECIPE_HEADER = "🤖 NEW AUTO-GENERATED RECIPE:"


@dataclass
class PublishedRecipe:
    artifact: GeneratedArtifact
    recipe_id: str
    message_id: str
    created_by: str
    timestamp: datetime


def is_clear_command(content: str) -> bool:
    return content.strip().lower() == CLEAR_COMMAND


def parse_recipe_command(content: str) -> Optional[str]:
    """Retorna o texto de ingredientes de um `/recipe ...`, ou None se não for o comando."""
    parts = content.strip().split(maxsplit=1)
    if not parts or parts[0].lower() != RECIPE_COMMAND:
        return None
    return parts[1].strip() if len(parts) > 1 else ""


def list_messages(store: ArtifactStore, limit: int = 100) -> List[ChatMessage]:
    return store.recent(limit)


def post_message(
    store: ArtifactStore,
    username: str,
    content: str,
    kind: MessageKind = MessageKind.USER,
    is_command: bool = False,
) -> str:
    return store.append_message(
        NewChatMessage(username=username, content=content, kind=kind, is_command=is_command)
    )


def publish_recipe(
    store: ArtifactStore,
    artifact: GeneratedArtifact,
    created_by: str,
    header: Optional[str] = None,
) -> PublishedRecipe:
    """Salva a receita e a mensagem do bot que a apresenta no chat."""
    recipe_id = store.add_recipe(artifact, created_by)
    content = format_recipe_message(artifact)
    if header:
        content = f"{header}\n{content}"
    message_id = store.append_message(
        NewChatMessage(
            username=f"[{created_by}]",
            content=content,
            kind=MessageKind.BOT,
            recipe_id=recipe_id,
        )
    )
    try:
        store.link_recipe_message(recipe_id, message_id)
    except StoreError:
        # Receita e mensagem já existem; só o vínculo reverso ficou faltando
        logger.warning("Could not link recipe %s to message %s", recipe_id, message_id)
    logger.info("Published recipe %s (%s) as message %s", recipe_id, artifact.name, message_id)
    return PublishedRecipe(
        artifact=artifact,
        recipe_id=recipe_id,
        message_id=message_id,
        created_by=created_by,
        timestamp=datetime.now(timezone.utc),
    )


async def generate_and_publish(
    store: ArtifactStore,
    brew: BrewService,
    raw_ingredients: Optional[str],
    created_by: str = AI_BARISTA,
) -> PublishedRecipe:
    artifact = await brew.generate_recipe(raw_ingredients)
    return publish_recipe(store, artifact, created_by)


async def auto_generate_and_publish(
    store: ArtifactStore,
    brew: BrewService,
    rng: Optional[random.Random] = None,
) -> PublishedRecipe:
    artifact = await brew.auto_generate_recipe(rng)
    return publish_recipe(store, artifact, BREW_BOT, header=AUTO_RECIPE_HEADER)


async def run_recipe_command(
    store: ArtifactStore,
    brew: BrewService,
    username: str,
    content: str,
    raw_ingredients: str,
) -> tuple[str, PublishedRecipe]:
    """
    Executa o comando `/recipe`:
    1. Salva a mensagem de comando do usuário.
    2. Gera a receita (Gemini ou fallback).
    3. Publica receita + mensagem do bot.
    Em caso de falha registra uma mensagem de sistema e propaga o erro.
    """
    command_message_id = post_message(store, username, content, is_command=True)
    try:
        published = await generate_and_publish(store, brew, raw_ingredients, AI_BARISTA)
    except Exception:
        logger.exception("Recipe command failed for %s", username)
        try:
            post_message(store, SYSTEM_USERNAME, RECIPE_FAILURE_MESSAGE, kind=MessageKind.SYSTEM)
        except Exception:
            logger.exception("Could not record recipe failure message")
        raise
    return command_message_id, published


def welcome_user(store: ArtifactStore, username: str) -> bool:
    """Registra a mensagem de boas-vindas e diz se o usuário já tinha histórico."""
    returning = store.has_history(username)
    if returning:
        content = f"Welcome back, {username}. Neural Brew terminal reconnected."
    else:
        content = f"New user {username} connected. Welcome to Neural Brew Terminal. Type /help for commands."
    # Registrada em nome do usuário para que a próxima visita conte como retorno
    post_message(store, username, content, kind=MessageKind.SYSTEM)
    return returning
