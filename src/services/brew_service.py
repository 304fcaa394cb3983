# src/services/brew_service.py
"""
Recipe generation pipeline.
Parser -> classifier -> prompt -> Gemini -> reconciler, with a rule-based
fallback when Gemini fails.
"""
from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional, Sequence

from starlette.concurrency import run_in_threadpool

from src.app.domain.errors import (
    GenerationConfigurationError,
    ProviderError,
    ProviderTimeoutError,
)
from src.app.domain.models import GeneratedArtifact
from src.services.classifier import classify
from src.services.fallback import fallback
from src.services.gemini_client import GeminiClient
from src.services.ingredients import parse_ingredients
from src.services.prompt_builder import GenerationPrompt, build_prompt
from src.services.reconciler import reconcile

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0

AUTO_INGREDIENT_CATEGORIES: dict[str, tuple[str, ...]] = {
    "base": (
        "espresso", "cold brew", "arabica coffee", "green tea", "black tea",
        "matcha", "chamomile", "oolong",
    ),
    "milk": ("whole milk", "oat milk", "almond milk", "heavy cream", "coconut milk"),
    "sweetener": ("honey", "maple syrup", "vanilla syrup", "caramel syrup", "brown sugar"),
    "spice": ("cinnamon", "nutmeg", "cardamom", "ginger", "star anise", "cocoa powder"),
}


def sample_ingredients(rng: Optional[random.Random] = None, count: int = 3) -> list[str]:
    """
    Sorteia ingredientes para a geração automática.
    É o único passo aleatório do pipeline; passe um Random com seed nos testes.
    """
    rng = rng or random.Random()
    picks = [rng.choice(AUTO_INGREDIENT_CATEGORIES["base"])]
    extras = [name for name in AUTO_INGREDIENT_CATEGORIES if name != "base"]
    for category in rng.sample(extras, k=min(max(count - 1, 0), len(extras))):
        picks.append(rng.choice(AUTO_INGREDIENT_CATEGORIES[category]))
    return picks


def format_recipe_message(artifact: GeneratedArtifact) -> str:
    """Renders an artifact as the terminal-style chat message body."""
    lines = [f"> {artifact.name}"]
    last = len(artifact.ingredients) - 1
    for index, ingredient in enumerate(artifact.ingredients):
        branch = "└" if index == last else "├"
        lines.append(f"{branch} {ingredient}")
    return (
        "\n".join(lines)
        + f"\n\nEffects: {', '.join(artifact.effects)}"
        + f"\n\nInstructions: {artifact.instructions}"
    )


class BrewService:
    """
    Runs the recipe pipeline for a single request.

    Holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        client: Optional[GeminiClient],
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._client = client
        self.timeout_seconds = timeout_seconds

    @property
    def provider_configured(self) -> bool:
        return self._client is not None

    async def _call_provider(self, tokens: Sequence[str], prompt: GenerationPrompt) -> GeneratedArtifact:
        if self._client is None:
            raise GenerationConfigurationError()
        try:
            # O thread continua até terminar ou estourar o timeout do SDK
            artifact = await asyncio.wait_for(
                run_in_threadpool(self._client.generate, prompt),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as timeout_error:
            raise ProviderTimeoutError(self.timeout_seconds) from timeout_error
        return reconcile(tokens, artifact)

    async def generate_recipe(self, raw_ingredients: Optional[str] = None) -> GeneratedArtifact:
        tokens = parse_ingredients(raw_ingredients)
        mode = classify(tokens)
        prompt = build_prompt(mode, tokens)
        logger.info("Generating %s recipe for %d ingredient(s)", mode.value, len(tokens))

        try:
            return await self._call_provider(tokens, prompt)
        except ProviderError as provider_error:
            logger.warning("Recipe generation failed, using %s fallback: %s", mode.value, provider_error)
            return fallback(mode, tokens)

    async def auto_generate_recipe(self, rng: Optional[random.Random] = None) -> GeneratedArtifact:
        ingredients = ", ".join(sample_ingredients(rng))
        logger.info("Auto-generating recipe with: %s", ingredients)
        return await self.generate_recipe(ingredients)
