# src/services/fallback.py
from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from src.app.domain.models import GeneratedArtifact, GenerationMode
from src.services.reconciler import reconcile_ingredients

# Receitas fixas, só com ingredientes reais. Usadas quando o Gemini falha.
FALLBACK_TEMPLATES = {
    GenerationMode.BEVERAGE: GeneratedArtifact(
        name="Neural Network Espresso",
        ingredients=(
            "Double shot espresso",
            "Hot water (200°F)",
            "Vanilla syrup",
            "Dark chocolate shavings",
        ),
        effects=(
            "Enhanced focus and alertness",
            "Improved cognitive function",
            "Sustained energy boost",
        ),
        instructions=(
            "1. Grind 18g of espresso beans fine and pull a 36g double shot in 27 seconds. "
            "2. Top with 4oz hot water at 200°F. "
            "3. Stir in 0.5oz vanilla syrup. "
            "4. Garnish with dark chocolate shavings and serve immediately."
        ),
    ),
    GenerationMode.INFUSION: GeneratedArtifact(
        name="Circuit Infusion Green Tea",
        ingredients=("Green tea leaves", "Hot water (175°F)", "Honey", "Fresh mint"),
        effects=("Gentle sustained focus", "Calming aromatic lift"),
        instructions=(
            "1. Heat water to 175°F. 2. Steep green tea leaves 2 minutes. "
            "3. Add honey and gently stir. 4. Bruise mint leaves lightly and add before serving."
        ),
    ),
    GenerationMode.SNACK: GeneratedArtifact(
        name="Neural Power Toast",
        ingredients=(
            "Whole grain bread slice",
            "Avocado",
            "Cherry tomatoes",
            "Olive oil",
            "Sea salt",
            "Cracked black pepper",
        ),
        effects=("Balanced energy", "Healthy fats for cognitive support"),
        instructions=(
            "1. Toast bread to medium. 2. Mash avocado onto toast. "
            "3. Halve cherry tomatoes and arrange. 4. Drizzle olive oil. "
            "5. Season with sea salt and pepper. Serve immediately."
        ),
    ),
}


def fallback(mode: GenerationMode, tokens: Sequence[str]) -> GeneratedArtifact:
    base = FALLBACK_TEMPLATES[mode]
    if not tokens:
        return base
    return replace(
        base,
        ingredients=tuple(reconcile_ingredients(tokens, base.ingredients)),
        instructions=f"Start by preparing user ingredients: {', '.join(tokens)}.\n{base.instructions}",
    )
