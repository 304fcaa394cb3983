# src/services/classifier.py
from __future__ import annotations

import re
from typing import Iterable, Sequence

from src.app.domain.models import GenerationMode

BEVERAGE_KEYWORDS = (
    "espresso", "coffee", "arabica", "robusta", "cold brew", "americano",
    "latte", "cappuccino", "mocha", "ristretto", "macchiato", "brew",
)
INFUSION_KEYWORDS = (
    "tea", "chai", "matcha", "earl grey", "oolong", "green tea", "black tea",
    "herbal", "mint", "chamomile", "hibiscus",
)
SAVORY_KEYWORDS = (
    "chicken", "beef", "pork", "egg", "eggs", "cheese", "onion", "garlic",
    "tomato", "spinach", "bread", "rice", "noodle", "noodles", "potato",
    "paneer", "tofu",
)

_BOTANICAL_RE = re.compile(r"leaf|leaves|herb|flower|ginger|lemongrass|mint")


def _keyword_pattern(keywords: Iterable[str]) -> re.Pattern[str]:
    # Ancora no início da palavra: "rice" não casa com "licorice"
    alternatives = "|".join(re.escape(keyword) for keyword in keywords)
    return re.compile(rf"\b(?:{alternatives})")


_BEVERAGE_RE = _keyword_pattern(BEVERAGE_KEYWORDS)
_INFUSION_RE = _keyword_pattern(INFUSION_KEYWORDS)
_SAVORY_RE = _keyword_pattern(SAVORY_KEYWORDS)


def _any_match(pattern: re.Pattern[str], tokens: Sequence[str]) -> bool:
    return any(pattern.search(token) for token in tokens)


def classify(tokens: Sequence[str]) -> GenerationMode:
    """
    Escolhe o modo de geração a partir dos ingredientes do usuário.

    Salgados têm prioridade sobre qualquer outro sinal, depois chá sem café,
    depois botânicos genéricos. Sem sinal claro, o padrão é bebida.
    """
    lowered = [token.lower() for token in tokens]
    if not lowered:
        return GenerationMode.BEVERAGE

    has_beverage = _any_match(_BEVERAGE_RE, lowered)
    has_infusion = _any_match(_INFUSION_RE, lowered)

    if _any_match(_SAVORY_RE, lowered):
        return GenerationMode.SNACK
    if has_infusion and not has_beverage:
        return GenerationMode.INFUSION
    if not has_beverage and not has_infusion and _any_match(_BOTANICAL_RE, lowered):
        return GenerationMode.INFUSION
    return GenerationMode.BEVERAGE
