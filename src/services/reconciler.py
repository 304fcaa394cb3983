# src/services/reconciler.py
"""
Garante que os ingredientes do usuário aparecem na receita final,
independente do que o modelo devolveu.
"""
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from src.app.domain.models import GeneratedArtifact

INGREDIENT_SYNONYMS = {
    "milk": "Whole milk",
    "sugar": "Brown sugar",
    "coffee": "Freshly ground espresso beans",
}


def normalize_ingredient(raw: str) -> str:
    synonym = INGREDIENT_SYNONYMS.get(raw.lower())
    if synonym:
        return synonym
    return raw[:1].upper() + raw[1:]


def _find_claimable(token: str, existing: Sequence[str], claimed: set[int]) -> Optional[int]:
    lowered = token.lower()
    contains_index: Optional[int] = None
    for index, entry in enumerate(existing):
        if index in claimed:
            continue
        entry_lower = entry.lower()
        if entry_lower == lowered:
            return index
        if contains_index is None and lowered in entry_lower:
            contains_index = index
    return contains_index


def reconcile_ingredients(tokens: Sequence[str], existing: Sequence[str]) -> List[str]:
    """
    Ingredientes do usuário primeiro (na ordem digitada), depois os
    ingredientes originais que sobraram, sem duplicatas (case-insensitive).
    """
    claimed: set[int] = set()
    result: List[str] = []
    seen: set[str] = set()

    for token in tokens:
        index = _find_claimable(token, existing, claimed)
        if index is not None:
            claimed.add(index)
            entry = existing[index]
        else:
            entry = normalize_ingredient(token)
        if entry.lower() not in seen:
            seen.add(entry.lower())
            result.append(entry)

    for index, entry in enumerate(existing):
        if index in claimed or entry.lower() in seen:
            continue
        seen.add(entry.lower())
        result.append(entry)

    return result


def reconcile(tokens: Sequence[str], artifact: GeneratedArtifact) -> GeneratedArtifact:
    ingredients = reconcile_ingredients(tokens, artifact.ingredients)
    instructions = artifact.instructions
    if tokens and tokens[0].lower() not in instructions.lower():
        note = f"Use the user ingredients first: {', '.join(tokens)}."
        instructions = f"{note}\n{instructions}" if instructions else note
    return replace(artifact, ingredients=tuple(ingredients), instructions=instructions)
