# src/services/ingredients.py
import re
from typing import List, Optional

from src.app.domain.models import MAX_INGREDIENT_TOKENS

# Vírgula, ponto e vírgula, quebra de linha ou a palavra "and"
_SPLIT_RE = re.compile(r"[,;\n]| and ", re.IGNORECASE)


def parse_ingredients(raw: Optional[str]) -> List[str]:
    """Quebra o texto livre do usuário em no máximo 8 ingredientes."""
    if not raw:
        return []
    pieces = (piece.strip() for piece in _SPLIT_RE.split(raw))
    return [piece for piece in pieces if piece][:MAX_INGREDIENT_TOKENS]
