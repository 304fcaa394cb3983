from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Sequence

from src.app.domain.models import GenerationMode

CAFE_NAME = "Neural Brew"

RECIPE_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "ingredients": {"type": "array", "items": {"type": "string"}},
        "effects": {"type": "array", "items": {"type": "string"}},
        "instructions": {"type": "string"},
    },
    "required": ["name", "ingredients", "effects", "instructions"],
}

_MODE_DESCRIPTORS = {
    GenerationMode.BEVERAGE: "coffee beverage",
    GenerationMode.INFUSION: "tea infusion",
    GenerationMode.SNACK: "savory cafe snack",
}

_MODE_RULES = {
    GenerationMode.BEVERAGE: (
        "Coffee Recipe Rules:\n"
        "- 4-6 real coffee-related ingredients max\n"
        "- Only real, purchasable coffee & cafe ingredients\n"
        "- Professional barista style steps\n"
        "- Instructions must include extraction details (dose, grind, water temperature, shot time)"
    ),
    GenerationMode.INFUSION: (
        "Tea Recipe Rules:\n"
        "- 3-6 real tea / herbal infusion ingredients\n"
        "- Use real tea bases or herbs (NO fictional tech ingredients)\n"
        "- Instructions must include steeping temperature & time"
    ),
    GenerationMode.SNACK: (
        "Snack Recipe Rules:\n"
        "- 4-8 real, simple snack ingredients\n"
        "- Must be a quick-prep cafe snack (sandwich, wrap, toast, salad bowl, energy bites, etc.)\n"
        "- Instructions must be concise assembly steps (no baking unless absolutely necessary & <15 min)"
    ),
}

_DEFAULT_SOURCING = {
    GenerationMode.BEVERAGE: "using premium coffee ingredients and modern brewing techniques",
    GenerationMode.INFUSION: "using real tea leaves or herbal ingredients",
    GenerationMode.SNACK: "using real, quick-preparation cafe snack ingredients",
}

_ACCEPTABLE_EXAMPLES = """Examples of ACCEPTABLE real ingredients:
- Espresso beans, arabica coffee, cold brew concentrate
- Whole milk, oat milk, almond milk, heavy cream
- Vanilla syrup, caramel syrup, cinnamon, nutmeg
- Dark chocolate, cocoa powder, honey, brown sugar
- (Tea) green tea, black tea, oolong, chamomile, peppermint, ginger, lemongrass, hibiscus
- (Snack) bread, cheese, eggs, chicken, lettuce, spinach, tomato, herbs, olive oil, nuts, seeds

Examples of UNACCEPTABLE fake ingredients:
- "Neural foam", "quantum milk", "digital compounds", "matrix syrup"
- Any fictional or made-up ingredients"""

_RESPONSE_SHAPE = """Respond JSON only (no markdown, no commentary):
{
  "name": "Professional recipe name with subtle tech theme",
  "ingredients": ["Real ingredient 1", "Real ingredient 2", ...],
  "effects": ["Realistic benefit 1", "Realistic benefit 2", ...],
  "instructions": "Step-by-step professional preparation"
}"""


@dataclass(frozen=True)
class GenerationPrompt:
    mode: GenerationMode
    text: str
    response_schema: Dict[str, Any] = field(default_factory=lambda: RECIPE_RESPONSE_SCHEMA)


def _user_ingredient_rules(tokens: Sequence[str]) -> str:
    if not tokens:
        return "- Keep ingredients realistic and purchasable"
    return (
        "- Each of these user ingredients MUST appear as its own item in the ingredients array: "
        f"{', '.join(tokens)}\n"
        "- You may normalize wording (e.g. 'milk' -> 'whole milk') but never drop an item "
        "or merge two of them into one entry\n"
        "- Do NOT add unrelated flavors that would overshadow the user ingredients"
    )


def build_prompt(mode: GenerationMode, tokens: Sequence[str]) -> GenerationPrompt:
    """Monta a instrução para o Gemini a partir do modo e dos ingredientes."""
    if tokens:
        sourcing = (
            f"that incorporates these user ingredients: {', '.join(tokens)}. "
            "They must appear explicitly and be the primary focus"
        )
    else:
        sourcing = _DEFAULT_SOURCING[mode]

    sections = [
        f'You are a professional creator at "{CAFE_NAME}" - a modern tech-themed cafe. '
        f"Create a sophisticated {_MODE_DESCRIPTORS[mode]} recipe {sourcing}.",
        "IMPORTANT REQUIREMENTS:\n"
        "- Every ingredient must be a real item purchasable at a cafe or grocery store\n"
        "- NO fictional, invented or tech-themed ingredients; the tech theme belongs only in the recipe name\n"
        "- NO slang or unprofessional language\n"
        "- Effects must be realistic (flavor notes, mood, energy, focus, calm, satiation)",
        _MODE_RULES[mode],
        _ACCEPTABLE_EXAMPLES,
        "ADDITIONAL HARD REQUIREMENTS:\n" + _user_ingredient_rules(tokens),
        _RESPONSE_SHAPE,
    ]
    return GenerationPrompt(mode=mode, text="\n\n".join(sections))
