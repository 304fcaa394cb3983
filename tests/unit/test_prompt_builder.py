from __future__ import annotations

from src.app.domain.models import GenerationMode
from src.services.prompt_builder import RECIPE_RESPONSE_SCHEMA, build_prompt


class TestBuildPrompt:
    def test_schema_requires_all_fields(self) -> None:
        prompt = build_prompt(GenerationMode.BEVERAGE, [])
        schema = prompt.response_schema
        assert schema["type"] == "object"
        assert set(schema["required"]) == {"name", "ingredients", "effects", "instructions"}
        assert schema["properties"]["ingredients"] == {"type": "array", "items": {"type": "string"}}
        assert schema["properties"]["name"] == {"type": "string"}

    def test_mentions_every_token(self) -> None:
        prompt = build_prompt(GenerationMode.BEVERAGE, ["milk", "cinnamon"])
        assert "milk, cinnamon" in prompt.text
        assert "own item in the ingredients array" in prompt.text

    def test_without_tokens_has_no_user_ingredient_rule(self) -> None:
        prompt = build_prompt(GenerationMode.SNACK, [])
        assert "own item in the ingredients array" not in prompt.text
        assert "realistic and purchasable" in prompt.text

    def test_real_ingredient_constraint(self) -> None:
        text = build_prompt(GenerationMode.INFUSION, ["mint"]).text
        assert "real item purchasable" in text
        assert "NO fictional" in text

    def test_mode_specific_rules(self) -> None:
        assert "extraction details" in build_prompt(GenerationMode.BEVERAGE, []).text
        assert "steeping temperature & time" in build_prompt(GenerationMode.INFUSION, []).text
        assert "assembly steps" in build_prompt(GenerationMode.SNACK, []).text

    def test_persona_framing(self) -> None:
        text = build_prompt(GenerationMode.BEVERAGE, []).text
        assert text.startswith("You are a professional creator")
        assert "Neural Brew" in text

    def test_pure_function(self) -> None:
        first = build_prompt(GenerationMode.SNACK, ["bread", "cheese"])
        second = build_prompt(GenerationMode.SNACK, ["bread", "cheese"])
        assert first == second
        assert first.mode == GenerationMode.SNACK
        assert RECIPE_RESPONSE_SCHEMA["required"] == ["name", "ingredients", "effects", "instructions"]
