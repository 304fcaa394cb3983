from __future__ import annotations

from src.app.domain.models import GenerationMode
from src.services.classifier import classify


class TestClassify:
    def test_empty_defaults_to_beverage(self) -> None:
        assert classify([]) == GenerationMode.BEVERAGE

    def test_savory_overrides_beverage(self) -> None:
        assert classify(["chicken", "espresso"]) == GenerationMode.SNACK

    def test_savory_overrides_infusion(self) -> None:
        assert classify(["green tea", "cheese"]) == GenerationMode.SNACK

    def test_tea_without_coffee_is_infusion(self) -> None:
        assert classify(["green tea", "honey"]) == GenerationMode.INFUSION

    def test_tea_with_coffee_is_beverage(self) -> None:
        assert classify(["chai", "espresso"]) == GenerationMode.BEVERAGE

    def test_botanical_without_indicators_is_infusion(self) -> None:
        assert classify(["lemongrass", "honey"]) == GenerationMode.INFUSION
        assert classify(["fresh ginger"]) == GenerationMode.INFUSION

    def test_unrecognized_tokens_default_to_beverage(self) -> None:
        assert classify(["milk", "cinnamon"]) == GenerationMode.BEVERAGE

    def test_matching_is_case_insensitive(self) -> None:
        assert classify(["Cold Brew", "EGGS"]) == GenerationMode.SNACK
        assert classify(["Matcha"]) == GenerationMode.INFUSION

    def test_keyword_must_start_a_word(self) -> None:
        assert classify(["licorice root"]) != GenerationMode.SNACK
