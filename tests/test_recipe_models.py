"""
Recipe draft model and normalization tests
"""

import pytest

from ai.exceptions import ParseError
from ai.recipe_models import (
    Category,
    Difficulty,
    RecipeDraft,
    coerce_number,
    coerce_positive_int,
    normalize_category,
    normalize_difficulty,
)


class TestEnumNormalization:

    @pytest.mark.parametrize("raw,expected", [
        ("EASY", Difficulty.EASY),
        ("medium", Difficulty.MEDIUM),
        ("hard", Difficulty.HARD),
        (" Hard ", Difficulty.HARD),
        ("expert", Difficulty.EASY),
        ("", Difficulty.EASY),
        (None, Difficulty.EASY),
        (3, Difficulty.EASY),
    ])
    def test_difficulty(self, raw, expected):
        assert normalize_difficulty(raw) is expected

    @pytest.mark.parametrize("raw,expected", [
        ("BREAKFAST", Category.BREAKFAST),
        ("dessert", Category.DESSERT),
        ("main_course", Category.MAIN_COURSE),
        ("side dish", Category.SIDE_DISH),
        ("Main-Course", Category.MAIN_COURSE),
        ("PASTA", Category.DINNER),
        (None, Category.DINNER),
    ])
    def test_category(self, raw, expected):
        assert normalize_category(raw) is expected

    def test_enum_member_passes_through(self):
        assert normalize_category(Category.SOUP) is Category.SOUP


class TestCoercion:

    @pytest.mark.parametrize("raw,expected", [
        (6, 6), ("6", 6), (2.9, 2), ("0", 4), (-3, 4), ("lots", 4), (None, 4), (True, 4),
        (float("inf"), 4), (float("nan"), 4), ("1e999", 4),
    ])
    def test_positive_int(self, raw, expected):
        assert coerce_positive_int(raw, 4) == expected

    @pytest.mark.parametrize("raw", [float("inf"), float("-inf"), float("nan"), "1e999"])
    def test_non_finite_number(self, raw):
        assert coerce_number(raw) == 0


class TestFromProvider:

    def test_well_formed_document(self, sample_recipe):
        draft = RecipeDraft.from_provider(sample_recipe)
        assert draft.title == "Lemon Herb Chicken"
        assert draft.difficulty is Difficulty.MEDIUM
        assert draft.prep_time == 10
        assert [step.step_number for step in draft.instructions] == [1, 2, 3]
        assert draft.ingredients[0].notes == "bone-in"

    def test_enums_normalized(self, sample_recipe):
        sample_recipe["difficulty"] = "Impossible"
        sample_recipe["category"] = "PASTA"
        draft = RecipeDraft.from_provider(sample_recipe)
        assert draft.difficulty is Difficulty.EASY
        assert draft.category is Category.DINNER

    def test_steps_renumbered_contiguously(self, sample_recipe):
        sample_recipe["instructions"] = [
            {"stepNumber": 3, "description": "Boil water."},
            {"stepNumber": 7, "description": ""},
            {"stepNumber": 9, "description": "Add pasta."},
            "Drain and serve.",
        ]
        draft = RecipeDraft.from_provider(sample_recipe)
        assert [(s.step_number, s.description) for s in draft.instructions] == [
            (1, "Boil water."),
            (2, "Add pasta."),
            (3, "Drain and serve."),
        ]

    def test_lenient_numbers(self, sample_recipe):
        sample_recipe["prepTime"] = "about 10"
        sample_recipe["servings"] = "6"
        sample_recipe["calories"] = "n/a"
        draft = RecipeDraft.from_provider(sample_recipe)
        assert draft.prep_time == 15
        assert draft.servings == 6
        assert draft.calories == 0

    def test_camel_case_serialization(self, sample_recipe):
        data = RecipeDraft.from_provider(sample_recipe).model_dump(by_alias=True)
        assert "prepTime" in data and "cookTime" in data
        assert data["instructions"][0]["stepNumber"] == 1

    def test_missing_title(self, sample_recipe):
        sample_recipe["title"] = "  "
        with pytest.raises(ParseError):
            RecipeDraft.from_provider(sample_recipe)

    def test_missing_instructions(self, sample_recipe):
        sample_recipe["instructions"] = []
        with pytest.raises(ParseError):
            RecipeDraft.from_provider(sample_recipe)

    def test_instructions_not_a_list(self, sample_recipe):
        sample_recipe["instructions"] = "Cook it."
        with pytest.raises(ParseError):
            RecipeDraft.from_provider(sample_recipe)

    def test_overflowing_numbers_fall_back_to_defaults(self, sample_recipe):
        sample_recipe["prepTime"] = 1e999
        sample_recipe["calories"] = float("inf")
        draft = RecipeDraft.from_provider(sample_recipe)
        assert draft.prep_time == 15
        assert draft.calories == 0

    @pytest.mark.parametrize("tags", [5, {"a": 1}, True])
    def test_tags_of_unexpected_type_are_dropped(self, sample_recipe, tags):
        sample_recipe["tags"] = tags
        assert RecipeDraft.from_provider(sample_recipe).tags == []

    def test_tags_from_comma_separated_string(self, sample_recipe):
        sample_recipe["tags"] = "quick, easy,,  "
        assert RecipeDraft.from_provider(sample_recipe).tags == ["quick", "easy"]

    def test_non_string_ingredient_fields_are_stringified(self, sample_recipe):
        sample_recipe["ingredients"] = [{"name": "Salt", "amount": 1, "unit": None, "notes": 5}]
        ingredient = RecipeDraft.from_provider(sample_recipe).ingredients[0]
        assert (ingredient.amount, ingredient.unit, ingredient.notes) == ("1", "", "5")

    def test_unexpected_conversion_error_becomes_parse_error(self, sample_recipe, monkeypatch):
        def explode(value, default):
            raise OverflowError("too big")

        monkeypatch.setattr("ai.recipe_models.coerce_positive_int", explode)
        with pytest.raises(ParseError):
            RecipeDraft.from_provider(sample_recipe)
