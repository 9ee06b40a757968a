"""
Offline recipe synthesis used when no AI provider is reachable
"""

import re
from typing import Any, Mapping, Optional

from .recipe_models import (
    RecipeDraft,
    coerce_positive_int,
    normalize_category,
    normalize_difficulty,
)

PLACEHOLDER_TITLE = "Chef's Special"
MAX_TITLE_LENGTH = 60
DEFAULT_SERVINGS = 4
DEFAULT_CUISINE = "International"

FALLBACK_INGREDIENTS = [
    {"name": "Olive oil", "amount": "2", "unit": "tbsp", "notes": ""},
    {"name": "Onion, diced", "amount": "1", "unit": "medium", "notes": ""},
    {"name": "Garlic, minced", "amount": "3", "unit": "cloves", "notes": ""},
    {"name": "Mixed veggies", "amount": "2", "unit": "cups", "notes": "fresh or frozen"},
    {"name": "Protein of choice", "amount": "300", "unit": "g", "notes": "tofu/chicken/beans"},
    {"name": "Salt", "amount": "1", "unit": "tsp", "notes": "to taste"},
    {"name": "Black pepper", "amount": "1/2", "unit": "tsp", "notes": ""},
]

FALLBACK_STEPS = [
    "Heat olive oil in a pan over medium heat.",
    "Sauté onion until translucent, then add garlic and cook 30 seconds.",
    "Add protein and cook until done; season with salt and pepper.",
    "Stir in mixed veggies and cook until tender-crisp.",
    "Adjust seasoning and serve warm.",
]

_WORD = re.compile(r"\w\S*")


def title_case(text: str) -> str:
    """Capitalize the first character of each word and lowercase the rest"""
    return _WORD.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


def fallback_title(seed: Optional[str]) -> str:
    words = (seed or "").split()
    if not words:
        return PLACEHOLDER_TITLE
    title = title_case(" ".join(words))[:MAX_TITLE_LENGTH].rstrip()
    return title or PLACEHOLDER_TITLE


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def build_fallback_recipe(
    title_seed: Optional[str],
    preferences: Optional[Mapping[str, Any]] = None,
) -> RecipeDraft:
    """Build a complete recipe from a title seed and sparse preferences.

    Never fails and performs no I/O. Recognized preference keys are
    ``category``, ``difficulty``, ``servings``, ``cuisine`` and
    ``dietary_restrictions``; all are optional.
    """
    preferences = preferences or {}
    cuisine = _text(preferences.get("cuisine"))
    dietary = preferences.get("dietary_restrictions")

    tags = [cuisine.lower()] if cuisine else []
    if dietary is not None and str(dietary).strip():
        tags.append(str(dietary))

    description = " ".join(
        f"A tasty, easy-to-make {cuisine} dish generated as a fallback when AI is unavailable.".split()
    )

    return RecipeDraft(
        title=fallback_title(title_seed),
        description=description,
        prep_time=15,
        cook_time=20,
        servings=coerce_positive_int(preferences.get("servings"), DEFAULT_SERVINGS),
        difficulty=normalize_difficulty(preferences.get("difficulty")),
        category=normalize_category(preferences.get("category")),
        cuisine=cuisine or DEFAULT_CUISINE,
        tags=tags,
        calories=420,
        protein=20,
        carbs=50,
        fat=15,
        ingredients=[dict(item) for item in FALLBACK_INGREDIENTS],
        instructions=[
            {"step_number": number, "description": step}
            for number, step in enumerate(FALLBACK_STEPS, start=1)
        ],
    )
