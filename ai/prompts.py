"""
Prompt construction for recipe generation
"""

from dataclasses import dataclass
from typing import Optional, Union

from pydantic import BaseModel

from .exceptions import ValidationError
from .recipe_models import Category, Difficulty


class RecipePreferences(BaseModel):
    """Optional user preferences accompanying a generation prompt"""
    dietary_restrictions: Optional[str] = None
    cuisine: Optional[str] = None
    difficulty: Optional[str] = None
    servings: Optional[Union[int, float, str]] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class RecipePrompt:
    """System and user instructions sent to a chat-completion provider"""
    system: str
    user: str


SYSTEM_PROMPT_TEMPLATE = """You are a professional chef and recipe developer. Create a detailed recipe based on the user's request.

Format your response as a JSON object with the following structure:
{{
  "title": "Recipe Title",
  "description": "Brief description of the recipe",
  "prepTime": number (in minutes),
  "cookTime": number (in minutes),
  "servings": number,
  "difficulty": {difficulties},
  "category": {categories},
  "cuisine": "cuisine type",
  "tags": ["tag1", "tag2", "tag3"],
  "calories": number,
  "protein": number,
  "carbs": number,
  "fat": number,
  "ingredients": [
    {{
      "name": "ingredient name",
      "amount": "amount",
      "unit": "unit",
      "notes": "optional notes"
    }}
  ],
  "instructions": [
    {{
      "stepNumber": 1,
      "description": "detailed step description"
    }}
  ]
}}

Number the instructions consecutively starting at 1.

Consider these preferences:
- Dietary restrictions: {dietary_restrictions}
- Cuisine: {cuisine}
- Difficulty: {difficulty}
- Servings: {servings}

Make sure the recipe is practical, well-seasoned, and includes proper cooking techniques."""


def _choices(enum_cls) -> str:
    return " | ".join(f'"{member.value}"' for member in enum_cls)


def _or_default(value, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def build_recipe_prompt(
    prompt: Optional[str],
    preferences: Optional[RecipePreferences] = None,
) -> RecipePrompt:
    """Assemble the provider instructions for a free-text recipe request.

    Raises ValidationError when the prompt is missing or blank.
    """
    if prompt is None or not str(prompt).strip():
        raise ValidationError("Prompt is required")

    preferences = preferences or RecipePreferences()
    system = SYSTEM_PROMPT_TEMPLATE.format(
        difficulties=_choices(Difficulty),
        categories=_choices(Category),
        dietary_restrictions=_or_default(preferences.dietary_restrictions, "none"),
        cuisine=_or_default(preferences.cuisine, "any"),
        difficulty=_or_default(preferences.difficulty, "any"),
        servings=_or_default(preferences.servings, "4"),
    )
    return RecipePrompt(system=system, user=prompt)
