"""
Recipe draft models and the shared enum normalization rules
"""

import math
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .exceptions import ParseError

E = TypeVar("E", bound=Enum)


class Difficulty(str, Enum):
    """Recipe difficulty levels"""
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class Category(str, Enum):
    """Meal categories"""
    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    DESSERT = "DESSERT"
    SNACK = "SNACK"
    BEVERAGE = "BEVERAGE"
    APPETIZER = "APPETIZER"
    SOUP = "SOUP"
    SALAD = "SALAD"
    MAIN_COURSE = "MAIN_COURSE"
    SIDE_DISH = "SIDE_DISH"


DEFAULT_DIFFICULTY = Difficulty.EASY
DEFAULT_CATEGORY = Category.DINNER


def normalize_choice(raw: Any, choices: Type[E], default: E) -> E:
    """Map a raw value onto an enum member, falling back to ``default``.

    Matching is case-insensitive and treats spaces and hyphens as
    underscores, so ``"side dish"`` resolves to ``SIDE_DISH``.
    """
    if isinstance(raw, choices):
        return raw
    if raw is None:
        return default
    key = str(raw).strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return choices(key)
    except ValueError:
        return default


def normalize_difficulty(raw: Any) -> Difficulty:
    return normalize_choice(raw, Difficulty, DEFAULT_DIFFICULTY)


def normalize_category(raw: Any) -> Category:
    return normalize_choice(raw, Category, DEFAULT_CATEGORY)


def coerce_positive_int(value: Any, default: int) -> int:
    """Best-effort positive integer, ``default`` when the value is unusable"""
    if isinstance(value, bool):
        return default
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number > 0 else default


def coerce_number(value: Any, default: float = 0) -> float:
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number if number >= 0 else default


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngredientDraft(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    amount: str = ""
    unit: str = ""
    notes: Optional[str] = None

    @field_validator("amount", "unit", mode="before")
    @classmethod
    def stringify(cls, v):
        return "" if v is None else str(v)

    @field_validator("notes", mode="before")
    @classmethod
    def stringify_notes(cls, v):
        return None if v is None else str(v)


class InstructionDraft(CamelModel):
    step_number: int = Field(..., ge=1)
    description: str = Field(..., min_length=1)


class RecipeDraft(CamelModel):
    """In-memory recipe produced by generation, not yet persisted"""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    prep_time: int = Field(default=15, ge=1)
    cook_time: int = Field(default=20, ge=1)
    servings: int = Field(default=4, ge=1)
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    category: Category = DEFAULT_CATEGORY
    cuisine: str = ""
    tags: List[str] = Field(default_factory=list)
    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    ingredients: List[IngredientDraft] = Field(default_factory=list)
    instructions: List[InstructionDraft] = Field(default_factory=list)

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, v):
        return normalize_difficulty(v)

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, v):
        return normalize_category(v)

    @field_validator("description", "cuisine", mode="before")
    @classmethod
    def _text_or_blank(cls, v):
        return "" if v is None else str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            v = [tag.strip() for tag in v.split(",")]
        elif not isinstance(v, (list, tuple)):
            return []
        # Blank tags are dropped; the rest are kept as given
        return [str(tag) for tag in v if tag is not None and str(tag).strip()]

    @classmethod
    def from_provider(cls, data: Dict[str, Any]) -> "RecipeDraft":
        """Build a usable draft from a parsed provider document.

        Numbers are coerced leniently, enums normalized and instructions
        renumbered 1..N. A document without a title or without any usable
        step raises ParseError.
        """
        title = str(data.get("title") or "").strip()[:200]
        if not title:
            raise ParseError("recipe has no title")

        instructions = []
        for step in _as_list(data.get("instructions")):
            if isinstance(step, dict):
                text = step.get("description") or step.get("instruction") or ""
            else:
                text = step
            text = str(text or "").strip()
            if text:
                instructions.append({"step_number": len(instructions) + 1, "description": text})
        if not instructions:
            raise ParseError("recipe has no instructions")

        ingredients = []
        for item in _as_list(data.get("ingredients")):
            if isinstance(item, dict):
                name = str(item.get("name") or item.get("item") or "").strip()
                if name:
                    ingredients.append({
                        "name": name[:200],
                        "amount": item.get("amount"),
                        "unit": item.get("unit"),
                        "notes": item.get("notes") or None,
                    })
            elif item is not None and str(item).strip():
                ingredients.append({"name": str(item).strip()[:200]})

        try:
            return cls(
                title=title,
                description=data.get("description"),
                prep_time=coerce_positive_int(data.get("prepTime"), 15),
                cook_time=coerce_positive_int(data.get("cookTime"), 20),
                servings=coerce_positive_int(data.get("servings"), 4),
                difficulty=data.get("difficulty"),
                category=data.get("category"),
                cuisine=data.get("cuisine"),
                tags=data.get("tags"),
                calories=coerce_number(data.get("calories")),
                protein=coerce_number(data.get("protein")),
                carbs=coerce_number(data.get("carbs")),
                fat=coerce_number(data.get("fat")),
                ingredients=ingredients,
                instructions=instructions,
            )
        except PydanticValidationError as e:
            raise ParseError(f"recipe data is malformed: {e.error_count()} invalid field(s)") from e
        except (TypeError, ValueError, OverflowError) as e:
            raise ParseError(f"recipe data is malformed: {e}") from e


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []
