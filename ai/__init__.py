"""
Recipe Share - AI recipe generation package
Prompting, provider clients, response parsing and the fallback chain
"""

import logging
from typing import Optional

from config import get_settings

from .exceptions import (
    GenerationError,
    ParseError,
    ProviderError,
    RecipeGenerationError,
    RecipeGenerationFailed,
    ValidationError,
)
from .fallback_strategies import GenerationResult, GenerationSource
from .prompts import RecipePreferences
from .recipe_generator import RecipeGenerator
from .recipe_models import Category, Difficulty, RecipeDraft

logger = logging.getLogger(__name__)

# Process-wide generator, created on first use from settings
_recipe_generator: Optional[RecipeGenerator] = None


def get_recipe_generator() -> RecipeGenerator:
    """FastAPI dependency returning the shared RecipeGenerator"""
    global _recipe_generator
    if _recipe_generator is None:
        settings = get_settings()
        _recipe_generator = RecipeGenerator.from_settings(settings)
        logger.info(
            f"Recipe generator initialized (primary configured: "
            f"{_recipe_generator.primary_client.configured}, secondary configured: "
            f"{_recipe_generator.dispatcher.secondary_configured})"
        )
    return _recipe_generator


async def close_recipe_generator():
    """Release provider connections held by the shared generator"""
    global _recipe_generator
    if _recipe_generator is not None:
        await _recipe_generator.close()
        _recipe_generator = None


__all__ = [
    "Category",
    "Difficulty",
    "GenerationError",
    "GenerationResult",
    "GenerationSource",
    "ParseError",
    "ProviderError",
    "RecipeDraft",
    "RecipeGenerationError",
    "RecipeGenerationFailed",
    "RecipeGenerator",
    "RecipePreferences",
    "ValidationError",
    "close_recipe_generator",
    "get_recipe_generator",
]
