"""
Recipe persistence collaborator

An in-memory store standing in for the relational database; each write
replaces the whole recipe aggregate (recipe, ingredients, instructions) at
once.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from ai.recipe_models import RecipeDraft

from .models import RecipeUpdate, StoredRecipe

DEMO_AUTHOR_ID = "demo-user"


class RecipeRepository(ABC):
    @abstractmethod
    def list(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> List[StoredRecipe]:
        pass

    @abstractmethod
    def get(self, recipe_id: str) -> Optional[StoredRecipe]:
        pass

    @abstractmethod
    def create(self, draft: RecipeDraft, author_id: str = DEMO_AUTHOR_ID) -> StoredRecipe:
        pass

    @abstractmethod
    def update(self, recipe_id: str, changes: RecipeUpdate) -> Optional[StoredRecipe]:
        pass

    @abstractmethod
    def delete(self, recipe_id: str) -> bool:
        pass


class InMemoryRecipeRepository(RecipeRepository):
    def __init__(self):
        self._recipes: Dict[str, StoredRecipe] = {}

    def list(self, category=None, search=None, limit=10, offset=0):
        # Insertion order is creation order; newest first
        recipes = list(reversed(self._recipes.values()))

        if category and category.upper() != "ALL":
            recipes = [r for r in recipes if r.category.value == category.upper()]

        if search:
            needle = search.lower()
            recipes = [
                r for r in recipes
                if needle in r.title.lower()
                or needle in r.description.lower()
                or any(needle in tag.lower() for tag in r.tags)
            ]

        return recipes[offset:offset + limit]

    def get(self, recipe_id):
        return self._recipes.get(recipe_id)

    def create(self, draft, author_id=DEMO_AUTHOR_ID):
        recipe = StoredRecipe(**draft.model_dump(), author_id=author_id)
        self._recipes[recipe.id] = recipe
        return recipe

    def update(self, recipe_id, changes):
        existing = self._recipes.get(recipe_id)
        if existing is None:
            return None

        data = existing.model_dump()
        data.update(changes.model_dump(exclude_unset=True, exclude_none=True))
        data["updated_at"] = datetime.utcnow()
        recipe = StoredRecipe(**data)
        self._recipes[recipe_id] = recipe
        return recipe

    def delete(self, recipe_id):
        return self._recipes.pop(recipe_id, None) is not None

    def clear(self):
        self._recipes.clear()


# Process-wide store
_repository = InMemoryRecipeRepository()


def get_recipe_repository() -> RecipeRepository:
    """FastAPI dependency returning the shared recipe store"""
    return _repository
