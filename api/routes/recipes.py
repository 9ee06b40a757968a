"""
Recipe CRUD routes backed by the recipe repository
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
import structlog

from ai.recipe_models import RecipeDraft
from ..models import (
    MessageResponse,
    RecipeEnvelope,
    RecipeListResponse,
    RecipeUpdate,
)
from ..repository import RecipeRepository, get_recipe_repository

logger = structlog.get_logger()
router = APIRouter(prefix="/api/recipes", tags=["Recipes"])


def _get_or_404(repository: RecipeRepository, recipe_id: str):
    recipe = repository.get(recipe_id)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.get("", response_model=RecipeListResponse, response_model_exclude_none=True)
async def list_recipes(
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    repository: RecipeRepository = Depends(get_recipe_repository),
):
    """List recipes, newest first"""
    recipes = repository.list(category=category, search=search, limit=limit, offset=offset)
    return RecipeListResponse(recipes=recipes)


@router.post("", response_model=RecipeEnvelope, response_model_exclude_none=True, status_code=201)
async def create_recipe(
    draft: RecipeDraft,
    repository: RecipeRepository = Depends(get_recipe_repository),
):
    recipe = repository.create(draft)
    logger.info("Recipe created", recipe_id=recipe.id, title=recipe.title)
    return RecipeEnvelope(recipe=recipe)


@router.get("/{recipe_id}", response_model=RecipeEnvelope, response_model_exclude_none=True)
async def get_recipe(
    recipe_id: str,
    repository: RecipeRepository = Depends(get_recipe_repository),
):
    return RecipeEnvelope(recipe=_get_or_404(repository, recipe_id))


@router.put("/{recipe_id}", response_model=RecipeEnvelope, response_model_exclude_none=True)
async def update_recipe(
    recipe_id: str,
    changes: RecipeUpdate,
    repository: RecipeRepository = Depends(get_recipe_repository),
):
    # TODO: enforce recipe ownership once authentication exists
    _get_or_404(repository, recipe_id)
    recipe = repository.update(recipe_id, changes)
    logger.info("Recipe updated", recipe_id=recipe_id)
    return RecipeEnvelope(recipe=recipe)


@router.delete("/{recipe_id}", response_model=MessageResponse)
async def delete_recipe(
    recipe_id: str,
    repository: RecipeRepository = Depends(get_recipe_repository),
):
    _get_or_404(repository, recipe_id)
    repository.delete(recipe_id)
    logger.info("Recipe deleted", recipe_id=recipe_id)
    return MessageResponse(message="Recipe deleted successfully")
