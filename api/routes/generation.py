"""
AI recipe generation route
"""

from fastapi import APIRouter, Depends
import structlog

from ai import RecipeGenerator, get_recipe_generator
from ..models import RecipeGenerationRequest, RecipeGenerationResponse

logger = structlog.get_logger()
router = APIRouter(prefix="/api/ai", tags=["Recipe Generation"])


@router.post(
    "/generate-recipe",
    response_model=RecipeGenerationResponse,
    response_model_exclude_none=True,
)
async def generate_recipe(
    body: RecipeGenerationRequest,
    generator: RecipeGenerator = Depends(get_recipe_generator),
):
    """
    Generate a recipe from a free-text prompt

    Falls back to a secondary provider and then to an offline recipe when
    the primary provider is rate limited, out of quota or not configured.
    """
    result = await generator.generate(body.prompt, body.preferences())

    logger.info(
        "Recipe generated",
        source=result.source.value,
        model_used=result.model_used,
        fallback=result.note is not None,
    )

    return RecipeGenerationResponse(
        recipe=result.recipe,
        note=result.note,
        source=result.source,
        model_used=result.model_used,
    )
