"""
Recipe generation pipeline: prompt, primary provider, parser, fallback chain
"""

import logging
from typing import Optional

from config import Settings

from .exceptions import RecipeGenerationError
from .fallback_strategies import (
    FallbackDispatcher,
    GenerationResult,
    GenerationSource,
    describe_failure,
)
from .parser import parse_recipe_response
from .prompts import RecipePreferences, build_recipe_prompt
from .providers import PrimaryGenerationClient, SecondaryGenerationClient
from .recipe_models import RecipeDraft

logger = logging.getLogger(__name__)


class RecipeGenerator:
    """Stateless across requests; safe to share process-wide"""

    def __init__(
        self,
        primary_client: PrimaryGenerationClient,
        secondary_client: Optional[SecondaryGenerationClient] = None,
    ):
        self.primary_client = primary_client
        self.secondary_client = secondary_client
        self.dispatcher = FallbackDispatcher(secondary_client)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RecipeGenerator":
        primary = PrimaryGenerationClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.generation_temperature,
            max_tokens=settings.openai_max_tokens,
        )
        secondary = SecondaryGenerationClient(
            api_key=settings.openrouter_api_key,
            model=settings.openrouter_model,
            base_url=settings.openrouter_base_url,
            temperature=settings.generation_temperature,
        )
        return cls(primary, secondary)

    async def generate(
        self,
        prompt: Optional[str],
        preferences: Optional[RecipePreferences] = None,
    ) -> GenerationResult:
        """Generate a recipe for a free-text prompt.

        Raises ValidationError for a blank prompt and RecipeGenerationFailed
        for failures the fallback chain does not absorb.
        """
        recipe_prompt = build_recipe_prompt(prompt, preferences)

        if not self.primary_client.configured:
            logger.info("Primary provider not configured, skipping straight to fallback")
            failure = describe_failure(None, primary_configured=False)
            return await self.dispatcher.recover(failure, recipe_prompt, prompt, preferences)

        try:
            text = await self.primary_client.complete(recipe_prompt)
            recipe = RecipeDraft.from_provider(parse_recipe_response(text))
        except RecipeGenerationError as e:
            logger.warning(f"Primary provider failed: {e!r}")
            failure = describe_failure(e, primary_configured=True)
            return await self.dispatcher.recover(failure, recipe_prompt, prompt, preferences)

        logger.info(f"Recipe generated by primary provider: {recipe.title}")
        return GenerationResult(
            recipe=recipe,
            source=GenerationSource.PRIMARY,
            model_used=self.primary_client.model,
        )

    async def close(self):
        await self.primary_client.close()
        if self.secondary_client is not None:
            await self.secondary_client.close()
