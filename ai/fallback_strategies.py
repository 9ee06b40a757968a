"""
Fallback strategies for recipe generation
Handles quota limits, missing credentials and provider outages by degrading
to a secondary provider and finally to an offline recipe
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .exceptions import (
    GenerationError,
    ParseError,
    ProviderError,
    RecipeGenerationError,
    RecipeGenerationFailed,
)
from .offline_recipe import build_fallback_recipe
from .parser import parse_recipe_response
from .prompts import RecipePreferences, RecipePrompt
from .recipe_models import RecipeDraft

logger = logging.getLogger(__name__)

QUOTA_ERROR_CODES = frozenset({"insufficient_quota", "invalid_api_key"})

SECONDARY_PROVIDER_NOTE = "Generated via OpenRouter fallback."
OFFLINE_RECIPE_NOTE = "AI unavailable, returned fallback recipe."


class FailureType(Enum):
    """Types of failures we need to handle"""
    PROVIDER_ERROR = "provider_error"
    EMPTY_RESPONSE = "empty_response"
    INVALID_RESPONSE = "invalid_response"
    MISSING_CREDENTIAL = "missing_credential"
    UNEXPECTED = "unexpected"


class GenerationSource(str, Enum):
    """Where a returned recipe came from"""
    PRIMARY = "primary"
    SECONDARY = "secondary"
    OFFLINE = "offline"


@dataclass(frozen=True)
class FailureContext:
    """Normalized description of a primary-provider failure"""
    failure_type: FailureType
    message: str = ""
    status_code: Optional[int] = None
    code: Optional[str] = None
    primary_configured: bool = True


@dataclass
class GenerationResult:
    """Outcome of one generation request"""
    recipe: RecipeDraft
    source: GenerationSource
    note: Optional[str] = None
    model_used: Optional[str] = None


def describe_failure(error: Optional[Exception], primary_configured: bool = True) -> FailureContext:
    """Turn a pipeline exception into a FailureContext"""
    if not primary_configured:
        return FailureContext(
            FailureType.MISSING_CREDENTIAL,
            message="primary provider credential not configured",
            primary_configured=False,
        )

    if isinstance(error, ProviderError):
        return FailureContext(
            FailureType.PROVIDER_ERROR,
            message=error.message,
            status_code=error.status_code,
            code=error.code,
        )
    if isinstance(error, ParseError):
        return FailureContext(FailureType.INVALID_RESPONSE, message=error.message)
    if isinstance(error, GenerationError):
        return FailureContext(FailureType.EMPTY_RESPONSE, message=error.message)

    return FailureContext(
        FailureType.UNEXPECTED,
        message=str(error) if error is not None else "",
        status_code=getattr(error, "status_code", None),
        code=getattr(error, "code", None),
    )


def is_quota_or_unavailable(failure: FailureContext) -> bool:
    """Whether a failure should be absorbed by the fallback chain.

    True for rate limiting (HTTP 429), quota or credential error codes, any
    message mentioning a quota, a missing primary credential, or a primary
    provider that answered with nothing usable.
    """
    if not failure.primary_configured:
        return True
    if failure.failure_type in (
        FailureType.MISSING_CREDENTIAL,
        FailureType.EMPTY_RESPONSE,
        FailureType.INVALID_RESPONSE,
    ):
        return True
    if failure.status_code == 429:
        return True
    if failure.code is not None and str(failure.code) in QUOTA_ERROR_CODES:
        return True
    return "quota" in (failure.message or "").lower()


class FallbackDispatcher:
    """Secondary provider, then offline synthesis"""

    def __init__(self, secondary_client=None):
        self.secondary_client = secondary_client

    @property
    def secondary_configured(self) -> bool:
        return self.secondary_client is not None and self.secondary_client.configured

    async def recover(
        self,
        failure: FailureContext,
        prompt: Optional[RecipePrompt],
        request_prompt: Optional[str] = None,
        preferences: Optional[RecipePreferences] = None,
    ) -> GenerationResult:
        """Apply the fallback policy to a primary failure.

        Raises RecipeGenerationFailed when the failure is not a
        quota/availability problem.
        """
        if not is_quota_or_unavailable(failure):
            logger.error(
                f"Recipe generation failed without fallback: {failure.failure_type.value} "
                f"status={failure.status_code} code={failure.code} - {failure.message}"
            )
            raise RecipeGenerationFailed()

        logger.warning(
            f"Primary provider unavailable ({failure.failure_type.value}), using fallback chain"
        )

        if prompt is not None and self.secondary_configured:
            recipe = await self._try_secondary(prompt)
            if recipe is not None:
                return GenerationResult(
                    recipe=recipe,
                    source=GenerationSource.SECONDARY,
                    note=SECONDARY_PROVIDER_NOTE,
                    model_used=getattr(self.secondary_client, "model", None),
                )

        recipe = build_fallback_recipe(
            request_prompt or "Custom Dish",
            self._preference_bag(preferences),
        )
        logger.info("Returning offline fallback recipe")
        return GenerationResult(
            recipe=recipe,
            source=GenerationSource.OFFLINE,
            note=OFFLINE_RECIPE_NOTE,
        )

    async def _try_secondary(self, prompt: RecipePrompt) -> Optional[RecipeDraft]:
        try:
            text = await self.secondary_client.complete(prompt)
            return RecipeDraft.from_provider(parse_recipe_response(text))
        except RecipeGenerationError as e:
            logger.warning(f"Secondary provider fallback failed: {e!r}")
        except Exception as e:
            logger.warning(f"Secondary provider fallback failed unexpectedly: {e!r}")
        return None

    @staticmethod
    def _preference_bag(preferences: Optional[RecipePreferences]) -> Dict[str, Any]:
        if preferences is None:
            return {}
        return preferences.model_dump(exclude_none=True)
