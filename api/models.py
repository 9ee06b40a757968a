"""
Request and Response models for the Recipe Share AI Service
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from ai.fallback_strategies import GenerationSource
from ai.prompts import RecipePreferences
from ai.recipe_models import (
    CamelModel,
    Category,
    Difficulty,
    IngredientDraft,
    InstructionDraft,
    RecipeDraft,
    normalize_category,
    normalize_difficulty,
)


class ErrorType(str, Enum):
    """Error types for standardized error handling"""
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    GENERATION_FAILED = "generation_failed"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Standardized error response"""
    error: str
    error_type: ErrorType
    request_id: Optional[str] = None
    errors: Optional[List[Dict[str, Any]]] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service: str
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    checks: Dict[str, bool] = Field(default_factory=dict)
    uptime: Optional[float] = None


# Recipe Generation Models
class RecipeGenerationRequest(CamelModel):
    """Request body for AI recipe generation.

    ``prompt`` is optional here so that a missing prompt is reported by the
    generation pipeline as a 400 rather than by request validation.
    """
    prompt: Optional[str] = None
    dietary_restrictions: Optional[str] = None
    cuisine: Optional[str] = None
    difficulty: Optional[str] = None
    servings: Optional[Union[int, float, str]] = None

    @field_validator("dietary_restrictions", mode="before")
    @classmethod
    def join_restrictions(cls, v):
        if isinstance(v, list):
            return ", ".join(str(item).strip() for item in v if str(item).strip()) or None
        return v

    def preferences(self) -> RecipePreferences:
        return RecipePreferences(
            dietary_restrictions=self.dietary_restrictions,
            cuisine=self.cuisine,
            difficulty=self.difficulty,
            servings=self.servings,
        )


class RecipeGenerationResponse(CamelModel):
    """Response for AI recipe generation"""
    recipe: RecipeDraft
    note: Optional[str] = None
    source: GenerationSource
    model_used: Optional[str] = None


# Recipe CRUD Models
class StoredRecipe(RecipeDraft):
    """Persisted recipe with identity and timestamps"""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    author_id: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class RecipeUpdate(CamelModel):
    """Partial recipe update; supplied lists replace the stored ones"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    prep_time: Optional[int] = Field(None, ge=1)
    cook_time: Optional[int] = Field(None, ge=1)
    servings: Optional[int] = Field(None, ge=1)
    difficulty: Optional[Difficulty] = None
    category: Optional[Category] = None
    cuisine: Optional[str] = None
    tags: Optional[List[str]] = None
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    ingredients: Optional[List[IngredientDraft]] = None
    instructions: Optional[List[InstructionDraft]] = None

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, v):
        return None if v is None else normalize_difficulty(v)

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, v):
        return None if v is None else normalize_category(v)


class RecipeEnvelope(CamelModel):
    recipe: StoredRecipe


class RecipeListResponse(CamelModel):
    recipes: List[StoredRecipe]


class MessageResponse(BaseModel):
    message: str
