"""
API Routes Package for the Recipe Share AI Service
"""

from .health import router as health_router
from .generation import router as generation_router
from .recipes import router as recipes_router

__all__ = [
    "health_router",
    "generation_router",
    "recipes_router",
]
