"""
Pytest configuration and shared fixtures
"""

import json
import os

import pytest
from fastapi.testclient import TestClient

# Set test environment before settings are loaded
os.environ["ENVIRONMENT"] = "testing"
os.environ["CORS_ORIGINS"] = "http://localhost:3000,http://localhost:8000"
os.environ["RATE_LIMIT_REQUESTS"] = "10000"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("OPENROUTER_API_KEY", None)

from config import get_settings  # noqa: E402
from api import create_app  # noqa: E402
from ai import get_recipe_generator  # noqa: E402
from api.repository import get_recipe_repository  # noqa: E402


SAMPLE_RECIPE = {
    "title": "Lemon Herb Chicken",
    "description": "Bright, weeknight-friendly roast chicken",
    "prepTime": 10,
    "cookTime": 35,
    "servings": 4,
    "difficulty": "MEDIUM",
    "category": "DINNER",
    "cuisine": "Mediterranean",
    "tags": ["chicken", "citrus"],
    "calories": 380,
    "protein": 34,
    "carbs": 6,
    "fat": 22,
    "ingredients": [
        {"name": "Chicken thighs", "amount": "800", "unit": "g", "notes": "bone-in"},
        {"name": "Lemon", "amount": "1", "unit": "whole"},
    ],
    "instructions": [
        {"stepNumber": 1, "description": "Heat the oven to 220C."},
        {"stepNumber": 2, "description": "Season the chicken with lemon and herbs."},
        {"stepNumber": 3, "description": "Roast for 35 minutes."},
    ],
}


class FakeProvider:
    """Stand-in for a generation client: returns canned text or raises"""

    def __init__(self, text=None, error=None, configured=True, model="fake-model"):
        self.text = text
        self.error = error
        self._configured = configured
        self.model = model
        self.calls = []
        self.closed = False

    @property
    def configured(self):
        return self._configured

    async def complete(self, prompt):
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text

    async def close(self):
        self.closed = True


@pytest.fixture
def sample_recipe():
    """Recipe document as a provider would return it"""
    return json.loads(json.dumps(SAMPLE_RECIPE))


@pytest.fixture
def sample_recipe_text(sample_recipe):
    return json.dumps(sample_recipe)


@pytest.fixture
def fake_provider():
    """Factory for FakeProvider instances"""
    return FakeProvider


@pytest.fixture(scope="session")
def test_settings():
    """Test settings configuration"""
    return get_settings()


@pytest.fixture(scope="session")
def app():
    """Create test FastAPI application"""
    return create_app()


@pytest.fixture(scope="session")
def client(app) -> TestClient:
    """Create test client"""
    return TestClient(app)


@pytest.fixture
def use_generator(app):
    """Install a RecipeGenerator for the duration of one test"""
    def install(generator):
        app.dependency_overrides[get_recipe_generator] = lambda: generator
        return generator

    yield install
    app.dependency_overrides.pop(get_recipe_generator, None)


@pytest.fixture
def repository():
    """Empty shared recipe store"""
    repo = get_recipe_repository()
    repo.clear()
    yield repo
    repo.clear()


@pytest.fixture
def sample_generation_request():
    """Sample recipe generation request body"""
    return {
        "prompt": "Make a healthy pasta dish",
        "cuisine": "Italian",
        "dietaryRestrictions": "vegetarian",
        "servings": 4,
        "difficulty": "medium",
    }
