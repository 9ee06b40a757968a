"""
Exception taxonomy for the recipe generation pipeline
"""

from typing import Optional


class RecipeGenerationError(Exception):
    """Base class for every error raised by the generation pipeline"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RecipeGenerationError):
    """Required input is missing or empty; never triggers a fallback"""


class ProviderError(RecipeGenerationError):
    """Transport, credential or quota failure reported by an AI provider"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        provider: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.provider = provider

    def __repr__(self) -> str:
        return (
            f"ProviderError(provider={self.provider!r}, status_code={self.status_code!r}, "
            f"code={self.code!r}, message={self.message!r})"
        )


class ParseError(RecipeGenerationError):
    """Provider text held no extractable recipe document"""


class GenerationError(RecipeGenerationError):
    """Provider answered but produced nothing usable (e.g. empty content)"""


class RecipeGenerationFailed(RecipeGenerationError):
    """Non-recoverable failure surfaced to the caller as a 500"""

    def __init__(self, message: str = "Failed to generate recipe", cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause
