"""
Chat-completion provider clients

The primary provider is OpenAI through its async SDK; the secondary is
OpenRouter, reached over plain HTTP with a bearer key. Both make a single
attempt per request and return the raw text of the first choice.
"""

import logging
from typing import Any, Dict, Optional

import httpx
from openai import APIStatusError, AsyncOpenAI, OpenAIError

from .exceptions import GenerationError, ProviderError
from .prompts import RecipePrompt

logger = logging.getLogger(__name__)


def _messages(prompt: RecipePrompt):
    return [
        {"role": "system", "content": prompt.system},
        {"role": "user", "content": prompt.user},
    ]


class PrimaryGenerationClient:
    """OpenAI chat-completion client"""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_tokens: int = 1200,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.api_key) or self._client is not None

    def _get_client(self):
        if self._client is None:
            if not self.api_key:
                raise ProviderError("OpenAI API key is not configured", provider=self.name)
            # One attempt per provider; the fallback chain handles failures
            self._client = AsyncOpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    async def complete(self, prompt: RecipePrompt) -> str:
        client = self._get_client()
        try:
            completion = await client.chat.completions.create(
                model=self.model,
                messages=_messages(prompt),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except APIStatusError as e:
            raise ProviderError(
                e.message,
                status_code=e.status_code,
                code=e.code,
                provider=self.name,
            ) from e
        except OpenAIError as e:
            raise ProviderError(str(e), code=getattr(e, "code", None), provider=self.name) from e

        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        if not content or not content.strip():
            raise GenerationError("empty response")
        return content

    async def close(self):
        if self._client is not None and hasattr(self._client, "close"):
            await self._client.close()


class SecondaryGenerationClient:
    """OpenRouter chat-completion client over HTTP"""

    name = "openrouter"

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "mistralai/mixtral-8x7b-instruct:free",
        base_url: str = "https://openrouter.ai/api/v1",
        temperature: float = 0.7,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self._http_client = http_client

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient()
        return self._http_client

    def _payload(self, prompt: RecipePrompt) -> Dict[str, Any]:
        # No explicit token cap for the secondary provider
        return {
            "model": self.model,
            "messages": _messages(prompt),
            "temperature": self.temperature,
        }

    async def complete(self, prompt: RecipePrompt) -> str:
        if not self.api_key:
            raise ProviderError("OpenRouter API key is not configured", provider=self.name)

        try:
            response = await self._get_http_client().post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {self.api_key}",
                },
                json=self._payload(prompt),
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"OpenRouter request failed: {e}", provider=self.name) from e

        if response.is_error:
            message, code = _error_details(response)
            raise ProviderError(
                message,
                status_code=response.status_code,
                code=code,
                provider=self.name,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise GenerationError("invalid response body") from e

        content = None
        choices = data.get("choices") if isinstance(data, dict) else None
        if choices:
            content = (choices[0].get("message") or {}).get("content")
        if not content or not str(content).strip():
            raise GenerationError("empty response")
        return content

    async def close(self):
        if self._http_client is not None:
            await self._http_client.aclose()


def _error_details(response: httpx.Response):
    """Pull the provider's error message and code out of an error body"""
    message = f"OpenRouter returned HTTP {response.status_code}"
    code = None
    try:
        body = response.json()
    except ValueError:
        return message, code

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        message = error.get("message") or message
        if error.get("code") is not None:
            code = str(error["code"])
    return message, code
