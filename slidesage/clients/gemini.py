"""
Gemini API Client

Async client for Google AI Studio's generateContent endpoint. Implements the
LanguageModel capability used by the answer service.
"""

import logging

import httpx
from pydantic import ValidationError

from slidesage.core.config import settings
from slidesage.schemas.gemini import GeminiRequest, GeminiResponse

logger = logging.getLogger(__name__)


class LLMClientError(Exception):
    """Base exception for LLM client errors."""


class EmptyCompletionError(LLMClientError):
    """Raised when the API answers without any candidate text."""


class GeminiClient:
    """
    Async Gemini API client.

    Args:
        api_key: Google AI Studio API key. Defaults to settings.GEMINI_API_KEY.
        model: Model name (e.g. "gemini-1.5-flash"). Defaults to settings.GEMINI_MODEL.
        base_url: API base URL. Defaults to settings.GEMINI_BASE_URL.
        client: Optional pre-configured httpx.AsyncClient for testing.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self._model = model or settings.GEMINI_MODEL
        self._base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")

        if not self._api_key:
            raise LLMClientError("GEMINI_API_KEY is not configured")

        self._external_client = client is not None
        self._client = client or httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(settings.GEMINI_TIMEOUT),
        )

    @property
    def model(self) -> str:
        """Name of the Gemini model being called."""
        return self._model

    async def close(self) -> None:
        """Close the underlying HTTP client (only if internally created)."""
        if not self._external_client:
            await self._client.aclose()

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    async def complete(self, prompt: str) -> str:
        """
        Generate a completion for a fully rendered prompt.

        Args:
            prompt: Prompt text (system prompt, context, and question).

        Returns:
            Text of the first candidate.

        Raises:
            LLMClientError: On network errors or non-200 responses.
            EmptyCompletionError: If the response carries no candidate text.
        """
        url = f"{self._base_url}/models/{self._model}:generateContent"
        body = GeminiRequest.from_prompt(prompt).model_dump(exclude_none=True)

        try:
            response = await self._client.post(url, params={"key": self._api_key}, json=body)
        except httpx.RequestError as exc:
            raise LLMClientError(f"Request to Gemini failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning("Gemini returned HTTP %d for model %s", response.status_code, self._model)
            raise LLMClientError(f"Unexpected HTTP {response.status_code} from Gemini")

        try:
            parsed = GeminiResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise LLMClientError(f"Malformed Gemini response: {exc}") from exc

        text = parsed.first_text()
        if not text:
            raise EmptyCompletionError("Gemini returned no candidates")

        logger.debug("Gemini completion: %d chars", len(text))
        return text
