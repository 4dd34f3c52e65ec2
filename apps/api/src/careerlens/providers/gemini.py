"""Gemini provider adapter for the Google generative language API."""

import logging
import time

import httpx

from careerlens.providers.base import (
    CompletionRequest,
    CompletionResponse,
    EmptyResponseError,
    ProviderAdapter,
    ProviderAuthError,
    ProviderDownError,
    ProviderError,
    ProviderNotConfiguredError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class GeminiAdapter(ProviderAdapter):
    """
    Adapter for the Gemini ``generateContent`` endpoint.

    Returns the candidate text exactly as produced; callers are expected
    to run it through the extractor.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _get_headers(self) -> dict[str, str]:
        """Get request headers with auth."""
        if not self.api_key:
            raise ProviderNotConfiguredError(self.name, "GENERATIVE_API_KEY not configured in environment")

        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """Send a single-turn prompt to Gemini."""
        headers = self._get_headers()
        start_time = time.monotonic()

        payload = {
            "contents": [{"parts": [{"text": request.prompt}]}],
            "generationConfig": {
                "temperature": request.temperature,
                "maxOutputTokens": request.max_tokens,
                "topP": request.top_p,
                "topK": request.top_k,
            },
        }

        logger.info(
            f"Calling Gemini model={request.model} prompt_chars={len(request.prompt)} "
            f"max_tokens={request.max_tokens}"
        )

        try:
            response = await self._client.post(
                f"{self.base_url}/models/{request.model}:generateContent",
                headers=headers,
                json=payload,
            )
        except httpx.ConnectError:
            raise ProviderDownError(self.name, "Cannot connect to Gemini API")
        except httpx.TimeoutException:
            raise ProviderDownError(self.name, "Gemini API request timed out")

        latency_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(f"Gemini responded {response.status_code} in {latency_ms}ms")

        if response.status_code == 429:
            retry_after = response.headers.get("retry-after")
            raise RateLimitError(
                self.name,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        if response.status_code in (401, 403):
            raise ProviderAuthError(self.name, response.status_code)

        if response.is_error:
            logger.error(f"Gemini API error {response.status_code}: {response.text[:500]}")
            raise ProviderError(
                f"Gemini API error {response.status_code}: {response.text}",
                self.name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            logger.error(f"Gemini returned a non-JSON body: {response.text[:500]}")
            raise ProviderError("Gemini API returned a non-JSON response", self.name, status_code=response.status_code)

        if not isinstance(data, dict):
            raise ProviderError("Gemini API returned an unexpected response body", self.name)

        if data.get("error"):
            error = data["error"]
            message = error.get("message", "unknown error") if isinstance(error, dict) else str(error)
            raise ProviderError(f"Gemini API error: {message}", self.name)

        candidates = data.get("candidates") or []
        if not candidates:
            logger.warning("No candidates in Gemini response")
            raise EmptyResponseError(self.name, "Empty response from Gemini API")

        candidate = candidates[0]
        parts = (candidate.get("content") or {}).get("parts") or []
        content = "\n".join(part.get("text", "") for part in parts)

        if not content:
            logger.warning("No content parts in Gemini candidate")
            raise EmptyResponseError(self.name, "Empty response from Gemini API")

        usage = data.get("usageMetadata") or {}

        return CompletionResponse(
            content=content,
            model=data.get("modelVersion", request.model),
            provider=self.name,
            latency_ms=latency_ms,
            usage={
                "prompt_tokens": usage.get("promptTokenCount", 0),
                "completion_tokens": usage.get("candidatesTokenCount", 0),
                "total_tokens": usage.get("totalTokenCount", 0),
            },
            finish_reason=candidate.get("finishReason"),
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
