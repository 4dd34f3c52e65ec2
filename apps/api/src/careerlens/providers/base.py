"""Base provider adapter interface and types."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class CompletionRequest:
    """Request for model completion."""

    prompt: str
    model: str
    temperature: float = 0.7
    max_tokens: int = 4096
    top_p: float = 0.95
    top_k: int = 40


@dataclass
class CompletionResponse:
    """Response from model completion."""

    content: str
    model: str
    provider: str
    usage: dict[str, int] | None = None  # tokens used
    latency_ms: int = 0
    finish_reason: str | None = None


class ProviderAdapter(ABC):
    """
    Abstract base class for generative provider adapters.

    Adapters turn a prompt into raw text. They know nothing about JSON;
    extraction happens downstream.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g., 'gemini')."""
        ...

    @property
    @abstractmethod
    def configured(self) -> bool:
        """Whether credentials are present."""
        ...

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionResponse:
        """
        Send completion request to provider.

        Args:
            request: The completion request

        Returns:
            CompletionResponse with model output

        Raises:
            ProviderError on failure
        """
        ...

    async def close(self) -> None:
        """Close provider connections. Override in subclasses if needed."""
        pass


class ProviderError(Exception):
    """Base exception for provider errors."""

    error_type = "PROVIDER_ERROR"

    def __init__(
        self,
        message: str,
        provider: str,
        recoverable: bool = True,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.recoverable = recoverable
        self.status_code = status_code


class RateLimitError(ProviderError):
    """Rate limit exceeded."""

    error_type = "RATE_LIMIT"

    def __init__(self, provider: str, retry_after: int | None = None):
        super().__init__(f"Rate limit exceeded for {provider}", provider, recoverable=True, status_code=429)
        self.retry_after = retry_after


class ProviderAuthError(ProviderError):
    """Credentials were rejected."""

    error_type = "AUTH_ERROR"

    def __init__(self, provider: str, status_code: int):
        super().__init__(
            f"{provider} rejected the API key ({status_code})",
            provider,
            recoverable=False,
            status_code=status_code,
        )


class ProviderNotConfiguredError(ProviderError):
    """No credentials configured."""

    error_type = "NOT_CONFIGURED"

    def __init__(self, provider: str, message: str):
        super().__init__(message, provider, recoverable=False)


class ProviderDownError(ProviderError):
    """Provider is unavailable."""

    error_type = "PROVIDER_DOWN"

    def __init__(self, provider: str, message: str = "Provider unavailable"):
        super().__init__(message, provider, recoverable=True)


class EmptyResponseError(ProviderError):
    """Provider answered without any text."""

    error_type = "EMPTY_RESPONSE"

    def __init__(self, provider: str, message: str = "Empty response"):
        super().__init__(message, provider, recoverable=True)
