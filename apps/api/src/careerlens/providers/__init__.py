"""Provider adapters for generative text and speech."""

from careerlens.providers.base import (
    CompletionRequest,
    CompletionResponse,
    ProviderAdapter,
    ProviderError,
)
from careerlens.providers.elevenlabs import ElevenLabsAdapter, SpeechError
from careerlens.providers.gemini import GeminiAdapter

__all__ = [
    "CompletionRequest",
    "CompletionResponse",
    "ElevenLabsAdapter",
    "GeminiAdapter",
    "ProviderAdapter",
    "ProviderError",
    "SpeechError",
]
