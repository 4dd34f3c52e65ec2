"""
CareerLens Generator - Prompt in, normalized career data out.

The generator is the only caller of the extraction core:
1. Send the prompt to the generative provider
2. Extract the JSON literal from the raw text
3. Parse it
4. Normalize it against the endpoint's schema descriptor

There are no retries. Provider and extraction errors propagate to the
HTTP layer, which reports them as failures of the AI-assist feature.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from careerlens.core.extractor import FailureObserver, JSONExtractor
from careerlens.core.normalizer import SchemaNormalizer
from careerlens.core.schema import SchemaDescriptor
from careerlens.providers.base import CompletionRequest, ProviderAdapter

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Normalized payload plus call metadata."""

    data: Any
    model: str
    provider: str
    latency_ms: int = 0
    raw_length: int = 0
    finish_reason: str | None = None
    usage: dict[str, int] = field(default_factory=dict)
    defaults_applied: list[str] = field(default_factory=list)


class CareerGenerator:
    """Run prompts through the provider and the extraction pipeline."""

    def __init__(
        self,
        provider: ProviderAdapter,
        model: str,
        observer: FailureObserver | None = None,
    ):
        self.provider = provider
        self.model = model
        self.extractor = JSONExtractor(observer=observer)
        self.normalizer = SchemaNormalizer()

    async def generate(
        self,
        prompt: str,
        schema: SchemaDescriptor,
        max_tokens: int = 4096,
        temperature: float = 0.7,
    ) -> GenerationResult:
        """
        Generate structured data for one endpoint.

        Args:
            prompt: Full prompt text
            schema: Shape the response must be normalized to
            max_tokens: Output token cap for the model

        Returns:
            GenerationResult whose ``data`` satisfies ``schema``

        Raises:
            ProviderError: The generative call failed
            NoJsonFound: The response held no balanced JSON
            MalformedJson: The balanced literal was not valid JSON
        """
        response = await self.provider.complete(
            CompletionRequest(
                prompt=prompt,
                model=self.model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        )
        logger.info(f"[{schema.name}] received {len(response.content)} chars from {response.provider}")
        if response.usage:
            logger.info(f"[{schema.name}] token usage: {response.usage}")

        if response.finish_reason == "MAX_TOKENS":
            logger.warning(f"[{schema.name}] response truncated at max_tokens={max_tokens}")

        parsed = self.extractor.extract_json(response.content, prefer_array=schema.prefer_array)
        result = self.normalizer.normalize_with_report(schema, parsed)

        if result.defaults_applied:
            logger.info(
                f"[{schema.name}] defaults applied to {len(result.defaults_applied)} fields: "
                f"{result.defaults_applied[:10]}"
            )

        return GenerationResult(
            data=result.data,
            model=response.model,
            provider=response.provider,
            latency_ms=response.latency_ms,
            raw_length=len(response.content),
            finish_reason=response.finish_reason,
            usage=response.usage or {},
            defaults_applied=result.defaults_applied,
        )

