"""Schema Normalizer - Default-fill and clamp parsed model output."""

from careerlens.core.normalizer.normalizer import NormalizedResult, SchemaNormalizer, normalize

__all__ = ["NormalizedResult", "SchemaNormalizer", "normalize"]
