"""CareerLens Core - Extraction and normalization of model output."""

from careerlens.core.errors import ExtractionError, MalformedJson, NoJsonFound
from careerlens.core.extractor import JSONExtractor
from careerlens.core.normalizer import NormalizedResult, SchemaNormalizer
from careerlens.core.schema import FieldKind, FieldSpec, SchemaDescriptor

__all__ = [
    "ExtractionError",
    "FieldKind",
    "FieldSpec",
    "JSONExtractor",
    "MalformedJson",
    "NoJsonFound",
    "NormalizedResult",
    "SchemaDescriptor",
    "SchemaNormalizer",
]
