"""JSON Extractor - Find and parse the JSON value in model output."""

from careerlens.core.extractor.extractor import (
    ExtractionFailure,
    FailureObserver,
    JSONExtractor,
    find_balanced,
)

__all__ = ["ExtractionFailure", "FailureObserver", "JSONExtractor", "find_balanced"]
