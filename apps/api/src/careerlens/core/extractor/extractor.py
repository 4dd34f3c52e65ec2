"""
JSON Extractor - Locate and parse the JSON value inside model output.

Generative models do not reliably return bare JSON. Responses may be
wrapped in markdown fences or surrounded by commentary, and string values
may themselves contain braces. The extractor finds the first balanced
structure while ignoring brackets inside string literals.

Flow:
1. Trim whitespace and strip leading/trailing code fences
2. Scan for a balanced object, then a balanced array (or array first)
3. Parse the literal with the json module
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable

from careerlens.core.errors import MalformedJson, NoJsonFound

logger = logging.getLogger(__name__)

OBJECT_BRACKETS = ("{", "}")
ARRAY_BRACKETS = ("[", "]")


@dataclass
class ExtractionFailure:
    """What a failure observer receives."""

    error_type: str
    message: str
    text: str


FailureObserver = Callable[[ExtractionFailure], None]


def find_balanced(text: str, open_char: str, close_char: str) -> str | None:
    """
    Return the first balanced structure opened by ``open_char``.

    Scanning starts at the first ``open_char``. Double quotes toggle the
    in-string state and a backslash suppresses the next character, so
    brackets inside string literals never move the depth counter.

    Returns:
        The substring from the opening bracket through its matching close,
        or None if the structure never closes.
    """
    start = text.find(open_char)
    if start == -1:
        return None

    depth = 0
    in_string = False
    escape_next = False

    for index in range(start, len(text)):
        char = text[index]

        if escape_next:
            escape_next = False
            continue

        if char == "\\":
            escape_next = True
            continue

        if char == '"':
            in_string = not in_string
            continue

        if in_string:
            continue

        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return text[start : index + 1]

    return None


class JSONExtractor:
    """Recover a JSON value from raw model output."""

    LEADING_FENCE_PATTERN = re.compile(r"^```[\w-]*\s*")
    TRAILING_FENCE_PATTERN = re.compile(r"\s*```\s*$")

    def __init__(self, observer: FailureObserver | None = None):
        self.observer = observer

    def strip_fences(self, text: str) -> str:
        """Remove surrounding whitespace and markdown fence markers."""
        cleaned = text.strip()
        cleaned = self.LEADING_FENCE_PATTERN.sub("", cleaned)
        cleaned = self.TRAILING_FENCE_PATTERN.sub("", cleaned)
        return cleaned.strip()

    def extract(self, text: str, prefer_array: bool = False) -> str:
        """
        Extract the first balanced JSON literal from text.

        Args:
            text: Raw model output
            prefer_array: Try ``[...]`` before ``{...}``

        Returns:
            The JSON literal, brackets included

        Raises:
            NoJsonFound: If neither bracket pair yields a closed structure
        """
        cleaned = self.strip_fences(text or "")
        logger.debug(f"Extracting JSON from {len(cleaned)} chars of cleaned output")

        order = (ARRAY_BRACKETS, OBJECT_BRACKETS) if prefer_array else (OBJECT_BRACKETS, ARRAY_BRACKETS)
        for open_char, close_char in order:
            literal = find_balanced(cleaned, open_char, close_char)
            if literal is not None:
                logger.debug(f"Extracted {open_char}{close_char} literal: {len(literal)} chars")
                return literal

        logger.warning(f"No complete JSON structure found in {len(cleaned)} chars of output")
        logger.debug(f"Output head: {cleaned[:300]!r}")
        logger.debug(f"Output tail: {cleaned[-300:]!r}")

        error = NoJsonFound(text or "")
        self._notify(error.error_type, str(error), text or "")
        raise error

    def parse(self, literal: str) -> Any:
        """
        Parse an extracted literal.

        Raises:
            MalformedJson: If the literal is balanced but not valid JSON
        """
        try:
            return json.loads(literal)
        except json.JSONDecodeError as e:
            logger.warning(f"JSON parse failed: {e}")
            error = MalformedJson.from_decode_error(literal, e)
            self._notify(error.error_type, str(error), literal)
            raise error from e
        except RecursionError as e:
            logger.warning(f"JSON parse failed: literal of {len(literal)} chars is nested too deeply")
            error = MalformedJson(literal, "nesting exceeds the parser's recursion limit")
            self._notify(error.error_type, str(error), literal)
            raise error from e

    def extract_json(self, text: str, prefer_array: bool = False) -> Any:
        """Extract and parse in one step."""
        return self.parse(self.extract(text, prefer_array=prefer_array))

    def _notify(self, error_type: str, message: str, text: str) -> None:
        if self.observer is not None:
            self.observer(ExtractionFailure(error_type=error_type, message=message, text=text))
