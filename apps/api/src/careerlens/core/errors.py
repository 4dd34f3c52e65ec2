"""Errors raised when model output cannot be turned into JSON."""

from json import JSONDecodeError


class ExtractionError(Exception):
    """Base exception for extraction pipeline failures."""

    error_type = "EXTRACTION_ERROR"

    def __init__(self, message: str, text: str = ""):
        super().__init__(message)
        self.text = text


class NoJsonFound(ExtractionError):
    """No balanced JSON object or array could be located in the text."""

    error_type = "NO_JSON_FOUND"

    def __init__(self, text: str = ""):
        super().__init__("No valid JSON found in model response", text)


class MalformedJson(ExtractionError):
    """A balanced literal was found but the JSON parser rejected it."""

    error_type = "PARSE_ERROR"

    def __init__(self, literal: str, diagnostic: str, line: int | None = None, column: int | None = None):
        super().__init__(f"JSON parse error: {diagnostic}", literal)
        self.diagnostic = diagnostic
        self.line = line
        self.column = column

    @classmethod
    def from_decode_error(cls, literal: str, error: JSONDecodeError) -> "MalformedJson":
        """Build from the json module's error, keeping its position."""
        return cls(literal, str(error), line=error.lineno, column=error.colno)
