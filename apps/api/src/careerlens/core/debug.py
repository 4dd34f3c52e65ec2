"""Debug dumps - Persist unparseable model output for offline diagnosis."""

import logging
import time
from pathlib import Path

from careerlens.core.extractor import ExtractionFailure

logger = logging.getLogger(__name__)


class DebugDumpObserver:
    """
    Extraction failure observer that writes the offending text to disk.

    Raw output with no JSON goes to ``extract-debug-<ms>.txt``; balanced
    literals that failed to parse go to ``extract-parse-error-<ms>.json``.
    Write failures are logged and swallowed so diagnostics never mask the
    original extraction error.
    """

    FILENAME_PREFIXES = {
        "NO_JSON_FOUND": ("extract-debug", "txt"),
        "PARSE_ERROR": ("extract-parse-error", "json"),
    }

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def __call__(self, failure: ExtractionFailure) -> Path | None:
        prefix, suffix = self.FILENAME_PREFIXES.get(failure.error_type, ("extract-failure", "txt"))
        path = self.directory / f"{prefix}-{time.time_ns() // 1_000_000}.{suffix}"

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(failure.text, encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not save debug file {path}: {e}")
            return None

        logger.info(f"Debug file saved: {path}")
        return path
