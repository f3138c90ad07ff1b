"""
Atomic file writer for parser output.

Ensures an interrupted run never leaves a truncated output file behind.
"""

from __future__ import annotations

import json
import tempfile
from collections.abc import Callable
from pathlib import Path

from .errors import GoFileParseError


class OutputValidationError(GoFileParseError):
    """Raised when produced output fails validation before being written."""

    pass


class AtomicWriter:
    """Handles atomic file writes with validation.

    The content is written to a temporary file in the target directory,
    validated, then moved over the target in a single rename.
    """

    def __init__(self, validate_json: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_json: Optional validation function for JSON output
        """
        self._validate_json = validate_json or self._default_validate_json

    def write(self, path: Path, content: str, output_format: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            output_format: Format of the content ("json" or "summary")
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory so that the rename stays on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate and output_format == "json":
                self._validate_json(content)

            temp_path.replace(path)
        except Exception:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass  # Best effort cleanup
            raise

    def _default_validate_json(self, content: str) -> None:
        """Check the content parses as a JSON object with a files list.

        Raises:
            OutputValidationError: If validation fails
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise OutputValidationError(f"Generated JSON is not valid: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("files"), list):
            raise OutputValidationError("Generated JSON has no files list")
