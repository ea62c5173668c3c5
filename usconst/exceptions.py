"""
Exception types of the US Constitution reader.

Every error raised on purpose derives from ``USConstException``, so entry
points can report it and exit non-zero. ``details`` holds machine-readable
context and is appended to the message when the exception is printed.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from pathlib import Path
from typing import Any, Dict, Optional


class USConstException(Exception):
    """Base class of all application errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"


# Input and output

class DataProcessingException(USConstException):
    """A data or output file could not be processed."""


class FileProcessingException(DataProcessingException):
    """Reading, writing or copying a file failed."""

    def __init__(self, file_path: Path, operation: str, original_error: Optional[Exception] = None):
        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error

        details = {"file": str(file_path), "operation": operation}
        if original_error is not None:
            details["error"] = f"{type(original_error).__name__}: {original_error}"
        super().__init__(f"Could not {operation} {file_path}", details)


class JSONParsingException(DataProcessingException):
    """A file is not valid JSON."""

    def __init__(self, source: str, original_error: Optional[Exception] = None):
        details = {"source": source}
        if original_error is not None:
            details["error"] = str(original_error)
        super().__init__(f"Invalid JSON in {source}", details)


class SearchIndexException(DataProcessingException):
    """The search index is valid JSON but not a list of records."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Search index unusable: {reason}", {"source": source})


# Configuration

class ConfigurationException(USConstException):
    """Build paths or settings are unusable."""


class InvalidConfigurationException(ConfigurationException):
    """A configuration value or file is invalid."""

    def __init__(self, config_key: str, reason: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            f"Invalid configuration for '{config_key}': {reason}",
            {"config_key": config_key, **(details or {})},
        )


# Validation

class ValidationException(USConstException):
    """Input content does not have the expected shape."""


class EntryValidationException(ValidationException):
    """A record of constitution.json is invalid."""


class TemplateMarkerException(ValidationException):
    """The page template lacks a generated-content marker pair."""

    def __init__(self, start_marker: str, end_marker: str):
        self.start_marker = start_marker
        self.end_marker = end_marker
        super().__init__(f"Missing marker pair: {start_marker} / {end_marker}")
