"""
File operation utilities for the US Constitution reader.

This module provides common file operations with consistent error handling
and logging, reducing code duplication across the codebase.
"""

import json
import shutil
from pathlib import Path
from typing import Any

from usconst.logging_config import get_logger
from usconst.exceptions import FileProcessingException, JSONParsingException
from usconst.constants import DEFAULT_ENCODING

logger = get_logger(__name__)


class FileOperations:
    """Centralized file operations with consistent error handling."""

    @staticmethod
    def read_json(file_path: Path, encoding: str = DEFAULT_ENCODING) -> Any:
        """
        Read and parse a JSON file with proper error handling.

        Args:
            file_path: Path to the JSON file
            encoding: File encoding (default: utf-8)

        Returns:
            Parsed JSON data

        Raises:
            FileProcessingException: If file cannot be read
            JSONParsingException: If JSON is invalid
        """
        try:
            with open(file_path, 'r', encoding=encoding) as f:
                data = json.load(f)
            logger.debug(f"Successfully read JSON from: {file_path}")
            return data
        except json.JSONDecodeError as e:
            raise JSONParsingException(str(file_path), e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise FileProcessingException(file_path, "read JSON", e) from e

    @staticmethod
    def write_json(
        file_path: Path,
        data: Any,
        encoding: str = DEFAULT_ENCODING,
        indent: int = 2,
        ensure_ascii: bool = False,
        trailing_newline: bool = True,
    ) -> None:
        """
        Write data to a JSON file with proper error handling.

        Args:
            file_path: Path to write the JSON file
            data: Data to serialize as JSON
            encoding: File encoding (default: utf-8)
            indent: JSON indentation level
            ensure_ascii: Whether to escape non-ASCII characters
            trailing_newline: Whether to end the file with a newline

        Raises:
            FileProcessingException: If file cannot be written
        """
        payload = json.dumps(data, indent=indent, ensure_ascii=ensure_ascii)
        if trailing_newline:
            payload += "\n"
        FileOperations.write_text(file_path, payload, encoding=encoding)

    @staticmethod
    def read_text(file_path: Path, encoding: str = DEFAULT_ENCODING) -> str:
        """Read a text file, wrapping OS errors."""
        try:
            with open(file_path, 'r', encoding=encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FileProcessingException(file_path, "read", e) from e

    @staticmethod
    def write_text(file_path: Path, content: str, encoding: str = DEFAULT_ENCODING) -> None:
        """Write a text file, creating parent directories as needed."""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps "\n" line endings on every platform
            with open(file_path, 'w', encoding=encoding, newline="") as f:
                f.write(content)
            logger.debug(f"Wrote {len(content)} characters to: {file_path}")
        except OSError as e:
            raise FileProcessingException(file_path, "write", e) from e

    @staticmethod
    def ensure_directory(directory: Path) -> None:
        """
        Ensure a directory exists, creating it if necessary.

        Raises:
            FileProcessingException: If directory cannot be created
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured directory exists: {directory}")
        except OSError as e:
            raise FileProcessingException(directory, "create directory", e) from e

    @staticmethod
    def copy_file(source: Path, destination: Path) -> None:
        """
        Copy a file, overwriting the destination.

        Raises:
            FileProcessingException: If copy operation fails
        """
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, destination)
            logger.debug(f"Copied {source} to {destination}")
        except OSError as e:
            raise FileProcessingException(source, f"copy to {destination}", e) from e

