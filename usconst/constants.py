"""
Constants module for the US Constitution reader.

This module contains string constants, enums, and other immutable values
used throughout the application.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from enum import Enum
from typing import Final


class Part(str, Enum):
    """Top-level parts of the document."""

    PREAMBLE = "preamble"
    ARTICLE = "article"
    AMENDMENT = "amendment"


class Status(str, Enum):
    """Repeal status filter values."""

    ALL = "all"
    ACTIVE = "active"
    REPEALED = "repealed"


ALL: Final = "all"


# HTML/CSS classes and IDs
class HTMLClasses:
    """HTML CSS class names used by generated markup and the filter layer."""

    ENTRY: Final = "entry"
    PART_HEADING: Final = "part-heading"
    MAJOR_PART_HEADING: Final = "major-part-heading"
    HIDDEN: Final = "is-hidden"


class ElementIds:
    """Element ids of the page controls."""

    SEARCH: Final = "search-input"
    PART: Final = "part-filter"
    ARTICLE: Final = "article-filter"
    AMENDMENT: Final = "amendment-filter"
    STATUS: Final = "status-filter"
    RESULTS_COUNT: Final = "results-count"
    ACTIVE_FILTERS: Final = "active-filters"

    PREAMBLE_HEADING: Final = "part-preamble"
    ARTICLES_HEADING: Final = "part-articles"
    AMENDMENTS_HEADING: Final = "part-amendments"


# Data attributes
class DataAttributes:
    """HTML data attributes."""

    ENTRY_ID: Final = "data-entry-id"
    PART: Final = "data-part"
    ARTICLE: Final = "data-article"
    AMENDMENT: Final = "data-amendment"
    REPEALED: Final = "data-repealed"


# Regular expressions patterns
class Patterns:
    """Common regex patterns."""

    AMENDMENT_ID: Final = r"^amend(\d+)-"
    ARTICLE_HEADING_ID: Final = r"^part-article-(\d+)$"
    AMENDMENT_HEADING_ID: Final = r"^part-amendment-(\d+)$"


class DateFormats:
    """Date formatting patterns (arrow tokens)."""

    ISO_DATE: Final = "YYYY-MM-DD"


# MIME types
class MimeTypes:
    """MIME type constants."""

    JSON: Final = "application/json"
    HTML: Final = "text/html; charset=utf-8"
    TEXT: Final = "text/plain; charset=utf-8"
    CSS: Final = "text/css; charset=utf-8"
    JS: Final = "text/javascript; charset=utf-8"
    SVG: Final = "image/svg+xml"
    BINARY: Final = "application/octet-stream"


# Encoding
DEFAULT_ENCODING: Final = "utf-8"
