"""
HTML operation utilities for the US Constitution reader.

This module provides common HTML operations with BeautifulSoup,
reducing code duplication across HTML processing modules.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup, Doctype, Tag

from usconst.exceptions import FileProcessingException
from usconst.logging_config import get_logger

logger = get_logger(__name__)

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#39;"),
)


def escape_html(value) -> str:
    """
    Escape a value for use in HTML text and double-quoted attributes.

    Ampersands are replaced first so existing entities are escaped too.
    """
    text = str(value)
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


class HTMLProcessor:
    """Common HTML processing operations with BeautifulSoup."""

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def parse_html(self, html_content: str) -> BeautifulSoup:
        """Parse HTML content into BeautifulSoup object."""
        return BeautifulSoup(html_content, self.parser)

    @staticmethod
    def add_class(element: Tag, class_name: str) -> None:
        """
        Add a CSS class to an element.

        Args:
            element: BeautifulSoup Tag
            class_name: Class name to add
        """
        if "class" in element.attrs:
            if class_name not in element["class"]:
                element["class"].append(class_name)
        else:
            element["class"] = [class_name]

    @staticmethod
    def remove_class(element: Tag, class_name: str) -> None:
        """
        Remove a CSS class from an element.

        Args:
            element: BeautifulSoup Tag
            class_name: Class name to remove
        """
        if "class" in element.attrs and class_name in element["class"]:
            element["class"].remove(class_name)
            if not element["class"]:
                del element["class"]

    @classmethod
    def toggle_class(cls, element: Tag, class_name: str, enabled: bool) -> None:
        """Add or remove a CSS class depending on ``enabled``."""
        if enabled:
            cls.add_class(element, class_name)
        else:
            cls.remove_class(element, class_name)

    @staticmethod
    def set_text(soup: BeautifulSoup, element_id: str, text: str) -> bool:
        """Replace the text of the element with the given id, if present."""
        element = soup.find(id=element_id)
        if element is None:
            return False
        element.string = text
        return True


def parse_html(html_content: str) -> BeautifulSoup:
    """Convenience function to parse HTML."""
    return HTMLProcessor().parse_html(html_content)


def render_html(
    soup: Union[BeautifulSoup, str],
    add_doctype: bool = True,
    minify: bool = False,
) -> str:
    """
    Serialize a document, optionally adding a DOCTYPE and minifying.

    Args:
        soup: BeautifulSoup object or HTML string
        add_doctype: Whether to add DOCTYPE if missing
        minify: Whether to minify the output

    Returns:
        HTML string
    """
    if isinstance(soup, BeautifulSoup):
        has_doctype = any(isinstance(element, Doctype) for element in soup.contents)
        content = str(soup)
    else:
        has_doctype = soup.lstrip().lower().startswith("<!doctype")
        content = soup

    if add_doctype and not has_doctype:
        content = "<!DOCTYPE html>\n" + content

    if minify:
        from usconst.utils.minification_utils import minify_html_content
        content = minify_html_content(content)

    return content


def write_html(
    soup: Union[BeautifulSoup, str],
    file_path: Union[str, Path],
    encoding: str = "utf-8",
    add_doctype: bool = True,
    minify: bool = False,
    source_path: Optional[Path] = None,
) -> None:
    """
    Write HTML to file with optional minification.

    Args:
        soup: BeautifulSoup object or HTML string to write
        file_path: Output file path
        encoding: File encoding
        add_doctype: Whether to add DOCTYPE if missing
        minify: Whether to minify the HTML output
        source_path: Original file, only used in log messages

    Raises:
        FileProcessingException: If the file cannot be written
    """
    content = render_html(soup, add_doctype=add_doctype, minify=minify)

    file_path = Path(file_path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding=encoding, newline="") as f:
            f.write(content)
    except OSError as e:
        raise FileProcessingException(file_path, "write HTML", e) from e

    logger.debug(f"Wrote HTML {source_path or ''} -> {file_path} (minified={minify})")
