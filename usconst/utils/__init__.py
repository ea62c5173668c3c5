"""
Shared helpers of the US Constitution reader.

Modules:
    file_utils: JSON and text file access with wrapped errors
    html_utils: BeautifulSoup helpers, escaping and HTML output
    minification_utils: minify-html wrapper for exported pages
    progress_utils: tqdm progress bars
    logging_utils, logging_decorators: logger lookup and entry point setup
"""

from .file_utils import FileOperations
from .html_utils import HTMLProcessor, escape_html, parse_html, render_html, write_html

__all__ = [
    'FileOperations',
    'HTMLProcessor',
    'escape_html',
    'parse_html',
    'render_html',
    'write_html',
]
