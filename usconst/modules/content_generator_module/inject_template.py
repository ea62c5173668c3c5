"""Splices generated HTML into the page template between textual markers.

The template keeps its markers after splicing, so the build can run again
on an already generated page and replace the previous output.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import re

from usconst.config import Markers
from usconst.exceptions import TemplateMarkerException


def inject_generated(source_html: str, start_marker: str, end_marker: str, content: str) -> str:
    """
    Replace the first ``start_marker ... end_marker`` span with the content.

    Args:
        source_html: Page template
        start_marker: Opening marker (kept)
        end_marker: Closing marker (kept)
        content: Generated HTML placed on its own lines between the markers

    Returns:
        Updated HTML

    Raises:
        TemplateMarkerException: If the marker pair is not present in order
    """
    pattern = re.compile(f"{re.escape(start_marker)}.*?{re.escape(end_marker)}", re.DOTALL)
    if not pattern.search(source_html):
        raise TemplateMarkerException(start_marker, end_marker)

    replacement = f"{start_marker}\n{content}\n{end_marker}"
    # A callable keeps backslashes in the content literal
    return pattern.sub(lambda _match: replacement, source_html, count=1)


def inject_page(source_html: str, toc_html: str, content_html: str) -> str:
    """Splice both the table of contents and the entry content into a page."""
    with_toc = inject_generated(source_html, Markers.TOC_START, Markers.TOC_END, toc_html)
    return inject_generated(with_toc, Markers.CONTENT_START, Markers.CONTENT_END, content_html)
