"""
HTML minification for the exported site, using minify-html.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import minify_html

from usconst.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)

# Closing tags and the html/head opening tags stay, so the exported page
# parses the same way as the source page. Inline scripts are left alone.
MINIFY_OPTIONS = {
    "minify_css": True,
    "minify_js": False,
    "keep_closing_tags": True,
    "keep_html_and_head_opening_tags": True,
    "keep_comments": False,
}


def minify_html_content(html_content: str, strict: bool = False) -> str:
    """
    Minify a page, including its inline CSS.

    Args:
        html_content: Page to minify
        strict: Raise minifier errors instead of returning the page unchanged

    Returns:
        Minified page
    """
    try:
        minified = minify_html.minify(html_content, **MINIFY_OPTIONS)
    except Exception as e:
        if strict:
            raise
        logger.warning(f"Minification failed, keeping the page unminified: {e}")
        return html_content

    saved = len(html_content) - len(minified)
    logger.debug(f"Minified HTML from {len(html_content)} to {len(minified)} characters ({saved} saved)")
    return minified
