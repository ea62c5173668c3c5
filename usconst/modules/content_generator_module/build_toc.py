"""Module for generating the table of contents of the constitution page.

The table of contents links to the preamble, to the "Part: Articles" and
"Part: Amendments" group headings and to one heading per distinct article
and amendment number, in ascending numeric order.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import Iterable, List

from usconst.constants import Part
from .normalize_entries import Entry, format_number


def build_toc(entries: Iterable[Entry]) -> str:
    """
    Generate the ``<ol class="toc-list">`` markup for the given entries.

    Args:
        entries: Normalized entries (order does not matter)

    Returns:
        HTML string with one ``<li>`` per line
    """
    has_preamble = False
    article_numbers = set()
    amendment_numbers = set()

    for entry in entries:
        if entry.part == Part.PREAMBLE:
            has_preamble = True
        if entry.part == Part.ARTICLE and entry.article is not None:
            article_numbers.add(entry.article)
        if entry.part == Part.AMENDMENT and entry.amendment_number is not None:
            amendment_numbers.add(entry.amendment_number)

    items: List[str] = []

    if has_preamble:
        items.append('<li><a href="#part-preamble">Preamble</a></li>')

    if article_numbers:
        items.append('<li class="toc-group"><a href="#part-articles">Part: Articles</a></li>')
        for num in sorted(article_numbers):
            label = format_number(num)
            items.append(
                f'<li class="toc-subitem"><a href="#part-article-{label}">Article {label}</a></li>'
            )

    if amendment_numbers:
        items.append('<li class="toc-group"><a href="#part-amendments">Part: Amendments</a></li>')
        for num in sorted(amendment_numbers):
            items.append(
                f'<li class="toc-subitem"><a href="#part-amendment-{num}">Amendment {num}</a></li>'
            )

    body = "\n".join(f"  {item}" for item in items)
    return f'<ol class="toc-list">\n{body}\n</ol>'
