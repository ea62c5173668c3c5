"""Builds the plain-text markdown export of the constitution for LLM retrieval.

The export mirrors the page structure with markdown headings:
- ``## Preamble``, ``## Articles`` and ``## Amendments`` for the parts
- ``### Article N`` / ``### Amendment N`` whenever the number changes
- ``#### <locator> [<id>]`` followed by the entry text for every entry,
  plus a ``[Repealed on <date>]`` line for repealed entries with a known date

Clause locators are left out of amendment headings.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import Iterable, List, Optional

from usconst.constants import Part
from .normalize_entries import Entry, build_title, format_number


DOCUMENT_TITLE = "# Constitution of the United States"


def build_llm_heading(entry: Entry) -> str:
    """Locator heading of one entry, e.g. "Amendment 14, Section 1"."""
    return build_title(
        entry.part,
        entry.article,
        entry.amendment_number,
        entry.section,
        entry.clause,
        entry.subclause,
        include_clause=entry.part == Part.ARTICLE,
    )


def build_llm_markdown(entries: Iterable[Entry], source_name: str = "constitution.json") -> str:
    """
    Generate the markdown export.

    Args:
        entries: Normalized entries in document order
        source_name: Name of the data file, mentioned in the header blurb

    Returns:
        Markdown text ending with exactly one newline
    """
    lines: List[str] = [
        DOCUMENT_TITLE,
        "",
        "Plain-text retrieval document for LLM use.",
        f"Generated from {source_name} by the usconst content build.",
        "",
    ]

    has_preamble_header = False
    has_articles_header = False
    has_amendments_header = False
    current_article: Optional[float] = None
    current_amendment: Optional[int] = None

    for entry in entries:
        if entry.part == Part.PREAMBLE and not has_preamble_header:
            has_preamble_header = True
            if lines[-1] != "":
                lines.append("")
            lines.extend(["## Preamble", ""])

        if entry.part == Part.ARTICLE and entry.article != current_article:
            if not has_articles_header:
                has_articles_header = True
                lines.extend(["## Articles", ""])
            current_article = entry.article
            lines.extend([f"### Article {format_number(current_article)}", ""])

        if entry.part == Part.AMENDMENT and entry.amendment_number != current_amendment:
            if not has_amendments_header:
                has_amendments_header = True
                lines.extend(["## Amendments", ""])
            current_amendment = entry.amendment_number
            lines.extend([f"### Amendment {current_amendment}", ""])

        lines.append(f"#### {build_llm_heading(entry)} [{entry.id}]")
        lines.append(entry.text)
        if entry.is_repealed and entry.repealed_on:
            lines.append(f"[Repealed on {entry.repealed_on}]")
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
