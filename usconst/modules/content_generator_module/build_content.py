"""Module for generating the article/section HTML of the constitution page.

This module turns the ordered entries into the static markup that the page
template embeds between the content markers. It:
- Groups entries into part blocks (preamble, one per article, one per amendment)
- Emits "Part: Articles" / "Part: Amendments" headings before the first block of each group
- Renders every entry as an ``<article class="entry">`` carrying the data
  attributes the filter layer reads (part, article, amendment, repealed)
- Adds a details disclosure with a link row and the entry's locators and dates

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import Iterable, List, Optional, Tuple

from usconst.constants import Part
from usconst.utils.html_utils import escape_html
from .normalize_entries import Entry, format_number


PART_LABELS = {
    Part.PREAMBLE: "Preamble",
    Part.ARTICLE: "Article",
    Part.AMENDMENT: "Amendment",
}


def format_part_label(entry: Entry) -> str:
    return PART_LABELS[entry.part]


def build_detail_rows(entry: Entry) -> List[Tuple[str, str]]:
    """
    Collect the label/value rows shown in an entry's details list.

    Only rows with a value are included, in a fixed order.
    """
    rows = [("Part", format_part_label(entry))]

    if entry.article is not None:
        rows.append(("Article", format_number(entry.article)))
    if entry.amendment_number is not None:
        rows.append(("Amendment", str(entry.amendment_number)))
    if entry.section is not None:
        rows.append(("Section", format_number(entry.section)))
    if entry.clause is not None:
        rows.append(("Clause", format_number(entry.clause)))
    if entry.subclause is not None:
        rows.append(("Subclause", format_number(entry.subclause)))
    if entry.search_tags:
        rows.append(("Search tags", ", ".join(entry.search_tags)))
    if entry.ratified_on:
        rows.append(("Ratified", entry.ratified_on))
    if entry.proposed_on:
        rows.append(("Proposed", entry.proposed_on))
    if entry.effective_on:
        rows.append(("Effective", entry.effective_on))
    if entry.repealed_on:
        rows.append(("Repealed", entry.repealed_on))

    return rows


def build_details_html(entry: Entry, entry_anchor_id: str) -> str:
    """Render the ``<details class="entry-details">`` block of one entry."""
    anchor = escape_html(entry_anchor_id)
    items_html = "\n".join(
        f'      <div class="entry-detail-row"><dt>{escape_html(label)}</dt><dd>{escape_html(value)}</dd></div>'
        for label, value in build_detail_rows(entry)
    )

    return "\n".join([
        '  <details class="entry-details">',
        '    <summary class="entry-details-toggle" aria-label="Entry details">i</summary>',
        '    <dl class="entry-details-list">',
        f'      <div class="entry-detail-row entry-detail-row-link"><dt>Link</dt><dd><button type="button" class="copy-anchor-button" data-anchor-id="{anchor}">Copy link</button> <a class="entry-anchor-link" href="#{anchor}">Open</a></dd></div>',
        items_html,
        "    </dl>",
        "  </details>",
    ])


def build_entry_html(entry: Entry) -> List[str]:
    """Render one entry as a list of lines."""
    escaped_id = escape_html(entry.id)
    entry_id = f"entry-{escaped_id}"
    article_value = "" if entry.article is None else format_number(entry.article)
    amendment_value = "" if entry.amendment_number is None else str(entry.amendment_number)
    repealed_badge = '<span class="repealed-badge">Repealed</span>' if entry.is_repealed else ""
    text_html = escape_html(entry.text).replace("\n", "<br>")

    return [
        f'<article class="entry" id="{entry_id}" data-entry-id="{escaped_id}" '
        f'data-part="{entry.part.value}" data-article="{article_value}" '
        f'data-amendment="{amendment_value}" '
        f'data-repealed="{"true" if entry.is_repealed else "false"}">',
        '  <div class="entry-heading-row">',
        f'    <h3 class="entry-title"><a href="#{entry_id}">{escape_html(entry.title)}</a>{repealed_badge}</h3>',
        build_details_html(entry, entry_id),
        "  </div>",
        f'  <p class="entry-text">{text_html}</p>',
        "</article>",
    ]


class _ContentWriter:
    """Accumulates output lines and tracks the currently open part block."""

    def __init__(self):
        self.lines: List[str] = []
        self.block_open = False

    def close_part_block(self):
        if not self.block_open:
            return
        self.lines.append("</section>")
        self.block_open = False

    def open_part_block(self, attrs: str, heading_lines: List[str]):
        self.close_part_block()
        self.lines.append(f'<section class="part-block" {attrs}>')
        self.lines.extend(heading_lines)
        self.block_open = True

    def major_heading(self, heading_id: str, key: str, label: str):
        self.close_part_block()
        self.lines.extend([
            f'<section class="major-part-heading" id="{heading_id}" data-major-heading="{key}">',
            f"  <h2>{label}</h2>",
            "</section>",
        ])


def _part_heading(heading_id: str, part: str, label: str) -> List[str]:
    return [
        f'<section class="part-heading" id="{heading_id}" data-part-heading="{part}">',
        f"  <h2>{label}</h2>",
        "</section>",
    ]


def build_content(entries: Iterable[Entry]) -> str:
    """
    Generate the grouped entry markup.

    Entries must already be sorted by position. A new part block is opened
    whenever the article or amendment number changes between consecutive
    entries of that part.

    Args:
        entries: Normalized entries in document order

    Returns:
        Newline-joined HTML string
    """
    writer = _ContentWriter()
    has_preamble_heading = False
    has_article_part_heading = False
    has_amendment_part_heading = False
    current_article: Optional[float] = None
    current_amendment: Optional[int] = None

    for entry in entries:
        if entry.part == Part.PREAMBLE and not has_preamble_heading:
            has_preamble_heading = True
            writer.open_part_block(
                'data-part-block="preamble"',
                _part_heading("part-preamble", "preamble", "Preamble"),
            )

        if entry.part == Part.ARTICLE and entry.article != current_article:
            if not has_article_part_heading:
                has_article_part_heading = True
                writer.major_heading("part-articles", "articles", "Part: Articles")

            current_article = entry.article
            label = format_number(current_article)
            writer.open_part_block(
                f'data-part-block="article" data-part-block-number="{label}"',
                _part_heading(f"part-article-{label}", "article", f"Article {label}"),
            )

        if entry.part == Part.AMENDMENT and entry.amendment_number != current_amendment:
            if not has_amendment_part_heading:
                has_amendment_part_heading = True
                writer.major_heading("part-amendments", "amendments", "Part: Amendments")

            current_amendment = entry.amendment_number
            writer.open_part_block(
                f'data-part-block="amendment" data-part-block-number="{current_amendment}"',
                _part_heading(
                    f"part-amendment-{current_amendment}",
                    "amendment",
                    f"Amendment {current_amendment}",
                ),
            )

        writer.lines.extend(build_entry_html(entry))

    writer.close_part_block()

    return "\n".join(writer.lines)
