"""Applies a filter state to the constitution page.

Given the parsed page and the search index, this module:
- Fills the article and amendment selects with the values found in the index
- Reflects the filter state in the form controls
- Hides entries that do not match (``is-hidden`` class and ``aria-hidden``)
- Hides part headings without any visible entry
- Writes the result count and the active filter summary

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from bs4 import BeautifulSoup, Tag

from usconst.constants import DataAttributes, ElementIds, HTMLClasses
from usconst.utils.html_utils import HTMLProcessor, parse_html
from usconst.utils.logging_utils import get_module_logger

from .filter_state import (
    FilterState,
    build_active_filter_summary,
    option_values,
    sanitize_state,
    sorted_option_values,
    state_from_query,
    state_to_query,
)
from .entry_filter import heading_has_visible_entries, load_index, matches_entry

logger = get_module_logger(__name__)

ENTRY_SELECTOR = f".{HTMLClasses.ENTRY}[{DataAttributes.ENTRY_ID}]"
HEADING_SELECTOR = f".{HTMLClasses.MAJOR_PART_HEADING}, .{HTMLClasses.PART_HEADING}"


@dataclass
class FilterOutcome:
    """Result of filtering one page."""
    state: FilterState
    visible_ids: List[str]
    total: int

    @property
    def visible_count(self) -> int:
        return len(self.visible_ids)

    @property
    def results_text(self) -> str:
        return f"Showing {self.visible_count} of {self.total} entries."


def find_entry_elements(soup: BeautifulSoup) -> List[Tag]:
    return soup.select(ENTRY_SELECTOR)


def update_select_options(soup: BeautifulSoup, select: Optional[Tag], values: Sequence[str], label_prefix: str) -> None:
    """Keep the first ("all") option and append one option per value."""
    if select is None:
        return
    options = select.find_all("option")
    for option in options[1:]:
        option.decompose()
    for value in values:
        option = soup.new_tag("option", value=value)
        option.string = f"{label_prefix} {value}"
        select.append(option)


def select_value(select: Optional[Tag], value: str) -> None:
    """Mark the option with the given value as selected."""
    if select is None:
        return
    for option in select.find_all("option"):
        if option.get("value") == value:
            option["selected"] = ""
        elif "selected" in option.attrs:
            del option["selected"]


def apply_state_to_controls(soup: BeautifulSoup, state: FilterState) -> None:
    search = soup.find(id=ElementIds.SEARCH)
    if search is not None:
        search["value"] = state.q
    select_value(soup.find(id=ElementIds.PART), state.part)
    select_value(soup.find(id=ElementIds.ARTICLE), state.article)
    select_value(soup.find(id=ElementIds.AMENDMENT), state.amendment)
    select_value(soup.find(id=ElementIds.STATUS), state.status)


def apply_filters(
    soup: BeautifulSoup,
    records: Sequence[Mapping],
    state: FilterState,
) -> FilterOutcome:
    """
    Apply an already sanitized state to the page in place.

    Entries whose id is missing from the index are always hidden.

    Args:
        soup: Parsed page
        records: Search index records
        state: Sanitized filter state

    Returns:
        FilterOutcome with the visible entry ids
    """
    index_by_id: Dict[str, Mapping] = {record.get("id"): record for record in records}
    entry_elements = find_entry_elements(soup)

    update_select_options(
        soup, soup.find(id=ElementIds.ARTICLE),
        sorted_option_values(option_values(records, "article")), "Article",
    )
    update_select_options(
        soup, soup.find(id=ElementIds.AMENDMENT),
        sorted_option_values(option_values(records, "amendmentNumber")), "Amendment",
    )
    apply_state_to_controls(soup, state)

    visible_ids: List[str] = []
    visible_records: List[Mapping] = []
    for element in entry_elements:
        entry_id = element.get(DataAttributes.ENTRY_ID) or ""
        record = index_by_id.get(entry_id)
        if record is None:
            HTMLProcessor.add_class(element, HTMLClasses.HIDDEN)
            continue

        visible = matches_entry(record, state)
        HTMLProcessor.toggle_class(element, HTMLClasses.HIDDEN, not visible)
        element["aria-hidden"] = "false" if visible else "true"
        if visible:
            visible_ids.append(entry_id)
            visible_records.append(record)

    for heading in soup.select(HEADING_SELECTOR):
        has_matches = heading_has_visible_entries(heading.get("id") or "", visible_records)
        HTMLProcessor.toggle_class(heading, HTMLClasses.HIDDEN, not has_matches)

    outcome = FilterOutcome(state=state, visible_ids=visible_ids, total=len(entry_elements))
    HTMLProcessor.set_text(soup, ElementIds.RESULTS_COUNT, outcome.results_text)
    HTMLProcessor.set_text(soup, ElementIds.ACTIVE_FILTERS, build_active_filter_summary(state))

    logger.debug(f"{outcome.results_text} ({build_active_filter_summary(state)})")
    return outcome


@dataclass
class FilteredPage:
    """A filtered page together with the canonical query of its state."""
    html: str
    outcome: FilterOutcome
    canonical_query: str


def filter_page(page_html: str, index_path: Optional[Path], query: str) -> FilteredPage:
    """
    Parse a page, load its search index and apply the filters from a query string.

    Args:
        page_html: Spliced constitution page
        index_path: Location of the search index (None uses the page-derived index)
        query: URL query string, with or without the leading "?"

    Returns:
        FilteredPage with the rendered HTML
    """
    soup = parse_html(page_html)
    records = load_index(index_path, find_entry_elements(soup))

    state = state_from_query(
        query,
        option_values(records, "article"),
        option_values(records, "amendmentNumber"),
    )
    outcome = apply_filters(soup, records, state)
    return FilteredPage(html=str(soup), outcome=outcome, canonical_query=state_to_query(state))


def sanitize_for_records(raw: Mapping[str, Optional[str]], records: Sequence[Mapping]) -> FilterState:
    """Sanitize raw values against the select values present in ``records``."""
    return sanitize_state(
        raw,
        option_values(records, "article"),
        option_values(records, "amendmentNumber"),
    )
