"""Matching of search index records against a filter state.

This module also loads the search index. When the generated index is
missing or malformed, an equivalent index is derived from the entry
elements of the page itself, so filtering keeps working on a page whose
generated files were not deployed.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import re
from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Sequence

from bs4 import Tag

from usconst.constants import ALL, DataAttributes, ElementIds, Part, Patterns, Status
from usconst.exceptions import (
    FileProcessingException, JSONParsingException, SearchIndexException
)
from usconst.types import SearchIndexRecord
from usconst.utils.file_utils import FileOperations
from usconst.utils.logging_utils import get_module_logger

from .filter_state import FilterState

logger = get_module_logger(__name__)

ARTICLE_HEADING_RE = re.compile(Patterns.ARTICLE_HEADING_ID)
AMENDMENT_HEADING_RE = re.compile(Patterns.AMENDMENT_HEADING_ID)


def matches_entry(record: Mapping, state: FilterState) -> bool:
    """
    Check whether an index record passes every active filter.

    The text query is a case-insensitive substring test against the
    record's lowercase ``searchable`` blob.
    """
    if state.part != ALL and record.get("part") != state.part:
        return False

    if state.article != ALL and record.get("article") != float(state.article):
        return False

    if state.amendment != ALL and record.get("amendmentNumber") != float(state.amendment):
        return False

    is_repealed = bool(record.get("isRepealed"))
    if state.status == Status.ACTIVE.value and is_repealed:
        return False
    if state.status == Status.REPEALED.value and not is_repealed:
        return False

    if state.q and state.q.lower() not in (record.get("searchable") or ""):
        return False

    return True


def filter_records(records: Iterable[Mapping], state: FilterState) -> List[Mapping]:
    return [record for record in records if matches_entry(record, state)]


def heading_has_visible_entries(heading_id: str, visible_records: Sequence[Mapping]) -> bool:
    """
    Decide whether a part heading has at least one visible entry below it.

    Headings with ids this function does not know stay visible.
    """
    if heading_id == ElementIds.PREAMBLE_HEADING:
        return any(r.get("part") == Part.PREAMBLE.value for r in visible_records)
    if heading_id == ElementIds.ARTICLES_HEADING:
        return any(r.get("part") == Part.ARTICLE.value for r in visible_records)
    if heading_id == ElementIds.AMENDMENTS_HEADING:
        return any(r.get("part") == Part.AMENDMENT.value for r in visible_records)

    article_match = ARTICLE_HEADING_RE.match(heading_id)
    if article_match:
        number = int(article_match.group(1))
        return any(
            r.get("part") == Part.ARTICLE.value and r.get("article") == number
            for r in visible_records
        )

    amendment_match = AMENDMENT_HEADING_RE.match(heading_id)
    if amendment_match:
        number = int(amendment_match.group(1))
        return any(
            r.get("part") == Part.AMENDMENT.value and r.get("amendmentNumber") == number
            for r in visible_records
        )

    return True


def to_int(value: Optional[str]) -> Optional[int]:
    """Parse an integer attribute value; empty, fractional or non-numeric values give None."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def make_fallback_index(entry_elements: Iterable[Tag]) -> List[SearchIndexRecord]:
    """
    Derive index records from the page's entry elements.

    Section, clause and subclause are not present on the page and stay None.
    """
    records = []
    for element in entry_elements:
        part = element.get(DataAttributes.PART) or Part.ARTICLE.value
        records.append({
            "id": element.get(DataAttributes.ENTRY_ID) or "",
            "part": part,
            "type": part,
            "article": to_int(element.get(DataAttributes.ARTICLE)),
            "section": None,
            "clause": None,
            "subclause": None,
            "amendmentNumber": to_int(element.get(DataAttributes.AMENDMENT)),
            "isRepealed": element.get(DataAttributes.REPEALED) == "true",
            "searchable": element.get_text().lower(),
        })
    return records


def read_index(index_path: Path) -> List[SearchIndexRecord]:
    """
    Read a search index file.

    Raises:
        FileProcessingException: If the file cannot be read
        JSONParsingException: If the file is not valid JSON
        SearchIndexException: If the payload is not a list of objects
    """
    payload = FileOperations.read_json(index_path)
    if not isinstance(payload, list):
        raise SearchIndexException(str(index_path), "payload is not an array")
    if not all(isinstance(record, dict) for record in payload):
        raise SearchIndexException(str(index_path), "records must be objects")
    return payload


def load_index(index_path: Optional[Path], entry_elements: Sequence[Tag]) -> List[SearchIndexRecord]:
    """
    Load the search index, falling back to the page's entry elements.

    Args:
        index_path: Location of search-index.json (None skips straight to the fallback)
        entry_elements: ``.entry[data-entry-id]`` elements of the page

    Returns:
        List of index records
    """
    if index_path is not None:
        try:
            return read_index(index_path)
        except (FileProcessingException, JSONParsingException, SearchIndexException) as e:
            logger.warning(f"Falling back to page-derived search index: {e}")
    return make_fallback_index(entry_elements)
