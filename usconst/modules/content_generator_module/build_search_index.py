"""Builds the search index consumed by the filter layer.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import Iterable, List

from usconst.types import SearchIndexRecord
from .normalize_entries import Entry


def build_search_record(entry: Entry) -> SearchIndexRecord:
    """Project an entry onto the fields the filter layer needs (key order is part of the format)."""
    return {
        "id": entry.id,
        "part": entry.part.value,
        "type": entry.type,
        "article": entry.article,
        "section": entry.section,
        "clause": entry.clause,
        "subclause": entry.subclause,
        "amendmentNumber": entry.amendment_number,
        "isRepealed": entry.is_repealed,
        "searchable": entry.searchable,
    }


def build_search_index(entries: Iterable[Entry]) -> List[SearchIndexRecord]:
    return [build_search_record(entry) for entry in entries]
