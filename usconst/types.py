"""
Type definitions for the US Constitution reader.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import Optional, TypedDict, Union

Number = Union[int, float]


class SearchIndexRecord(TypedDict):
    """One record of the generated search index (keys as written to search-index.json)."""
    id: str
    part: str
    type: str
    article: Optional[Number]
    section: Optional[Number]
    clause: Optional[Number]
    subclause: Optional[Number]
    amendmentNumber: Optional[int]
    isRepealed: bool
    searchable: str
