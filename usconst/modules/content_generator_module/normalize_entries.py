"""Normalizes the canonical constitution.json records into ordered entries.

Each raw record is validated, its part (preamble, article or amendment) and
amendment number are derived from its type and id, display title and the
lowercase search blob are computed, and the result is sorted by position.

Functions:
    get_part(entry_id, entry_type): Derive the document part of a record
    get_amendment_number(entry_id): Extract the amendment number from an id
    build_title(part, ...): Human readable locator, e.g. "Article 1, Section 8, Clause 3"
    normalize_entry(raw): Validate and normalize one record
    normalize(raw_data): Validate, normalize and sort all records

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

import json
import math
import re
from typing import Any, List, Optional, Tuple

import arrow
from pydantic import BaseModel, ConfigDict, Field

from usconst.constants import DateFormats, Part, Patterns
from usconst.exceptions import EntryValidationException
from usconst.types import Number
from usconst.utils.logging_utils import get_module_logger

logger = get_module_logger(__name__)

AMENDMENT_ID_RE = re.compile(Patterns.AMENDMENT_ID)
DATE_FIELDS = ("ratifiedOn", "effectiveOn", "proposedOn", "repealedOn")


class Entry(BaseModel):
    """A normalized, immutable constitution entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    part: Part
    type: str
    article: Optional[Number] = None
    section: Optional[Number] = None
    clause: Optional[Number] = None
    subclause: Optional[Number] = None
    amendment_number: Optional[int] = None
    is_repealed: bool = False
    text: str
    search_tags: Tuple[str, ...] = Field(default_factory=tuple)
    position: Number
    title: str = ""
    ratified_on: Optional[str] = None
    effective_on: Optional[str] = None
    proposed_on: Optional[str] = None
    repealed_on: Optional[str] = None
    searchable: str = ""


def _number_or_none(value: Any) -> Optional[Number]:
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and len(value) > 0 else None


def _as_string(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_position(value: Any) -> Optional[Number]:
    """Accept JSON numbers and numeric strings; anything else is missing."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else value
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        if math.isnan(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def _check_date(entry_id: str, field: str, value: Optional[str]) -> None:
    if value is None:
        return
    try:
        arrow.get(value, DateFormats.ISO_DATE)
    except ValueError:
        logger.warning(f"Entry {entry_id}: {field} '{value}' is not a {DateFormats.ISO_DATE} date")


def get_part(entry_id: str, entry_type: str) -> Part:
    """Derive the document part from a record's type and id."""
    if entry_type == Part.PREAMBLE.value:
        return Part.PREAMBLE
    if entry_type == Part.AMENDMENT.value or AMENDMENT_ID_RE.match(entry_id):
        return Part.AMENDMENT
    return Part.ARTICLE


def get_amendment_number(entry_id: str) -> Optional[int]:
    """Extract the amendment number from ids like ``amend14-s1``."""
    match = AMENDMENT_ID_RE.match(entry_id)
    return int(match.group(1)) if match else None


def format_number(value: Number) -> str:
    """Format a locator number the way it appears in titles and attributes."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_title(
    part: Part,
    article: Optional[Number],
    amendment_number: Optional[int],
    section: Optional[Number],
    clause: Optional[Number],
    subclause: Optional[Number],
    include_clause: bool = True,
) -> str:
    """
    Build the display title of an entry.

    Args:
        part: Document part
        article: Article number (article part only)
        amendment_number: Amendment number (amendment part only)
        section: Section number or None
        clause: Clause number or None
        subclause: Subclause number or None
        include_clause: Whether to include the clause locator

    Returns:
        Title such as "Amendment 14, Section 1" or "Preamble"
    """
    if part == Part.PREAMBLE:
        return "Preamble"

    if part == Part.ARTICLE:
        head, number = "Article", article
    else:
        head, number = "Amendment", amendment_number
    pieces = [head if number is None else f"{head} {format_number(number)}"]

    if section is not None:
        pieces.append(f"Section {format_number(section)}")
    if include_clause and clause is not None:
        pieces.append(f"Clause {format_number(clause)}")
    if subclause is not None:
        pieces.append(f"Subclause {format_number(subclause)}")

    return ", ".join(pieces)


def normalize_entry(raw: Any) -> Entry:
    """
    Validate and normalize one record of the canonical data file.

    Raises:
        EntryValidationException: If the record is not an object or lacks
            id, type, text or a numeric position
    """
    if not isinstance(raw, dict):
        raise EntryValidationException("Encountered invalid record in constitution.json.")

    entry_id = _as_string(raw.get("id"))
    entry_type = _as_string(raw.get("type"))
    text = _as_string(raw.get("text"))
    raw_tags = raw.get("searchTags")
    search_tags = tuple(str(tag) for tag in raw_tags) if isinstance(raw_tags, list) else ()
    position = _parse_position(raw.get("position"))

    if not entry_id or not entry_type or not text or position is None:
        raise EntryValidationException(
            f"Entry is missing required fields: {json.dumps(raw, ensure_ascii=False)}",
            {"id": entry_id or None},
        )

    part = get_part(entry_id, entry_type)
    article = _number_or_none(raw.get("article"))
    section = _number_or_none(raw.get("section"))
    clause = _number_or_none(raw.get("clause"))
    subclause = _number_or_none(raw.get("subclause"))
    amendment_number = get_amendment_number(entry_id)

    dates = {field: _string_or_none(raw.get(field)) for field in DATE_FIELDS}
    for field, value in dates.items():
        _check_date(entry_id, field, value)

    if part == Part.AMENDMENT and amendment_number is None:
        logger.warning(f"Entry {entry_id}: amendment without an amendment number in its id")

    title = build_title(part, article, amendment_number, section, clause, subclause)
    searchable = " ".join([text, entry_id, *search_tags, title]).lower()

    return Entry(
        id=entry_id,
        part=part,
        type=entry_type,
        article=article,
        section=section,
        clause=clause,
        subclause=subclause,
        amendment_number=amendment_number,
        # Presence of a repeal date marks the entry, even when the date is empty
        is_repealed=raw.get("repealedOn") is not None,
        text=text,
        search_tags=search_tags,
        position=position,
        title=title,
        ratified_on=dates["ratifiedOn"],
        effective_on=dates["effectiveOn"],
        proposed_on=dates["proposedOn"],
        repealed_on=dates["repealedOn"],
        searchable=searchable,
    )


def normalize(raw_data: Any) -> List[Entry]:
    """
    Normalize all records and sort them by position.

    The sort is stable, so records sharing a position keep their file order.

    Raises:
        EntryValidationException: If the payload is not a list, a record is
            invalid, or two records share an id
    """
    if not isinstance(raw_data, list):
        raise EntryValidationException("constitution.json must be an array.")

    entries = [normalize_entry(raw) for raw in raw_data]

    seen = set()
    for entry in entries:
        if entry.id in seen:
            raise EntryValidationException(f"Duplicate entry id: {entry.id}", {"id": entry.id})
        seen.add(entry.id)

    entries.sort(key=lambda entry: entry.position)
    logger.debug(f"Normalized {len(entries)} entries")
    return entries
