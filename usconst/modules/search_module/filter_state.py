"""Filter state of the constitution page and its URL query representation.

The state has five fields: a free-text query and four selects (part,
article, amendment, status). Values coming from a URL or a form are
sanitized against the allowed values; article and amendment values must
occur in the search index. Only non-default fields are written back to the
query string, so the default view has a clean URL.

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from typing import Iterable, List, Mapping, Optional, Set
from urllib.parse import parse_qs, urlencode

from pydantic import BaseModel, ConfigDict

from usconst.constants import ALL, Part, Status


ALLOWED_PARTS = frozenset([ALL, Part.PREAMBLE.value, Part.ARTICLE.value, Part.AMENDMENT.value])
ALLOWED_STATUS = frozenset([Status.ALL.value, Status.ACTIVE.value, Status.REPEALED.value])

# Query parameter order on output
QUERY_KEYS = ("q", "part", "article", "amendment", "status")


class FilterState(BaseModel):
    """Sanitized filter selection."""

    model_config = ConfigDict(frozen=True)

    q: str = ""
    part: str = ALL
    article: str = ALL
    amendment: str = ALL
    status: str = ALL


DEFAULTS = FilterState()


def option_values(records: Iterable[Mapping], key: str) -> Set[str]:
    """
    Collect the allowed select values for ``key`` ("article" or "amendmentNumber").

    Only numeric values count; the set always contains "all".
    """
    values = {ALL}
    for record in records:
        value = record.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            values.add(format_option_value(value))
    return values


def format_option_value(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def sorted_option_values(values: Iterable[str]) -> List[str]:
    """Numeric values without "all", in ascending numeric order."""
    return sorted((value for value in values if value != ALL), key=float)


def sanitize_state(
    raw: Mapping[str, Optional[str]],
    article_values: Set[str],
    amendment_values: Set[str],
) -> FilterState:
    """
    Build a FilterState from untrusted values.

    Missing or empty values take the default; values outside the allowed
    sets fall back to the default as well.

    Args:
        raw: Mapping with any of the keys q, part, article, amendment, status
        article_values: Allowed article values (including "all")
        amendment_values: Allowed amendment values (including "all")

    Returns:
        Sanitized FilterState
    """
    def pick(key: str) -> str:
        value = raw.get(key)
        return value if isinstance(value, str) and value else getattr(DEFAULTS, key)

    part = pick("part")
    if part not in ALLOWED_PARTS:
        part = DEFAULTS.part

    status = pick("status")
    if status not in ALLOWED_STATUS:
        status = DEFAULTS.status

    article = pick("article")
    if article not in article_values:
        article = DEFAULTS.article

    amendment = pick("amendment")
    if amendment not in amendment_values:
        amendment = DEFAULTS.amendment

    q = raw.get("q")
    q = q.strip() if isinstance(q, str) else ""

    return FilterState(q=q, part=part, article=article, amendment=amendment, status=status)


def parse_query(query: str) -> dict:
    """Parse a query string into the first value per filter key."""
    params = parse_qs(query.lstrip("?"), keep_blank_values=True)
    return {key: params[key][0] for key in QUERY_KEYS if key in params}


def state_from_query(query: str, article_values: Set[str], amendment_values: Set[str]) -> FilterState:
    """Read the filter state from a URL query string."""
    return sanitize_state(parse_query(query), article_values, amendment_values)


def state_to_query(state: FilterState) -> str:
    """Serialize the non-default fields of a state, without a leading "?"."""
    params = [
        (key, getattr(state, key))
        for key in QUERY_KEYS
        if getattr(state, key) != getattr(DEFAULTS, key)
    ]
    return urlencode(params)


def is_default_state(state: FilterState) -> bool:
    return state == DEFAULTS


def build_active_filter_summary(state: FilterState) -> str:
    """Human readable summary, e.g. 'Search "speech" | Part: amendment'."""
    parts = []
    if state.q:
        parts.append(f'Search "{state.q}"')
    if state.part != ALL:
        parts.append(f"Part: {state.part}")
    if state.article != ALL:
        parts.append(f"Article: {state.article}")
    if state.amendment != ALL:
        parts.append(f"Amendment: {state.amendment}")
    if state.status != ALL:
        parts.append(f"Status: {state.status}")

    return " | ".join(parts) if parts else "No active filters."
