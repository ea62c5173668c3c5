"""Search module for filtering the constitution page.

This module holds the filter layer: the filter state and its URL query form,
matching of search index records, and applying a state to the page markup.

Modules:
    filter_state: FilterState, sanitizing and query string round trip
    entry_filter: Record matching, heading visibility, index loading
    page_filter: Applying a state to a parsed page

License:
    https://github.com/quadratecode/zhlaw/blob/main/LICENSE.md
"""

from .filter_state import (
    DEFAULTS,
    FilterState,
    build_active_filter_summary,
    is_default_state,
    sanitize_state,
    state_from_query,
    state_to_query,
)
from .entry_filter import (
    filter_records,
    heading_has_visible_entries,
    load_index,
    make_fallback_index,
    matches_entry,
)
from .page_filter import FilterOutcome, FilteredPage, apply_filters, filter_page

__all__ = [
    'DEFAULTS',
    'FilterState',
    'build_active_filter_summary',
    'is_default_state',
    'sanitize_state',
    'state_from_query',
    'state_to_query',
    'filter_records',
    'heading_has_visible_entries',
    'load_index',
    'make_fallback_index',
    'matches_entry',
    'FilterOutcome',
    'FilteredPage',
    'apply_filters',
    'filter_page',
]
