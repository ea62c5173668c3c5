from usconst.modules.search_module import (
    DEFAULTS,
    FilterState,
    build_active_filter_summary,
    is_default_state,
    sanitize_state,
    state_from_query,
    state_to_query,
)
from usconst.modules.search_module.filter_state import option_values, sorted_option_values

RECORDS = [
    {"id": "art1-s1", "article": 1, "amendmentNumber": None},
    {"id": "art7", "article": 7.0, "amendmentNumber": None},
    {"id": "amend18-s1", "article": None, "amendmentNumber": 18},
    {"id": "amend2-1", "article": None, "amendmentNumber": 2},
    {"id": "odd", "article": True, "amendmentNumber": "3"},
]
ARTICLES = option_values(RECORDS, "article")
AMENDMENTS = option_values(RECORDS, "amendmentNumber")


def test_option_values():
    assert ARTICLES == {"all", "1", "7"}
    assert AMENDMENTS == {"all", "2", "18"}
    assert sorted_option_values(AMENDMENTS) == ["2", "18"]


def test_sanitize_keeps_valid_values():
    state = sanitize_state(
        {"q": "  Speech ", "part": "amendment", "article": "all", "amendment": "18", "status": "repealed"},
        ARTICLES, AMENDMENTS,
    )
    assert state == FilterState(q="Speech", part="amendment", amendment="18", status="repealed")


def test_sanitize_replaces_invalid_values_with_defaults():
    state = sanitize_state(
        {"q": None, "part": "bogus", "article": "3", "amendment": "99", "status": "gone"},
        ARTICLES, AMENDMENTS,
    )
    assert state == DEFAULTS
    assert is_default_state(state)


def test_sanitize_empty_and_missing_values():
    assert sanitize_state({}, ARTICLES, AMENDMENTS) == DEFAULTS
    assert sanitize_state({"part": "", "status": ""}, ARTICLES, AMENDMENTS) == DEFAULTS


def test_query_round_trip_only_writes_non_defaults():
    state = FilterState(q="free speech", part="amendment", status="active")
    query = state_to_query(state)
    assert query == "q=free+speech&part=amendment&status=active"
    assert state_from_query("?" + query, ARTICLES, AMENDMENTS) == state


def test_default_state_has_empty_query():
    assert state_to_query(DEFAULTS) == ""


def test_state_from_query_uses_first_value_and_ignores_unknown_keys():
    state = state_from_query("article=7&article=1&page=3&status=all", ARTICLES, AMENDMENTS)
    assert state == FilterState(article="7")


def test_summary():
    assert build_active_filter_summary(DEFAULTS) == "No active filters."
    state = FilterState(q="speech", part="amendment", article="1", amendment="18", status="repealed")
    assert build_active_filter_summary(state) == (
        'Search "speech" | Part: amendment | Article: 1 | Amendment: 18 | Status: repealed'
    )
