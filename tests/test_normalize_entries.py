import pytest
from pydantic import ValidationError

from usconst.constants import Part
from usconst.exceptions import EntryValidationException
from usconst.modules.content_generator_module.normalize_entries import (
    build_title,
    format_number,
    get_amendment_number,
    get_part,
    normalize,
    normalize_entry,
)


def test_sorted_by_position(entries):
    assert [e.id for e in entries] == [
        "preamble", "art1-s1", "art1-s8-c3", "art7", "amend1-1", "amend18-s1", "amend21-s1",
    ]


def test_derived_fields(entries):
    by_id = {e.id: e for e in entries}

    assert by_id["preamble"].part == Part.PREAMBLE
    assert by_id["preamble"].title == "Preamble"
    assert by_id["art1-s8-c3"].title == "Article 1, Section 8, Clause 3"
    assert by_id["art7"].title == "Article 7"
    assert by_id["amend1-1"].part == Part.AMENDMENT
    assert by_id["amend1-1"].amendment_number == 1
    assert by_id["amend1-1"].title == "Amendment 1, Clause 1"
    assert by_id["amend18-s1"].is_repealed is True
    assert by_id["amend18-s1"].repealed_on == "1933-12-05"
    assert by_id["amend21-s1"].is_repealed is False


def test_searchable_blob_is_lowercase_and_complete(entries):
    entry = next(e for e in entries if e.id == "art1-s8-c3")
    assert entry.searchable == entry.searchable.lower()
    assert "regulate commerce" in entry.searchable
    assert "art1-s8-c3" in entry.searchable
    assert "commerce clause" in entry.searchable
    assert "article 1, section 8, clause 3" in entry.searchable


def test_get_part():
    assert get_part("preamble", "preamble") == Part.PREAMBLE
    assert get_part("amend5-1", "article") == Part.AMENDMENT
    assert get_part("x", "amendment") == Part.AMENDMENT
    assert get_part("art2-s1", "article") == Part.ARTICLE
    assert get_part("misc", "other") == Part.ARTICLE


def test_get_amendment_number():
    assert get_amendment_number("amend14-s1") == 14
    assert get_amendment_number("amendment") is None
    assert get_amendment_number("art1-s1") is None


def test_format_number():
    assert format_number(3) == "3"
    assert format_number(3.0) == "3"
    assert format_number(2.5) == "2.5"


def test_build_title_subclause_and_missing_number():
    assert build_title(Part.ARTICLE, 1, None, 9, 2, 1) == "Article 1, Section 9, Clause 2, Subclause 1"
    assert build_title(Part.AMENDMENT, None, None, 2, None, None) == "Amendment, Section 2"
    assert build_title(Part.AMENDMENT, None, 14, 1, 3, None, include_clause=False) == "Amendment 14, Section 1"


def test_numeric_string_position_is_accepted():
    entry = normalize_entry({"id": "art1-s1", "type": "article", "text": "x", "position": " 2 "})
    assert entry.position == 2


def test_non_numeric_locators_become_none():
    entry = normalize_entry({
        "id": "art1-s1", "type": "article", "text": "x", "position": 1,
        "article": "1", "section": True,
    })
    assert entry.article is None
    assert entry.section is None


def test_empty_repeal_date_still_marks_repealed():
    entry = normalize_entry({
        "id": "amend18-s2", "type": "amendment", "text": "x", "position": 1, "repealedOn": "",
    })
    assert entry.is_repealed is True
    assert entry.repealed_on is None


@pytest.mark.parametrize("missing", ["id", "type", "text", "position"])
def test_missing_required_field(raw_entries, missing):
    record = dict(raw_entries[2])
    del record[missing]
    with pytest.raises(EntryValidationException, match="missing required fields"):
        normalize_entry(record)


@pytest.mark.parametrize("position", [None, True, "first", float("nan")])
def test_invalid_position(position):
    with pytest.raises(EntryValidationException):
        normalize_entry({"id": "art1-s1", "type": "article", "text": "x", "position": position})


def test_payload_must_be_a_list():
    with pytest.raises(EntryValidationException, match="must be an array"):
        normalize({"id": "preamble"})


def test_record_must_be_an_object():
    with pytest.raises(EntryValidationException, match="invalid record"):
        normalize(["preamble"])


def test_duplicate_ids_are_rejected(raw_entries):
    raw_entries.append(dict(raw_entries[0], position=99))
    with pytest.raises(EntryValidationException, match="Duplicate entry id: amend18-s1"):
        normalize(raw_entries)


def test_equal_positions_keep_file_order():
    entries = normalize([
        {"id": "b", "type": "article", "article": 1, "text": "b", "position": 1},
        {"id": "a", "type": "article", "article": 1, "text": "a", "position": 1},
    ])
    assert [e.id for e in entries] == ["b", "a"]


def test_invalid_date_is_kept_with_a_warning(caplog):
    with caplog.at_level("WARNING"):
        entry = normalize_entry({
            "id": "amend1-1", "type": "amendment", "text": "x", "position": 1,
            "ratifiedOn": "December 1791",
        })
    assert entry.ratified_on == "December 1791"
    assert "not a YYYY-MM-DD date" in caplog.text


def test_entries_are_immutable(entries):
    with pytest.raises(ValidationError):
        entries[0].title = "Changed"
