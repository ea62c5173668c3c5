import json

import pytest

from usconst.config import Markers
from usconst.exceptions import EntryValidationException, FileProcessingException, TemplateMarkerException
from usconst.modules.content_generator_module import run_build


def test_writes_all_artifacts(build_paths):
    result = run_build(build_paths, show_progress=False)

    assert result.entry_count == 7
    assert build_paths.prerender_html.read_text(encoding="utf-8") == result.content_html
    assert build_paths.llm_file.read_text(encoding="utf-8") == result.llm_markdown

    index = json.loads(build_paths.search_index.read_text(encoding="utf-8"))
    assert [record["id"] for record in index] == [entry.id for entry in result.entries]

    page = build_paths.index_html.read_text(encoding="utf-8")
    assert page == result.page_html
    assert f"{Markers.TOC_START}\n{result.toc_html}\n{Markers.TOC_END}" in page
    assert f"{Markers.CONTENT_START}\n{result.content_html}\n{Markers.CONTENT_END}" in page


def test_rebuild_is_idempotent(build_paths):
    run_build(build_paths, show_progress=False)
    first = build_paths.index_html.read_text(encoding="utf-8")
    run_build(build_paths, show_progress=False)
    assert build_paths.index_html.read_text(encoding="utf-8") == first


def test_invalid_data_leaves_template_untouched(build_paths):
    template = build_paths.index_html.read_text(encoding="utf-8")
    build_paths.data_file.write_text(json.dumps([{"id": "x"}]), encoding="utf-8")

    with pytest.raises(EntryValidationException):
        run_build(build_paths, show_progress=False)
    assert build_paths.index_html.read_text(encoding="utf-8") == template


def test_template_without_markers(build_paths):
    build_paths.index_html.write_text("<html><body></body></html>", encoding="utf-8")
    with pytest.raises(TemplateMarkerException):
        run_build(build_paths, show_progress=False)
    assert not build_paths.prerender_html.exists()
    assert not build_paths.search_index.exists()
    assert not build_paths.llm_file.exists()


def test_missing_data_file(build_paths):
    build_paths.data_file.unlink()
    with pytest.raises(FileProcessingException):
        run_build(build_paths, show_progress=False)


def test_search_index_file_format(build_paths):
    build_paths.data_file.write_text(
        json.dumps([{"id": "preamble", "type": "preamble", "text": "Établir la justice", "position": 1}]),
        encoding="utf-8",
    )
    run_build(build_paths, show_progress=False)

    expected = (
        "[\n"
        "  {\n"
        '    "id": "preamble",\n'
        '    "part": "preamble",\n'
        '    "type": "preamble",\n'
        '    "article": null,\n'
        '    "section": null,\n'
        '    "clause": null,\n'
        '    "subclause": null,\n'
        '    "amendmentNumber": null,\n'
        '    "isRepealed": false,\n'
        '    "searchable": "établir la justice preamble preamble"\n'
        "  }\n"
        "]\n"
    )
    assert build_paths.search_index.read_bytes() == expected.encode("utf-8")
