from usconst.modules.content_generator_module import build_llm_markdown, normalize


def test_markdown_structure(entries):
    markdown = build_llm_markdown(entries)
    lines = markdown.splitlines()

    assert lines[0] == "# Constitution of the United States"
    assert "Generated from constitution.json by the usconst content build." in lines
    assert lines.count("## Preamble") == 1
    assert lines.count("## Articles") == 1
    assert lines.count("## Amendments") == 1
    assert lines.count("### Article 1") == 1
    assert "#### Article 1, Section 8, Clause 3 [art1-s8-c3]" in lines
    assert "#### Preamble [preamble]" in lines


def test_amendment_headings_leave_out_clauses(entries):
    markdown = build_llm_markdown(entries)
    assert "#### Amendment 1 [amend1-1]" in markdown
    assert "Clause 1 [amend1-1]" not in markdown


def test_repealed_entries_carry_their_date(entries):
    lines = build_llm_markdown(entries).splitlines()
    heading = lines.index("#### Amendment 18, Section 1 [amend18-s1]")
    assert lines[heading + 2] == "[Repealed on 1933-12-05]"
    assert "[Repealed on" not in "\n".join(lines[lines.index("### Amendment 21"):])


def test_ends_with_single_newline(entries):
    markdown = build_llm_markdown(entries, source_name="data.json")
    assert markdown.endswith(".\n")
    assert not markdown.endswith("\n\n")
    assert "Generated from data.json" in markdown


def test_preamble_heading_once_for_several_records():
    entries = normalize([
        {"id": "preamble", "type": "preamble", "text": "We the People", "position": 1},
        {"id": "preamble-2", "type": "preamble", "text": "do ordain", "position": 2},
    ])
    assert build_llm_markdown(entries).splitlines().count("## Preamble") == 1
