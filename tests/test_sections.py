# tests/test_sections.py
from proofreader.services.sections import (
    content_sections, extract_sections, heading_lines, normalize_title, split_sentences,
)


def test_preamble_goes_to_implicit_introduction():
    sections = extract_sections("Some opening words.\n\n# Methods\nWe survey people.")
    assert [s.title for s in sections] == ["Introduction", "Methods"]
    assert sections[0].implicit and sections[0].level == 0
    assert not sections[1].implicit and sections[1].level == 1


def test_no_implicit_section_when_document_starts_with_heading():
    sections = extract_sections("## Background\nText.\n### Detail\nMore text.")
    assert [s.title for s in sections] == ["Background", "Detail"]
    assert [s.level for s in sections] == [2, 3]


def test_every_line_assigned_once_in_order():
    text = "intro line\n# A\na1\n\na2\n## B\n# C\nc1"
    sections = extract_sections(text)
    # heading lines open their section, so count them with the body
    total = sum(len(s.lines) + (0 if s.implicit else 1) for s in sections)
    assert total == len(text.split("\n"))
    assert [s.start_line for s in sections] == sorted(s.start_line for s in sections)
    assert sections[1].lines == ["a1", "", "a2"]


def test_empty_heading_kept_but_not_a_content_section():
    sections = extract_sections("# Part One\n## Chapter\nBody text here.")
    assert len(sections) == 2
    assert [s.title for s in content_sections(sections)] == ["Chapter"]


def test_heading_text_strips_markers():
    assert heading_lines("# Title ##\n####  Deep one\nnot # a heading") == [
        (1, "Title"), (4, "Deep one"),
    ]


def test_normalize_title_drops_numbering():
    assert normalize_title("2.1 Research Design") == "research design"
    assert normalize_title("IV. Results") == "results"


def test_split_sentences():
    assert split_sentences("One. Two!  Three? ") == ["One", "Two", "Three"]
