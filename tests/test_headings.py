from __future__ import annotations

import pytest

from readmyreadme.exceptions import NeverThrown
from readmyreadme.headings import Heading, extract_headings, offset_to_position


def test_extracts_level_two_headings_in_document_order(sample_readme: str) -> None:
    headings = extract_headings(sample_readme)
    assert [heading.text for heading in headings] == [
        "Overview",
        "Getting Started",
        "Random Notes",
        "License",
    ]


def test_span_covers_heading_line_without_terminator(sample_readme: str) -> None:
    first = extract_headings(sample_readme)[0]
    start, end = first.span
    assert sample_readme[start:end] == "## Overview"


def test_deeper_and_shallower_markers_are_not_matched() -> None:
    text = "# Title\n### Deep\n#### Deeper\n## Kept\n"
    assert extract_headings(text) == (Heading(text="Kept", span=(29, 36)),)
    assert [h.text for h in extract_headings(text, level=1)] == ["Title"]
    assert [h.text for h in extract_headings(text, level=3)] == ["Deep"]


def test_marker_must_be_followed_by_whitespace() -> None:
    text = "##NoSpace\n##\tTabbed\n  ## Indented\n"
    assert [h.text for h in extract_headings(text)] == ["Tabbed"]


def test_crlf_line_endings_are_excluded_from_text_and_span() -> None:
    text = "## Usage  \r\nbody\r\n## License\r\n"
    headings = extract_headings(text)
    assert [h.text for h in headings] == ["Usage", "License"]
    start, end = headings[1].span
    assert text[start:end] == "## License"


def test_no_headings_yields_empty_sequence() -> None:
    assert extract_headings("") == ()
    assert extract_headings("plain text\n### only deeper\n") == ()


def test_extraction_is_restartable(sample_readme: str) -> None:
    assert extract_headings(sample_readme) == extract_headings(sample_readme)


@pytest.mark.parametrize("level", [0, 7])
def test_invalid_level_is_a_precondition_violation(level: int) -> None:
    with pytest.raises(NeverThrown) as excinfo:
        extract_headings("## x\n", level=level)
    assert excinfo.value.env == {"level": level}


def test_offset_to_position_counts_lines_and_utf16_units() -> None:
    text = "ab\n\U0001f600c\nlast"
    assert offset_to_position(text, 0) == (0, 0)
    assert offset_to_position(text, 2) == (0, 2)
    assert offset_to_position(text, 3) == (1, 0)
    # the emoji is one code point but two UTF-16 code units
    assert offset_to_position(text, 5) == (1, 3)
    assert offset_to_position(text, len(text)) == (2, 4)


def test_offset_outside_document_is_rejected() -> None:
    with pytest.raises(NeverThrown):
        offset_to_position("abc", 4)


@pytest.mark.parametrize(
    ("encoding", "expected"),
    [("utf-8", (1, 5)), ("utf-16", (1, 3)), ("utf-32", (1, 2))],
)
def test_offset_to_position_counts_units_of_requested_encoding(
    encoding: str, expected: tuple[int, int]
) -> None:
    text = "ab\n\U0001f600c\nlast"
    assert offset_to_position(text, 5, encoding) == expected


def test_unknown_position_encoding_is_rejected() -> None:
    with pytest.raises(NeverThrown) as excinfo:
        offset_to_position("abc", 1, "latin-1")
    assert excinfo.value.env == {"encoding": "latin-1"}
