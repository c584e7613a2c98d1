from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from readmyreadme.lint import lint_text, qualifies, span_positions, stale_notice, uri_to_path
from readmyreadme.outline import DiagnosticKind
from readmyreadme.schema import ReadmeSettings


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ("file:///home/user/project/README.md", True),
        ("file:///home/user/project/docs/README.md", True),
        ("file:///home/user/project/readme.md", False),
        ("file:///home/user/project/NOT_README.md.bak", False),
        ("untitled:Untitled-1", False),
        (Path("project/README.md"), True),
    ],
)
def test_default_pattern_matches_readme_basename(target, expected: bool) -> None:
    assert qualifies(target, ["README.md"]) is expected


def test_glob_patterns_are_supported() -> None:
    assert qualifies("file:///docs/guide.md", ["README.md", "*.md"])
    assert not qualifies("file:///docs/guide.rst", ["*.md"])


def test_uri_to_path_unquotes_file_uris() -> None:
    assert uri_to_path("file:///tmp/my%20project/README.md") == Path(
        "/tmp/my project/README.md"
    )


def test_lint_text_with_default_template(sample_readme: str) -> None:
    diagnostics = lint_text(sample_readme, ReadmeSettings())
    unmatched = [d for d in diagnostics if d.kind is DiagnosticKind.UNMATCHED_HEADING]
    missing = [d.section for d in diagnostics if d.kind is DiagnosticKind.MISSING_SECTION]
    assert [sample_readme[slice(*d.span)] for d in unmatched] == ["## Random Notes"]
    assert missing == ["Table of contents", "Usage", "Contributing", "Credits"]


def test_lint_text_honours_heading_level(sample_readme: str) -> None:
    settings = ReadmeSettings(heading_level=3)
    diagnostics = lint_text(sample_readme, settings)
    assert diagnostics[0].kind is DiagnosticKind.UNMATCHED_HEADING
    assert "Details are level three" in diagnostics[0].message


def test_lint_text_caps_problem_count(sample_readme: str) -> None:
    assert len(lint_text(sample_readme, ReadmeSettings(max_number_of_problems=2))) == 2
    assert lint_text(sample_readme, ReadmeSettings(max_number_of_problems=0)) == []


def test_empty_document_reports_every_section() -> None:
    diagnostics = lint_text("", ReadmeSettings())
    assert len(diagnostics) == 7
    assert {d.kind for d in diagnostics} == {DiagnosticKind.MISSING_SECTION}


def test_span_positions_for_heading_on_later_line(sample_readme: str) -> None:
    heading_span = lint_text(sample_readme, ReadmeSettings())[0].span
    assert span_positions(sample_readme, heading_span) == ((10, 0), (10, 15))


def test_stale_notice_only_for_old_files(tmp_path: Path) -> None:
    readme = tmp_path / "README.md"
    readme.write_text("# x\n", encoding="utf-8")
    now = datetime.now(timezone.utc)
    assert stale_notice(readme, now=now) is None
    old = (now - timedelta(days=45)).timestamp()
    os.utime(readme, (old, old))
    notice = stale_notice(readme, now=now)
    assert notice is not None
    assert "README.md" in notice and "30 days" in notice


def test_stale_notice_ignores_missing_files(tmp_path: Path) -> None:
    assert stale_notice(tmp_path / "README.md") is None
