from __future__ import annotations

import fnmatch
from datetime import datetime, timedelta, timezone
from pathlib import Path, PurePosixPath
from typing import Sequence
from urllib.parse import unquote, urlparse

from readmyreadme.headings import UTF16, extract_headings, offset_to_position
from readmyreadme.outline import OutlineDiagnostic, match_outline
from readmyreadme.schema import ReadmeSettings

STALE_AFTER_DAYS = 30


def uri_to_path(uri: str) -> Path:
    parsed = urlparse(uri)
    if parsed.scheme == "file":
        return Path(unquote(parsed.path))
    return Path(uri)


def qualifies(uri_or_path: str | Path, patterns: Sequence[str]) -> bool:
    """Whether a document's basename matches one of the document patterns."""
    if isinstance(uri_or_path, Path):
        name = uri_or_path.name
    else:
        name = PurePosixPath(unquote(urlparse(uri_or_path).path) or uri_or_path).name
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def lint_text(text: str, settings: ReadmeSettings) -> list[OutlineDiagnostic]:
    headings = extract_headings(text, settings.heading_level)
    diagnostics = match_outline(headings, settings.expected_sections())
    return diagnostics[: settings.max_number_of_problems]


def span_positions(
    text: str, span: tuple[int, int], encoding: str = UTF16
) -> tuple[tuple[int, int], tuple[int, int]]:
    start, end = span
    return (
        offset_to_position(text, start, encoding),
        offset_to_position(text, end, encoding),
    )


def stale_notice(
    path: Path,
    *,
    now: datetime | None = None,
    max_age_days: int = STALE_AFTER_DAYS,
) -> str | None:
    try:
        mtime = path.stat().st_mtime
    except OSError:
        return None
    now = now or datetime.now(timezone.utc)
    modified = datetime.fromtimestamp(mtime, tz=timezone.utc)
    if now - modified <= timedelta(days=max_age_days):
        return None
    return (
        f"This {path.name} file was last edited more than {max_age_days} days ago. "
        "Please check if it is still up to date."
    )
