from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from readmyreadme.invariants import require

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6

UTF8 = "utf-8"
UTF16 = "utf-16"
UTF32 = "utf-32"


@dataclass(frozen=True)
class Heading:
    text: str
    span: tuple[int, int]


@lru_cache(maxsize=None)
def _heading_re(level: int) -> re.Pattern[str]:
    # Exactly `level` hashes, then at least one blank; "###" fails "##[ \t]".
    return re.compile(
        rf"^#{{{level}}}[ \t]+(?P<text>[^\r\n]*)",
        re.MULTILINE,
    )


def extract_headings(text: str, level: int = 2) -> tuple[Heading, ...]:
    """Return every ATX heading of exactly ``level`` in document order.

    The span covers the whole heading line without its terminator; the text
    is the remainder after the marker, stripped.
    """
    require(
        MIN_HEADING_LEVEL <= level <= MAX_HEADING_LEVEL,
        "invalid heading level",
        level=level,
    )
    return tuple(
        Heading(text=match.group("text").strip(), span=(match.start(), match.end()))
        for match in _heading_re(level).finditer(text)
    )


def offset_to_position(
    text: str, offset: int, encoding: str = UTF16
) -> tuple[int, int]:
    """Translate a code point offset into a zero-based (line, character) pair.

    ``character`` counts code units of ``encoding``, one of the LSP position
    encodings; UTF-16 is the protocol default.
    """
    require(encoding in (UTF8, UTF16, UTF32), "unknown position encoding", encoding=encoding)
    require(0 <= offset <= len(text), "offset outside document", offset=offset, length=len(text))
    line = text.count("\n", 0, offset)
    line_start = text.rfind("\n", 0, offset) + 1
    prefix = text[line_start:offset]
    if encoding == UTF32:
        return line, len(prefix)
    if encoding == UTF8:
        return line, len(prefix.encode("utf-8"))
    return line, len(prefix.encode("utf-16-le")) // 2
