"""Outline matching of document headings against expected sections.

A single pass threads a shrinking pool of still-unsatisfied sections through
the headings in document order. A heading consumes the first pooled section
with a keyword contained in its text; headings that consume nothing are
reported, and so is every section left in the pool afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from readmyreadme.headings import Heading

SOURCE_TAG = "readmyreadme"
DOCUMENT_START: tuple[int, int] = (0, 0)


class DiagnosticKind(str, Enum):
    UNMATCHED_HEADING = "unmatched-heading"
    MISSING_SECTION = "missing-section"


class Severity(str, Enum):
    WARNING = "warning"


@dataclass(frozen=True)
class ExpectedSection:
    name: str
    required: bool = True
    keywords: tuple[str, ...] = ()

    def matches(self, heading_text: str) -> bool:
        folded = heading_text.casefold()
        return any(keyword.casefold() in folded for keyword in self.keywords)


@dataclass(frozen=True)
class OutlineDiagnostic:
    kind: DiagnosticKind
    span: tuple[int, int]
    message: str
    severity: Severity = Severity.WARNING
    source: str = SOURCE_TAG
    section: str | None = None


def unmatched_heading(heading: Heading) -> OutlineDiagnostic:
    return OutlineDiagnostic(
        kind=DiagnosticKind.UNMATCHED_HEADING,
        span=heading.span,
        message=(
            f"Heading '{heading.text}' does not correspond to any remaining "
            "expected section"
        ),
    )


def missing_section(section: ExpectedSection) -> OutlineDiagnostic:
    label = "required" if section.required else "recommended"
    return OutlineDiagnostic(
        kind=DiagnosticKind.MISSING_SECTION,
        span=DOCUMENT_START,
        message=f"Missing {label} section '{section.name}'",
        section=section.name,
    )


def first_match(
    heading: Heading, pool: Sequence[ExpectedSection]
) -> int | None:
    for index, section in enumerate(pool):
        if section.matches(heading.text):
            return index
    return None


def match_outline(
    headings: Iterable[Heading],
    sections: Sequence[ExpectedSection],
) -> list[OutlineDiagnostic]:
    pool: tuple[ExpectedSection, ...] = tuple(sections)
    unmatched: list[OutlineDiagnostic] = []
    for heading in headings:
        index = first_match(heading, pool)
        if index is None:
            unmatched.append(unmatched_heading(heading))
            continue
        pool = pool[:index] + pool[index + 1 :]
    return unmatched + [missing_section(section) for section in pool]
