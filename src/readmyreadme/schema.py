from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from readmyreadme.headings import MAX_HEADING_LEVEL, MIN_HEADING_LEVEL
from readmyreadme.outline import ExpectedSection


class SectionSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    required: bool = True
    keywords: List[str] = []

    @field_validator("keywords")
    @classmethod
    def _drop_blank_keywords(cls, value: List[str]) -> List[str]:
        # An empty keyword is a substring of every heading.
        return [keyword.strip() for keyword in value if keyword.strip()]

    def to_expected(self) -> ExpectedSection:
        return ExpectedSection(
            name=self.name,
            required=self.required,
            keywords=tuple(self.keywords),
        )


def _default_sections() -> List[SectionSettings]:
    from readmyreadme.settings import DEFAULT_SECTIONS

    return [SectionSettings.model_validate(item) for item in DEFAULT_SECTIONS]


class OutlineStructureSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    sections: List[SectionSettings] = Field(default_factory=_default_sections)


class ReadmeSettings(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    max_number_of_problems: int = Field(1000, alias="maxNumberOfProblems", ge=0)
    heading_level: int = Field(
        2, alias="headingLevel", ge=MIN_HEADING_LEVEL, le=MAX_HEADING_LEVEL
    )
    document_patterns: List[str] = Field(
        default_factory=lambda: ["README.md"], alias="documentPatterns"
    )
    outline_structure: OutlineStructureSettings = Field(
        default_factory=OutlineStructureSettings, alias="outlineStructure"
    )

    def expected_sections(self) -> tuple[ExpectedSection, ...]:
        return tuple(
            section.to_expected() for section in self.outline_structure.sections
        )


class PositionDTO(BaseModel):
    line: int
    character: int


class LintDiagnosticDTO(BaseModel):
    path: str
    kind: str
    severity: str
    message: str
    source: str
    start: PositionDTO
    end: PositionDTO
    section: Optional[str] = None


class LintResponse(BaseModel):
    files: List[str] = []
    diagnostics: List[LintDiagnosticDTO] = []
    errors: List[str] = []
