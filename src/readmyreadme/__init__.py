"""readmyreadme package root."""

from readmyreadme.exceptions import NeverRaise, NeverThrown
from readmyreadme.headings import Heading, extract_headings
from readmyreadme.invariants import never
from readmyreadme.outline import (
    DiagnosticKind,
    ExpectedSection,
    OutlineDiagnostic,
    match_outline,
)

__all__ = [
    "__version__",
    "DiagnosticKind",
    "ExpectedSection",
    "Heading",
    "NeverRaise",
    "NeverThrown",
    "OutlineDiagnostic",
    "extract_headings",
    "match_outline",
    "never",
]

__version__ = "0.1.0"
