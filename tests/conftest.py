from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


import pytest

from readmyreadme.outline import ExpectedSection


@pytest.fixture(autouse=True)
def _root_logging_scope():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if getattr(handler, "_readmyreadme_stderr", False):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def make_section():
    def _make(name: str, *keywords: str, required: bool = True) -> ExpectedSection:
        return ExpectedSection(name=name, required=required, keywords=tuple(keywords))

    return _make


@pytest.fixture
def sample_readme() -> str:
    return (
        "# Project\n"
        "\n"
        "## Overview\n"
        "Some prose.\n"
        "\n"
        "## Getting Started\n"
        "pip install project\n"
        "\n"
        "### Details are level three\n"
        "\n"
        "## Random Notes\n"
        "\n"
        "## License\n"
        "MIT\n"
    )
