from __future__ import annotations

import logging
from typing import Mapping

from pydantic import ValidationError

from readmyreadme.schema import ReadmeSettings

logger = logging.getLogger(__name__)

CONFIGURATION_SECTION = "readmyreadme"

DEFAULT_SECTIONS: tuple[dict[str, object], ...] = (
    {
        "name": "Description",
        "required": True,
        "keywords": [
            "Description",
            "Why?",
            "Overview",
            "Introduction",
            "Demo",
            "Example",
            "Examples",
            "About",
        ],
    },
    {
        "name": "Table of contents",
        "required": True,
        "keywords": ["Table of content", "listing", "tabular array", "agenda"],
    },
    {
        "name": "Installation",
        "required": True,
        "keywords": [
            "Installation",
            "How To",
            "Quick start",
            "Getting Started",
            "Quickstart",
            "Setup",
        ],
    },
    {
        "name": "Usage",
        "required": True,
        "keywords": ["Usage", "Configuration", "Options", "Implementation", "Configure"],
    },
    {
        "name": "Contributing",
        "required": True,
        "keywords": [
            "Contributing",
            "Related",
            "Involve",
            "Contribute",
            "Assistance",
            "Contact",
            "Development",
            "Contribution",
        ],
    },
    {
        "name": "Credits",
        "required": True,
        "keywords": [
            "Credits",
            "Tribute",
            "Acknowledgement",
            "Thanks",
            "Supporters",
            "Contributors",
            "Community",
        ],
    },
    {
        "name": "License",
        "required": True,
        "keywords": ["License", "Permission", "Consent"],
    },
)


def default_settings() -> ReadmeSettings:
    return ReadmeSettings()


def parse_settings(
    payload: object, *, fallback: ReadmeSettings | None = None
) -> ReadmeSettings:
    """Validate an editor or file payload, falling back on bad input."""
    fallback = fallback if fallback is not None else default_settings()
    if payload is None:
        return fallback
    if not isinstance(payload, Mapping):
        logger.warning(
            "ignoring %s settings of type %s", CONFIGURATION_SECTION, type(payload).__name__
        )
        return fallback
    try:
        return ReadmeSettings.model_validate(dict(payload))
    except ValidationError as exc:
        logger.warning("ignoring invalid %s settings: %s", CONFIGURATION_SECTION, exc)
        return fallback


class SettingsStore:
    """Per-document settings cache owned by the language server.

    ``global_settings`` answers for every document when the client cannot
    serve ``workspace/configuration``; otherwise resolved settings are cached
    per URI until the document closes or the configuration changes.
    """

    def __init__(self, global_settings: ReadmeSettings | None = None) -> None:
        self.global_settings = global_settings or default_settings()
        self._by_uri: dict[str, ReadmeSettings] = {}

    def get(self, uri: str) -> ReadmeSettings | None:
        return self._by_uri.get(uri)

    def put(self, uri: str, settings: ReadmeSettings) -> None:
        self._by_uri[uri] = settings

    def forget(self, uri: str) -> None:
        self._by_uri.pop(uri, None)

    def clear(self) -> None:
        self._by_uri.clear()

    def __contains__(self, uri: object) -> bool:
        return uri in self._by_uri

    def __len__(self) -> int:
        return len(self._by_uri)
