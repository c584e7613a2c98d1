"""Invariant markers for readmyreadme."""

from __future__ import annotations

from typing import NoReturn

from readmyreadme.exceptions import NeverThrown


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as unreachable for well-formed input.

    The env payload is metadata only; it is attached to the raised
    exception so the caller can report what was violated.
    """
    raise NeverThrown(reason or "never() marker reached", env=env)


def require(condition: bool, reason: str, **env: object) -> None:
    if not condition:
        never(reason, **env)
