"""Exception types raised by readmyreadme."""

from __future__ import annotations


class NeverRaise(RuntimeError):
    """Sentinel exception for code paths that callers must never reach.

    Raising this exception signals a precondition violation by the caller:
    a heading level outside the Markdown range, an offset outside the
    document, and so on. The environment payload names the offending values.
    """

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.env = dict(env or {})


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""
