# coverfinder/orchestrators/errors.py

from __future__ import annotations

from collections.abc import Mapping


class CoverResolutionError(RuntimeError):
    """Base class for failures surfaced to the caller of a resolution."""


class CodeParseError(CoverResolutionError):
    """No code could be extracted from the request."""

    def __init__(self, raw: str = "") -> None:
        super().__init__("Unable to parse code from this row." if not raw else f"Unable to parse code from {raw!r}.")
        self.raw = raw


class CoverNotFoundError(CoverResolutionError):
    """Every provider came back empty."""

    def __init__(self, code: str, reasons: Mapping[str, str] | None = None) -> None:
        self.code = code
        self.reasons = dict(reasons or {})
        detail = "".join(f" {label}: {reason}" for label, reason in self.reasons.items() if reason)
        super().__init__(f"No cover found for {code}.{detail}")


__all__ = [
    "CoverResolutionError",
    "CodeParseError",
    "CoverNotFoundError",
]
