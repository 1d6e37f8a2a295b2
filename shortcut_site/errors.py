"""
shortcut_site.errors: exception types raised by the site builder.

Every error carries a short code so the CLI can report it uniformly.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence


class SiteBuilderError(Exception):
    """Base error with a code and optional detail."""

    def __init__(self, code: str, message: str, detail: Any = None) -> None:
        self.code = code
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"error_code": self.code, "message": self.message}
        if self.detail:
            d["detail"] = self.detail
        return d


class ShortcutAPIError(SiteBuilderError):
    """Shortcut API answered with a non-success status."""

    def __init__(self, status: int, path: str, body: str = "") -> None:
        self.status = status
        self.path = path
        super().__init__(
            code="SHORTCUT_API_ERROR",
            message=f"Shortcut API {path} returned HTTP {status}",
            detail=body[:500] if body else None,
        )


class SiteGenerationError(SiteBuilderError):
    """One or more epic subtrees failed while the rest of the site was written."""

    def __init__(self, failures: Mapping[int, BaseException]) -> None:
        self.failures = dict(failures)
        ids = ", ".join(str(i) for i in sorted(self.failures))
        super().__init__(
            code="GENERATION_FAILED",
            message=f"Failed to generate {len(self.failures)} epic(s): {ids}",
            detail={str(k): repr(v) for k, v in self.failures.items()},
        )


class SiteNotFoundError(SiteBuilderError):
    def __init__(self, message: str, available: Sequence[str] = ()) -> None:
        super().__init__(code="SITE_NOT_FOUND", message=message, detail=list(available) or None)


__all__ = ["SiteBuilderError", "ShortcutAPIError", "SiteGenerationError", "SiteNotFoundError"]
