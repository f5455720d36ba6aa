"""Error taxonomy for loading site graphs and rendering briefings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


class SiteBriefError(Exception):
    """Base class for every error raised by sitebrief."""


class NotFoundError(SiteBriefError):
    """Raised when a graph source cannot be located."""

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source


@dataclass(frozen=True)
class ValidationIssue:
    """A single structural problem found while validating a site graph."""

    path: str
    detail: str
    ref: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.path}: {self.detail}"


class ValidationError(SiteBriefError):
    """Raised when a site graph violates its structural contract."""

    def __init__(self, message: str, issues: Sequence[ValidationIssue] = ()) -> None:
        super().__init__(message)
        self.issues = list(issues)

    @classmethod
    def from_issues(cls, issues: Sequence[ValidationIssue]) -> "ValidationError":
        count = len(issues)
        noun = "issue" if count == 1 else "issues"
        details = "; ".join(str(issue) for issue in issues)
        return cls(f"Site graph failed validation ({count} {noun}): {details}", issues)


class NoRootFoundError(SiteBriefError):
    """Raised when no page can serve as the navigation tree root."""

    def __init__(self, message: str, *, root_id: str | None = None) -> None:
        super().__init__(message)
        self.root_id = root_id


class MissingCredentialsError(SiteBriefError):
    """Raised when a task briefing needs credentials the graph does not define."""

    def __init__(self, message: str, *, pages: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.pages = list(pages)


class UnknownNodeError(SiteBriefError, LookupError):
    """Raised when a caller asks for a node id that the graph does not contain."""

    def __init__(self, node_id: str) -> None:
        super().__init__(f"Node with id '{node_id}' not found")
        self.node_id = node_id


class ConfigError(SiteBriefError):
    """Raised when the configuration file cannot be parsed."""


class ExportError(SiteBriefError):
    """Raised when an external diagram renderer fails."""


__all__ = [
    "ConfigError",
    "ExportError",
    "MissingCredentialsError",
    "NoRootFoundError",
    "NotFoundError",
    "SiteBriefError",
    "UnknownNodeError",
    "ValidationError",
    "ValidationIssue",
]
