"""Errors that abort a planning run.

Every error derives from ``PlannerError`` so callers (the CLI, the watch loop)
can report a failed build with a single ``except`` clause.
"""

from __future__ import annotations

from collections.abc import Sequence


class PlannerError(Exception):
    """Base class for build-aborting planner errors."""


class InvalidDocumentError(PlannerError):
    """Raised when a slug or locale cannot be derived from a document path."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid document {path!r}: {reason}")


class ContentQueryError(PlannerError):
    """Raised when the content source fails to deliver the document set."""


class PlannerConfigError(PlannerError, ValueError):
    """Raised for an unusable locale set or page size."""


class OrphanedDocumentError(PlannerError):
    """Raised under the ``fail`` orphan policy for a document in an unknown locale."""

    def __init__(self, path: str, lang: str) -> None:
        self.path = path
        self.lang = lang
        super().__init__(f"Document {path!r} has locale {lang!r}, which is not a configured locale")


class DuplicateSlugError(PlannerError):
    """Raised when two documents of one locale resolve to the same slug."""

    def __init__(self, lang: str, slug: str, paths: Sequence[str]) -> None:
        self.lang = lang
        self.slug = slug
        self.paths = tuple(paths)
        super().__init__(f"Slug {slug!r} is used more than once in locale {lang!r}: {', '.join(self.paths)}")


class RouteConflictError(PlannerError):
    """Raised when a page sink receives two different requests for one route."""

    def __init__(self, route_path: str) -> None:
        self.route_path = route_path
        super().__init__(f"Route {route_path!r} is already registered with a different page request")


class DuplicateRouteError(PlannerError):
    """Raised when two planned pages would be served at the same route."""

    def __init__(self, route_path: str, sources: Sequence[str]) -> None:
        self.route_path = route_path
        self.sources = tuple(sources)
        super().__init__(f"Route {route_path!r} is planned more than once: {', '.join(self.sources)}")
