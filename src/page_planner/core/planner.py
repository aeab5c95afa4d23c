"""Turn resolved documents into listing and detail page requests.

Listing pages paginate each locale's documents in the order they are given,
so callers pass documents already sorted newest first. Routes of the default
locale carry no prefix; every other locale is prefixed with ``/<code>``:

    /blog, /blog/2, /blog/<slug>
    /pt/blog, /pt/blog/2, /pt/blog/<slug>
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from page_planner.core.errors import (
    DuplicateRouteError,
    DuplicateSlugError,
    OrphanedDocumentError,
    PlannerConfigError,
)
from page_planner.core.locales import validate_locales
from page_planner.models import DetailContext, PageRequest, PaginationContext, ResolvedDocument, Template

logger = logging.getLogger(__name__)

BLOG_SEGMENT = "blog"
DEFAULT_PAGE_SIZE = 10


class OrphanPolicy(str, Enum):
    """What to do with documents whose locale is not configured."""

    DROP = "drop"
    WARN = "warn"
    FAIL = "fail"


def locale_prefix(lang: str, default_locale: str) -> str:
    return "" if lang == default_locale else f"/{lang}"


def listing_path(lang: str, default_locale: str, page_number: int) -> str:
    """Route of the 1-based listing page ``page_number``."""
    base = f"{locale_prefix(lang, default_locale)}/{BLOG_SEGMENT}"
    return base if page_number == 1 else f"{base}/{page_number}"


def detail_path(lang: str, default_locale: str, slug: str) -> str:
    return f"{locale_prefix(lang, default_locale)}/{BLOG_SEGMENT}/{slug}"


def paginate(count: int, page_size: int) -> int:
    """Number of listing pages for ``count`` documents; zero when there are none."""
    if page_size < 1:
        raise PlannerConfigError(f"Page size must be at least 1, got {page_size}")
    return (count + page_size - 1) // page_size


def partition_by_locale(
    documents: Sequence[ResolvedDocument],
    locales: Sequence[str],
    orphan_policy: OrphanPolicy = OrphanPolicy.DROP,
) -> tuple[dict[str, list[ResolvedDocument]], list[ResolvedDocument]]:
    """Group documents by locale, keeping input order inside each group.

    Returns the groups (one per configured locale, possibly empty) and the
    documents whose locale is not configured.
    """
    groups: dict[str, list[ResolvedDocument]] = {code: [] for code in locales}
    orphans: list[ResolvedDocument] = []
    for doc in documents:
        group = groups.get(doc.lang)
        if group is not None:
            group.append(doc)
            continue
        if orphan_policy is OrphanPolicy.FAIL:
            raise OrphanedDocumentError(doc.source_path or doc.slug, doc.lang)
        if orphan_policy is OrphanPolicy.WARN:
            logger.warning("Dropping %s: locale %r is not configured", doc.source_path or doc.slug, doc.lang)
        orphans.append(doc)
    return groups, orphans


def _check_unique_slugs(lang: str, documents: Sequence[ResolvedDocument]) -> None:
    seen: dict[str, str] = {}
    for doc in documents:
        if doc.slug in seen:
            raise DuplicateSlugError(lang, doc.slug, [seen[doc.slug], doc.source_path])
        seen[doc.slug] = doc.source_path


def _describe(request: PageRequest, sources: dict[tuple[str, str], str]) -> str:
    ctx = request.context
    if isinstance(ctx, PaginationContext):
        return f"listing page {ctx.current_page} of locale {ctx.lang!r}"
    return sources.get((ctx.lang, ctx.slug)) or f"post {ctx.slug!r}"


def _check_unique_routes(requests: Sequence[PageRequest], documents: Sequence[ResolvedDocument]) -> None:
    """Reject a plan in which two requests share a route, such as a post ``2.md`` and listing page 2."""
    sources = {(doc.lang, doc.slug): doc.source_path for doc in documents if doc.source_path}
    seen: dict[str, PageRequest] = {}
    for request in requests:
        first = seen.setdefault(request.route_path, request)
        if first is not request:
            raise DuplicateRouteError(request.route_path, [_describe(first, sources), _describe(request, sources)])


def listing_requests(lang: str, count: int, default_locale: str, page_size: int) -> list[PageRequest]:
    num_pages = paginate(count, page_size)
    requests: list[PageRequest] = []
    for index in range(num_pages):
        current_page = index + 1
        context = PaginationContext(
            limit=page_size,
            skip=index * page_size,
            num_pages=num_pages,
            current_page=current_page,
            lang=lang,
            previous_path=listing_path(lang, default_locale, current_page - 1) if current_page > 1 else None,
            next_path=listing_path(lang, default_locale, current_page + 1) if current_page < num_pages else None,
        )
        requests.append(
            PageRequest(
                route_path=listing_path(lang, default_locale, current_page),
                template=Template.LISTING,
                context=context,
            )
        )
    return requests


def detail_request(doc: ResolvedDocument, default_locale: str) -> PageRequest:
    return PageRequest(
        route_path=detail_path(doc.lang, default_locale, doc.slug),
        template=Template.DETAIL,
        context=DetailContext(slug=doc.slug, lang=doc.lang),
    )


def plan(
    resolved_documents: Sequence[ResolvedDocument],
    locales: Sequence[str],
    default_locale: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    orphan_policy: OrphanPolicy = OrphanPolicy.DROP,
) -> list[PageRequest]:
    """Plan every listing and detail page of the blog.

    Listing requests come first, grouped by locale in configuration order,
    followed by one detail request per document of a configured locale. The
    result depends only on the arguments.
    """
    validate_locales(locales, default_locale)
    if page_size < 1:
        raise PlannerConfigError(f"Page size must be at least 1, got {page_size}")

    groups, _ = partition_by_locale(resolved_documents, locales, orphan_policy)
    for lang, docs in groups.items():
        _check_unique_slugs(lang, docs)

    listings: list[PageRequest] = []
    details: list[PageRequest] = []
    for lang in locales:
        docs = groups[lang]
        pages = listing_requests(lang, len(docs), default_locale, page_size)
        logger.debug("Locale %s: %d document(s), %d listing page(s)", lang, len(docs), len(pages))
        listings.extend(pages)
        details.extend(detail_request(doc, default_locale) for doc in docs)

    requests = listings + details
    _check_unique_routes(requests, resolved_documents)
    return requests
