from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from page_planner.core.errors import ContentQueryError
from page_planner.core.locales import LocaleConfig
from page_planner.core.planner import DEFAULT_PAGE_SIZE, OrphanPolicy, plan
from page_planner.core.ports.content import ContentSource
from page_planner.core.ports.sink import PageSink
from page_planner.core.resolver import resolve_all
from page_planner.models import Document, PageRequest, ResolvedDocument, Template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    requests: tuple[PageRequest, ...]
    dropped: tuple[ResolvedDocument, ...]

    @property
    def listing_count(self) -> int:
        return sum(1 for r in self.requests if r.template is Template.LISTING)

    @property
    def detail_count(self) -> int:
        return sum(1 for r in self.requests if r.template is Template.DETAIL)


async def fetch_documents(source: ContentSource) -> list[Document]:
    """Run the single content query of a build.

    Any failure of the source surfaces as ``ContentQueryError``.
    """
    try:
        return list(await source.fetch_documents())
    except ContentQueryError:
        raise
    except Exception as exc:
        raise ContentQueryError(f"Content query failed: {exc}") from exc


def plan_documents(
    documents: Sequence[Document],
    locale_config: LocaleConfig,
    page_size: int = DEFAULT_PAGE_SIZE,
    orphan_policy: OrphanPolicy = OrphanPolicy.DROP,
) -> BuildResult:
    resolved = resolve_all(documents)
    requests = plan(resolved, locale_config.locales, locale_config.default, page_size, orphan_policy)
    configured = set(locale_config.locales)
    dropped = tuple(doc for doc in resolved if doc.lang not in configured)
    return BuildResult(requests=tuple(requests), dropped=dropped)


async def run_build(
    source: ContentSource,
    sink: PageSink,
    locale_config: LocaleConfig,
    page_size: int = DEFAULT_PAGE_SIZE,
    orphan_policy: OrphanPolicy = OrphanPolicy.DROP,
) -> BuildResult:
    """Fetch, resolve and plan the whole site, then hand every request to ``sink``.

    Planning completes before the sink sees a single request, so a failing
    build never registers a partial route set.
    """
    documents = await fetch_documents(source)
    result = plan_documents(documents, locale_config, page_size, orphan_policy)

    for request in result.requests:
        await sink.create_page(request)
    await sink.flush()

    logger.info(
        "Planned %d listing and %d detail page(s) from %d document(s)",
        result.listing_count,
        result.detail_count,
        len(documents),
    )
    if result.dropped:
        logger.info("%d document(s) outside the configured locales were dropped", len(result.dropped))
    return result
