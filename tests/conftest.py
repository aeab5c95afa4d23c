"""Shared fixtures and helpers for tests."""

from collections.abc import Callable
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from page_planner.content.memory import InMemoryContentSource
from page_planner.models import Document, FrontMatter, ResolvedDocument
from page_planner.sinks.memory import InMemoryPageSink

_REPO_ROOT = Path(__file__).parent.parent
_EPOCH = datetime(2021, 1, 1)


# ---------------------------------------------------------------------------
# Auto-marker: tag every test under tests/unit as "unit"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        if rel.parts and rel.parts[0] == "unit":
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Document factories
# ---------------------------------------------------------------------------


def make_document(
    slug: str,
    lang: str = "en",
    day: int = 0,
    tags: list[str] | None = None,
    root: str = "/site/content",
) -> Document:
    return Document(
        absolute_path=f"{root}/{lang}/{slug}.md",
        frontmatter=FrontMatter(
            title=slug.replace("-", " ").title(),
            date=_EPOCH + timedelta(days=day),
            tags=tags or [],
        ),
        body=f"# {slug}\n",
    )


def make_resolved(slug: str, lang: str = "en", day: int = 0) -> ResolvedDocument:
    return ResolvedDocument(
        slug=slug,
        lang=lang,
        title=slug,
        date=_EPOCH + timedelta(days=day),
        source_path=f"/site/content/{lang}/{slug}.md",
    )


def make_corpus(counts: dict[str, int]) -> list[ResolvedDocument]:
    """``counts`` maps locale to number of posts; posts are returned newest first per locale."""
    docs: list[ResolvedDocument] = []
    for lang, count in counts.items():
        docs.extend(make_resolved(f"{lang}-post-{i}", lang, day=count - i) for i in range(count))
    return docs


@pytest.fixture
def document_factory() -> Callable[..., Document]:
    return make_document


@pytest.fixture
def corpus_factory() -> Callable[[dict[str, int]], list[ResolvedDocument]]:
    return make_corpus


@pytest.fixture
def in_memory_sink() -> InMemoryPageSink:
    return InMemoryPageSink()


@pytest.fixture
def in_memory_source() -> InMemoryContentSource:
    return InMemoryContentSource()


@pytest.fixture
def content_tree(tmp_path: Path) -> Path:
    """A content folder with two English posts, one Portuguese post and an unpublished draft."""
    root = tmp_path / "content"
    posts = {
        "en/first-post.md": "---\ntitle: First post\ndate: 2021-01-10\ntags: [python]\n---\nHello\n",
        "en/second-post.md": "---\ntitle: Second post\ndate: 2021-02-10\n---\nAgain\n",
        "pt/primeiro-post.md": "---\ntitle: Primeiro post\ndate: 2021-01-15\n---\nOlá\n",
        "non-published/en/draft.md": "---\ntitle: Draft\ndate: 2021-03-01\n---\nWIP\n",
    }
    for rel, text in posts.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    (root / "en" / "notes.txt").write_text("not a post", encoding="utf-8")
    return root
