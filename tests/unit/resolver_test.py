"""Unit tests for slug and locale resolution."""

from collections.abc import Callable
from datetime import date, datetime

import pytest

from page_planner.core.errors import InvalidDocumentError
from page_planner.core.resolver import resolve, resolve_all
from page_planner.models import Document, FrontMatter


def _doc(path: str, lang: str | None = None, when: datetime = datetime(2021, 5, 1)) -> Document:
    return Document(absolute_path=path, frontmatter=FrontMatter(title="T", date=when), lang=lang)


class TestResolve:
    def test_slug_is_file_name_without_extension(self) -> None:
        assert resolve(_doc("/site/content/en/hello-world.md")).slug == "hello-world"

    def test_lang_is_parent_directory(self) -> None:
        assert resolve(_doc("/site/content/pt/ola.md")).lang == "pt"

    def test_only_last_extension_is_stripped(self) -> None:
        assert resolve(_doc("/c/en/release.v2.md")).slug == "release.v2"

    def test_explicit_lang_wins_over_directory(self) -> None:
        assert resolve(_doc("/c/posts/hello.md", lang="pt")).lang == "pt"

    def test_blank_explicit_lang_falls_back_to_directory(self) -> None:
        assert resolve(_doc("/c/en/hello.md", lang="  ")).lang == "en"

    def test_lang_is_not_validated(self) -> None:
        assert resolve(_doc("/c/klingon/hello.md")).lang == "klingon"

    def test_copies_front_matter(self, document_factory: Callable[..., Document]) -> None:
        doc = document_factory("tagged", tags=["a", "b"])
        resolved = resolve(doc)
        assert resolved.title == "Tagged"
        assert resolved.tags == ["a", "b"]
        assert resolved.date == doc.frontmatter.date
        assert resolved.source_path == doc.absolute_path

    @pytest.mark.parametrize(
        "path",
        ["", "   ", "/c/en/", "/c/en/..", "hello.md", "/hello.md"],
        ids=["empty", "blank", "directory", "dotdot", "no-parent", "root-file"],
    )
    def test_malformed_paths_raise(self, path: str) -> None:
        with pytest.raises(InvalidDocumentError) as exc_info:
            resolve(_doc(path))
        assert exc_info.value.path == path


class TestResolveAll:
    def test_sorts_newest_first(self) -> None:
        docs = [
            _doc("/c/en/old.md", when=datetime(2020, 1, 1)),
            _doc("/c/en/new.md", when=datetime(2022, 1, 1)),
            _doc("/c/en/mid.md", when=datetime(2021, 1, 1)),
        ]
        assert [d.slug for d in resolve_all(docs)] == ["new", "mid", "old"]

    def test_ties_keep_input_order(self) -> None:
        same = datetime(2021, 1, 1)
        docs = [_doc(f"/c/en/p{i}.md", when=same) for i in range(4)]
        assert [d.slug for d in resolve_all(docs)] == ["p0", "p1", "p2", "p3"]

    def test_plain_dates_are_accepted(self) -> None:
        fm = FrontMatter.model_validate({"title": "T", "date": date(2021, 3, 4)})
        resolved = resolve_all([Document(absolute_path="/c/en/x.md", frontmatter=fm)])
        assert resolved[0].date == datetime(2021, 3, 4)

    def test_fails_fast_on_first_invalid_document(self) -> None:
        with pytest.raises(InvalidDocumentError):
            resolve_all([_doc("/c/en/ok.md"), _doc("")])
