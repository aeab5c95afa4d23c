from collections.abc import Iterable
from pathlib import PurePath

from page_planner.core.errors import InvalidDocumentError
from page_planner.models import Document, ResolvedDocument


def resolve(document: Document) -> ResolvedDocument:
    """Derive the slug and locale of a document.

    The slug is the file name without its extension. The locale is the
    document's explicit ``lang`` when set, otherwise the name of the directory
    holding the file. Locales are not checked against any configuration here.
    """
    raw_path = document.absolute_path.strip()
    if not raw_path:
        raise InvalidDocumentError(document.absolute_path, "empty path")
    if raw_path.endswith(("/", "\\")):
        raise InvalidDocumentError(document.absolute_path, "path names a directory, not a file")

    path = PurePath(raw_path)
    if path.name in ("", ".", ".."):
        raise InvalidDocumentError(document.absolute_path, "path has no file name")

    slug = path.stem.strip()
    if not slug:
        raise InvalidDocumentError(document.absolute_path, "file name yields an empty slug")

    lang = (document.lang or "").strip() or path.parent.name
    if not lang:
        raise InvalidDocumentError(document.absolute_path, "no parent directory to derive a locale from")

    fm = document.frontmatter
    return ResolvedDocument(
        slug=slug,
        lang=lang,
        title=fm.title,
        date=fm.date,
        tags=list(fm.tags),
        source_path=raw_path,
    )


def resolve_all(documents: Iterable[Document]) -> list[ResolvedDocument]:
    """Resolve a batch of documents, newest first.

    Ties keep their input order.
    """
    resolved = [resolve(doc) for doc in documents]
    return sorted(resolved, key=ResolvedDocument.sort_key, reverse=True)
