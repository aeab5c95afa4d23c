"""Markdown content source backed by a directory tree.

Files are grouped in one directory per locale (``content/en/post.md``). Only
the YAML front-matter is read; bodies are passed through untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from fnmatch import fnmatch
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from page_planner.core.errors import ContentQueryError
from page_planner.models import Document, FrontMatter

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIXES: frozenset[str] = frozenset({".md", ".markdown"})
DEFAULT_IGNORE: tuple[str, ...] = ("non-published/**",)

_DELIMITER = "---"
_CLOSING_DELIMITERS = ("---", "...")


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Split ``text`` into its YAML front-matter mapping and the remaining body.

    Text that does not open with ``---`` has no front-matter. Raises
    ``ValueError`` for an unterminated block or one that is not a mapping.
    """
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].strip() != _DELIMITER:
        return {}, text

    for index in range(1, len(lines)):
        if lines[index].strip() in _CLOSING_DELIMITERS:
            block = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            break
    else:
        raise ValueError("front-matter block is not terminated")

    metadata = yaml.safe_load(block) or {}
    if not isinstance(metadata, dict):
        raise ValueError("front-matter is not a mapping")
    return metadata, body


def is_markdown_file(path: Path) -> bool:
    return path.suffix.lower() in MARKDOWN_SUFFIXES


class FilesystemContentSource:
    """Load every markdown file under ``content_dir``.

    Implements the ``ContentSource`` protocol. Paths matching one of the
    ``ignore`` glob patterns (relative to ``content_dir``) are skipped.
    """

    def __init__(self, content_dir: str | Path, ignore: Sequence[str] = DEFAULT_IGNORE) -> None:
        self._root = Path(content_dir)
        self._ignore = tuple(ignore)

    def _is_ignored(self, path: Path) -> bool:
        relative = path.relative_to(self._root).as_posix()
        return any(fnmatch(relative, pattern) for pattern in self._ignore)

    def _discover(self) -> list[Path]:
        return sorted(
            p for p in self._root.rglob("*") if p.is_file() and is_markdown_file(p) and not self._is_ignored(p)
        )

    def _load(self, path: Path) -> Document:
        try:
            text = path.read_text(encoding="utf-8")
            metadata, body = split_front_matter(text)
        except (OSError, UnicodeDecodeError, ValueError, yaml.YAMLError) as exc:
            raise ContentQueryError(f"Cannot read front-matter of {path}: {exc}") from exc

        try:
            frontmatter = FrontMatter.model_validate(metadata)
        except ValidationError as exc:
            raise ContentQueryError(f"Invalid front-matter in {path}: {exc}") from exc

        lang = metadata.get("lang")
        return Document(
            absolute_path=str(path.resolve()),
            frontmatter=frontmatter,
            body=body,
            lang=str(lang) if lang is not None else None,
        )

    async def fetch_documents(self) -> list[Document]:
        if not self._root.is_dir():
            raise ContentQueryError(f"Content directory not found: {self._root}")
        paths = self._discover()
        logger.debug("Found %d markdown file(s) under %s", len(paths), self._root)
        return [self._load(p) for p in paths]
