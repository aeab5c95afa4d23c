from page_planner.content.filesystem import (
    DEFAULT_IGNORE,
    MARKDOWN_SUFFIXES,
    FilesystemContentSource,
    is_markdown_file,
    split_front_matter,
)
from page_planner.content.memory import InMemoryContentSource

__all__ = [
    "DEFAULT_IGNORE",
    "MARKDOWN_SUFFIXES",
    "FilesystemContentSource",
    "InMemoryContentSource",
    "is_markdown_file",
    "split_front_matter",
]
