from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _coerce_datetime(value: Any) -> Any:
    # YAML front-matter yields plain dates for "2021-03-04"
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


class FrontMatter(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    title: str
    date: datetime
    tags: list[str] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        return _coerce_datetime(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, value: Any) -> Any:
        return [] if value is None else value


class Document(BaseModel):
    """A content file as supplied by a content source.

    ``lang`` is optional; when it is missing the locale is taken from the
    name of the directory holding the file.
    """

    model_config = ConfigDict(frozen=True)

    absolute_path: str
    frontmatter: FrontMatter
    body: str = ""
    lang: str | None = None


class ResolvedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str = Field(min_length=1)
    lang: str
    title: str
    date: datetime
    tags: list[str] = Field(default_factory=list)
    source_path: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Any:
        return _coerce_datetime(value)

    def sort_key(self) -> datetime:
        """Naive UTC timestamp so aware and naive dates compare."""
        if self.date.tzinfo is None:
            return self.date
        return self.date.astimezone(timezone.utc).replace(tzinfo=None)


class Template(str, Enum):
    DETAIL = "detail"
    LISTING = "listing"


class PaginationContext(BaseModel):
    """Slice of a locale's documents rendered by one listing page.

    Serialized with camelCase keys (``numPages``, ``currentPage``) so listing
    templates receive the same context names they query with.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    limit: int = Field(ge=1)
    skip: int = Field(ge=0)
    num_pages: int = Field(ge=1)
    current_page: int = Field(ge=1)
    lang: str
    previous_path: str | None = None
    next_path: str | None = None


class DetailContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    lang: str


class PageRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    route_path: str
    template: Template
    context: PaginationContext | DetailContext

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.route_path,
            "template": self.template.value,
            "context": self.context.model_dump(by_alias=True),
        }
