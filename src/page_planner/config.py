"""Planner settings loaded from ``PAGE_PLANNER_*`` environment variables and ``.env``.

List values are given as JSON, e.g. ``PAGE_PLANNER_LOCALES='["en", "pt"]'``.
"""

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict, SettingsError

from page_planner.content.filesystem import DEFAULT_IGNORE
from page_planner.core.errors import PlannerConfigError
from page_planner.core.locales import LocaleConfig, load_locale_config
from page_planner.core.planner import DEFAULT_PAGE_SIZE, OrphanPolicy


class PlannerSettings(BaseSettings):
    content_dir: Path = Field(default=Path("content"), description="Root of the per-locale markdown folders.")
    locales_dir: Path = Field(
        default=Path("locales"),
        description="Folder whose sub-directories name the locales when none are configured.",
    )
    locales: list[str] | None = Field(default=None, description="Ordered locale codes; overrides discovery.")
    default_locale: str = Field(default="en", description="Locale whose routes carry no prefix.")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, description="Posts per listing page.")
    orphan_policy: OrphanPolicy = Field(
        default=OrphanPolicy.DROP,
        description="Handling of documents whose locale is not configured.",
    )
    ignore: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE), description="Content globs to skip.")
    manifest_path: Path = Field(default=Path("public/pages.json"), description="Where `build` writes the manifest.")

    model_config = SettingsConfigDict(
        env_prefix="PAGE_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def locale_config(self) -> LocaleConfig:
        return load_locale_config(self.locales, self.default_locale, self.locales_dir)


def get_settings(**overrides: Any) -> PlannerSettings:
    """Load settings, letting non-``None`` keyword overrides win over the environment.

    Overrides go through the same validation as environment values.
    """
    try:
        return PlannerSettings(**{k: v for k, v in overrides.items() if v is not None})
    except (ValidationError, SettingsError) as exc:
        raise PlannerConfigError(f"Invalid settings: {exc}") from exc
