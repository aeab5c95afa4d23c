from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from page_planner.core.errors import PlannerConfigError

logger = logging.getLogger(__name__)


def validate_locales(locales: Sequence[str], default_locale: str) -> None:
    if not locales:
        raise PlannerConfigError("At least one locale must be configured")
    seen: set[str] = set()
    for code in locales:
        if not code or code != code.strip() or "/" in code:
            raise PlannerConfigError(f"Invalid locale code: {code!r}")
        if code in seen:
            raise PlannerConfigError(f"Locale {code!r} is configured more than once")
        seen.add(code)
    if default_locale not in seen:
        raise PlannerConfigError(f"Default locale {default_locale!r} is not one of {', '.join(locales)}")


@dataclass(frozen=True)
class LocaleConfig:
    locales: tuple[str, ...]
    default: str

    def __post_init__(self) -> None:
        validate_locales(self.locales, self.default)


def discover_locales(locales_dir: str | Path) -> tuple[str, ...]:
    """Return the locale codes named by the sub-directories of a locale-strings folder.

    Entries are sorted so that the result does not depend on filesystem order.
    Hidden entries and plain files are skipped.
    """
    root = Path(locales_dir)
    if not root.is_dir():
        raise PlannerConfigError(f"Locale directory not found: {root}")
    codes = tuple(sorted(p.name for p in root.iterdir() if p.is_dir() and not p.name.startswith(".")))
    if not codes:
        raise PlannerConfigError(f"No locale sub-directories in {root}")
    logger.debug("Discovered locales %s in %s", ", ".join(codes), root)
    return codes


def load_locale_config(
    locales: Sequence[str] | None,
    default_locale: str,
    locales_dir: str | Path | None = None,
) -> LocaleConfig:
    """Build the locale configuration, preferring explicit codes over discovery."""
    if locales:
        return LocaleConfig(tuple(locales), default_locale)
    if locales_dir is None:
        raise PlannerConfigError("No locales configured and no locale directory to discover them from")
    return LocaleConfig(discover_locales(locales_dir), default_locale)
