import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from page_planner.config import PlannerSettings, get_settings
from page_planner.core.build import BuildResult, run_build
from page_planner.core.errors import PlannerError
from page_planner.core.planner import OrphanPolicy, listing_path
from page_planner.core.ports.content import ContentSource
from page_planner.core.ports.sink import PageSink
from page_planner.models import PageRequest
from page_planner.sinks.manifest import ManifestPageSink
from page_planner.sinks.memory import InMemoryPageSink

console = Console()

ContentDirOption = Annotated[
    Path | None,
    typer.Option("--content-dir", help="Root of the per-locale markdown folders."),
]
LocaleOption = Annotated[
    list[str] | None,
    typer.Option("--locale", "-l", help="Locale code, repeat in order. Overrides locale discovery."),
]
DefaultLocaleOption = Annotated[str | None, typer.Option("--default-locale", help="Locale served without prefix.")]
PageSizeOption = Annotated[int | None, typer.Option("--page-size", min=1, help="Posts per listing page.")]
OrphanPolicyOption = Annotated[
    OrphanPolicy | None,
    typer.Option("--orphans", help="Documents in unconfigured locales: drop, warn or fail."),
]


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(escape(str(v)) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _format_context(request: PageRequest) -> str:
    return ", ".join(f"{k}={v}" for k, v in request.context.model_dump(by_alias=True).items() if v is not None)


def load_settings(
    content_dir: Path | None = None,
    locales: list[str] | None = None,
    default_locale: str | None = None,
    page_size: int | None = None,
    orphan_policy: OrphanPolicy | None = None,
    manifest_path: Path | None = None,
) -> PlannerSettings:
    """Settings from the environment with command-line overrides applied.

    Invalid values from either source are reported and exit with status 1.
    """
    try:
        return get_settings(
            content_dir=content_dir,
            locales=locales or None,
            default_locale=default_locale,
            page_size=page_size,
            orphan_policy=orphan_policy,
            manifest_path=manifest_path,
        )
    except PlannerError as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc


def _get_source(settings: PlannerSettings) -> ContentSource:
    from page_planner.content.filesystem import FilesystemContentSource

    return FilesystemContentSource(settings.content_dir, settings.ignore)


def execute_build(settings: PlannerSettings, sink: PageSink) -> BuildResult:
    """Run one build; report a planner failure and exit with status 1."""
    try:
        locale_config = settings.locale_config()
        source = _get_source(settings)
        return asyncio.run(run_build(source, sink, locale_config, settings.page_size, settings.orphan_policy))
    except PlannerError as exc:
        console.print(f"[red]Build failed:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc


def plan(
    content_dir: ContentDirOption = None,
    locale: LocaleOption = None,
    default_locale: DefaultLocaleOption = None,
    page_size: PageSizeOption = None,
    orphans: OrphanPolicyOption = None,
) -> None:
    """Show the pages a build would create."""
    settings = load_settings(content_dir, locale, default_locale, page_size, orphans)
    result = execute_build(settings, InMemoryPageSink())
    rows = [(r.route_path, r.template.value, _format_context(r)) for r in result.requests]
    _render_table(["path", "template", "context"], rows)


def build(
    content_dir: ContentDirOption = None,
    locale: LocaleOption = None,
    default_locale: DefaultLocaleOption = None,
    page_size: PageSizeOption = None,
    orphans: OrphanPolicyOption = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Manifest file to write.")] = None,
) -> None:
    """Plan all pages and write the route manifest."""
    settings = load_settings(content_dir, locale, default_locale, page_size, orphans, output)
    result = execute_build(settings, ManifestPageSink(settings.manifest_path))
    console.print(
        f"[green]Planned[/green] {result.listing_count} listing and {result.detail_count} detail page(s)"
    )
    if result.dropped:
        console.print(f"[yellow]Dropped[/yellow] {len(result.dropped)} document(s) in unconfigured locales")
    console.print(f"[green]Wrote[/green] manifest to {escape(str(settings.manifest_path))}")


def locales(
    locale: LocaleOption = None,
    default_locale: DefaultLocaleOption = None,
) -> None:
    """List the configured locales and their route prefixes."""
    settings = load_settings(locales=locale, default_locale=default_locale)
    try:
        config = settings.locale_config()
    except PlannerError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc
    rows = [
        (code, listing_path(code, config.default, 1), "yes" if code == config.default else "")
        for code in config.locales
    ]
    _render_table(["locale", "listing root", "default"], rows)
