import asyncio
import contextlib
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from page_planner.cli.plan import (
    ContentDirOption,
    DefaultLocaleOption,
    LocaleOption,
    OrphanPolicyOption,
    PageSizeOption,
    _get_source,
    load_settings,
)
from page_planner.config import PlannerSettings
from page_planner.content.filesystem import is_markdown_file
from page_planner.core.build import run_build
from page_planner.core.errors import PlannerError
from page_planner.sinks.manifest import ManifestPageSink
from page_planner.watcher.watchfiles_adapter import ContentWatcher

console = Console()


def markdown_changes(paths: set[Path]) -> set[Path]:
    return {p for p in paths if is_markdown_file(p)}


async def rebuild(settings: PlannerSettings, changed: set[Path] | None = None) -> bool:
    """Rebuild the manifest; a failed build is reported and the previous manifest kept."""
    if changed:
        console.print(f"Rebuilding after {len(changed)} changed file(s)...")
    try:
        result = await run_build(
            _get_source(settings),
            ManifestPageSink(settings.manifest_path),
            settings.locale_config(),
            settings.page_size,
            settings.orphan_policy,
        )
    except PlannerError as exc:
        console.print(f"[red]Build failed:[/red] {escape(str(exc))}")
        return False
    console.print(f"[green]Planned[/green] {len(result.requests)} page(s) -> {escape(str(settings.manifest_path))}")
    return True


def watch(
    content_dir: ContentDirOption = None,
    locale: LocaleOption = None,
    default_locale: DefaultLocaleOption = None,
    page_size: PageSizeOption = None,
    orphans: OrphanPolicyOption = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Manifest file to write.")] = None,
) -> None:
    """Build once, then rebuild whenever a markdown file changes."""
    settings = load_settings(content_dir, locale, default_locale, page_size, orphans, output)

    async def _on_change(paths: set[Path]) -> None:
        changed = markdown_changes(paths)
        if changed:
            await rebuild(settings, changed)

    async def _run() -> None:
        await rebuild(settings)
        watcher = ContentWatcher(settings.content_dir, _on_change)
        await watcher.start()
        console.print(f"Watching {escape(str(settings.content_dir))} (Ctrl-C to stop)")
        try:
            await asyncio.Event().wait()
        finally:
            await watcher.stop()

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run())
