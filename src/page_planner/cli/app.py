import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from page_planner.cli.plan import build, locales, plan
from page_planner.cli.watch import watch

app = typer.Typer(
    name="page-planner",
    help="Page planner: turn localized blog posts into listing and detail routes.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def _root(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details.")] = False,
) -> None:
    configure_logging(verbose)


app.command("plan")(plan)
app.command("build")(build)
app.command("locales")(locales)
app.command("watch")(watch)


def main() -> None:
    app()
