from __future__ import annotations

import sys

import typer

from kickout import (
    __app_name__,
    __author__,
    __author_url__,
    __description__,
    __homepage__,
    __license__,
    __version__,
)
from kickout.cli.context import build_context
from kickout.core.config import DEFAULT_DIST_TAG
from kickout.core.errors import ErrorCode
from kickout.core.result import Err
from kickout.core.update_check import notify_update
from kickout.output.errors import report_failure
from kickout.release.model import Options
from kickout.release.workflow import run_release


app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(f"{__app_name__} {__version__} <{__homepage__}>", err=True)
    typer.echo(__description__, err=True)
    typer.echo(f"Copyright (c) 2017-2025 {__author__} <{__author_url__}>", err=True)
    typer.echo(
        f"Licensed under {__license__} <http://spdx.org/licenses/{__license__}.html>",
        err=True,
    )
    raise typer.Exit(code=ErrorCode.OK)


@app.command(help="Conveniently release a Git-versioned NPM package.")
def release(
    bump: str = typer.Argument(
        ...,
        metavar="major|minor|patch|X.Y.Z",
        help="Version part to bump, or the explicit new version.",
        show_default=False,
    ),
    version: bool = typer.Option(
        False,
        "-V",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="show program version information",
    ),
    no_color: bool = typer.Option(False, "-C", "--noColor", help="do not use any colors in output"),
    noop: bool = typer.Option(
        False, "-n", "--noop", help="do not execute any destructive commands at all"
    ),
    message: str = typer.Option("", "-m", "--message", help="use custom commit message"),
    tag: str | None = typer.Option(
        None,
        "-t",
        "--tag",
        help="set particular NPM package tag",
        show_default=DEFAULT_DIST_TAG,
    ),
) -> None:
    del version
    ctx = build_context(no_color=no_color)

    parsed = Options.parse(
        bump=bump,
        noop=noop,
        message=message,
        tag=ctx.settings.default_tag if tag is None else tag,
        no_color=no_color or ctx.settings.no_color,
    )
    if isinstance(parsed, Err):
        raise typer.Exit(code=report_failure(parsed.error, ctx.console))

    if sys.stdout.isatty():
        notify_update(ctx.console, current=__version__, settings=ctx.settings)

    result = run_release(
        options=parsed.value,
        settings=ctx.settings,
        cwd=ctx.cwd,
        runner=ctx.runner,
        console=ctx.console,
    )
    if isinstance(result, Err):
        raise typer.Exit(code=report_failure(result.error.error, ctx.console))


def main() -> None:
    app()
