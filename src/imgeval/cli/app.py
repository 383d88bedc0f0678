"""Root Typer app with global options."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="imgeval",
    help="Naturalness and lightness-order scoring for image-enhancement pipelines.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from imgeval import __version__

        typer.echo(f"imgeval {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("imgeval")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.propagate = False


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show version."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline checkpoints."),
) -> None:
    """imgeval: image enhancement quality scoring."""
    _configure_logging(verbose)


# Import and register commands
from imgeval.cli.batch import batch  # noqa: E402
from imgeval.cli.model import model_info  # noqa: E402
from imgeval.cli.score import loe, naturalness  # noqa: E402
from imgeval.cli.summary import summary  # noqa: E402

app.command()(naturalness)
app.command()(loe)
app.command()(batch)
app.command()(summary)
app.command(name="model-info")(model_info)
