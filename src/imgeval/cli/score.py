"""imgeval naturalness / loe: score single images."""

from __future__ import annotations

from typing import NoReturn, Optional

import orjson
import typer
from rich.console import Console

from imgeval.core.lightness_order import lightness_order_score
from imgeval.core.naturalness import naturalness_score
from imgeval.errors import ImgevalError
from imgeval.io.image_reader import read_pixel_buffer
from imgeval.io.model_io import load_model
from imgeval.models.config import MetricsConfig, load_config
from imgeval.models.rating import rate_lightness_order, rate_naturalness
from imgeval.utils import fmt_score, rating_markup

console = Console()


def _metrics_config(config_path: Optional[str]) -> MetricsConfig:
    if config_path is None:
        return MetricsConfig()
    return load_config(config_path).metrics


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def naturalness(
    image: str = typer.Argument(..., help="Image to score"),
    model_path: Optional[str] = typer.Option(
        None, "-m", "--model", help="Naturalness model (.json or .npz)"
    ),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config"),
    patch_size: Optional[int] = typer.Option(None, "--patch-size", help="Patch side in pixels"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text"),
) -> None:
    """Score how natural an image looks (lower is better)."""
    config = _metrics_config(config_path)
    if patch_size is not None:
        config.patch_size = patch_size

    try:
        model = load_model(model_path) if model_path else None
        buf = read_pixel_buffer(image)
        score = naturalness_score(buf, model, config)
    except (ImgevalError, OSError, ValueError) as exc:
        _fail(str(exc))

    rating = rate_naturalness(score)
    if as_json:
        typer.echo(
            orjson.dumps({"image": image, "naturalness": score, "rating": rating.value}).decode()
        )
        return
    console.print(f"Naturalness: [bold]{fmt_score(score)}[/bold] ({rating_markup(rating)})")


def loe(
    reference: str = typer.Argument(..., help="Original image"),
    candidate: str = typer.Argument(..., help="Enhanced image"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config"),
    window: Optional[int] = typer.Option(None, "--window", help="Local-max window radius"),
    no_resize: bool = typer.Option(
        False, "--no-resize", help="Fail instead of resizing the candidate to the reference"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of text"),
) -> None:
    """Score how well the candidate preserves the reference's lightness order."""
    config = _metrics_config(config_path)
    if window is not None:
        config.window = window

    try:
        ref = read_pixel_buffer(reference)
        cand = read_pixel_buffer(candidate, size=None if no_resize else (ref.width, ref.height))
        score = lightness_order_score(ref, cand, config)
    except (ImgevalError, OSError, ValueError) as exc:
        _fail(str(exc))

    rating = rate_lightness_order(score)
    if as_json:
        payload = {
            "reference": reference,
            "candidate": candidate,
            "lightness_order": score,
            "rating": rating.value,
        }
        typer.echo(orjson.dumps(payload).decode())
        return
    console.print(f"Lightness order: [bold]{fmt_score(score)}[/bold] ({rating_markup(rating)})")
