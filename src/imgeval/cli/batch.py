"""imgeval batch command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from imgeval.models.config import BatchConfig, load_config


def batch(
    reference_dir: str = typer.Argument(..., help="Directory of original images"),
    candidate_dir: str = typer.Argument(..., help="Directory of enhanced images (same names)"),
    output: str = typer.Option("./imgeval_results.jsonl", "-o", "--output", help="Results path"),
    model_path: Optional[str] = typer.Option(
        None, "-m", "--model", help="Naturalness model (.json or .npz)"
    ),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="YAML config"),
    workers: Optional[int] = typer.Option(None, "--workers", help="Number of parallel workers"),
    resume: bool = typer.Option(
        True, "--resume/--no-resume", help="Skip pairs already in the results file"
    ),
    skip_naturalness: bool = typer.Option(False, "--skip-naturalness"),
    skip_loe: bool = typer.Option(False, "--skip-loe", help="Skip lightness-order scoring"),
    extensions: Optional[str] = typer.Option(
        None, "--extensions", help="Comma-separated extensions"
    ),
) -> None:
    """Score every reference/candidate pair and write a JSONL results file."""
    from imgeval.pipeline.runner import run_batch

    for directory in (reference_dir, candidate_dir):
        if not Path(directory).is_dir():
            typer.echo(f"Error: {directory} is not a valid directory", err=True)
            raise typer.Exit(1)

    config = load_config(config_path) if config_path else BatchConfig()
    if model_path is not None:
        config.model_path = model_path
    if workers is not None:
        config.workers = workers
    if skip_naturalness:
        config.skip_naturalness = True
    if skip_loe:
        config.skip_lightness_order = True
    if extensions:
        config.extensions = tuple(f".{e.strip().lstrip('.')}" for e in extensions.split(","))

    if not config.skip_naturalness and not config.model_path:
        typer.echo("Error: --model is required unless --skip-naturalness is given", err=True)
        raise typer.Exit(1)

    try:
        run_batch(reference_dir, candidate_dir, output, config, resume=resume)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)
