"""imgeval model-info: inspect a naturalness model artifact."""

from __future__ import annotations

import numpy as np
import typer
from rich.console import Console
from rich.table import Table

from imgeval.core.naturalness import INVERSE_FLOOR
from imgeval.io.model_io import load_model

console = Console()


def model_info(
    path: str = typer.Argument(..., help="Model file (.json or .npz)"),
) -> None:
    """Validate a model file and show its basic statistics."""
    try:
        model = load_model(path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)

    diag = np.diagonal(model.cov)
    table = Table(title="Naturalness Model", show_header=False, border_style="blue")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Name", model.name or "—")
    table.add_row("Version", model.version)
    table.add_row("Features", str(model.mean.shape[0]))
    table.add_row("Mean range", f"{model.mean.min():.4f} to {model.mean.max():.4f}")
    table.add_row("Covariance diagonal", f"{diag.min():.4f} to {diag.max():.4f}")
    table.add_row("Unusable diagonal entries", str(int(np.sum(~(diag > INVERSE_FLOOR)))))
    table.add_row("Symmetric", "yes" if np.allclose(model.cov, model.cov.T) else "no")
    console.print(table)
