"""imgeval summary: batch results overview."""

from __future__ import annotations

from typing import Optional

import orjson
import typer
from rich.console import Console
from rich.table import Table

from imgeval.core.aggregator import ScoreStats, summarize
from imgeval.io.results_io import read_results
from imgeval.utils import fmt_score, rating_markup

console = Console()


def _stats_row(table: Table, label: str, stats: ScoreStats) -> None:
    table.add_row(
        label,
        f"{stats.count:,}",
        fmt_score(stats.mean, 2),
        fmt_score(stats.median, 2),
        fmt_score(stats.min, 2),
        fmt_score(stats.max, 2),
    )


def summary(
    results: str = typer.Argument(..., help="Path to results JSONL"),
    output: Optional[str] = typer.Option(None, "-o", "--out", help="Output JSON path"),
) -> None:
    """Show score statistics and rating counts for a results file."""
    meta, records = read_results(results)
    if not records:
        console.print("[red]No records found.[/red]")
        raise typer.Exit(1)

    result = summarize(records)

    console.print(f"\n[bold]Batch Summary ({result.total_pairs:,} pairs)[/bold]")
    if meta:
        console.print(f"  Reference: {meta.reference_dir}")
        console.print(f"  Candidate: {meta.candidate_dir}")
        if meta.model_version:
            console.print(f"  Model: {meta.model_version}")
    if result.failed_count:
        console.print(f"  [red]Failed: {result.failed_count:,}[/red]")
        for name, count in result.error_counts.items():
            console.print(f"    {name}: {count:,}")

    table = Table(border_style="blue")
    for col in ("Metric", "Count", "Mean", "Median", "Min", "Max"):
        table.add_column(col)
    _stats_row(table, "Naturalness", result.naturalness)
    _stats_row(table, "Lightness order", result.lightness_order)
    console.print(table)

    for label, counts in (
        ("Naturalness ratings", result.naturalness_ratings),
        ("Lightness-order ratings", result.lightness_order_ratings),
    ):
        if counts:
            parts = ", ".join(f"{rating_markup(k)} {v:,}" for k, v in counts.items())
            console.print(f"  {label}: {parts}")

    if output:
        data = orjson.dumps(result.to_dict(), option=orjson.OPT_INDENT_2)
        with open(output, "wb") as f:
            f.write(data)
        console.print(f"[green]Saved to {output}[/green]")
