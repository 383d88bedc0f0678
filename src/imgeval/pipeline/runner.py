"""ProcessPoolExecutor orchestration with Rich progress."""

from __future__ import annotations

import os
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from imgeval.core.evaluate import evaluate_pair
from imgeval.io.image_reader import pair_images
from imgeval.io.model_io import load_model
from imgeval.io.results_io import append_records, create_results
from imgeval.models.config import BatchConfig
from imgeval.models.model import NaturalnessModel
from imgeval.models.result import ResultsMeta, ScoreRecord
from imgeval.pipeline.checkpoint import filter_pending, load_scored_set
from imgeval.pipeline.signals import ShutdownHandler, worker_init

console = Console()

# Max futures in flight at once to bound memory usage
_BATCH_SIZE = 1000


def run_batch(
    reference_dir: str,
    candidate_dir: str,
    output_path: str,
    config: BatchConfig,
    resume: bool = True,
) -> tuple[int, int]:
    """Score every matched pair. Returns (total_scored, failed_count)."""
    with ShutdownHandler() as shutdown:
        return _run_batch_inner(reference_dir, candidate_dir, output_path, config, resume, shutdown)


def _run_batch_inner(
    reference_dir: str,
    candidate_dir: str,
    output_path: str,
    config: BatchConfig,
    resume: bool,
    shutdown: ShutdownHandler,
) -> tuple[int, int]:
    output = Path(output_path)

    model: NaturalnessModel | None = None
    if not config.skip_naturalness and config.model_path:
        model = load_model(config.model_path)

    console.print(f"[bold]Pairing images in[/bold] {reference_dir} and {candidate_dir} ...")
    pairs, unmatched = pair_images(reference_dir, candidate_dir, config.extensions)
    console.print(f"  Found [bold]{len(pairs):,}[/bold] pairs")
    if unmatched:
        console.print(f"  [yellow]{len(unmatched):,} references have no candidate[/yellow]")

    if not pairs:
        console.print("[yellow]No image pairs found.[/yellow]")
        return 0, 0

    already_scored = 0
    if resume and output.exists():
        scored_set, existing = load_scored_set(output_path)
        already_scored = len(existing)
        pending = filter_pending(pairs, scored_set)
        if already_scored > 0:
            console.print(
                f"  Resuming: [green]{already_scored:,}[/green] already scored, "
                f"[bold]{len(pending):,}[/bold] remaining"
            )
    else:
        pending = pairs
        meta = ResultsMeta(
            reference_dir=os.path.abspath(reference_dir),
            candidate_dir=os.path.abspath(candidate_dir),
            model_path=config.model_path,
            model_version=model.version if model else None,
            total_pairs=len(pairs),
            created_at=datetime.now(timezone.utc).isoformat(),
            settings={
                "workers": config.workers,
                "patch_size": config.metrics.patch_size,
                "window": config.metrics.window,
                "block_target": config.metrics.block_target,
                "duplicate_d2_scale": config.metrics.duplicate_d2_scale,
                "skip_naturalness": config.skip_naturalness,
                "skip_lightness_order": config.skip_lightness_order,
            },
        )
        create_results(output_path, meta)

    if not pending:
        console.print("[green]All pairs already scored![/green]")
        return already_scored, 0

    total_done = 0
    failed_count = 0
    buffer: list[ScoreRecord] = []

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]Scoring pairs"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        TextColumn("•"),
        TimeRemainingColumn(),
        console=console,
    )

    with progress:
        task = progress.add_task("Scoring", total=len(pending))

        workers = max(1, min(config.workers, len(pending)))
        with ProcessPoolExecutor(max_workers=workers, initializer=worker_init) as executor:
            for batch_start in range(0, len(pending), _BATCH_SIZE):
                if shutdown.is_shutting_down:
                    break

                batch = pending[batch_start : batch_start + _BATCH_SIZE]
                futures: dict[Future[ScoreRecord], tuple[str, str]] = {
                    executor.submit(evaluate_pair, ref, cand, config, model): (ref, cand)
                    for ref, cand in batch
                }

                for future in as_completed(futures):
                    if shutdown.is_shutting_down:
                        progress.update(task, description="[yellow]Shutting down gracefully...")
                        for f in futures:
                            f.cancel()
                        break

                    try:
                        record = future.result()
                    except Exception as exc:
                        ref, cand = futures[future]
                        record = ScoreRecord(
                            reference_path=ref,
                            candidate_path=cand,
                            name=os.path.basename(cand),
                            error=str(exc) or type(exc).__name__,
                            error_type=type(exc).__name__,
                            evaluated_at=datetime.now(timezone.utc).isoformat(),
                        )

                    buffer.append(record)
                    if record.failed:
                        failed_count += 1

                    total_done += 1
                    progress.update(task, advance=1)

                    if len(buffer) >= config.flush_every:
                        append_records(output_path, buffer)
                        buffer.clear()

        if buffer:
            append_records(output_path, buffer)
            buffer.clear()

    final_count = already_scored + total_done

    console.print()
    console.print("[bold green]Batch complete![/bold green]")
    console.print(f"  Total scored: [bold]{final_count:,}[/bold]")
    if failed_count:
        console.print(f"  Failed: [red]{failed_count:,}[/red]")
    console.print(f"  Results: {output_path}")

    if shutdown.is_shutting_down:
        console.print(
            f"\n[yellow]Saved progress. Resume with: imgeval batch {reference_dir} "
            f"{candidate_dir}[/yellow]"
        )

    return final_count, failed_count
