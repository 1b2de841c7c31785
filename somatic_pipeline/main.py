#!/usr/bin/env python3
"""
Somatic staging pipeline - entry point.

Deduplicates ICGC simple somatic mutation files and stages them as MAF
records, one worker per input file.

Usage:
    python -m somatic_pipeline.main transform /tmp/EOPC-DE.tsv --staging-dir /tmp/icgc
    python -m somatic_pipeline.main columns
"""

import sys
from pathlib import Path

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from somatic_pipeline.config import settings
from somatic_pipeline.errors import ConfigurationError
from somatic_pipeline.staging import TsvStagingFileHandler, resolve_column_names
from somatic_pipeline.transformers import SimpleSomaticTransformer, TransformerPool
from somatic_pipeline.utils.paths import staging_subdir_name

console = Console()


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(debug):
    """Somatic mutation dedup-and-staging pipeline"""
    if debug:
        from somatic_pipeline.utils.logging import setup_logging
        setup_logging(level="DEBUG")


@cli.command()
@click.argument("inputs", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--staging-dir", type=click.Path(path_type=Path), default=None,
              help="Root directory for staging files (one subdirectory per input)")
@click.option("--workers", type=int, default=None, help="Number of files transformed in parallel")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for each file")
@click.option("--window", type=int, default=None, help="Recency window size")
@click.option("--capacity", type=int, default=None, help="Expected distinct records per file")
@click.option("--error-rate", type=float, default=None, help="Dedup filter false-positive rate")
@click.option("--on-malformed", type=click.Choice(["skip", "abort"]), default=None,
              help="Skip or abort on records missing identity fields")
def transform(inputs, staging_dir, workers, timeout, window, capacity, error_rate, on_malformed):
    """
    Deduplicate and stage one or more ICGC simple somatic mutation files.
    """
    staging_root = staging_dir or settings.pipeline.staging_dir
    timeout = timeout or settings.pipeline.run_timeout

    console.print(f"\n[bold blue]Somatic staging - Transform[/bold blue]")
    console.print(f"Inputs: {len(inputs)}")
    console.print(f"Staging root: {staging_root}")
    console.print(f"Timeout: {timeout}s\n")

    transformers = []
    rejected = []
    # One writer per staging file: resolved staging dir -> input that owns it
    claimed: dict[Path, Path] = {}
    for input_path in inputs:
        try:
            destination = (staging_root / staging_subdir_name(input_path)).resolve()
            if destination in claimed:
                raise ConfigurationError(
                    f"Staging directory {destination} is already used by {claimed[destination]}"
                )
            transformer = SimpleSomaticTransformer(
                TsvStagingFileHandler(),
                destination,
                filter_capacity=capacity,
                filter_error_rate=error_rate,
                recency_window=window,
                on_malformed=on_malformed,
            )
            transformer.set_input_path(input_path)
            transformers.append(transformer)
            claimed[destination] = input_path
        except ConfigurationError as e:
            console.print(f"[red]Skipping {input_path}: {e}[/red]")
            logger.error(f"Configuration rejected for {input_path}: {e}")
            rejected.append(input_path)

    with TransformerPool(max_workers=workers) as pool:
        outcomes = pool.run_all(transformers, timeout=timeout)

    # Print summary
    console.print("\n[bold]Transformation Summary[/bold]")
    table = Table()
    table.add_column("Input")
    table.add_column("Status")
    table.add_column("Read")
    table.add_column("Staged")
    table.add_column("Duplicates")
    table.add_column("Malformed")
    table.add_column("Duration")

    for outcome in outcomes:
        result = outcome.result
        status = "[green]Success[/green]" if outcome.success else f"[red]{outcome.status.title()}[/red]"
        duration = f"{result.duration_seconds:.1f}s" if result and result.duration_seconds else "-"
        table.add_row(
            outcome.input_path.name if outcome.input_path else "-",
            status,
            str(result.records_read) if result else "-",
            str(result.records_written) if result else "-",
            str(result.records_rejected) if result else "-",
            str(result.records_malformed) if result else "-",
            duration,
        )
    for input_path in rejected:
        table.add_row(Path(input_path).name, "[red]Rejected[/red]", "-", "-", "-", "-", "-")

    console.print(table)

    for outcome in outcomes:
        if outcome.error:
            console.print(f"[red]{outcome.input_path}: {outcome.error}[/red]")

    if rejected or not all(outcome.success for outcome in outcomes):
        sys.exit(1)


@cli.command()
def columns():
    """Show the staging file columns."""
    for column in resolve_column_names():
        console.print(column)


if __name__ == "__main__":
    cli()
