"""CLI entry point for transformcache.

Runs the incremental pipeline for a project outside of a host build tool:
- build: one incremental run
- clean: remove generated outputs and the manifest
- watch: one run, then re-run on every source change
- status: report what the next run would do
"""

from __future__ import annotations

import atexit
import sys
import time
from pathlib import Path

import click

from transformcache.config import ConfigError, TransformConfig, load_config
from transformcache.detector import DetectorError
from transformcache.logging import project_log_dir, setup_logging
from transformcache.manifest import Manifest, ManifestError
from transformcache.pipeline import PipelineStageError
from transformcache.plugin import TransformPlugin


def project_options(func):
    """Options shared by every command."""
    func = click.option(
        "-v",
        "--verbose",
        is_flag=True,
        help="Enable verbose output",
    )(func)
    func = click.option(
        "--dst-dir",
        "destination_dir",
        default=None,
        help="Destination directory name (default: from transform.yaml or 'app')",
    )(func)
    func = click.option(
        "--src-dir",
        "source_dir",
        default=None,
        help="Source directory name (default: from transform.yaml or 'src')",
    )(func)
    func = click.option(
        "-p",
        "--project-dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=Path("."),
        show_default=True,
        help="Project root directory",
    )(func)
    return func


def _load(
    project_dir: Path, source_dir: str | None, destination_dir: str | None, verbose: bool
) -> TransformConfig:
    """Load configuration and set up logging for a command."""
    config = load_config(project_dir, source_dir=source_dir, destination_dir=destination_dir)
    setup_logging(project_log_dir(config.paths), verbose=verbose)
    return config


@click.group()
@click.version_option(package_name="transformcache")
def main() -> None:
    """transformcache - incremental build-artifact cache."""
    pass


@main.command()
@project_options
@click.option("--progress", is_flag=True, help="Show a progress bar while transforming")
def build(
    project_dir: Path,
    source_dir: str | None,
    destination_dir: str | None,
    verbose: bool,
    progress: bool,
) -> None:
    """Transform changed source files and remove outdated outputs."""
    try:
        config = _load(project_dir, source_dir, destination_dir, verbose)
        plugin = TransformPlugin(config, show_progress=progress)
        result = plugin.run()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except PipelineStageError as e:
        click.echo(f"Build failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"  Processed: {len(result.orchestration.processed)}")
    click.echo(f"  Unchanged: {len(result.changes.unchanged)}")
    click.echo(f"  Skipped:   {len(result.orchestration.skipped)}")
    click.echo(f"  Removed:   {len(result.collection.removed)}")
    if not result.collection.ok:
        click.echo(f"  Not removed: {len(result.collection.failures)}", err=True)
        for failure in result.collection.failures:
            click.echo(f"  Warning: could not remove {failure.path}: {failure.error}", err=True)
    click.echo(f"\nOutputs written to: {config.paths.dst}")


@main.command()
@project_options
def clean(
    project_dir: Path,
    source_dir: str | None,
    destination_dir: str | None,
    verbose: bool,
) -> None:
    """Remove the destination tree and the manifest."""
    try:
        config = _load(project_dir, source_dir, destination_dir, verbose)
        plugin = TransformPlugin(config)
        plugin.clean()
        plugin.store.discard()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Clean failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"Removed {config.paths.dst}")


@main.command()
@project_options
@click.option(
    "--interval",
    type=float,
    default=1.0,
    show_default=True,
    help="Seconds between liveness checks while watching",
)
def watch(
    project_dir: Path,
    source_dir: str | None,
    destination_dir: str | None,
    verbose: bool,
    interval: float,
) -> None:
    """Build once, then rebuild whenever a source file changes."""
    try:
        config = _load(project_dir, source_dir, destination_dir, verbose)
        plugin = TransformPlugin(config)
        plugin.run()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except PipelineStageError as e:
        click.echo(f"Build failed: {e}", err=True)
        sys.exit(1)

    atexit.register(plugin.shutdown)
    watcher = plugin.start_watcher()
    click.echo(f"Watching {config.paths.src} (Ctrl+C to stop)")

    try:
        while watcher.is_running:
            time.sleep(interval)
    except KeyboardInterrupt:
        click.echo("\nStopping watcher...")
    finally:
        plugin.shutdown()


@main.command()
@project_options
def status(
    project_dir: Path,
    source_dir: str | None,
    destination_dir: str | None,
    verbose: bool,
) -> None:
    """Show which source files the next build would process or remove."""
    try:
        config = _load(project_dir, source_dir, destination_dir, verbose)
        plugin = TransformPlugin(config)
        previous = plugin.store.read()
        changes = plugin.detector.detect(previous or Manifest())
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except (ManifestError, DetectorError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if previous is None:
        click.echo("No manifest found: the next build starts from a clean destination.")
        previous = Manifest()
    else:
        click.echo(f"Manifest: {config.paths.manifest} ({len(previous)} entries)")

    current = {source.key for source in changes.changed} | set(changes.unchanged)
    removed = [source for source in previous if source not in current]

    click.echo(f"  Unchanged: {len(changes.unchanged)}")
    click.echo(f"  Changed:   {len(changes.changed)}")
    for source in changes.changed:
        label = "modified" if source.key in previous else "new"
        click.echo(f"    {label}: {source.path}")
    click.echo(f"  Removed:   {len(removed)}")
    for source in removed:
        click.echo(f"    removed: {source}")


if __name__ == "__main__":
    main()
