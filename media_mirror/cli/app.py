"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.logging import RichHandler

from media_mirror import __version__
from media_mirror.core.mirror_manager import MirrorManager
from media_mirror.exceptions import MirrorError
from media_mirror.storage.config_manager import ConfigManager
from media_mirror.storage.manifest_store import ManifestStore

from .formatters import (
    format_error_with_suggestions,
    print_summary_panel,
    print_validation_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("media_mirror")

app = typer.Typer(
    name="media-mirror",
    help=(
        "Mirror the remote videos and background declared in a manifest into local"
        " cache directories. Use 'media-mirror <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

DEFAULT_ENV_FILE = Path(".env")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Media Mirror CLI"""
    if version:
        console.print(f"[bold]media-mirror[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("media_mirror").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _load_config(
    env_file: Path,
    public_dir: Path | None,
    manifest: Path | None,
    dry_run: bool | None = None,
):
    cli_options = {
        key: value
        for key, value in {
            "public_dir": public_dir,
            "manifest_path": manifest,
            "dry_run": dry_run,
        }.items()
        if value is not None
    }
    return ConfigManager(env_file).load_config(cli_options)


ENV_FILE_OPTION = typer.Option(
    DEFAULT_ENV_FILE,
    "--env-file",
    help="Optional .env file; variables already set in the environment win.",
)
PUBLIC_DIR_OPTION = typer.Option(
    None,
    "--public-dir",
    "-d",
    help="Directory holding the manifest and the cache directories "
    "(default: $MEDIA_MIRROR_PUBLIC_DIR or ./public).",
)
MANIFEST_OPTION = typer.Option(
    None,
    "--manifest",
    "-m",
    help="Manifest path (default: <public-dir>/videos.json).",
)


@app.command(name="sync")
def sync_command(
    public_dir: Path | None = PUBLIC_DIR_OPTION,
    manifest: Path | None = MANIFEST_OPTION,
    env_file: Path = ENV_FILE_OPTION,
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Report what would be downloaded and removed without touching files.",
    ),
):
    """Download missing assets, update cachedSrc paths and prune stale files."""

    async def _sync_async():
        try:
            config = _load_config(env_file, public_dir, manifest, dry_run)
            manager = MirrorManager(config)
            if config.dry_run:
                console.print("[bold cyan]🎬 Starting dry run...[/bold cyan]")
            else:
                console.print("[bold cyan]🎬 Starting cache sync...[/bold cyan]")
            stats = await manager.run()
        except MirrorError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e

        print_summary_panel(stats, manager.duration)

    asyncio.run(_sync_async())


@app.command()
def validate(
    public_dir: Path | None = PUBLIC_DIR_OPTION,
    manifest: Path | None = MANIFEST_OPTION,
    env_file: Path = ENV_FILE_OPTION,
):
    """Validate the configuration and the manifest without syncing."""
    try:
        config = _load_config(env_file, public_dir, manifest)
        loaded = ManifestStore().load(config.manifest_path)
    except MirrorError as e:
        console.print(f"[red]✗ Validation failed: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    print_validation_table(config, loaded)
