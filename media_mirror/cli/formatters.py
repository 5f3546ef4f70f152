"""
Functions for formatting and displaying data in the console using Rich.
"""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from media_mirror.models.config import MirrorConfig
from media_mirror.models.manifest import Manifest
from media_mirror.models.stats import ReconcileStats
from media_mirror.utils.formatting import format_duration, format_size, mask_secret
from media_mirror.utils.path import is_http_url


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ParseError": [
            "• Check that the manifest is valid JSON.",
            "• 'videos' must be a list of objects; 'background' a URL or an object.",
            "• Run `media-mirror validate` to list every problem.",
        ],
        "FilesystemError": [
            "• Check that the manifest path exists and is readable.",
            "• Check write permissions on the public and cache directories.",
            "• Use --public-dir or --manifest to point at the right location.",
        ],
        "ConfigurationError": [
            "• Review R2_ENDPOINT, AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY.",
            "• Values in the process environment override the .env file.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_validation_table(config: MirrorConfig, manifest: Manifest):
    """Displays a summary of the current settings and the declared assets."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    store = config.object_store
    table.add_row("Manifest:", f"[dim]{escape(str(config.manifest_path))}[/dim]")
    table.add_row("Videos Dir:", f"[dim]{escape(str(config.videos_dir))}[/dim]")
    table.add_row(
        "Backgrounds Dir:", f"[dim]{escape(str(config.backgrounds_dir))}[/dim]"
    )
    table.add_row(
        "Object Store:",
        f"[green]✓ {escape(store.endpoint_url)}[/green]"
        if store.is_configured
        else "[yellow]✗ Not configured (anonymous HTTP only)[/yellow]",
    )
    if store.is_configured:
        table.add_row("Region:", escape(store.region))
        table.add_row(
            "Default Bucket:",
            escape(store.default_bucket)
            if store.default_bucket
            else "[dim](none)[/dim]",
        )
        table.add_row("Path Style:", "✓ Enabled" if store.force_path_style else "✗")
        table.add_row("Access Key:", mask_secret(store.access_key_id))

    remote_videos = sum(1 for video in manifest.videos if is_http_url(video.src))
    table.add_row("Videos:", f"{len(manifest.videos)} ({remote_videos} remote)")
    background = manifest.background
    table.add_row(
        "Background:",
        escape(background.src or "(no src)") if background else "[dim](none)[/dim]",
    )

    console.print(
        Panel(
            table,
            title="[bold green]✓ Validated Settings[/bold green]",
            border_style="green",
        )
    )


def print_summary_panel(stats: ReconcileStats, duration_s: float):
    """Displays a final summary of the reconciliation run."""
    console = Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row(
        "✓ Downloaded:", f"[bold green]{stats.downloaded}[/bold green]"
    )
    stats_table.add_row("○ Already Cached:", f"{stats.cache_hits}")

    if stats.skipped > 0:
        stats_table.add_row("○ Not Remote:", f"[yellow]{stats.skipped}[/yellow]")
    if stats.removed > 0:
        stats_table.add_row("🗑 Removed:", f"[magenta]{stats.removed}[/magenta]")
    if stats.failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.failed}[/bold red]")
        for label in stats.failed_assets:
            stats_table.add_row("", f"[dim]{escape(label)}[/dim]")

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.bytes_downloaded)}[/cyan]"
    )
    stats_table.add_row(
        "Manifest:",
        "[green]updated[/green]" if stats.manifest_changed else "unchanged",
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")

    if stats.dry_run:
        title = "🔍 [bold]Dry Run Summary[/bold]"
        border_color = "yellow"
    elif stats.failed:
        title = "⚠ [bold]Sync Finished With Failures[/bold]"
        border_color = "yellow"
    else:
        title = "🎬 [bold]Sync Complete![/bold]"
        border_color = "green"

    console.print()
    console.print(
        Panel(
            stats_table,
            title=title,
            border_style=border_color,
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
    console.print()
