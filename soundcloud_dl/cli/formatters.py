"""
Functions for formatting and displaying data in the console using Rich.
"""

import json
from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from soundcloud_dl.models.stats import DownloadStats
from soundcloud_dl.utils.formatting import format_duration, format_size


def describe_error(error: Exception) -> str:
    """
    Returns the most useful description of an error, preferring a structured
    API error body over the bare message.
    """
    body = getattr(error, "body", None)
    if isinstance(body, (dict, list)):
        return json.dumps(body, indent=2, ensure_ascii=False)
    if isinstance(body, str) and body.strip():
        return body.strip()
    return str(error)


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__

    suggestions_map = {
        "ConfigError": [
            "• Set CLIENT_ID and PROFILE_URL in the environment or a .env file.",
            "• Or pass them with --client-id and a PROFILE_URL argument.",
        ],
        "ResolutionError": [
            "• Check that the URL points to a profile, not a track or playlist.",
            "• Open the URL in a browser to confirm the profile exists.",
        ],
        "NetworkError": [
            "• Your client_id may have expired; fetch a fresh one.",
            "• The SoundCloud API might be temporarily unavailable.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(describe_error(error))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_summary_panel(
    stats: DownloadStats,
    duration_s: float,
    out_dir: Path,
    console: Console | None = None,
) -> None:
    """Displays the final summary of the download session."""
    console = console or Console()

    stats_table = Table(show_header=False, box=None, padding=(0, 2))
    stats_table.add_column(style="bold cyan", justify="right", width=20)
    stats_table.add_column(style="white", justify="left")

    stats_table.add_row("Tracks:", f"[bold]{stats.tracks_processed}[/bold]")
    stats_table.add_row(
        "✓ Artwork:", f"[bold green]{stats.artwork_downloaded}[/bold green]"
    )
    stats_table.add_row("✓ Audio:", f"[bold green]{stats.audio_downloaded}[/bold green]")

    skip_sections: list[str] = []
    if stats.artwork_skipped_exists > 0:
        skip_sections.append(
            f"[yellow]{stats.artwork_skipped_exists} artwork (exists)[/yellow]"
        )
    if stats.audio_skipped_exists > 0:
        skip_sections.append(
            f"[yellow]{stats.audio_skipped_exists} audio (exists)[/yellow]"
        )
    if skip_sections:
        stats_table.add_row("○ Skipped:", " + ".join(skip_sections))

    if stats.audio_unavailable > 0:
        stats_table.add_row(
            "⚠ No Audio:", f"[yellow]{stats.audio_unavailable}[/yellow]"
        )

    if stats.files_failed > 0:
        stats_table.add_row("✗ Failed:", f"[bold red]{stats.files_failed}[/bold red]")

    stats_table.add_row("", "")  # Spacer
    stats_table.add_row(
        "Total Size:", f"[cyan]{format_size(stats.total_size_downloaded)}[/cyan]"
    )
    stats_table.add_row("Time Elapsed:", f"[blue]{format_duration(duration_s)}[/blue]")
    stats_table.add_row("Output:", f"[dim]{escape(str(out_dir))}[/dim]")

    if stats.dry_run:
        title = "🔍 [bold]Dry Run Summary[/bold]"
        border_color = "yellow"
    else:
        title = "🎵 [bold]Download Complete![/bold]"
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
