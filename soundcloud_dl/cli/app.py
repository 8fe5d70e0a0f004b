"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from soundcloud_dl import __version__
from soundcloud_dl.api.client import SoundCloudAPIClient
from soundcloud_dl.api.http import HttpClient
from soundcloud_dl.core.download_manager import DownloadManager
from soundcloud_dl.exceptions import SoundCloudDlError
from soundcloud_dl.models.catalog import User
from soundcloud_dl.models.config import DownloadConfig
from soundcloud_dl.storage.config_manager import ConfigManager

from .formatters import format_error_with_suggestions, print_summary_panel

console = Console()
err_console = Console(stderr=True)

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
log = logging.getLogger("soundcloud_dl")

app = typer.Typer(
    name="soundcloud-dl",
    help=(
        "Download every track and its artwork from a SoundCloud profile. Use"
        " 'soundcloud-dl <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

ENV_FILE_OPTION = typer.Option(
    Path(".env"),
    "--env-file",
    help="Read CLIENT_ID, PROFILE_URL and OUT_DIR from this file.",
)
CLIENT_ID_OPTION = typer.Option(
    None, "--client-id", help="SoundCloud API client_id (overrides CLIENT_ID)."
)
PROFILE_URL_ARGUMENT = typer.Argument(
    None,
    help="Profile URL, e.g. https://soundcloud.com/<user> (overrides PROFILE_URL).",
)


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
    """SoundCloud profile downloader"""
    if version:
        console.print(f"[bold]soundcloud-dl[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("soundcloud_dl").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def _load_config(env_file: Path, cli_options: dict[str, Any]) -> DownloadConfig:
    try:
        return ConfigManager(env_file).load_config(cli_options)
    except SoundCloudDlError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e


@app.command(name="download")
def download_command(
    profile_url: Optional[str] = PROFILE_URL_ARGUMENT,
    client_id: Optional[str] = CLIENT_ID_OPTION,
    out_dir: Optional[Path] = typer.Option(
        None, "-o", "--out-dir", help="Output directory (overrides OUT_DIR)."
    ),
    no_artwork: bool = typer.Option(
        False, "--no-artwork", help="Download audio only, skip artwork."
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Resolve and list everything without writing any files.",
    ),
    env_file: Path = ENV_FILE_OPTION,
):
    """Download all tracks and artwork of a profile."""
    config = _load_config(
        env_file,
        {
            "profile_url": profile_url,
            "client_id": client_id,
            "out_dir": out_dir,
            "no_artwork": no_artwork,
            "dry_run": dry_run,
        },
    )

    async def _download_async() -> DownloadManager:
        async with HttpClient(config.user_agent, config.request_timeout) as http:
            manager = DownloadManager(config, http)
            await manager.run()
            return manager

    if config.dry_run:
        console.print("[bold cyan]🎵 Starting dry run session...[/bold cyan]")
    else:
        console.print("[bold cyan]🎵 Starting download session...[/bold cyan]")

    try:
        manager = asyncio.run(_download_async())
    except SoundCloudDlError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    print_summary_panel(manager.stats, manager.duration, config.out_dir, console)


@app.command()
def resolve(
    profile_url: Optional[str] = PROFILE_URL_ARGUMENT,
    client_id: Optional[str] = CLIENT_ID_OPTION,
    env_file: Path = ENV_FILE_OPTION,
):
    """Resolve a profile URL and show the user it belongs to."""
    config = _load_config(
        env_file, {"profile_url": profile_url, "client_id": client_id}
    )

    async def _resolve_async() -> User:
        async with HttpClient(config.user_agent, config.request_timeout) as http:
            api_client = SoundCloudAPIClient(
                http, config.client_id, base_url=config.api_base_url
            )
            return await api_client.resolve_user(config.profile_url)

    try:
        user = asyncio.run(_resolve_async())
    except SoundCloudDlError as e:
        err_console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    console.print(f"[green]✓[/] [bold]{escape(user.username)}[/bold] (#{user.id})")
    if user.track_count is not None:
        console.print(f"  Tracks: [cyan]{user.track_count}[/cyan]")
