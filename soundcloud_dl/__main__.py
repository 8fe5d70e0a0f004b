"""
Main entry point for the soundcloud-dl application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import sys

import typer
from rich.console import Console

from soundcloud_dl.cli.app import app
from soundcloud_dl.cli.formatters import format_error_with_suggestions
from soundcloud_dl.exceptions import SoundCloudDlError


def main() -> None:
    """Main entry point function."""
    log = logging.getLogger("soundcloud_dl")
    console = Console(stderr=True)

    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(130)
    except SoundCloudDlError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(1)
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
