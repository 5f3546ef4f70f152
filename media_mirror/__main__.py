"""
Process entry point for `python -m media_mirror` and the `media-mirror` script.

Anything the CLI commands do not report themselves ends here as an error panel
and a non-zero exit status.
"""

import asyncio
import logging
import os
import sys

import typer
from rich.console import Console

from media_mirror.cli.app import app
from media_mirror.cli.formatters import format_error_with_suggestions
from media_mirror.exceptions import MirrorError

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

log = logging.getLogger("media_mirror")


def _force_utf8_streams() -> None:
    # The summary panel draws non-ASCII glyphs; legacy Windows consoles use cp1252.
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass


def main() -> None:
    if os.name == "nt":
        _force_utf8_streams()

    console = Console(stderr=True)
    try:
        app()
    except (typer.Exit, typer.Abort):
        pass
    except (KeyboardInterrupt, asyncio.CancelledError):
        console.print(
            "\n[yellow]⚠️  Sync interrupted. Files already cached are kept; "
            "run the command again to finish.[/yellow]"
        )
        sys.exit(EXIT_INTERRUPTED)
    except MirrorError as e:
        console.print(format_error_with_suggestions(e))
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
