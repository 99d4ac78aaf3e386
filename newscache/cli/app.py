"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from ..config import Config
from ..db import close_connection_pool
from ..utils.logging import configure_logging
from .articles import cached_command, fetch_command, search_command, status_command
from .bookmarks import bookmarks_app
from .common import console
from .init import init_command

app = typer.Typer(
    name="newscache",
    help="News Cache - offline-first headline reader",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    try:
        level = "DEBUG" if verbose else Config().log_level
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    configure_logging(level)
    ctx.call_on_close(close_connection_pool)


# Register commands
app.command("init")(init_command)
app.command("fetch")(fetch_command)
app.command("cached")(cached_command)
app.command("search")(search_command)
app.command("status")(status_command)
app.add_typer(bookmarks_app, name="bookmarks", help="Manage bookmarked articles")


if __name__ == "__main__":
    app()
