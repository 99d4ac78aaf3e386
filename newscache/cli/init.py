"""Init command implementation."""

from pathlib import Path

import typer
from rich.panel import Panel

from ..config import DEFAULT_CONFIG_PATH, ConfigModel, save_config
from ..db import init_database, validate_connection
from .common import console


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file to write",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("newscache", "--db-name", help="Database name"),
    db_user: str = typer.Option("newscache", "--db-user", help="Database user"),
    country: str = typer.Option("us", "--country", help="Country for top headlines"),
    page_size: int = typer.Option(20, "--page-size", help="Default page size", min=1, max=100),
) -> None:
    """Initialize configuration and the article cache database."""
    console.print(Panel.fit("📰 News Cache - Initialization", style="bold blue"))

    config = ConfigModel(
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "NEWSCACHE_DB_PASSWORD",
        },
        news_api={"country": country, "api_key_env": "NEWSAPI_KEY"},
        fetch_defaults={"page_size": page_size},
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    # Validate database connection
    console.print("\n[bold]Testing database connection...[/bold]")
    db_config = config.postgres.model_dump()

    if not validate_connection(db_config):
        console.print(
            "[red]❌ Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            "Set the password via environment variable: "
            "[bold]export NEWSCACHE_DB_PASSWORD=your_password[/bold]"
        )
        raise typer.Exit(1)

    console.print("✅ Database connection successful")

    console.print("\n[bold]Initializing database schema...[/bold]")
    try:
        init_database(db_config)
        console.print("✅ Database schema initialized")
    except Exception as e:
        console.print(f"[red]❌ Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]✅ News cache initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Set database password: [bold]export NEWSCACHE_DB_PASSWORD=your_password[/bold]\n"
            f"2. Set NewsAPI key: [bold]export NEWSAPI_KEY=your_key[/bold]\n"
            f"3. Run: [bold]newscache fetch[/bold]",
            style="green",
        )
    )
