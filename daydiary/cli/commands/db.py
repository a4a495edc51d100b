"""
Database commands.
"""
import typer
from rich.console import Console

from daydiary.core.config import settings
from daydiary.core.database import init_db

app = typer.Typer(help="Database maintenance commands")
console = Console()


@app.command("init")
def init():
    """Run migrations (or create tables) for the configured database."""
    console.print(f"Initializing [bold]{settings.database_type}[/bold] database...")
    init_db()
    console.print("[green]Database ready.[/green]")
