"""
Main CLI application using Typer.

Entry point: python -m daydiary.cli
CLI Name: daydiary-admin
"""
import typer

from daydiary import __version__ as app_version
from daydiary.cli.commands import db, entries, media

app = typer.Typer(
    name="daydiary-admin",
    help="Day Diary Admin CLI - maintenance tools for a self-hosted diary",
)


@app.command()
def version():
    """Show CLI version information."""
    typer.echo(f"Day Diary CLI version {app_version}")


# Register command groups
app.add_typer(db.app, name="db")
app.add_typer(entries.app, name="entries")
app.add_typer(media.app, name="media")
