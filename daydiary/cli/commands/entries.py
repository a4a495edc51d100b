"""
Diary entry commands.
"""
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from daydiary.core.database import get_session_context
from daydiary.services.entry_service import EntryService

app = typer.Typer(help="Diary entry commands")
console = Console()


@app.command("list")
def list_entries(
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Maximum entries to show"),
):
    """List entries, newest date first."""
    if limit is not None and limit <= 0:
        raise typer.BadParameter("Limit must be a positive integer.")

    with get_session_context() as session:
        entries = EntryService(session).list_entries()
        if limit is not None:
            entries = entries[:limit]

        table = Table(title="Diary entries")
        table.add_column("Date", style="cyan")
        table.add_column("Mood")
        table.add_column("Title")
        table.add_column("Files", justify="right")
        for entry in entries:
            table.add_row(entry.date, entry.mood or "", entry.title or "", str(len(entry.files or [])))

    console.print(table)
    console.print(f"{len(entries)} entr{'y' if len(entries) == 1 else 'ies'}")
