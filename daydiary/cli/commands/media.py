"""
Gallery media commands.
"""
import typer
from rich.console import Console
from rich.table import Table

from daydiary.core.database import get_session_context
from daydiary.services.media_service import MediaService

app = typer.Typer(help="Gallery media commands")
console = Console()


@app.command("list")
def list_media(
    favorites: bool = typer.Option(False, "--favorites", "-f", help="Only show favorites"),
):
    """List gallery media, newest first."""
    with get_session_context() as session:
        items = MediaService(session).list_media()
        if favorites:
            items = [item for item in items if item.favorite]

        table = Table(title="Gallery")
        table.add_column("ID", justify="right", style="cyan")
        table.add_column("Name")
        table.add_column("Type")
        table.add_column("Favorite")
        table.add_column("Added")
        for item in items:
            table.add_row(
                str(item.id),
                item.name,
                item.type,
                "★" if item.favorite else "",
                item.added_at.strftime("%Y-%m-%d %H:%M"),
            )

    console.print(table)
