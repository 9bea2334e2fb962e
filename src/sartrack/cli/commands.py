"""CLI commands for the SAR training tracker.

Commands:
- init-db: Create the database schema
- serve: Run the HTTP API with uvicorn
- create-user: Register a user account
- sessions: List training sessions
- rebuild-proficiency: Recompute proficiency from round history
"""

from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from sartrack.config.app_config import load_app_config
from sartrack.config.logging import configure_logging
from sartrack.core import auth, proficiency, session_manager
from sartrack.db.database import init_db
from sartrack.errors import SarTrackError

app = typer.Typer(
    name="sartrack",
    help="Record-keeping for search-and-rescue dog training.",
    no_args_is_help=True,
)

console = Console()


def _short_timestamp(value: str) -> str:
    """Trim an ISO timestamp to minutes for table display."""
    return value[:16].replace("T", " ")


def _init_db_from_config(db_path: str | None) -> Path:
    """Initialize the database at db_path or the configured path."""
    config = load_app_config()
    path = Path(db_path or config.database.path)
    try:
        init_db(path, busy_timeout=config.database.busy_timeout)
    except SarTrackError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(code=1)
    return path


@app.command(name="init-db")
def init_database(
    db_path: str | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Create the database and schema if missing."""
    path = _init_db_from_config(db_path)
    console.print("[green]✓ Database ready[/green]")
    console.print(f"  [dim]path:[/dim] {path}")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default from config)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API."""
    config = load_app_config()
    configure_logging(config.server.log_level)

    bind_host = host or config.server.host
    bind_port = port or config.server.port
    console.print(f"[blue]Serving on http://{bind_host}:{bind_port}[/blue]")

    uvicorn.run(
        "sartrack.web.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        log_level=config.server.log_level,
        reload=reload,
    )


@app.command(name="create-user")
def create_user(
    email: str = typer.Argument(..., help="Login email"),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Password (min 8 characters)",
    ),
    admin: bool = typer.Option(False, "--admin", help="Grant admin rights"),
    db_path: str | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Register a user account."""
    _init_db_from_config(db_path)

    try:
        user = auth.register_user(email, password, is_admin=admin)
    except SarTrackError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✓ User created[/green]")
    console.print(f"  [dim]id:[/dim]    {user.id}")
    console.print(f"  [dim]email:[/dim] {user.email}")
    if user.is_admin:
        console.print("  [dim]admin:[/dim] yes")


@app.command(name="sessions")
def list_sessions(
    db_path: str | None = typer.Option(None, "--db", help="Database file (default from config)"),
    open_only: bool = typer.Option(False, "--open", help="Only sessions that are not closed"),
) -> None:
    """List training sessions, newest first."""
    _init_db_from_config(db_path)

    sessions = session_manager.list_sessions()
    if open_only:
        sessions = [s for s in sessions if s.is_open]

    if not sessions:
        console.print("[yellow]No sessions found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Started")
    table.add_column("Ended")
    table.add_column("Location")
    table.add_column("Rounds", justify="right")

    for s in sessions:
        rounds = session_manager.list_session_rounds(s.id)
        ended = _short_timestamp(s.ended_at) if s.ended_at else "[green]open[/green]"
        table.add_row(
            str(s.id), _short_timestamp(s.started_at), ended, s.location or "", str(len(rounds))
        )

    console.print(table)


@app.command(name="rebuild-proficiency")
def rebuild_proficiency(
    db_path: str | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Recompute dog proficiency from all recorded rounds."""
    _init_db_from_config(db_path)

    try:
        written = proficiency.rebuild_proficiency()
    except SarTrackError as e:
        console.print(f"[red]✗ {e.message}[/red]")
        raise typer.Exit(code=1)

    console.print("[green]✓ Proficiency rebuilt[/green]")
    console.print(f"  [dim]rows:[/dim] {written}")


if __name__ == "__main__":
    app()
