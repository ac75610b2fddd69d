"""
Command Line Interface for Support Desk.
"""

from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import get_settings
from ..core import TicketManager
from ..db.base import init_database, session_scope
from ..deps import get_dispatcher, get_token_service
from ..logging_config import configure_logging
from ..schemas.enums import TicketPriority, TicketStatus, UserRole

app = typer.Typer(help="Support Desk - support ticketing backend")
console = Console()

STATUS_EMOJI = {
    "open": "🟢",
    "in_progress": "🟡",
    "resolved": "✅",
    "closed": "⏹️",
}


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind the server to"),
    port: Optional[int] = typer.Option(None, help="Port to run the API server on"),
    reload: bool = typer.Option(False, help="Reload on code changes (development)"),
):
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    rprint(Panel.fit("🚀 Starting Support Desk", style="bold blue"))
    console.print(f"Serving on http://{host}:{port}")
    uvicorn.run("support_desk.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db():
    """Create all database tables that do not exist yet."""
    configure_logging(get_settings())
    init_database()
    console.print("✅ Database initialized")


@app.command()
def tickets(
    status: Optional[TicketStatus] = typer.Option(None, help="Only show tickets with this status"),
    priority: Optional[TicketPriority] = typer.Option(
        None, help="Only show tickets with this priority"
    ),
):
    """List tickets, most recent first."""
    with session_scope() as db:
        rows = TicketManager(db, get_dispatcher()).list(
            status=status.value if status else None,
            priority=priority.value if priority else None,
        )

    if not rows:
        console.print("No tickets found")
        return

    table = Table(title="Tickets", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Title")
    table.add_column("Status", style="green")
    table.add_column("Priority", style="yellow")
    table.add_column("Customer", justify="right")
    table.add_column("Agent", justify="right")
    table.add_column("Created")

    for ticket in rows:
        table.add_row(
            str(ticket.id),
            ticket.title[:50] + "..." if len(ticket.title) > 50 else ticket.title,
            f"{STATUS_EMOJI.get(ticket.status, '❓')} {ticket.status}",
            ticket.priority,
            str(ticket.customer_id),
            str(ticket.assigned_agent_id) if ticket.assigned_agent_id is not None else "-",
            ticket.created_at.isoformat(timespec="seconds") if ticket.created_at else "-",
        )

    console.print(table)


@app.command("issue-token")
def issue_token(
    user_id: int = typer.Argument(..., help="Token subject"),
    email: str = typer.Argument(..., help="Email claim"),
    role: UserRole = typer.Argument(UserRole.CUSTOMER, help="Role claim"),
):
    """Print a signed session token for the given identity."""
    settings = get_settings()
    if not settings.jwt_secret:
        console.print("❌ JWT_SECRET is not set; a token signed now would not verify anywhere else")
        raise typer.Exit(code=1)

    token = get_token_service().issue(user_id, email, role.value)
    console.print(token)


if __name__ == "__main__":
    app()
