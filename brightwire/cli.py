#!/usr/bin/env python3
"""
Brightwire CLI
"""
import asyncio
import sys
from typing import Awaitable, Callable, Optional, TypeVar

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from brightwire.api.errors import BrightwireError
from brightwire.api.models import SubmissionStatus
from brightwire.api.service import SubmissionService
from brightwire.config import ConfigurationError, Settings, load_settings
from brightwire.version import SOURCE_ROOT, __version__, get_git_commit

console = Console()

T = TypeVar("T")


def show_version_info():
    """Display detailed version information"""
    import platform

    console.print("\n[bold cyan]Brightwire Version Information[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="dim")
    table.add_column("Value", style="green")

    table.add_row("Version", __version__)

    commit = get_git_commit(SOURCE_ROOT)
    if commit:
        table.add_row("Git commit", commit)

    table.add_row("Python", platform.python_version())

    console.print(table)
    console.print()


def version_callback(ctx, param, value):
    """Callback for --version option"""
    if not value or ctx.resilient_parsing:
        return
    show_version_info()
    ctx.exit()


def _load_settings() -> Settings:
    try:
        return load_settings()
    except ConfigurationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)


def run_with_service(action: Callable[[SubmissionService], Awaitable[T]]) -> T:
    """Run an action against the configured row store, then close it"""
    from brightwire.api.app import build_store, configure_logging

    settings = _load_settings()
    configure_logging("WARNING")
    try:
        store = build_store(settings)
    except ConfigurationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    async def runner() -> T:
        try:
            return await action(SubmissionService(store))
        finally:
            await store.close()

    try:
        return asyncio.run(runner())
    except BrightwireError as e:
        console.print(f"[red]✗ {escape(e.message)}[/red]")
        sys.exit(1)


@click.group()
@click.option(
    '--version', '-v',
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help='Show detailed version information'
)
def main():
    """Brightwire - contact intake API and admin back-office"""
    pass


@main.command()
def version():
    """Show version information"""
    show_version_info()


@main.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: PORT or 5000)")
@click.option("--reload", is_flag=True, help="Reload on code changes (development)")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Run the HTTP API"""
    import uvicorn

    settings = _load_settings()
    try:
        settings.require_store()
    except ConfigurationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        sys.exit(1)

    host = host or settings.host
    port = port or settings.port
    console.print(f"[bold green]🚀 Brightwire API on {host}:{port}[/bold green]")
    console.print(f"[dim]Health check: http://localhost:{port}/api/health[/dim]")
    console.print(f"[dim]Row store: {settings.store_backend}[/dim]")

    uvicorn.run(
        "brightwire.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@main.command()
@click.option("--url", "-u", default=None, help="API root (default: http://localhost:PORT)")
@click.option("--email", "-e", prompt=True, help="Admin email")
@click.option("--password", prompt=True, hide_input=True, help="Admin password")
@click.option("--interval", "-i", type=float, default=30.0, help="Refresh interval in seconds (0 disables)")
def dashboard(url: Optional[str], email: str, password: str, interval: float):
    """Open the terminal admin dashboard"""
    from brightwire.ui import AdminClient, AdminDashboard, ClientError

    if url is None:
        url = f"http://localhost:{_load_settings().port}"

    async def check_login():
        async with AdminClient(url) as client:
            return await client.login(email, password)

    try:
        identity = asyncio.run(check_login())
    except ClientError as e:
        console.print(f"[red]✗ Login failed: {escape(e.message)}[/red]")
        sys.exit(1)

    app = AdminDashboard(AdminClient(url), admin_email=identity.email, refresh_interval=interval)
    try:
        app.run()
    except KeyboardInterrupt:
        console.print("\n[yellow]Shutting down...[/yellow]")


@main.command()
def submissions():
    """List contact submissions, newest first"""

    async def fetch(service: SubmissionService):
        return await service.list_submissions()

    rows = run_with_service(fetch)
    if not rows:
        console.print("[dim]No submissions yet[/dim]")
        return

    table = Table(title=f"Contact submissions ({len(rows)})")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Received")
    table.add_column("Name", style="bold")
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Service", style="cyan")
    table.add_column("Status")

    status_styles = {"new": "yellow", "read": "cyan", "processed": "green"}
    for row in rows:
        table.add_row(
            str(row.id),
            row.created_at.strftime("%Y-%m-%d %H:%M"),
            escape(row.name),
            escape(row.email),
            escape(row.phone or "-"),
            escape(row.service),
            f"[{status_styles[row.status.value]}]{row.status.value}[/]",
        )
    console.print(table)


@main.command()
def stats():
    """Show dashboard statistics"""

    async def fetch(service: SubmissionService):
        return await service.stats()

    result = run_with_service(fetch)

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Total", str(result.total))
    table.add_row("This week", str(result.this_week))
    table.add_row("Top service", escape(result.top_service))
    console.print(table)


@main.command("set-status")
@click.argument("submission_id", type=int)
@click.argument("status", type=click.Choice(SubmissionStatus.values()))
def set_status(submission_id: int, status: str):
    """Set the status of a submission"""

    async def update(service: SubmissionService):
        await service.update_status(submission_id, status)

    run_with_service(update)
    console.print(f"[green]✓ Submission {submission_id} marked {status}[/green]")


@main.command()
def schema():
    """Print the SQL that creates the submissions table"""
    from brightwire.api.storage import SCHEMA_SQL

    click.echo(SCHEMA_SQL)


if __name__ == "__main__":
    main()
