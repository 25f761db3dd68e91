"""BioStar CLI - Main commands."""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="biostar",
    help="BioStar 2 administration CLI",
    add_completion=False
)
console = Console()
err_console = Console(stderr=True)

# Timestamp format used by the interactive console tools
CONSOLE_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


@dataclass
class ConnectionOptions:
    url: str
    login_id: Optional[str]
    insecure: bool
    timeout: float


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def parse_timestamp(value: str) -> datetime:
    """
    Parse YYYYMMDDHHMMSS or ISO 8601.

    YYYYMMDDHHMMSS is wall-clock time in the local zone. ISO 8601 values
    keep their offset; without one they are taken as UTC.
    """
    try:
        return datetime.strptime(value, CONSOLE_TIMESTAMP_FORMAT).astimezone()
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(
            f"'{value}' is neither YYYYMMDDHHMMSS nor ISO 8601"
        )


def prompt_credentials(login_id: Optional[str]):
    """Ask for the login ID (unless given) and a masked password."""
    from biostarpy import Credentials

    if not login_id:
        login_id = typer.prompt("BioStar 2 Login ID")
    secret = typer.prompt("BioStar 2 Password", hide_input=True)
    return Credentials(login_id, secret)


def make_client(options: ConnectionOptions):
    from biostarpy import BioStarClient

    config = BioStarClient.create_config(
        base_url=options.url,
        timeout=options.timeout,
        verify_ssl=not options.insecure,
    )
    return BioStarClient(
        config=config,
        credential_source=lambda: prompt_credentials(options.login_id)
    )


def fail(message: str):
    err_console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


@app.callback()
def main_options(
    ctx: typer.Context,
    url: str = typer.Option(
        "https://127.0.0.1", "--url", "-u", envvar="BIOSTAR_URL", help="BioStar server URL"
    ),
    login_id: Optional[str] = typer.Option(
        None, "--login-id", "-l", envvar="BIOSTAR_LOGIN_ID", help="Operator login ID"
    ),
    insecure: bool = typer.Option(False, "--insecure", "-k", help="Skip TLS verification"),
    timeout: float = typer.Option(30.0, "--timeout", help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """BioStar 2 administration CLI."""
    if verbose:
        from biostarpy import setup_logging
        logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        setup_logging(logging.DEBUG)
    ctx.obj = ConnectionOptions(url=url, login_id=login_id, insecure=insecure, timeout=timeout)


@app.command("login-check")
def login_check(ctx: typer.Context):
    """Log in and report whether a session was obtained."""
    from biostarpy import BioStarException

    async def do_login():
        async with make_client(ctx.obj) as biostar:
            try:
                await biostar.start()
            except BioStarException as e:
                fail(f"Login failed: {e}")
            console.print(f"[green]Login successful[/green] ({biostar.config.base_url})")
            await biostar.logout()

    run_async(do_login())


@app.command()
def users(
    ctx: typer.Context,
    group_id: int = typer.Option(1, "--group", "-g", help="User group ID (1 = all users)"),
    limit: int = typer.Option(100, "--limit", "-n", help="Maximum users to fetch"),
    offset: int = typer.Option(0, "--offset", help="Pagination offset"),
):
    """List users of a user group."""
    from biostarpy import BioStarException

    async def list_users():
        async with make_client(ctx.obj) as biostar:
            try:
                await biostar.start()
                page = await biostar.list_users(group_id=group_id, limit=limit, offset=offset)
            except BioStarException as e:
                fail(f"Failed to retrieve users: {e}")

            table = Table(title=f"{len(page.rows)} of {page.total} users")
            table.add_column("ID", style="cyan")
            table.add_column("Name")
            table.add_column("Group", style="dim")
            table.add_column("Email", style="dim")

            for user in page.rows:
                table.add_row(
                    user.user_id,
                    user.name or "",
                    user.user_group_name or (str(user.user_group_id) if user.user_group_id else ""),
                    user.email or "",
                )

            console.print(table)

    run_async(list_users())


@app.command("create-user")
def create_user(
    ctx: typer.Context,
    user_id: str = typer.Argument(..., help="New user ID (must be unused)"),
    start: str = typer.Option(..., "--start", help="Start of validity (YYYYMMDDHHMMSS local time, or ISO 8601)"),
    end: str = typer.Option(..., "--end", help="End of validity (YYYYMMDDHHMMSS local time, or ISO 8601)"),
    group_id: int = typer.Option(1, "--group", "-g", help="User group ID (1 = all users)"),
    name: Optional[str] = typer.Option(None, "--name", help="Display name"),
    email: Optional[str] = typer.Option(None, "--email", help="Email address"),
    department: Optional[str] = typer.Option(None, "--department", help="Department"),
    title: Optional[str] = typer.Option(None, "--title", help="Job title"),
    phone: Optional[str] = typer.Option(None, "--phone", help="Phone number"),
    access_group: Optional[List[int]] = typer.Option(
        None, "--access-group", help="Access group ID (repeatable)"
    ),
):
    """Create a user."""
    from biostarpy import BioStarException, NewUserRequest
    from biostarpy.core.api import RequestBuilder

    request = NewUserRequest(
        user_id=user_id,
        group_id=group_id,
        start_time=parse_timestamp(start),
        expiry_time=parse_timestamp(end),
        name=name,
        email=email,
        department=department,
        title=title,
        phone=phone,
        access_group_ids=access_group or None,
    )

    async def do_create():
        async with make_client(ctx.obj) as biostar:
            try:
                RequestBuilder.validate_new_user(request)
                await biostar.start()
                record = await biostar.create_user(request)
            except BioStarException as e:
                fail(f"User creation failed: {e}")
            console.print(f"[green]User created:[/green] {record}")

    run_async(do_create())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
