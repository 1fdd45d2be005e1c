"""Command line tools for running and inspecting the user service."""

import typer
from rich.console import Console
from rich.table import Table

from src.user_api.core.services import (
    DbManageService,
    DbSessionService,
    UserResourceHandler,
)
from src.user_api.entities.core.user import UserRepository
from src.user_api.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="User resource API tools",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
users_app = typer.Typer(help="Inspect users stored in the configured database")
app.add_typer(users_app, name="users")


@app.command("init-db")
def init_db(
    drop: bool = typer.Option(False, "--drop", help="Drop existing tables first"),
) -> None:
    """Create the database tables."""
    database_service = DbSessionService()
    manager = DbManageService(database_service.engine)
    if drop:
        typer.confirm("Drop all tables? Existing users will be lost", abort=True)
        manager.drop_all()
    manager.create_all()
    console.print(f"[green]Database ready at {get_config().database.url}[/green]")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "src.user_api.api.http.app:app",
        host=host or config.app.host,
        port=port or config.app.port,
        reload=reload,
        access_log=False,
    )


@users_app.command("list")
def list_users(
    page: int = typer.Option(1, "--page", "-p", help="Page number (1-based)"),
) -> None:
    """Show one page of users."""
    database_service = DbSessionService()
    with database_service.session_scope() as session:
        handler = UserResourceHandler(
            UserRepository(session), page_size=get_config().pagination.page_size
        )
        result = handler.list_users(page)

    body = result.body or {}
    if result.status_code != 200:
        console.print(f"[red]❌ {body.get('message', 'Failed to list users')}[/red]")
        raise typer.Exit(code=1)

    if not body["items"]:
        console.print("[yellow]No users found[/yellow]")
        return

    table = Table(
        title=f"Users (page {body['page']} of {body['pages']}, {body['total']} total)"
    )
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Email", style="blue")
    table.add_column("Age", style="magenta")
    table.add_column("Membership", style="yellow")

    for user in body["items"]:
        table.add_row(
            user["id"],
            user["name"],
            user["email"],
            "" if user["age"] is None else str(user["age"]),
            user["membership_status"] or "",
        )

    console.print(table)


@users_app.command("show")
def show_user(user_id: str = typer.Argument(..., help="User ID")) -> None:
    """Show a single user."""
    database_service = DbSessionService()
    with database_service.session_scope() as session:
        result = UserResourceHandler(UserRepository(session)).show_user(user_id)

    body = result.body or {}
    if result.status_code != 200:
        console.print(f"[red]❌ {body.get('message', 'Failed to load user')}[/red]")
        raise typer.Exit(code=1)

    for key, value in body["data"].items():
        console.print(f"[cyan]{key}[/cyan]: {value}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
