"""WMS CLI application using Typer.

Command-line utilities for deployment and first-run setup: secret
generation, schema creation, role seeding and the initial super admin.
"""

import asyncio
import logging
import secrets

import typer
from rich.console import Console
from rich.table import Table

from wms.application.services import BUILT_IN_ROLES, find_role, seed_roles
from wms.application.use_cases.user import CreateUserRequest, CreateUserUseCase
from wms.infrastructure.persistence.sqlalchemy.repositories import (
    RoleRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from wms.presentation.api.dependencies import (
    create_tables,
    get_engine,
    get_event_bus,
    get_session_maker,
)

logger = logging.getLogger(__name__)

SUPER_ADMIN_SLUG = "super-admin"

app = typer.Typer(
    name="wms",
    help="WMS - Warehouse Management System CLI",
    no_args_is_help=True,
)
console = Console()

secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
db_app = typer.Typer(
    name="db",
    help="Database schema and seed data",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User administration",
    no_args_is_help=True,
)
app.add_typer(secrets_app)
app.add_typer(db_app)
app.add_typer(users_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for WMS configuration.

    Copy the output to your .env file.
    """
    console.print("\n[bold green]WMS Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes for HS256 signing
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={secrets.token_urlsafe(64)}")
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={secrets.token_urlsafe(32)}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]Keep these secrets secure and never commit them "
        "to version control![/yellow]\n"
    )


async def _init_db() -> None:
    engine = get_engine()
    try:
        await create_tables(engine)
    finally:
        await engine.dispose()


@db_app.command("init")
def init_db() -> None:
    """Create all tables that do not exist yet."""
    asyncio.run(_init_db())
    console.print("[green]Database schema is up to date[/green]")


async def _seed_roles() -> list:
    async with get_session_maker()() as session:
        created = await seed_roles(RoleRepositorySQLAlchemy(session), BUILT_IN_ROLES)
        await session.commit()
    await get_engine().dispose()
    return created


@db_app.command("seed-roles")
def seed_roles_command() -> None:
    """Insert the built-in roles. Existing roles are left untouched."""
    created = asyncio.run(_seed_roles())
    if not created:
        console.print("[dim]All built-in roles already exist[/dim]")
        return

    table = Table(title="Created roles")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("System", justify="center")
    for role in created:
        system = "yes" if role.is_system_role else ""
        table.add_row(role.slug.value, role.name.value, system)
    console.print(table)


async def _create_admin(
    username: str,
    email: str,
    first_name: str,
    last_name: str,
    password: str,
) -> str:
    """Create the user and grant the super admin role.

    Returns an error message, or an empty string on success.
    """
    async with get_session_maker()() as session:
        user_repo = UserRepositorySQLAlchemy(session)
        role_repo = RoleRepositorySQLAlchemy(session)

        await seed_roles(role_repo, BUILT_IN_ROLES)
        super_admin = await find_role(role_repo, SUPER_ADMIN_SLUG)

        result = await CreateUserUseCase(user_repo, role_repo, get_event_bus()).execute(
            CreateUserRequest(
                username=username,
                email=email,
                first_name=first_name,
                last_name=last_name,
                password=password,
            ),
        )
        if result.is_failure:
            await session.rollback()
            return result.error or "Failed to create user"

        user = result.get_value().user
        role_ids = [super_admin.id] if super_admin else []
        await user_repo.assign_roles(user.id, role_ids)
        await session.commit()
        logger.info("Created super admin %s", user.username)

    await get_engine().dispose()
    return ""


@users_app.command("create-admin")
def create_admin(
    username: str = typer.Option(..., prompt=True),
    email: str = typer.Option(..., prompt=True),
    first_name: str = typer.Option(..., prompt="First name"),
    last_name: str = typer.Option(..., prompt="Last name"),
    password: str = typer.Option(
        ...,
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
    ),
) -> None:
    """Create a user holding the super admin role."""
    error = asyncio.run(_create_admin(username, email, first_name, last_name, password))
    if error:
        console.print(f"[red]{error}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Super admin [bold]{username}[/bold] created[/green]")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
