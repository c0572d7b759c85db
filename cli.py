"""Tenant IAM command-line tools, meant to be run by cron or an operator."""

import asyncio
import logging
from datetime import timedelta
from typing import Awaitable, Callable, List, Optional, TypeVar

import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.notification_dispatcher import LoggingNotificationDispatcher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import create_access_token
from src.app.services.tenancy_config import TenancyConfig
from src.app.services.tenant_invitation_service import TenantInvitationService
from src.domain.entities import TenantRole

T = TypeVar("T")

console = Console()

app = typer.Typer(
    name="tenant-iam",
    help="Maintenance commands for tenant memberships and invitations.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

DB_URI_OPTION = typer.Option(
    None, "--db-uri", help="Database URI (defaults to DB_URI from env.yaml)."
)


@app.callback()
def configure_logging(
    log_level: str = typer.Option(
        ApplicationConfig.LOG_LEVEL, "--log-level", help="Logging level."
    ),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _with_service(
    db_uri: str, action: Callable[[TenantInvitationService], Awaitable[T]]
) -> T:
    engine = create_async_engine(db_uri, echo=False, future=True)
    session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    config = TenancyConfig.from_application_config(ApplicationConfig)
    try:
        async with session_factory() as session:
            service = TenantInvitationService(
                SqlAlchemyUnitOfWork(session),
                config,
                LoggingNotificationDispatcher(config.tenant_display_name),
            )
            return await action(service)
    finally:
        await engine.dispose()


async def _init_db(db_uri: str) -> None:
    engine = create_async_engine(db_uri, echo=False, future=True)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    finally:
        await engine.dispose()


@app.command(name="cleanup-invitations")
def cleanup_invitations(db_uri: Optional[str] = DB_URI_OPTION) -> None:
    """Delete every expired invitation and print how many were removed."""
    result = asyncio.run(
        _with_service(
            db_uri or ApplicationConfig.DB_URI,
            lambda service: service.cleanup_expired_invitations(),
        )
    )
    console.print(f"[green]Deleted {result.value} expired invitation(s)[/green]")


@app.command(name="init-db")
def init_db(db_uri: Optional[str] = DB_URI_OPTION) -> None:
    """Create any missing tables."""
    asyncio.run(_init_db(db_uri or ApplicationConfig.DB_URI))
    console.print("[green]Database schema is up to date[/green]")


@app.command(name="add-user")
def add_user(
    email: str = typer.Argument(..., help="Email of the identity to register."),
    name: Optional[str] = typer.Option(None, "--name", help="Display name."),
    roles: List[str] = typer.Option(
        [], "--role", help="Global role, e.g. super_admin (repeatable)."
    ),
    token: bool = typer.Option(
        False, "--token", help="Also print a one-hour access token."
    ),
    db_uri: Optional[str] = DB_URI_OPTION,
) -> None:
    """Register an identity from the identity provider."""
    result = asyncio.run(
        _with_service(
            db_uri or ApplicationConfig.DB_URI,
            lambda service: service.register_user(email, name, roles),
        )
    )
    if result.is_err():
        console.print(f"[red]Error:[/red] {result.error.message}")
        raise typer.Exit(code=1)

    identity = result.value
    console.print(f"[green]Registered[/green] {identity.email} ({identity.id})")
    if token:
        console.print(create_access_token(identity.id, timedelta(hours=1)), soft_wrap=True)


@app.command(name="roles")
def roles() -> None:
    """Show the tenant roles and what each one may do."""
    table = Table(title="Tenant Roles", show_header=True)
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Description")
    table.add_column("Manage members", no_wrap=True)
    table.add_column("Permissions")

    for role in TenantRole:
        table.add_row(
            role.value,
            role.label,
            role.description,
            "[green]yes[/green]" if role.can_manage_members() else "no",
            ", ".join(role.permissions()),
        )

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
