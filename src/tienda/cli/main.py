"""Tienda CLI — run the API and manage its database.

Usage:
    tienda serve                                # Run the API with uvicorn
    tienda init-db                              # Create missing tables
    tienda seed                                 # Load the demo catalog
    tienda create-admin admin admin@tienda.dev  # Provision an ADMIN account
"""

from __future__ import annotations

import asyncio
import sys

import click
from sqlalchemy import or_, select

from tienda.config import settings


def _run(coro):
    """Run an async coroutine from a synchronous Click handler."""
    return asyncio.run(coro)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
def cli():
    """Tienda back-office API."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: TIENDA_HOST)")
@click.option("--port", default=None, type=int, help="Port (default: TIENDA_PORT)")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "tienda.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
def init_db():
    """Create every table that does not exist yet."""
    from tienda.db.engine import create_schema, engine

    async def _init():
        await create_schema()
        await engine.dispose()

    _run(_init())
    click.secho("Schema ready.", fg="green")


@cli.command()
def seed():
    """Load the demo catalog (categories, suppliers, products)."""
    from tienda.db.engine import async_session_factory, create_schema, engine
    from tienda.db.seed import seed_catalog

    async def _seed() -> bool:
        await create_schema()
        async with async_session_factory() as session:
            loaded = await seed_catalog(session)
        await engine.dispose()
        return loaded

    if _run(_seed()):
        click.secho("Demo catalog loaded.", fg="green")
    else:
        click.secho("Catalog already has data; nothing to do.", fg="yellow")


@cli.command("create-admin")
@click.argument("username")
@click.argument("email")
@click.option("--name", default="Admin", show_default=True)
@click.option("--last-name", default="Tienda", show_default=True)
@click.password_option()
def create_admin(username: str, email: str, name: str, last_name: str, password: str):
    """Provision an account holding both USER and ADMIN roles."""
    from tienda.auth import ROLE_ADMIN, ROLE_USER
    from tienda.auth.password import hash_password
    from tienda.db.engine import async_session_factory, create_schema, engine
    from tienda.db.models import User

    async def _create() -> bool:
        try:
            await create_schema()
            async with async_session_factory() as session:
                clash = await session.execute(
                    select(User.id).where(or_(User.username == username, User.email == email))
                )
                if clash.first() is not None:
                    return False
                session.add(
                    User(
                        name=name,
                        last_name=last_name,
                        username=username,
                        email=email,
                        password_hash=hash_password(password),
                        roles=[ROLE_USER, ROLE_ADMIN],
                    )
                )
                await session.commit()
            return True
        finally:
            await engine.dispose()

    if not _run(_create()):
        click.secho(f"Error: username or email already taken: {username} / {email}", fg="red", err=True)
        sys.exit(1)
    click.secho(f"Admin {username} created.", fg="green")


if __name__ == "__main__":
    cli()
