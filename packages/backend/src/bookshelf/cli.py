"""Bookshelf operator CLI.

Usage:
    bookshelf serve                  # Run the API with uvicorn
    bookshelf serve --reload         # ...with auto-reload for development
    bookshelf init-db                # Create database tables
"""

import asyncio

import click

from bookshelf.config import settings


@click.group()
def cli():
    """Bookshelf — book search account service."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: BOOKSHELF_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: BOOKSHELF_PORT).")
@click.option("--reload", is_flag=True, help="Reload on code changes.")
def serve(host, port, reload):
    """Run the HTTP server."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    click.secho(f"Now listening on http://{host}:{port}", fg="green")
    click.echo(f"Use GraphQL at http://{host}:{port}/graphql")
    uvicorn.run("bookshelf.main:app", host=host, port=port, reload=reload)


@cli.command("init-db")
def init_db():
    """Create all tables from the ORM models."""
    from bookshelf.db.engine import create_tables, engine

    async def _init():
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_init())
    click.secho("Tables created.", fg="green")


def main():
    cli()


if __name__ == "__main__":
    main()
