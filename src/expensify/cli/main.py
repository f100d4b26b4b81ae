"""Main CLI entry point."""

import logging

import click
import structlog

from expensify.database.factories import create_sqlite_database

# Import and register all commands at module level
from expensify.cli.commands import bank, card, extract, ingest, parse

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    """Configure structlog to drop events below the given level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides EXPENSIFY_DB_PATH environment variable)",
    envvar="EXPENSIFY_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level (overrides EXPENSIFY_LOG_LEVEL environment variable)",
    envvar="EXPENSIFY_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Expensify - Bank email transaction extraction.

    Turn notification emails from Ecuadorian banks into transactions, with
    a directory of banks, whitelisted senders and cards.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
bank.register_commands(cli)
card.register_commands(cli)
extract.register_commands(cli)
ingest.register_commands(cli)
parse.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
