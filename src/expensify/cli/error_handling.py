"""CLI error handling helpers."""

import click
import structlog

from expensify.domain.errors import DomainError, MailProviderError

logger = structlog.get_logger()


def handle_domain_error(ctx: click.Context, error: DomainError | MailProviderError | ValueError) -> None:
    """Print the error to stderr and exit 1.

    Mail provider failures are also logged as a warning.
    """
    if isinstance(error, MailProviderError):
        logger.warning("mail_provider_error", command=ctx.info_name, error=str(error))
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
