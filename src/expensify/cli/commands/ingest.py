"""Ingest command: store transactions for bank emails."""

import click

from expensify.cli.error_handling import handle_domain_error
from expensify.cli.mail import access_token_option, get_mail_client
from expensify.domain.errors import MailProviderError
from expensify.domain.ingestion import EmailIngestionService, IngestionStatus


@click.command("ingest")
@click.argument("message_ids", nargs=-1, required=True, metavar="MESSAGE_ID...")
@access_token_option
@click.pass_context
def ingest_messages(ctx, message_ids: tuple[str, ...], access_token: str | None):
    """Create transactions for the given messages.

    Messages already ingested are skipped, so re-running is safe.
    """
    service = EmailIngestionService(ctx.obj["db"], get_mail_client(ctx, access_token))

    counts = {status: 0 for status in IngestionStatus}
    for message_id in message_ids:
        try:
            result = service.ingest_message(message_id)
        except MailProviderError as e:
            handle_domain_error(ctx, e)
            return
        counts[result.status] += 1
        if result.status == IngestionStatus.CREATED:
            click.echo(f"{message_id}: created transaction {result.transaction_id}")
        else:
            click.echo(f"{message_id}: {result.status.value} ({result.reason})")

    click.echo(f"\nIngest complete:")
    click.echo(f"  Created: {counts[IngestionStatus.CREATED]}")
    click.echo(f"  Skipped: {counts[IngestionStatus.SKIPPED]}")
    click.echo(f"  Failed: {counts[IngestionStatus.FAILED]}")


def register_commands(cli):
    """Register ingest command with main CLI."""
    cli.add_command(ingest_messages)
