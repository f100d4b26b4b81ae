"""Extract command: show the transaction an email would create."""

import click

from expensify.cli.error_handling import handle_domain_error
from expensify.cli.mail import access_token_option, get_mail_client
from expensify.domain.entities import TransactionInsert
from expensify.domain.errors import MailProviderError
from expensify.domain.extraction import ExtractionResult, ExtractionService


def echo_result(ctx: click.Context, result: ExtractionResult) -> None:
    """Print an extracted transaction, or the failure and exit 1."""
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        ctx.exit(1)
    echo_insert(result.data)


def echo_insert(insert: TransactionInsert) -> None:
    click.echo(f"Type:        {insert.type.value}")
    click.echo(f"Description: {insert.description}")
    click.echo(f"Amount:      {insert.amount:.2f}")
    click.echo(f"Occurred at: {insert.occurred_at}")
    click.echo(f"Bank ID:     {insert.bank_id}")
    click.echo(f"Card ID:     {insert.card_id if insert.card_id is not None else '-'}")
    if insert.budget_id:
        click.echo(f"Budget ID:   {insert.budget_id}")
    if insert.comment:
        click.echo(f"Comment:     {insert.comment}")


@click.command("extract")
@click.argument("message_id", metavar="MESSAGE_ID")
@access_token_option
@click.pass_context
def extract_message(ctx, message_id: str, access_token: str | None):
    """Fetch a message and show the transaction it describes, without storing it.

    Examples:
        expensify extract AAMkAGI2... --access-token eyJ0...
    """
    service = ExtractionService(ctx.obj["db"], get_mail_client(ctx, access_token))

    try:
        result = service.extract_transaction_data(message_id)
    except MailProviderError as e:
        handle_domain_error(ctx, e)
        return
    echo_result(ctx, result)


def register_commands(cli):
    """Register extract command with main CLI."""
    cli.add_command(extract_message)
