"""Parse command: run extraction over a saved email body."""

from pathlib import Path

import click

from expensify.cli.commands.extract import echo_result
from expensify.cli.error_handling import handle_domain_error
from expensify.domain.entities import RawMessage
from expensify.domain.errors import ValidationError
from expensify.domain.extraction import ExtractionService
from expensify.utils.date_parser import now_utc_iso


@click.command("parse")
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--subject", required=True, help="Email subject")
@click.option("--from", "sender", required=True, help="Sender address (must be whitelisted)")
@click.option("--received-at", help="Receive instant, ISO-8601 UTC (defaults to now)")
@click.pass_context
def parse_file(ctx, body_file: str, subject: str, sender: str, received_at: str | None):
    """Extract the transaction from a saved HTML or text email body.

    Runs the same checks as extract against the local bank directory.

    Examples:
        expensify parse consumo.html --subject "Consumo Tarjeta de Crédito" \\
            --from notificaciones@produbanco.com
    """
    path = Path(body_file)
    try:
        body = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        handle_domain_error(ctx, ValidationError(f"{path.name} is not UTF-8 text ({e.reason} at byte {e.start})"))
    message = RawMessage(
        id=f"file:{path.name}",
        sender=sender.strip().lower(),
        subject=subject,
        received_at=received_at or now_utc_iso(),
        body=body,
    )
    service = ExtractionService(ctx.obj["db"])
    echo_result(ctx, service.extract_from_message(message, message.id))


def register_commands(cli):
    """Register parse command with main CLI."""
    cli.add_command(parse_file)
