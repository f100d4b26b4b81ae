"""Card directory commands."""

import click

from expensify.cli.error_handling import handle_domain_error
from expensify.domain.bank import BankService
from expensify.domain.card import CardService
from expensify.domain.errors import DomainError


@click.group()
def card_group():
    """Manage cards."""
    pass


@card_group.command("create")
@click.argument("name", metavar="CARD_NAME")
@click.option("--bank", required=True, help="Bank slug or ID")
@click.option("--last4", help="Last 3 or 4 digits of the card or account")
@click.option("--type", "card_type", help="Card type, e.g. debit or credit")
@click.option("--kind", "card_kind", help="Card kind, e.g. Visa or Mastercard")
@click.pass_context
def create_card(ctx, name: str, bank: str, last4: str | None, card_type: str | None, card_kind: str | None):
    """Create a new card.

    Examples:
        expensify card create "Visa Produbanco" --bank produbanco --last4 3733 --type credit
        expensify card create "Débito Pichincha" --bank pichincha --type debit
    """
    db = ctx.obj["db"]

    try:
        found = BankService(db).resolve_bank(bank)
        card_id = CardService(db).create_card(
            name=name,
            bank_id=found.id,
            last4=last4,
            card_type=card_type,
            card_kind=card_kind,
        )
        click.echo(f"Created card '{name}' (ID: {card_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@card_group.command("list")
@click.option("--bank", help="Only cards of this bank (slug or ID)")
@click.pass_context
def list_cards(ctx, bank: str | None):
    """List cards."""
    db = ctx.obj["db"]

    bank_id = None
    if bank is not None:
        try:
            bank_id = BankService(db).resolve_bank(bank).id
        except DomainError as e:
            handle_domain_error(ctx, e)

    cards = CardService(db).list_cards(bank_id=bank_id)
    if not cards:
        click.echo("No cards found.")
        return

    click.echo("\nCards:")
    click.echo("-" * 60)
    for card in cards:
        click.echo(
            f"ID: {card.id:3d} | {card.name:20s} | Last4: {card.last4 or '-':4s} | "
            f"Type: {card.card_type or '-'}"
        )


def register_commands(cli):
    """Register card commands with main CLI."""
    cli.add_command(card_group, name="card")
