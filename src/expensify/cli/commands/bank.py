"""Bank directory commands."""

import click

from expensify.cli.error_handling import handle_domain_error
from expensify.domain.bank import BankService
from expensify.domain.errors import DomainError


@click.group()
def bank_group():
    """Manage banks, whitelisted senders and blacklisted subjects."""
    pass


@bank_group.command("create")
@click.argument("name", metavar="BANK_NAME")
@click.option("--slug", help="Registry slug (pacifico, produbanco, pichincha, guayaquil)")
@click.pass_context
def create_bank(ctx, name: str, slug: str | None):
    """Create a new bank.

    Examples:
        expensify bank create "Produbanco" --slug produbanco
        expensify bank create "Banco del Pacífico" --slug pacifico
    """
    service = BankService(ctx.obj["db"])

    try:
        bank_id = service.create_bank(name=name, slug=slug)
        click.echo(f"Created bank '{name}' (ID: {bank_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_group.command("list")
@click.pass_context
def list_banks(ctx):
    """List all banks."""
    service = BankService(ctx.obj["db"])

    banks = service.list_banks()
    if not banks:
        click.echo("No banks found.")
        return

    click.echo("\nBanks:")
    click.echo("-" * 60)
    for bank in banks:
        click.echo(f"ID: {bank.id:3d} | {bank.name:20s} | Slug: {bank.slug or '-'}")
        for address in bank.emails:
            click.echo(f"      sender: {address}")
        for subject in bank.blacklisted_subjects:
            click.echo(f"      blacklisted: {subject}")


@bank_group.command("add-email")
@click.argument("bank", metavar="BANK")
@click.argument("address", metavar="EMAIL")
@click.pass_context
def add_email(ctx, bank: str, address: str):
    """Whitelist a sender address for a bank.

    BANK can be a bank slug or ID.

    Examples:
        expensify bank add-email produbanco notificaciones@produbanco.com
    """
    service = BankService(ctx.obj["db"])

    try:
        found = service.resolve_bank(bank)
        service.add_email(found.id, address)
        click.echo(f"Whitelisted '{address.strip().lower()}' for bank '{found.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@bank_group.command("blacklist")
@click.argument("bank", metavar="BANK")
@click.argument("subject", metavar="SUBJECT")
@click.pass_context
def blacklist_subject(ctx, bank: str, subject: str):
    """Ignore a bank's emails whose subject contains SUBJECT.

    Examples:
        expensify bank blacklist pichincha "Estado de cuenta"
    """
    service = BankService(ctx.obj["db"])

    try:
        found = service.resolve_bank(bank)
        service.blacklist_subject(found.id, subject)
        click.echo(f"Blacklisted subject '{subject}' for bank '{found.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register bank commands with main CLI."""
    cli.add_command(bank_group, name="bank")
