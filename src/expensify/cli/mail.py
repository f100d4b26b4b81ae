"""CLI helper building the mail client commands read messages from."""

import click

from expensify.mail.base import MailClient
from expensify.mail.graph import GraphMailClient

access_token_option = click.option(
    "--access-token",
    help="Microsoft Graph access token (overrides EXPENSIFY_ACCESS_TOKEN environment variable)",
    envvar="EXPENSIFY_ACCESS_TOKEN",
)


def get_mail_client(ctx: click.Context, access_token: str | None) -> MailClient:
    """Return the mail client placed in the context, or a Graph client for the token."""
    client = ctx.obj.get("mail_client")
    if client is not None:
        return client
    if not access_token:
        click.echo("Error: No access token. Use --access-token or set EXPENSIFY_ACCESS_TOKEN.", err=True)
        ctx.exit(1)
    return GraphMailClient(access_token=access_token)
