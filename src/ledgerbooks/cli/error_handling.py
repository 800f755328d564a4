"""CLI error handling helpers."""

import logging

import click

from ledgerbooks.domain.errors import DomainError, SnapshotError, UnsupportedVersionError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    Storage failures are logged with their cause so ``--verbose`` shows what
    the snapshot store actually reported.
    """
    if isinstance(error, (SnapshotError, UnsupportedVersionError)):
        logger.debug("snapshot failure in %s", ctx.command_path, exc_info=error)
    else:
        logger.debug("%s in %s: %s", type(error).__name__, ctx.command_path, error)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
