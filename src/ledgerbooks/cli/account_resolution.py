"""CLI helpers for resolving accounts, schedules and modifiers."""

from __future__ import annotations

from uuid import UUID

import click

from ledgerbooks.cli.error_handling import handle_domain_error
from ledgerbooks.domain.ledger import Ledger
from ledgerbooks.utils.account_resolver import (
    resolve_account,
    resolve_modifier,
    resolve_schedule,
)


def resolve_account_or_exit(ctx: click.Context, ledger: Ledger, account: str) -> UUID:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(ledger, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_schedule_or_exit(ctx: click.Context, ledger: Ledger, schedule: str) -> UUID:
    try:
        return resolve_schedule(ledger, schedule)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_modifier_or_exit(ctx: click.Context, ledger: Ledger, modifier: str) -> UUID:
    try:
        return resolve_modifier(ledger, modifier)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
