"""Snapshot store for ledgerbooks."""

from ledgerbooks.database.base import BookRepository
from ledgerbooks.database.factories import create_sqlite_repository

__all__ = ["BookRepository", "create_sqlite_repository"]
