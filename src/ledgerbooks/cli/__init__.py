"""CLI package for ledgerbooks."""
