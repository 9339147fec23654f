"""CLI commands for ledgerdesk."""
