"""Domain layer for ledgerdesk application."""
