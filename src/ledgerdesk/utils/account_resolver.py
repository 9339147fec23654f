"""Utility for resolving account names to IDs."""

from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.errors import NotFoundError


def resolve_account(account_service: AccountService, account: str) -> str:
    """Resolve an account name or ID to the account ID.

    IDs take precedence over names.

    Raises:
        NotFoundError: If no account matches
    """
    account = account.strip()
    if account_service.get_account(account) is not None:
        return account

    for acc in account_service.list_accounts():
        if acc.name == account:
            return acc.id

    raise NotFoundError(f"Account '{account}' not found")
