"""Session store and the one-shot lead-to-sale handoff.

The session is a small JSON document on local disk. It is created at login,
removed at logout, and passed explicitly to whoever needs it. Writes are
last-write-wins.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

CURRENT_USER_KEY = "currentUser"
LEAD_DATA_KEY = "leadData"


class SessionStore:
    """Persistent key-value session over a JSON file."""

    def __init__(self, path: Path):
        """Initialize session store.

        Args:
            path: Location of the session file
        """
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        if not data:
            self.path.unlink(missing_ok=True)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, default=str, indent=2), encoding="utf-8")

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def save_user(self, user: dict[str, Any]) -> None:
        """Store the logged-in user."""
        self.set(CURRENT_USER_KEY, user)
        logger.info("Session started for %s", user.get("username"))

    def get_user(self) -> Optional[dict[str, Any]]:
        """Return the logged-in user, or None."""
        user = self.get(CURRENT_USER_KEY)
        return user if isinstance(user, dict) else None

    def clear(self) -> None:
        """End the session (logout)."""
        self.remove(CURRENT_USER_KEY)
        logger.info("Session cleared")

    def is_logged_in(self) -> bool:
        return self.get_user() is not None


class LeadToSaleHandoff:
    """One-shot handoff of lead data to the next sale being created.

    The data is read at most once: ``take_lead_data`` clears it.
    """

    def __init__(self, session: SessionStore):
        self.session = session

    def set_lead_data(self, data: dict[str, Any]) -> None:
        self.session.set(LEAD_DATA_KEY, data)

    def peek_lead_data(self) -> Optional[dict[str, Any]]:
        """Return pending lead data without clearing it."""
        data = self.session.get(LEAD_DATA_KEY)
        return data if isinstance(data, dict) else None

    def take_lead_data(self) -> Optional[dict[str, Any]]:
        """Return pending lead data and clear it."""
        data = self.session.get(LEAD_DATA_KEY)
        self.session.remove(LEAD_DATA_KEY)
        return data if isinstance(data, dict) else None
