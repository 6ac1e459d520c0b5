"""Login session ticket kept between CLI invocations.

The ticket is a small JSON file holding the authenticated identity and an
expiry time. Expiry slides: each authenticated command pushes it forward.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from peopleledger.domain.clock import Clock, SystemClock
from peopleledger.domain.entities import AuthenticatedUser

SESSION_LIFETIME = timedelta(hours=2)


@dataclass(frozen=True)
class SessionTicket:
    """Persisted login session."""

    username: str
    display_name: str
    expires_at: datetime

    @property
    def user(self) -> AuthenticatedUser:
        return AuthenticatedUser(username=self.username, display_name=self.display_name)


def session_path_for(database_path: Optional[str]) -> Path:
    """Resolve the session file location.

    PEOPLELEDGER_SESSION_PATH wins; otherwise the ticket sits next to the
    database file, or in ~/.peopleledger for non-file databases.
    """
    override = os.environ.get("PEOPLELEDGER_SESSION_PATH")
    if override:
        return Path(override)
    if database_path:
        return Path(f"{database_path}.session")
    return Path.home() / ".peopleledger" / "session.json"


class SessionStore:
    """Reads and writes the session ticket file."""

    def __init__(self, path: Path, clock: Optional[Clock] = None):
        self.path = path
        self.clock = clock or SystemClock()

    def start(self, user: AuthenticatedUser) -> SessionTicket:
        """Write a fresh ticket for ``user``."""
        ticket = SessionTicket(
            username=user.username,
            display_name=user.display_name,
            expires_at=self.clock.now() + SESSION_LIFETIME,
        )
        self._write(ticket)
        return ticket

    def current(self) -> Optional[SessionTicket]:
        """Return the live ticket, or None if missing, unreadable or expired."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            ticket = SessionTicket(
                username=data["username"],
                display_name=data["display_name"],
                expires_at=datetime.fromisoformat(data["expires_at"]),
            )
        except FileNotFoundError:
            return None
        except (ValueError, KeyError, TypeError):
            # Corrupt ticket: treat as logged out
            self.end()
            return None

        if ticket.expires_at <= self.clock.now():
            self.end()
            return None
        return ticket

    def touch(self) -> Optional[SessionTicket]:
        """Slide the expiry of the live ticket forward; None if not logged in."""
        ticket = self.current()
        if ticket is None:
            return None
        return self.start(ticket.user)

    def end(self) -> None:
        """Remove the ticket."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

    def _write(self, ticket: SessionTicket) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "username": ticket.username,
            "display_name": ticket.display_name,
            "expires_at": ticket.expires_at.isoformat(),
        }
        self.path.write_text(json.dumps(payload), encoding="utf-8")
        os.chmod(self.path, 0o600)
