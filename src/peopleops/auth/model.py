from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Identity:
    """Authenticated principal owned by the auth provider.

    Immutable from the rest of the system's point of view.
    """

    identity_id: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(frozen=True)
class SessionIdentity:
    """What we store into the Flask session after sign-in."""

    identity_id: str
    email: str
    name: str
