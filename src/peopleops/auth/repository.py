from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import Identity


class IdentityRepository(Protocol):
    """Auth provider storage: identities and the profile created at sign-up."""

    def get_by_email(self, email: str) -> Optional[Identity]:
        raise NotImplementedError

    def create_with_profile(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        position: str,
        department: str,
        hire_date: date,
    ) -> Identity:
        """Insert the identity and its one-to-one profile atomically."""

        raise NotImplementedError
