from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Profile:
    """Employee record, one-to-one with an identity.

    email and hire_date are fixed once created.
    """

    profile_id: str
    name: str
    email: str
    position: Optional[str]
    department: Optional[str]
    hire_date: Optional[date]


@dataclass(frozen=True)
class EmployeeRow:
    """Directory listing row."""

    profile: Profile
    role: Role

    def matches(self, term: str) -> bool:
        term = term.lower()
        p = self.profile
        return any(term in (value or "").lower() for value in (p.name, p.email, p.department, p.position))
