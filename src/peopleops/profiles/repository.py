from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeRow, Profile


class ProfileRepository(Protocol):
    def get_by_id(self, profile_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def list_with_roles(self) -> Sequence[EmployeeRow]:
        """All profiles ordered by name."""

        raise NotImplementedError

    def update_details(
        self,
        profile_id: str,
        *,
        name: str,
        position: Optional[str],
        department: Optional[str],
    ) -> None:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
