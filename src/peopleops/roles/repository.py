from __future__ import annotations

from typing import Protocol


class RoleRepository(Protocol):
    def has_role(self, user_id: str, role: str) -> bool:
        raise NotImplementedError
