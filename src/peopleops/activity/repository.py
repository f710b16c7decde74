from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import ActivityAction
from .model import ActivityEntry


class ActivityRepository(Protocol):
    """Append-only: there is deliberately no update or delete."""

    def append(self, *, user_id: str, action: ActivityAction, description: str, created_at: datetime) -> int:
        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[ActivityEntry]:
        """Newest first, joined with the actor's display name."""

        raise NotImplementedError
