from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ActivityEntry:
    """Append-only log line shown on the dashboard feed."""

    entry_id: int
    user_id: str
    action: str
    description: str
    created_at: datetime
    actor_name: Optional[str] = None
