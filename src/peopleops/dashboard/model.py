from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..activity.model import ActivityEntry


@dataclass(frozen=True)
class DashboardOverview:
    total_employees: int
    pending_leaves: int
    today_attendance: int
    recent_activity: List[ActivityEntry] = field(default_factory=list)
