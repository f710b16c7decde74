from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_NAME_LENGTH, MIN_PROFILE_FIELD_LENGTH
from ..core.exceptions import AuthorizationError, NotFoundError
from ..roles.resolver import RoleResolver
from .model import EmployeeRow, Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class DirectoryService:
    """Use cases: employee directory and profile editing."""

    def __init__(self, profiles: ProfileRepository, roles: RoleResolver):
        self._profiles = profiles
        self._roles = roles

    def list_employees(self, *, search: str = "") -> list[EmployeeRow]:
        rows = list(self._profiles.list_with_roles())
        term = (search or "").strip()
        if not term:
            return rows
        return [row for row in rows if row.matches(term)]

    def get_profile(self, identity_id: str) -> Profile:
        profile = self._profiles.get_by_id(identity_id)
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def update_profile(
        self,
        actor_id: str,
        target_id: Optional[str] = None,
        *,
        name: str,
        position: Optional[str],
        department: Optional[str],
    ) -> Profile:
        target_id = target_id or actor_id
        if target_id != actor_id and not self._roles.is_admin(actor_id):
            raise AuthorizationError("You can only edit your own profile")

        name = require_min_length(require_non_empty(name, "Name"), "Name", MIN_NAME_LENGTH)
        position = require_min_length(require_non_empty(position, "Position"), "Position", MIN_PROFILE_FIELD_LENGTH)
        department = require_min_length(
            require_non_empty(department, "Department"), "Department", MIN_PROFILE_FIELD_LENGTH
        )

        current = self.get_profile(target_id)
        self._profiles.update_details(target_id, name=name, position=position, department=department)
        logger.info("Profile %s updated by %s", target_id, actor_id)

        return Profile(
            profile_id=current.profile_id,
            name=name,
            email=current.email,
            position=position,
            department=department,
            hire_date=current.hire_date,
        )
