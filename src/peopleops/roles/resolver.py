from __future__ import annotations

import logging
import time
from typing import Callable, Dict, Optional, Tuple

from ..core.constants import DEFAULT_ROLE_CACHE_SECONDS
from ..core.enums import Role
from .repository import RoleRepository

logger = logging.getLogger(__name__)


class RoleResolver:
    """Resolve the capability level of an identity.

    An identity is ADMIN when an ``admin`` row exists in ``user_roles`` and
    MEMBER otherwise. Lookups are cached per identity for ``ttl_seconds``
    (0 disables the cache); ``invalidate`` drops entries explicitly, e.g. on
    sign-out, so a revoked role is picked up by the next request.
    """

    def __init__(
        self,
        roles: RoleRepository,
        *,
        ttl_seconds: int = DEFAULT_ROLE_CACHE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._roles = roles
        self._ttl = max(0, int(ttl_seconds))
        self._clock = clock
        self._cache: Dict[str, Tuple[Role, float]] = {}

    def resolve(self, identity_id: str) -> Role:
        now = self._clock()
        cached = self._cache.get(identity_id)
        if cached and now < cached[1]:
            return cached[0]

        role = Role.ADMIN if self._roles.has_role(identity_id, Role.ADMIN.value) else Role.MEMBER
        if self._ttl:
            self._cache[identity_id] = (role, now + self._ttl)
        return role

    def is_admin(self, identity_id: str) -> bool:
        return self.resolve(identity_id) is Role.ADMIN

    def invalidate(self, identity_id: Optional[str] = None) -> None:
        if identity_id is None:
            self._cache.clear()
        else:
            self._cache.pop(identity_id, None)
        logger.debug("Role cache invalidated (%s)", identity_id or "all")
