from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH, MIN_PROFILE_FIELD_LENGTH
from ..core.exceptions import AuthenticationError, DuplicateError, ValidationError
from ..profiles.repository import ProfileRepository
from .model import Identity, SessionIdentity
from .repository import IdentityRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign up and sign in against the identity store."""

    def __init__(self, identities: IdentityRepository, profiles: ProfileRepository):
        self._identities = identities
        self._profiles = profiles

    def sign_up(
        self,
        email: str,
        password: str,
        *,
        name: str,
        position: str,
        department: str,
        today: Optional[date] = None,
    ) -> Identity:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        name = require_min_length(require_non_empty(name, "Name"), "Name", MIN_NAME_LENGTH)
        position = require_min_length(require_non_empty(position, "Position"), "Position", MIN_PROFILE_FIELD_LENGTH)
        department = require_min_length(
            require_non_empty(department, "Department"), "Department", MIN_PROFILE_FIELD_LENGTH
        )

        if self._identities.get_by_email(email):
            raise ValidationError("Email is already registered")

        try:
            identity = self._identities.create_with_profile(
                email=email,
                password_hash=generate_password_hash(password),
                name=name,
                position=position,
                department=department,
                hire_date=today or date.today(),
            )
        except DuplicateError:
            # lost a race with a concurrent sign-up for the same address
            raise ValidationError("Email is already registered")

        logger.info("Identity %s signed up", identity.identity_id)
        return identity

    def sign_in(self, email: str, password: str) -> SessionIdentity:
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        identity = self._identities.get_by_email(email)
        if not identity:
            raise AuthenticationError("Invalid login credentials")

        try:
            ok = check_password_hash(identity.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid login credentials")

        profile = self._profiles.get_by_id(identity.identity_id)
        name = profile.name if profile else identity.email
        return SessionIdentity(identity_id=identity.identity_id, email=identity.email, name=name)
