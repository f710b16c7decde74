"""Session context: who is signed in, and view guards built on it.

The identity lives in Flask's signed cookie session. The role is resolved
once per request through the container's RoleResolver and kept on ``g``.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import current_app, flash, g, redirect, render_template, session, url_for

from ..core.enums import Role
from ..core.exceptions import RemoteError
from .model import SessionIdentity

EXTENSION_KEY = "peopleops"

logger = logging.getLogger(__name__)


def _container():
    return current_app.extensions[EXTENSION_KEY]


def start_session(identity: SessionIdentity, *, remember: bool = False) -> None:
    session.clear()
    session.permanent = bool(remember)
    session["identity_id"] = identity.identity_id
    session["email"] = identity.email
    session["name"] = identity.name


def current_identity() -> Optional[SessionIdentity]:
    identity_id = session.get("identity_id")
    if not identity_id:
        return None
    return SessionIdentity(
        identity_id=str(identity_id),
        email=session.get("email", ""),
        name=session.get("name", ""),
    )


def current_identity_id() -> str:
    return str(session["identity_id"])


def current_role() -> Role:
    if "role" in g:
        return g.role
    identity_id = session.get("identity_id")
    if not identity_id:
        return Role.MEMBER
    if g.get("role_lookup_failed"):
        return Role.MEMBER

    try:
        g.role = _container().role_resolver.resolve(str(identity_id))
    except RemoteError:
        # fail closed for this request only; nothing is cached
        logger.exception("Resolving role for %s failed", identity_id)
        g.role_lookup_failed = True
        flash("Could not verify your permissions. Please try again.", "danger")
        return Role.MEMBER
    return g.role


def refresh_name(name: str) -> None:
    session["name"] = name


def end_session() -> None:
    identity_id = session.get("identity_id")
    if identity_id:
        _container().role_resolver.invalidate(str(identity_id))
    session.clear()
    g.pop("role", None)
    g.pop("role_lookup_failed", None)


def render_forbidden():
    return render_template("403.html"), 403


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "identity_id" not in session:
            flash("Please sign in to continue.", "warning")
            return redirect(url_for("auth"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "identity_id" not in session:
            return redirect(url_for("auth"))
        if current_role() is not Role.ADMIN:
            return render_forbidden()
        return view(*args, **kwargs)

    return wrapper
