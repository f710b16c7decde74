from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.session import current_identity_id, current_role, login_required, refresh_name
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.directory_service

    @app.route("/employees", methods=["GET"], endpoint="employees")
    @login_required
    def employees():
        search = request.args.get("q", "")
        rows = []
        try:
            rows = service.list_employees(search=search)
        except Exception:
            logger.exception("Loading employees failed")
            flash("Failed to load employees", "danger")

        return render_template(
            "profiles/employees.html",
            rows=rows,
            search=search,
            is_admin=current_role() is Role.ADMIN,
            active_page="employees",
        )

    @app.route("/profile", methods=["GET", "POST"], endpoint="profile")
    @login_required
    def profile():
        identity_id = current_identity_id()

        if request.method == "POST":
            try:
                updated = service.update_profile(
                    identity_id,
                    name=request.form.get("name", ""),
                    position=request.form.get("position", ""),
                    department=request.form.get("department", ""),
                )
                refresh_name(updated.name)
                flash("Profile updated successfully", "success")
                return redirect(url_for("profile"))
            except (ValidationError, AuthorizationError) as e:
                flash(str(e), "warning")
            except Exception:
                logger.exception("Updating profile %s failed", identity_id)
                flash("Failed to update profile", "danger")

        current = None
        try:
            current = service.get_profile(identity_id)
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Loading profile %s failed", identity_id)
            flash("Failed to load profile", "danger")

        return render_template("profiles/profile.html", profile=current, active_page="profile")
