from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, url_for

from ..auth.session import admin_required, current_identity_id, current_role, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DuplicateError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _mark(action: str, actor_id: str, target_id: str | None = None):
        try:
            if action == "check_in":
                service.check_in(actor_id, target_id)
                flash("Checked in successfully", "success")
            else:
                service.check_out(actor_id, target_id)
                flash("Checked out successfully", "success")
        except (DuplicateError, ValidationError) as e:
            flash(str(e), "warning")
        except AuthorizationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Attendance %s failed for %s", action, target_id or actor_id)
            flash("Failed to check in" if action == "check_in" else "Failed to check out", "danger")
        return redirect(url_for("attendance"))

    @app.route("/attendance", methods=["GET"], endpoint="attendance")
    @login_required
    def attendance():
        actor_id = current_identity_id()
        is_admin = current_role() is Role.ADMIN
        rows, today, can_self_mark = [], None, False
        try:
            rows = service.list_attendance(actor_id)
            today = service.today_status(actor_id)
            can_self_mark = service.can_mark(actor_id)
        except Exception:
            logger.exception("Loading attendance failed")
            flash("Failed to load attendance", "danger")

        employees = []
        if is_admin:
            try:
                employees = container.directory_service.list_employees()
            except Exception:
                logger.exception("Loading employees for attendance marking failed")

        return render_template(
            "attendance/index.html",
            rows=rows,
            today=today,
            is_admin=is_admin,
            can_self_mark=can_self_mark,
            employees=employees,
            active_page="attendance",
        )

    @app.route("/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        return _mark("check_in", current_identity_id())

    @app.route("/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        return _mark("check_out", current_identity_id())

    @app.route("/attendance/<target_id>/check-in", methods=["POST"], endpoint="mark_check_in")
    @admin_required
    def mark_check_in(target_id: str):
        return _mark("check_in", current_identity_id(), target_id)

    @app.route("/attendance/<target_id>/check-out", methods=["POST"], endpoint="mark_check_out")
    @admin_required
    def mark_check_out(target_id: str):
        return _mark("check_out", current_identity_id(), target_id)
