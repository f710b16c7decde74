from __future__ import annotations

import logging

from flask import Flask, flash, redirect, render_template, request, url_for

from ..auth.session import admin_required, current_identity_id, current_role, login_required
from ..common.datetime_utils import parse_iso_date
from ..container import Container
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/leaves", methods=["GET"], endpoint="leaves")
    @login_required
    def leaves():
        rows = []
        try:
            rows = service.list_requests(current_identity_id())
        except Exception:
            logger.exception("Loading leaves failed")
            flash("Failed to load leaves", "danger")

        return render_template(
            "leaves/index.html",
            rows=rows,
            is_admin=current_role() is Role.ADMIN,
            leave_types=list(LeaveType),
            pending=LeaveStatus.PENDING,
            active_page="leaves",
        )

    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    @login_required
    def submit_leave():
        try:
            try:
                start_date = parse_iso_date(request.form.get("start_date") or "")
                end_date = parse_iso_date(request.form.get("end_date") or "")
            except ValueError:
                raise ValidationError("Dates must use the YYYY-MM-DD format")

            service.submit(
                current_identity_id(),
                leave_type=request.form.get("type", ""),
                start_date=start_date,
                end_date=end_date,
                reason=request.form.get("reason", ""),
            )
            flash("Leave request submitted successfully", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            logger.exception("Submitting leave failed")
            flash("Failed to submit leave request", "danger")
        return redirect(url_for("leaves"))

    def _decide(request_id: int, *, approve: bool):
        verb = "approve" if approve else "reject"
        try:
            decide = service.approve if approve else service.reject
            decide(current_identity_id(), request_id, review_notes=request.form.get("review_notes", ""))
            flash("Leave approved" if approve else "Leave rejected", "success" if approve else "info")
        except ValidationError as e:
            flash(str(e), "warning")
        except AuthorizationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Failed to %s leave %s", verb, request_id)
            flash(f"Failed to {verb} leave", "danger")
        return redirect(url_for("leaves"))

    @app.route("/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    def approve_leave(request_id: int):
        return _decide(request_id, approve=True)

    @app.route("/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @admin_required
    def reject_leave(request_id: int):
        return _decide(request_id, approve=False)
