from __future__ import annotations

import logging

from flask import Flask, flash, render_template

from ..auth.session import login_required
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        overview = None
        try:
            overview = container.dashboard_service.overview()
        except Exception:
            logger.exception("Loading dashboard failed")
            flash("Failed to load dashboard data", "danger")
        return render_template("dashboard/index.html", overview=overview, active_page="dashboard")
