from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, flash, redirect, render_template, request, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from .session import current_identity, end_session, start_session

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=7)

    @app.route("/auth", methods=["GET", "POST"], endpoint="auth")
    def auth():
        if current_identity():
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                s_identity = container.auth_service.sign_in(email, password)
                start_session(s_identity, remember=bool(request.form.get("remember_me")))
                flash("Welcome back!", "success")
                return redirect(url_for("dashboard"))
            except (ValidationError, AuthenticationError) as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("Sign-in failed")
                flash("Failed to sign in", "danger")

        return render_template("auth/auth.html", active_tab="signin")

    @app.route("/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        if current_identity():
            return redirect(url_for("dashboard"))

        try:
            container.auth_service.sign_up(
                request.form.get("email", ""),
                request.form.get("password", ""),
                name=request.form.get("name", ""),
                position=request.form.get("position", ""),
                department=request.form.get("department", ""),
            )
            flash("Account created successfully! Please sign in.", "success")
            return redirect(url_for("auth"))
        except ValidationError as e:
            flash(str(e), "danger")
        except Exception:
            logger.exception("Sign-up failed")
            flash("Failed to sign up", "danger")

        return render_template("auth/auth.html", active_tab="signup"), 400

    @app.route("/auth/signout", methods=["POST"], endpoint="signout")
    def signout():
        end_session()
        flash("Signed out.", "info")
        return redirect(url_for("auth"))
