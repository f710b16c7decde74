from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .auth.session import EXTENSION_KEY, current_identity, current_role
from .common.log import configure_logging
from .container import Container, build_container
from .core.enums import Role
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, ensure_demo_users, list_tables
from .leaves.controller import register as register_leaves
from .profiles.controller import register as register_profiles
from .settings import get_settings_module

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    db_config = dict(getattr(settings, "DB_CONFIG"))

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)

        container = build_container(
            db_config=db_config,
            attendance_mode=getattr(settings, "ATTENDANCE_MODE", "self_service"),
            role_cache_seconds=int(getattr(settings, "ROLE_CACHE_SECONDS", 60)),
        )

    app.extensions[EXTENSION_KEY] = container

    @app.context_processor
    def inject_current_user():
        identity = current_identity()
        return {
            "current_user": identity,
            "is_admin_user": bool(identity) and current_role() is Role.ADMIN,
        }

    register_auth(app, container)
    register_dashboard(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_profiles(app, container)

    return app
