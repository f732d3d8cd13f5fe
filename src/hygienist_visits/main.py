from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.http import ok, register_error_handlers
from .config import get_settings_module
from .container import build_container
from .database.bootstrap import seed_demo_data
from .database.memory_store import InMemoryStore
from .hygienists.controller import register as register_hygienists
from .patients.controller import register as register_patients
from .reports.controller import register as register_reports
from .users.controller import register as register_users
from .visits.controller import register as register_visits

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("hygienist_visits").setLevel(level.upper())


def create_app(settings_module: Optional[str] = None, store: Optional[InMemoryStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", 7))
    app.permanent_session_lifetime = timedelta(days=app.config["SESSION_DAYS"])

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    logger.info("settings=%s", settings_module)

    container = build_container(store=store)
    if bool(getattr(settings, "SEED_DEMO_DATA", False)):
        seed_demo_data(container.store)

    register_error_handlers(app)
    register_users(app, container)
    register_patients(app, container)
    register_hygienists(app, container)
    register_visits(app, container)
    register_reports(app, container)

    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return ok({"status": "ok"})

    return app
