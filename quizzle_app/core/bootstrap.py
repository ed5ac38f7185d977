"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging
import os

from flask import Flask

from ..extensions import db, login_manager, scheduler
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure application logging if no handlers are present."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=None if app.testing else app.config.get("LOG_DIR"),
    )

    if app.logger.handlers:
        return

    app.logger.setLevel(logging.DEBUG if app.debug else logging.INFO)
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables."""

    from .. import models  # noqa: F401  (registers the tables on db.metadata)

    db.create_all()
    app.logger.info("Database tables ready at %s", app.config.get("SQLALCHEMY_DATABASE_URI"))


def register_jobs(app: Flask) -> None:
    """Start the background scheduler and register the periodic jobs."""

    if not app.config.get("SCHEDULER_ENABLED", False) or app.testing:
        return
    # Under the reloader only the child process runs jobs.
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        return

    from apscheduler.schedulers import SchedulerAlreadyRunningError

    from ..modules.auth.tasks import purge_expired_tokens
    from ..modules.quiz.tasks import sweep_timed_quizzes

    try:
        scheduler.init_app(app)
        if not scheduler.running:
            scheduler.start()

        if not scheduler.get_job('purge_expired_tokens'):
            scheduler.add_job(
                id='purge_expired_tokens',
                func=purge_expired_tokens,
                trigger='interval',
                minutes=app.config.get('TOKEN_PURGE_INTERVAL_MINUTES', 10),
                replace_existing=True,
            )
        if not scheduler.get_job('sweep_timed_quizzes'):
            scheduler.add_job(
                id='sweep_timed_quizzes',
                func=sweep_timed_quizzes,
                trigger='interval',
                seconds=app.config.get('QUIZ_SWEEP_INTERVAL_SECONDS', 30),
                replace_existing=True,
            )
        app.logger.info("Đã đăng ký các job nền (token purge, timed quiz sweep).")
    except SchedulerAlreadyRunningError:
        app.logger.info("Scheduler đã chạy, bỏ qua khởi tạo lại.")
