"""Application-wide extensions.

This module centralizes extension instances so they can be imported without
causing circular dependencies. Blueprints and services import from here rather
than from the application factory.
"""

from flask_apscheduler import APScheduler
from flask_login import LoginManager

from .db_instance import db

login_manager = LoginManager()
scheduler = APScheduler()

__all__ = ["db", "login_manager", "scheduler"]
