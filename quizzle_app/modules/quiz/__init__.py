"""Quiz module: question selection, timed sessions, scoring and the result store."""

from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__)

# Module Metadata
module_metadata = {
    'name': 'Quizzes',
    'category': 'Learning',
    'url_prefix': '/api',
    'enabled': True
}


def setup_module(app):
    """Connect the quiz signal receivers."""
    from . import events  # noqa: F401
