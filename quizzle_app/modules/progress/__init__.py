"""Progress module: derived statistics over a learner's quiz history."""

from flask import Blueprint

progress_bp = Blueprint('progress', __name__)

module_metadata = {
    'name': 'Progress',
    'category': 'Learning',
    'url_prefix': '/api',
    'enabled': True
}
