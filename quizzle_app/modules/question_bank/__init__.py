"""Question bank module: subject catalogue and static question content."""

from flask import Blueprint

question_bank_bp = Blueprint('question_bank', __name__)

module_metadata = {
    'name': 'Question Bank',
    'category': 'Content',
    'url_prefix': '/api',
    'enabled': True
}
