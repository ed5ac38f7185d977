from flask import Blueprint

ops_bp = Blueprint('ops', __name__)

module_metadata = {
    'name': 'System Operations',
    'category': 'System',
    'url_prefix': '/api',
    'enabled': True
}
