# File: quizzle_app/modules/auth/__init__.py
from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

module_metadata = {
    'name': 'Xác thực',
    'category': 'System',
    'url_prefix': '/api/auth',
    'enabled': True
}


def setup_module(app):
    """Wire the token store into Flask-Login."""
    from flask import current_app

    from quizzle_app.core.error_handlers import error_response
    from quizzle_app.extensions import login_manager

    from .services.auth_service import AuthService
    from .services.token_store import init_token_store

    init_token_store(app)

    @login_manager.request_loader
    def load_user_from_request(request):
        token = request.headers.get(current_app.config.get('SESSION_HEADER_NAME', 'X-Session-Id'))
        if not token:
            return None
        return AuthService.user_for_token(token)

    @login_manager.unauthorized_handler
    def unauthorized():
        return error_response('Not authenticated', 'UNAUTHORIZED', 401)
