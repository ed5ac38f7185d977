# File: quizzle_app/modules/auth/routes.py
from flask import current_app, jsonify, request
from flask_login import current_user, login_required

from quizzle_app.core.error_handlers import success_response

from . import auth_bp
from .schemas import CreateProfileSchema, LoginSchema
from .services.auth_service import AuthService

_create_schema = CreateProfileSchema()
_login_schema = LoginSchema()


def _session_payload(user, token):
    return {'user': user.to_dict(), 'sessionId': token}


@auth_bp.route('/create-profile', methods=['POST'])
def create_profile():
    data = _create_schema.load(request.get_json(silent=True) or {})
    user, token = AuthService.create_profile(
        data['name'], data['email'], avatar_url=data['avatar_url']
    )
    return jsonify(success_response(_session_payload(user, token), 'Profile created')), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    data = _login_schema.load(request.get_json(silent=True) or {})
    user, token = AuthService.login(data['email'])
    return jsonify(success_response(_session_payload(user, token)))


@auth_bp.route('/user', methods=['GET'])
@login_required
def get_current_user():
    return jsonify(success_response({'user': current_user.to_dict()}))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    token = request.headers.get(current_app.config['SESSION_HEADER_NAME'])
    if token:
        AuthService.logout(token)
    return jsonify(success_response(message='Logged out'))


@auth_bp.route('/reset-profile', methods=['DELETE'])
@login_required
def reset_profile():
    AuthService.reset_profile(current_user._get_current_object())
    return jsonify(success_response(message='Profile reset'))
