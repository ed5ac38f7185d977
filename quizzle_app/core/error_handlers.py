"""
Error Handlers for Quizzle

Provides:
- Custom exception classes
- Consistent error response format
- Flask error handlers
"""

from typing import Any, Dict, Optional

from flask import current_app, jsonify, request
from marshmallow import ValidationError as SchemaValidationError


class QuizzleError(Exception):
    """Base exception class for Quizzle."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON response."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class NotFoundError(QuizzleError):
    """Resource not found."""

    def __init__(self, message: str = 'Resource not found', resource: str = None):
        super().__init__(
            message=message,
            code='NOT_FOUND',
            status_code=404,
            details={'resource': resource} if resource else None
        )


class ContentUnavailable(NotFoundError):
    """No questions exist for the requested subject / difficulty / chapter."""

    def __init__(self, message: str = 'No questions available', resource: str = None):
        super().__init__(message=message, resource=resource)
        self.code = 'CONTENT_UNAVAILABLE'


class ValidationError(QuizzleError):
    """Input validation failed."""

    def __init__(self, message: str = 'Validation failed', errors: Dict = None):
        super().__init__(
            message=message,
            code='VALIDATION_ERROR',
            status_code=400,
            details={'errors': errors} if errors else None
        )


class AuthorizationError(QuizzleError):
    """Missing or unknown session token."""

    def __init__(self, message: str = 'Unauthorized'):
        super().__init__(
            message=message,
            code='UNAUTHORIZED',
            status_code=401
        )


class PermissionDeniedError(QuizzleError):
    """Authenticated, but the role does not allow the action."""

    def __init__(self, message: str = 'Permission denied'):
        super().__init__(
            message=message,
            code='FORBIDDEN',
            status_code=403
        )


class ConflictError(QuizzleError):
    """Resource already exists."""

    def __init__(self, message: str = 'Resource already exists'):
        super().__init__(
            message=message,
            code='CONFLICT',
            status_code=409
        )


class PersistenceError(QuizzleError):
    """The result store could not write or read a record."""

    def __init__(self, message: str = 'Failed to persist record'):
        super().__init__(
            message=message,
            code='PERSISTENCE_ERROR',
            status_code=500
        )


def error_response(
    message: str,
    code: str = 'ERROR',
    status_code: int = 400,
    details: Dict = None
) -> tuple:
    """Create a standardized error response."""
    response = {
        'success': False,
        'message': message,
        'code': code
    }
    if details:
        response['details'] = details

    return jsonify(response), status_code


def success_response(data: Any = None, message: str = None) -> dict:
    """Create a standardized success response."""
    response = {'success': True}
    if data is not None:
        response['data'] = data
    if message:
        response['message'] = message
    return response


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(QuizzleError)
    def handle_quizzle_error(error):
        if error.status_code >= 500:
            current_app.logger.error(f"{error.code}: {error.message}")
        else:
            current_app.logger.info(f"{error.code}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SchemaValidationError)
    def handle_schema_error(error):
        return error_response('Validation failed', 'VALIDATION_ERROR', 400, {'errors': error.messages})

    @app.errorhandler(404)
    def handle_not_found(error):
        if request.path.startswith('/api/'):
            return error_response('Endpoint not found', 'NOT_FOUND', 404)
        return error

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        if request.path.startswith('/api/'):
            return error_response('Method not allowed', 'METHOD_NOT_ALLOWED', 405)
        return error

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if request.path.startswith('/api/'):
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return error
