from flask import jsonify
from flask_login import current_user, login_required

from quizzle_app.core.error_handlers import NotFoundError, PermissionDeniedError, success_response
from quizzle_app.models import User

from ..question_bank.config import QuestionBankConfig
from . import progress_bp
from .services.progress_service import ProgressService


@progress_bp.route('/profile/stats', methods=['GET'])
@login_required
def profile_stats():
    return jsonify(success_response(ProgressService.get_stats(current_user.id)))


@progress_bp.route('/profile/progress', methods=['GET'])
@login_required
def profile_progress():
    return jsonify(success_response(ProgressService.get_progress(current_user.id)))


@progress_bp.route('/profile/lessons/<subject_id>', methods=['GET'])
@login_required
def lesson_progress(subject_id):
    if not QuestionBankConfig.get_subject(subject_id):
        raise NotFoundError(f"Subject '{subject_id}' not found", resource=subject_id)
    return jsonify(success_response(ProgressService.get_lesson_progress(current_user.id, subject_id)))


@progress_bp.route('/admin/user/<email>', methods=['GET'])
@login_required
def admin_user_report(email):
    if current_user.role != User.ROLE_INSTRUCTOR:
        raise PermissionDeniedError()
    return jsonify(success_response(ProgressService.get_user_report(email)))
