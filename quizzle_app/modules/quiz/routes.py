from flask import jsonify, request
from flask_login import current_user, login_required

from quizzle_app.core.error_handlers import success_response

from . import quiz_bp
from .schemas import QuizActionSchema, ReportedResultSchema, StartQuizSchema
from .services.result_store import ResultStore
from .services.session_service import QuizSessionService

_start_schema = StartQuizSchema()
_action_schema = QuizActionSchema()
_reported_schema = ReportedResultSchema()


# ============================================
# Quiz sessions
# ============================================

@quiz_bp.route('/quiz/start', methods=['POST'])
@login_required
def start_quiz():
    data = _start_schema.load(request.get_json(silent=True) or {})
    row, session = QuizSessionService.start(
        current_user.id,
        data['quiz_type'],
        subject_id=data['subject_id'],
        lesson_title=data['lesson_title'],
        difficulty=data['difficulty'],
    )
    return jsonify(success_response({'sessionId': row.session_id, 'session': session.view()})), 201


@quiz_bp.route('/quiz/session', methods=['GET'])
@login_required
def get_session():
    return jsonify(success_response(QuizSessionService.current_view(current_user.id)))


@quiz_bp.route('/quiz/session/<action>', methods=['POST'])
@login_required
def quiz_action(action):
    if action == 'abandon':
        return abandon_session()
    payload = _action_schema.load(request.get_json(silent=True) or {})
    return jsonify(success_response(QuizSessionService.apply_action(current_user.id, action, payload)))


@quiz_bp.route('/quiz/session', methods=['DELETE'])
@login_required
def abandon_session():
    abandoned = QuizSessionService.abandon(current_user.id)
    return jsonify(success_response({'abandoned': abandoned}))


# ============================================
# Results
# ============================================

@quiz_bp.route('/quiz-results', methods=['POST'])
@login_required
def save_quiz_result():
    data = _reported_schema.load(request.get_json(silent=True) or {})
    record = ResultStore.save_reported(current_user.id, data)
    return jsonify(success_response(record.to_dict(), 'Quiz result saved')), 201


@quiz_bp.route('/quiz-results', methods=['GET'])
@login_required
def list_quiz_results():
    records = ResultStore.load_records(current_user.id)
    return jsonify(success_response([r.to_dict() for r in records]))
