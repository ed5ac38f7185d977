"""Read-only endpoints over the subject catalogue and question bank."""

from flask import jsonify, request

from quizzle_app.core.error_handlers import NotFoundError, ValidationError, success_response

from . import question_bank_bp
from .config import QuestionBankConfig
from . import interface


def _subject_summary(subject):
    return {
        'id': subject['id'],
        'name': subject['name'],
        'description': subject['description'],
        'totalLessons': len(subject['lessons']),
    }


@question_bank_bp.route('/subjects', methods=['GET'])
def list_subjects():
    subjects = [_subject_summary(s) for s in QuestionBankConfig.SUBJECTS]
    return jsonify(success_response(subjects))


@question_bank_bp.route('/subjects/<subject_id>', methods=['GET'])
def get_subject(subject_id):
    subject = QuestionBankConfig.get_subject(subject_id)
    if not subject:
        raise NotFoundError(f"Subject '{subject_id}' not found", resource=subject_id)

    difficulty = request.args.get('difficulty', QuestionBankConfig.DEFAULT_DIFFICULTY)
    if difficulty not in QuestionBankConfig.DIFFICULTIES:
        raise ValidationError(f"Unknown difficulty '{difficulty}'")

    payload = _subject_summary(subject)
    payload['lessons'] = [
        {
            'id': lesson['id'],
            'title': lesson['title'],
            'order': lesson['order'],
            'estimatedTime': lesson['estimated_time'],
            'chapter': subject['lesson_chapters'].get(lesson['title']),
        }
        for lesson in subject['lessons']
    ]
    payload['chapterQuestionCounts'] = interface.chapter_counts(subject_id, difficulty)
    return jsonify(success_response(payload))


@question_bank_bp.route('/quiz-questions/<subject_id>/<difficulty>/<chapter>', methods=['GET'])
def get_chapter_questions(subject_id, difficulty, chapter):
    questions = interface.load_questions(subject_id, difficulty, chapter)
    return jsonify(success_response([q.to_dict() for q in questions]))
