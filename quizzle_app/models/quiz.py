"""Quiz persistence models: finished attempts and the in-flight session per user."""

from __future__ import annotations

import uuid

from sqlalchemy.types import JSON

from ..db_instance import db
from ..utils.time_utils import to_iso, utcnow


def _new_record_id() -> str:
    return str(uuid.uuid4())


class QuizResultRecord(db.Model):
    """Write-once record of a completed quiz attempt."""

    __tablename__ = 'quiz_results'

    id = db.Column(db.String(36), primary_key=True, default=_new_record_id)
    user_id = db.Column(
        db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True
    )
    subject_id = db.Column(db.String(64), nullable=False)
    lesson_title = db.Column(db.String(255), nullable=False)
    score = db.Column(db.Integer, nullable=False)
    total_questions = db.Column(db.Integer, nullable=False)
    time_spent = db.Column(db.Integer, nullable=False, default=0)
    selected_answers = db.Column(JSON, nullable=False, default=dict)
    questions = db.Column(JSON, nullable=False, default=list)
    completed_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    passed = db.Column(db.Boolean, nullable=False)
    quiz_type = db.Column(db.String(20), nullable=False)

    def to_dict(self) -> dict[str, object]:
        return {
            'id': self.id,
            'userId': self.user_id,
            'subjectId': self.subject_id,
            'lessonTitle': self.lesson_title,
            'score': self.score,
            'totalQuestions': self.total_questions,
            'timeSpent': self.time_spent,
            'selectedAnswers': self.selected_answers or {},
            'questions': self.questions or [],
            'completedAt': to_iso(self.completed_at),
            'passed': bool(self.passed),
            'quizType': self.quiz_type,
        }


class ActiveQuizSession(db.Model):
    """Serialized state of the single quiz a user is currently taking."""

    __tablename__ = 'active_quiz_sessions'

    session_id = db.Column(db.String(36), primary_key=True, default=_new_record_id)
    user_id = db.Column(
        db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True
    )
    quiz_type = db.Column(db.String(20), nullable=False)
    state = db.Column(JSON, nullable=False)
    started_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
    last_synced_at = db.Column(db.DateTime(timezone=True), default=utcnow, nullable=False)
