from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from marshmallow import EXCLUDE, Schema, fields, validate

from quizzle_app.utils.time_utils import to_iso

from ..question_bank.config import QuestionBankConfig
from .config import QuizConfig


@dataclass(frozen=True)
class TagScore:
    correct: int
    total: int
    percentage: int


@dataclass(frozen=True)
class ScoreSummary:
    correct_count: int
    total: int
    percentage: int
    passed: bool
    unanswered: int = 0
    per_tag_breakdown: Optional[Dict[str, TagScore]] = None

    @property
    def incorrect(self) -> int:
        return self.total - self.correct_count - self.unanswered

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'correctCount': self.correct_count,
            'incorrectCount': self.incorrect,
            'unansweredCount': self.unanswered,
            'totalQuestions': self.total,
            'percentage': self.percentage,
            'passed': self.passed,
        }
        if self.per_tag_breakdown:
            payload['perTagBreakdown'] = {tag: asdict(s) for tag, s in self.per_tag_breakdown.items()}
        return payload


@dataclass(frozen=True)
class QuizResult:
    """Finalized outcome of one quiz attempt. Built once on submit, then only stored."""

    user_id: Optional[str]
    subject_id: str
    lesson_title: str
    quiz_type: str
    score_percent: int
    total_questions: int
    time_spent_seconds: int
    answers: Dict[int, str]
    question_snapshot: List[Dict[str, Any]]
    passed: bool
    completed_at: datetime
    summary: Optional[ScoreSummary] = field(default=None, compare=False)
    forced: bool = False

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'userId': self.user_id,
            'subjectId': self.subject_id,
            'lessonTitle': self.lesson_title,
            'quizType': self.quiz_type,
            'score': self.score_percent,
            'totalQuestions': self.total_questions,
            'timeSpent': self.time_spent_seconds,
            'selectedAnswers': {str(k): v for k, v in self.answers.items()},
            'questions': self.question_snapshot,
            'passed': self.passed,
            'completedAt': to_iso(self.completed_at),
            'forced': self.forced,
        }
        if self.summary is not None:
            payload['summary'] = self.summary.to_dict()
        return payload


# --- Request Schemas (marshmallow) ---


class StartQuizSchema(Schema):
    quiz_type = fields.Str(
        required=True, data_key='quizType', validate=validate.OneOf(QuizConfig.QUIZ_TYPES)
    )
    subject_id = fields.Str(load_default=None, data_key='subjectId')
    lesson_title = fields.Str(load_default=None, data_key='lessonTitle')
    difficulty = fields.Str(load_default=None, validate=validate.OneOf(QuestionBankConfig.DIFFICULTIES))


class QuizActionSchema(Schema):
    option = fields.Str(load_default=None)
    index = fields.Int(load_default=None)


class ReportedResultSchema(Schema):
    """Body of POST /api/quiz-results. A client-sent ``passed`` is ignored."""

    class Meta:
        unknown = EXCLUDE

    subject_id = fields.Str(required=True, data_key='subjectId', validate=validate.Length(min=1))
    lesson_title = fields.Str(required=True, data_key='lessonTitle', validate=validate.Length(min=1))
    score = fields.Int(required=True, validate=validate.Range(min=0, max=100))
    total_questions = fields.Int(required=True, data_key='totalQuestions', validate=validate.Range(min=0))
    time_spent = fields.Int(load_default=0, data_key='timeSpent', validate=validate.Range(min=0))
    selected_answers = fields.Dict(load_default=dict, data_key='selectedAnswers')
    questions = fields.List(fields.Dict(), load_default=list)
    quiz_type = fields.Str(
        load_default=QuizConfig.QUIZ_LESSON, data_key='quizType', validate=validate.OneOf(QuizConfig.QUIZ_TYPES)
    )
    completed_at = fields.DateTime(load_default=None, data_key='completedAt')
