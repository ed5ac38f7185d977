# File: quizzle_app/modules/quiz/services/result_store.py
from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError

from quizzle_app.core.error_handlers import PersistenceError
from quizzle_app.core.logging_config import get_logger
from quizzle_app.models import QuizResultRecord, db
from quizzle_app.utils.time_utils import ensure_utc

from ..logics.scorer import is_passing
from ..schemas import QuizResult

logger = get_logger(__name__)


class ResultStore:
    """
    Append-only store of finished quiz attempts.
    """

    @staticmethod
    def save_result(result: QuizResult) -> str:
        """
        Persist a finalized result.

        Returns:
            The new record id.

        Raises:
            PersistenceError: any database fault; the transaction is rolled back.
        """
        record = QuizResultRecord(
            user_id=result.user_id,
            subject_id=result.subject_id,
            lesson_title=result.lesson_title,
            score=result.score_percent,
            total_questions=result.total_questions,
            time_spent=result.time_spent_seconds,
            selected_answers={str(k): v for k, v in result.answers.items()},
            questions=result.question_snapshot,
            completed_at=result.completed_at,
            passed=result.passed,
            quiz_type=result.quiz_type,
        )
        try:
            db.session.add(record)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(f"Could not save quiz result: {exc}") from exc

        logger.debug(f"[RESULTS] Saved result {record.id} for user={result.user_id}")
        return record.id

    @staticmethod
    def save_reported(user_id: str, payload: Dict[str, Any]) -> QuizResultRecord:
        """Store a result computed by the client. ``passed`` is re-derived from the score."""
        record = QuizResultRecord(
            user_id=user_id,
            subject_id=payload['subject_id'],
            lesson_title=payload['lesson_title'],
            score=payload['score'],
            total_questions=payload['total_questions'],
            time_spent=payload.get('time_spent', 0),
            selected_answers=payload.get('selected_answers') or {},
            questions=payload.get('questions') or [],
            passed=is_passing(payload['score']),
            quiz_type=payload['quiz_type'],
        )
        if payload.get('completed_at'):
            record.completed_at = ensure_utc(payload['completed_at'])
        try:
            db.session.add(record)
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            raise PersistenceError(f"Could not save quiz result: {exc}") from exc
        return record

    @staticmethod
    def load_records(user_id: str) -> List[QuizResultRecord]:
        """All records of a user, newest first."""
        try:
            return (
                QuizResultRecord.query
                .filter_by(user_id=user_id)
                .order_by(QuizResultRecord.completed_at.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Could not load quiz results: {exc}") from exc

    @staticmethod
    def load_results(user_id: str) -> List[QuizResult]:
        """All results of a user as ``QuizResult`` values, newest first."""
        return [ResultStore.to_result(r) for r in ResultStore.load_records(user_id)]

    @staticmethod
    def to_result(record: QuizResultRecord) -> QuizResult:
        return QuizResult(
            user_id=record.user_id,
            subject_id=record.subject_id,
            lesson_title=record.lesson_title,
            quiz_type=record.quiz_type,
            score_percent=record.score,
            total_questions=record.total_questions,
            time_spent_seconds=record.time_spent,
            answers={int(k): v for k, v in (record.selected_answers or {}).items() if str(k).isdigit()},
            question_snapshot=record.questions or [],
            passed=bool(record.passed),
            completed_at=ensure_utc(record.completed_at),
        )
