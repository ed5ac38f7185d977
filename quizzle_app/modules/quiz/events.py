"""
Event Handlers for the Quiz module.

Completed quizzes are persisted here, off the request's critical path: a
failed write is logged and announced, the user still gets their report.
"""
from flask import current_app

from quizzle_app.core.error_handlers import PersistenceError
from quizzle_app.core.signals import (
    quiz_completed,
    quiz_started,
    quiz_time_warning,
    result_persist_failed,
    result_persisted,
)


@quiz_completed.connect
def on_quiz_completed(sender, **kwargs):
    """
    Expected kwargs:
        - result: QuizResult
        - forced: bool (time limit reached)
    """
    from .services.result_store import ResultStore

    result = kwargs.get('result')
    if result is None or not result.user_id:
        return

    if kwargs.get('forced'):
        current_app.logger.info(
            f"[QUIZ] Time-forced submission for user={result.user_id}: {result.score_percent}%"
        )

    try:
        result_id = ResultStore.save_result(result)
    except PersistenceError as e:
        current_app.logger.error(f"[RESULTS] Could not persist quiz result: {e}", exc_info=True)
        result_persist_failed.send(sender, user_id=result.user_id, error=str(e))
        return

    result_persisted.send(sender, user_id=result.user_id, result_id=result_id)


@quiz_time_warning.connect
def on_quiz_time_warning(sender, **kwargs):
    current_app.logger.debug(
        f"[QUIZ] Time warning: user={kwargs.get('user_id')}, remaining={kwargs.get('remaining_seconds')}s"
    )


@quiz_started.connect
def on_quiz_started(sender, **kwargs):
    current_app.logger.info(
        f"[QUIZ] Started {kwargs.get('quiz_type')} quiz {kwargs.get('session_id')} "
        f"for user={kwargs.get('user_id')} ({kwargs.get('total_questions')} questions)"
    )


@result_persisted.connect
def on_result_persisted(sender, **kwargs):
    current_app.logger.info(f"[RESULTS] Stored result {kwargs.get('result_id')} for user={kwargs.get('user_id')}")
