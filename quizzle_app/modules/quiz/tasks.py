from quizzle_app.extensions import scheduler

from .services.session_service import QuizSessionService


def sweep_timed_quizzes():
    """Force-submit timed quizzes whose owner stopped sending requests."""

    # Scheduler gọi hàm này ngoài request, cần app context.
    with scheduler.app.app_context():
        finished = QuizSessionService.sweep_all()
        if finished:
            scheduler.app.logger.info(f"[QUIZ] Sweep force-submitted {finished} expired session(s)")
        return finished
