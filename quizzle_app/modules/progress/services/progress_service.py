from typing import Any, Dict

from quizzle_app.core.error_handlers import NotFoundError

from ...auth.interface import AuthInterface
from ...quiz.interface import load_records, load_results
from ..logics.aggregator import aggregate, lesson_progress, profile_stats, subject_breakdown


class ProgressService:
    """Loads a user's results from the store and folds them on demand."""

    @staticmethod
    def get_stats(user_id: str) -> Dict[str, Any]:
        return profile_stats(load_results(user_id))

    @staticmethod
    def get_progress(user_id: str) -> Dict[str, Any]:
        return aggregate(load_results(user_id)).to_dict()

    @staticmethod
    def get_lesson_progress(user_id: str, subject_id: str):
        return lesson_progress(load_results(user_id), subject_id)

    @staticmethod
    def get_user_report(email: str) -> Dict[str, Any]:
        """Admin view of one learner: profile, raw results, stats and per-subject breakdown."""
        user = AuthInterface.get_user_by_email(email)
        if user is None:
            raise NotFoundError('User not found', resource='user')

        records = load_records(user.id)
        results = load_results(user.id)
        return {
            'user': user.to_dict(),
            'quizResults': [r.to_dict() for r in records],
            'stats': profile_stats(results),
            'subjectBreakdown': subject_breakdown(results),
        }
