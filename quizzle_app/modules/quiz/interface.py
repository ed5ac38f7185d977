from typing import List

from quizzle_app.models import QuizResultRecord

from .schemas import QuizResult
from .services.result_store import ResultStore


def load_results(user_id: str) -> List[QuizResult]:
    """Public API: a user's finished attempts, newest first."""
    return ResultStore.load_results(user_id)


def load_records(user_id: str) -> List[QuizResultRecord]:
    return ResultStore.load_records(user_id)
