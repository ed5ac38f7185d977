from typing import Dict, List, Optional

from .config import QuestionBankConfig
from .schemas import Question
from .services.loader import QuestionBankLoader


def load_questions(subject: str, difficulty: str, chapter: str) -> List[Question]:
    """Public API: questions for one chapter. Raises ContentUnavailable."""
    return QuestionBankLoader.from_app().load_questions(subject, difficulty, chapter)


def load_lesson_pool(subject: str, lesson_title: str, difficulty: str) -> List[Question]:
    return QuestionBankLoader.from_app().load_lesson_pool(subject, lesson_title, difficulty)


def load_subject_pool(subject: str, difficulty: str) -> List[Question]:
    return QuestionBankLoader.from_app().load_subject_pool(subject, difficulty)


def load_full_syllabus_pool(difficulty: str) -> List[Question]:
    return QuestionBankLoader.from_app().load_full_syllabus_pool(difficulty)


def get_subject(subject_id: str) -> Optional[dict]:
    return QuestionBankConfig.get_subject(subject_id)


def chapter_counts(subject: str, difficulty: str) -> Dict[str, int]:
    return QuestionBankLoader.from_app().chapter_counts(subject, difficulty)
